"""
Relational gateway backed by Flask-SQLAlchemy.

Each collection is one table.  Rows carry a ``position`` column so records
come back in the order they were saved.  A save deletes and re-inserts the
whole table inside one transaction; on any database error the transaction is
rolled back and StorageError is raised, leaving the previous snapshot intact.
"""
import logging

from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from persistence.gateway import (
    ACCOUNTS,
    RESERVATIONS,
    VEHICLES,
    PersistenceGateway,
    StorageError,
)

logger = logging.getLogger(__name__)


class VehicleRecord(db.Model):
    __tablename__ = 'rental_vehicles'

    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    position = db.Column(db.Integer, nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text)
    price_6h = db.Column(db.Numeric(10, 2), nullable=False)
    price_12h = db.Column(db.Numeric(10, 2), nullable=False)
    price_24h = db.Column(db.Numeric(10, 2), nullable=False)  # Daily price
    price_48h = db.Column(db.Numeric(10, 2), nullable=False)
    active = db.Column(db.Boolean, default=True, nullable=False)

    @classmethod
    def from_record(cls, record, position):
        return cls(
            id=record['id'],
            position=position,
            name=record['name'],
            description=record.get('description'),
            price_6h=record['price_6h'],
            price_12h=record['price_12h'],
            price_24h=record['price_24h'],
            price_48h=record['price_48h'],
            active=record.get('active', True),
        )

    def to_record(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'price_6h': str(self.price_6h),
            'price_12h': str(self.price_12h),
            'price_24h': str(self.price_24h),
            'price_48h': str(self.price_48h),
            'active': bool(self.active),
        }

    def __repr__(self):
        return f'<VehicleRecord {self.id}: {self.name}>'


class AccountRecord(db.Model):
    __tablename__ = 'rental_accounts'

    id = db.Column(db.Integer, primary_key=True)
    position = db.Column(db.Integer, nullable=False, index=True)
    name = db.Column(db.String(150), nullable=False)
    email = db.Column(db.String(150), nullable=False, unique=True, index=True)
    password = db.Column(db.String(255), nullable=False)  # Plain text, see models/accounts.py
    phone = db.Column(db.String(30))
    location = db.Column(db.String(150))

    @classmethod
    def from_record(cls, record, position):
        return cls(
            position=position,
            name=record['name'],
            email=record['email'],
            password=record['password'],
            phone=record.get('phone'),
            location=record.get('location'),
        )

    def to_record(self):
        return {
            'name': self.name,
            'email': self.email,
            'password': self.password,
            'phone': self.phone,
            'location': self.location,
        }

    def __repr__(self):
        return f'<AccountRecord {self.email}>'


class ReservationRecord(db.Model):
    __tablename__ = 'rental_reservations'
    __table_args__ = (
        db.UniqueConstraint('vehicle_id', 'date', name='_vehicle_date_uc'),
    )

    id = db.Column(db.Integer, primary_key=True)
    position = db.Column(db.Integer, nullable=False, index=True)
    vehicle_id = db.Column(db.Integer, nullable=False, index=True)
    account_email = db.Column(db.String(150), nullable=False, index=True)
    date = db.Column(db.String(10), nullable=False)  # YYYY-MM-DD
    duration = db.Column(db.Integer, nullable=False)
    duration_unit = db.Column(db.String(10), nullable=False, default='days')
    total = db.Column(db.Numeric(10, 2), nullable=False)
    advance = db.Column(db.Numeric(10, 2), nullable=False)
    advance_paid = db.Column(db.Boolean, default=False, nullable=False)

    @classmethod
    def from_record(cls, record, position):
        return cls(
            position=position,
            vehicle_id=record['vehicle_id'],
            account_email=record['account_email'],
            date=record['date'],
            duration=record['duration'],
            duration_unit=record.get('duration_unit', 'days'),
            total=record['total'],
            advance=record['advance'],
            advance_paid=record.get('advance_paid', False),
        )

    def to_record(self):
        return {
            'vehicle_id': self.vehicle_id,
            'account_email': self.account_email,
            'date': self.date,
            'duration': self.duration,
            'duration_unit': self.duration_unit,
            'total': str(self.total),
            'advance': str(self.advance),
            'advance_paid': bool(self.advance_paid),
        }

    def __repr__(self):
        return f'<ReservationRecord vehicle={self.vehicle_id} date={self.date}>'


class SqlGateway(PersistenceGateway):
    """Whole-collection snapshots in relational tables."""

    MODELS = {
        VEHICLES: VehicleRecord,
        ACCOUNTS: AccountRecord,
        RESERVATIONS: ReservationRecord,
    }

    def __init__(self, database=db):
        self.db = database

    def load(self, collection):
        self._check_collection(collection)
        model = self.MODELS[collection]
        try:
            rows = self.db.session.query(model).order_by(model.position).all()
        except SQLAlchemyError as exc:
            self.db.session.rollback()
            raise StorageError(collection, f'could not load table {model.__tablename__}: {exc}') from exc

        logger.info(f'Loaded {len(rows)} records from {model.__tablename__}')
        return [row.to_record() for row in rows]

    def save(self, collection, records):
        self._check_collection(collection)
        model = self.MODELS[collection]
        session = self.db.session
        try:
            session.query(model).delete()
            session.add_all(
                model.from_record(record, position)
                for position, record in enumerate(records)
            )
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            raise StorageError(collection, f'could not save table {model.__tablename__}: {exc}') from exc
