from decimal import Decimal


class Reservation:
    """
    A booking of one vehicle by one account on one calendar date.

    ``total`` and ``advance`` are computed once by the pricing model at
    booking time and stored; receipts read the stored values.
    """

    def __init__(self, vehicle, account, date, duration, total, advance,
                 advance_paid=False, duration_unit='days'):
        self.vehicle = vehicle
        self.account = account
        self.date = date  # canonical 'YYYY-MM-DD'
        self.duration = duration
        self.duration_unit = duration_unit
        self.total = Decimal(str(total))
        self.advance = Decimal(str(advance))
        self.advance_paid = advance_paid

    @property
    def vehicle_id(self):
        return self.vehicle.id

    @property
    def balance_due(self):
        """Amount still owed at pickup."""
        if self.advance_paid:
            return self.total - self.advance
        return self.total

    def is_for(self, vehicle_id, date):
        return self.vehicle.id == vehicle_id and self.date == date

    def to_record(self):
        return {
            'vehicle_id': self.vehicle.id,
            'account_email': self.account.email,
            'date': self.date,
            'duration': self.duration,
            'duration_unit': self.duration_unit,
            'total': str(self.total),
            'advance': str(self.advance),
            'advance_paid': self.advance_paid,
        }

    @classmethod
    def from_record(cls, record, vehicle, account):
        return cls(
            vehicle=vehicle,
            account=account,
            date=record['date'],
            duration=int(record['duration']),
            total=record['total'],
            advance=record['advance'],
            advance_paid=bool(record.get('advance_paid', False)),
            duration_unit=record.get('duration_unit', 'days'),
        )

    def summary(self):
        """Receipt shown after booking and on the account's booking list."""
        return {
            'vehicle_id': self.vehicle.id,
            'vehicle': self.vehicle.name,
            'customer': self.account.name,
            'email': self.account.email,
            'date': self.date,
            'duration': self.duration,
            'duration_unit': self.duration_unit,
            'total': float(self.total),
            'advance': float(self.advance),
            'advance_paid': self.advance_paid,
            'balance_due': float(self.balance_due),
        }

    def __repr__(self):
        return (f'<Reservation vehicle={self.vehicle.id} date={self.date} '
                f'{self.duration} {self.duration_unit} email={self.account.email}>')
