"""
Rental Ledger
=============
Owns the in-memory fleet, customer accounts and reservations, enforces the
booking rules and writes every change through a PersistenceGateway before
reporting success.

Booking rules
-------------
  * a vehicle can be booked on a date only if it exists, is active and has no
    reservation for that exact date string (one booking per vehicle per day)
  * dates are compared as exact strings, so callers must normalise them
    first (see utils.dates.normalize_booking_date)
  * total and advance come from the deployment's PricingModel

Outcomes
--------
Expected failures (duplicate email, unknown vehicle, date taken, nothing to
cancel, wrong password) are plain ``None`` / ``False`` results.  A storage
failure is different: the in-memory change is undone and the gateway's
StorageError propagates, so a caller can tell "that date is taken" apart
from "we could not save your booking".

Every public operation runs under one re-entrant lock, which makes the
availability check and the append inside book() atomic within a process.
Separate ledger instances (e.g. several gunicorn workers) do not see each
other's writes.

Primary entry points
--------------------
  list_active_vehicles() / find_vehicle() / deactivate_vehicle()
  register() / login() / find_account_by_email()
  is_vehicle_available() / book() / cancel() / list_reservations_for_account()
"""
import logging
import threading

from models.accounts import Account, normalize_email
from models.reservations import Reservation
from models.vehicles import Vehicle
from persistence.gateway import ACCOUNTS, RESERVATIONS, VEHICLES, StorageError
from services.fleet_seed import seed_default_fleet
from services.pricing import DailyPricing

logger = logging.getLogger(__name__)


class RentalLedger:
    """
    In-memory rental state backed by a whole-collection snapshot store.

    Args:
        gateway:     PersistenceGateway used to load at start-up and save after
                     each mutation.
        pricing:     PricingModel; defaults to DailyPricing.
        seed_fleet:  when True and the store holds no vehicles, the default
                     fleet is added and saved straight away.
    """

    def __init__(self, gateway, pricing=None, seed_fleet=True):
        self.gateway = gateway
        self.pricing = pricing or DailyPricing()
        self._lock = threading.RLock()
        self._vehicles = []
        self._accounts = []
        self._reservations = []
        self._next_vehicle_id = 1

        self._load()

        if seed_fleet:
            seed_default_fleet(self)

    # ------------------------------------------------------------------
    # Loading and saving
    # ------------------------------------------------------------------

    def _load(self):
        with self._lock:
            self._vehicles = [Vehicle.from_record(r) for r in self.gateway.load(VEHICLES)]
            self._next_vehicle_id = max((v.id for v in self._vehicles), default=0) + 1
            self._accounts = [Account.from_record(r) for r in self.gateway.load(ACCOUNTS)]

            vehicles_by_id = {v.id: v for v in self._vehicles}
            accounts_by_email = {a.email_key: a for a in self._accounts}
            self._reservations = []
            for record in self.gateway.load(RESERVATIONS):
                vehicle = vehicles_by_id.get(record.get('vehicle_id'))
                account = accounts_by_email.get(normalize_email(record.get('account_email')))
                if vehicle is None or account is None:
                    logger.warning(
                        f"Skipping reservation on {record.get('date')}: unknown vehicle "
                        f"{record.get('vehicle_id')} or account {record.get('account_email')!r}"
                    )
                    continue
                self._reservations.append(Reservation.from_record(record, vehicle, account))

            logger.info(
                f'Ledger loaded: {len(self._vehicles)} vehicles, {len(self._accounts)} accounts, '
                f'{len(self._reservations)} reservations'
            )

    def _save(self, collection, items, undo):
        """Persist *items*; on failure run *undo* and re-raise."""
        try:
            self.gateway.save(collection, [item.to_record() for item in items])
        except StorageError:
            undo()
            logger.error(f'Could not persist {collection}; change rolled back', exc_info=True)
            raise

    # ------------------------------------------------------------------
    # Vehicles
    # ------------------------------------------------------------------

    def list_active_vehicles(self):
        """Active vehicles in insertion order."""
        with self._lock:
            return [v for v in self._vehicles if v.active]

    def list_vehicles(self):
        """Every vehicle, including deactivated ones."""
        with self._lock:
            return list(self._vehicles)

    def find_vehicle(self, vehicle_id):
        with self._lock:
            for vehicle in self._vehicles:
                if vehicle.id == vehicle_id:
                    return vehicle
            return None

    def deactivate_vehicle(self, vehicle_id):
        """
        Soft-delete a vehicle.

        Returns False when the id is unknown or the vehicle is already
        inactive; there is no way back to active.
        """
        with self._lock:
            vehicle = self.find_vehicle(vehicle_id)
            if vehicle is None or not vehicle.deactivate():
                logger.debug(f'Deactivate vehicle {vehicle_id}: unknown or already inactive')
                return False

            def undo():
                vehicle.active = True

            self._save(VEHICLES, self._vehicles, undo)
            logger.info(f'Vehicle {vehicle_id} ({vehicle.name}) deactivated')
            return True

    def add_vehicle(self, name, price_6h, price_12h, price_24h, price_48h, description=None):
        """Add a vehicle with explicit price tiers under the next free id."""
        with self._lock:
            vehicle = Vehicle(self._next_vehicle_id, name, price_6h, price_12h, price_24h,
                              price_48h, description=description)
            return self._append_vehicles([vehicle])[0]

    def add_vehicle_from_daily_price(self, name, daily_price, description=None):
        """Add a vehicle whose tiers are derived from a flat daily price."""
        with self._lock:
            vehicle = Vehicle.from_daily_price(self._next_vehicle_id, name, daily_price,
                                               description=description)
            return self._append_vehicles([vehicle])[0]

    def seed_vehicles(self, fleet):
        """
        Add *fleet* (dicts of Vehicle keyword arguments) if no vehicle exists yet.

        Returns the vehicles added, or [] when the store already had a fleet,
        even a fully deactivated one.
        """
        with self._lock:
            if self._vehicles or not fleet:
                return []
            vehicles = [
                Vehicle(self._next_vehicle_id + offset, **fields)
                for offset, fields in enumerate(fleet)
            ]
            added = self._append_vehicles(vehicles)
            logger.info(f'Seeded default fleet with {len(added)} vehicles')
            return added

    def _append_vehicles(self, vehicles):
        previous_next_id = self._next_vehicle_id
        self._vehicles.extend(vehicles)
        self._next_vehicle_id = max(v.id for v in vehicles) + 1

        def undo():
            del self._vehicles[-len(vehicles):]
            self._next_vehicle_id = previous_next_id

        self._save(VEHICLES, self._vehicles, undo)
        for vehicle in vehicles:
            logger.info(f'Vehicle {vehicle.id} ({vehicle.name}) added')
        return vehicles

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    def find_account_by_email(self, email):
        """Case-insensitive lookup."""
        key = normalize_email(email)
        with self._lock:
            for account in self._accounts:
                if account.email_key == key:
                    return account
            return None

    def register(self, name, email, password, phone=None, location=None):
        """
        Create an account. Returns None if the email is already registered.

        Presence of name/email/password is checked by the request layer.
        """
        with self._lock:
            if self.find_account_by_email(email) is not None:
                logger.debug(f'Registration rejected, email already exists: {email}')
                return None

            account = Account(name, email, password, phone, location)
            self._accounts.append(account)

            def undo():
                self._accounts.pop()

            self._save(ACCOUNTS, self._accounts, undo)
            logger.info(f'Registered account {email}')
            return account

    def login(self, email, password):
        """The account for *email* if *password* matches exactly, else None."""
        account = self.find_account_by_email(email)
        if account is not None and account.check_password(password):
            return account
        logger.debug(f'Login failed for {email}')
        return None

    # ------------------------------------------------------------------
    # Reservations
    # ------------------------------------------------------------------

    def _is_booked(self, vehicle_id, date):
        return any(r.is_for(vehicle_id, date) for r in self._reservations)

    def is_vehicle_available(self, vehicle_id, date):
        """True if the vehicle exists, is active and is not booked on *date*."""
        with self._lock:
            vehicle = self.find_vehicle(vehicle_id)
            return vehicle is not None and vehicle.active and not self._is_booked(vehicle_id, date)

    def quote(self, vehicle_id, duration):
        """Total and advance a booking would carry, or None for an unknown vehicle."""
        vehicle = self.find_vehicle(vehicle_id)
        if vehicle is None:
            return None
        total, advance = self.pricing.quote(vehicle, duration)
        return {
            'vehicle_id': vehicle.id,
            'duration': duration,
            'duration_unit': self.pricing.duration_unit,
            'total': total,
            'advance': advance,
        }

    def book(self, vehicle_id, account, date, duration, advance_paid=False):
        """
        Reserve *vehicle_id* for *account* on *date*.

        Args:
            vehicle_id:    Vehicle identifier.
            account:       Account making the booking.
            date:          Canonical 'YYYY-MM-DD' string.
            duration:      Days (daily pricing) or hours (hourly pricing).
            advance_paid:  Whether the advance was paid at booking time.

        Returns:
            The new Reservation, or None if the vehicle is unknown, inactive
            or already booked on that date, or the account is not registered.
        """
        with self._lock:
            registered = self.find_account_by_email(account.email)
            if registered is None:
                logger.debug(f'Booking rejected: no registered account for {account.email}')
                return None
            if not self.is_vehicle_available(vehicle_id, date):
                logger.debug(f'Booking rejected: vehicle {vehicle_id} not available on {date}')
                return None

            vehicle = self.find_vehicle(vehicle_id)
            account = registered
            total, advance = self.pricing.quote(vehicle, duration)
            reservation = Reservation(
                vehicle, account, date, duration, total, advance,
                advance_paid=advance_paid,
                duration_unit=self.pricing.duration_unit,
            )
            self._reservations.append(reservation)

            def undo():
                self._reservations.pop()

            self._save(RESERVATIONS, self._reservations, undo)
            logger.info(
                f'Booked vehicle {vehicle_id} for {account.email} on {date}: '
                f'{duration} {self.pricing.duration_unit}, total {total}, advance {advance}'
            )
            return reservation

    def cancel(self, email, date):
        """
        Remove the first reservation matching *email* (case-insensitive) and *date*.

        Returns False when nothing matched.
        """
        with self._lock:
            for index, reservation in enumerate(self._reservations):
                if reservation.account.matches_email(email) and reservation.date == date:
                    break
            else:
                logger.debug(f'Cancel: no reservation for {email} on {date}')
                return False

            del self._reservations[index]

            def undo():
                self._reservations.insert(index, reservation)

            self._save(RESERVATIONS, self._reservations, undo)
            logger.info(f'Cancelled reservation of vehicle {reservation.vehicle_id} for {email} on {date}')
            return True

    def list_reservations_for_account(self, email):
        """Reservations made with *email*, in storage order."""
        with self._lock:
            return [r for r in self._reservations if r.account.matches_email(email)]

    def list_reservations(self):
        with self._lock:
            return list(self._reservations)
