# Models package - plain records owned by the rental ledger

from models.accounts import Account
from models.reservations import Reservation
from models.vehicles import Vehicle

__all__ = [
    'Account',
    'Reservation',
    'Vehicle',
]
