"""
Persistence Gateway contract
============================
The ledger treats storage as a whole-collection snapshot store:

  load(name)           -> list of record dicts, [] when nothing was stored
  save(name, records)  -> overwrite the entire collection

A save is all-or-nothing from the caller's point of view: a later load sees
either the previous snapshot or the new one, never a mix.  Gateways own no
business state and raise StorageError for every I/O or database failure.
"""
import copy
from abc import ABC, abstractmethod

VEHICLES = 'vehicles'
ACCOUNTS = 'accounts'
RESERVATIONS = 'reservations'

COLLECTIONS = (VEHICLES, ACCOUNTS, RESERVATIONS)


class StorageError(Exception):
    """Raised when a collection cannot be read or written."""

    def __init__(self, collection, message):
        super().__init__(f'{collection}: {message}')
        self.collection = collection


class PersistenceGateway(ABC):
    """Load/save contract for the three rental collections."""

    @abstractmethod
    def load(self, collection):
        """Return every stored record of *collection*, in stored order."""

    @abstractmethod
    def save(self, collection, records):
        """Replace the stored *collection* with *records*."""

    @staticmethod
    def _check_collection(collection):
        if collection not in COLLECTIONS:
            raise ValueError(f'Unknown collection {collection!r}')


class MemoryGateway(PersistenceGateway):
    """Process-local store. Records are deep-copied in and out."""

    def __init__(self, initial=None):
        self._collections = {name: [] for name in COLLECTIONS}
        for name, records in (initial or {}).items():
            self._check_collection(name)
            self._collections[name] = copy.deepcopy(list(records))

    def load(self, collection):
        self._check_collection(collection)
        return copy.deepcopy(self._collections[collection])

    def save(self, collection, records):
        self._check_collection(collection)
        self._collections[collection] = copy.deepcopy(list(records))
