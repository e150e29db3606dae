"""
Shared pytest fixtures for the DriveNow Rentals test suite.

The session app uses TestingConfig: in-memory storage gateway, in-memory
SQLite for the relational gateway tests, CSRF disabled.  No app context is
held open for the whole session, so each test-client request gets its own
``g`` and Flask-Login state never leaks between requests.  The cached ledger
is dropped after each test so every test starts from a freshly seeded fleet.
"""
import pytest
from app import create_app
from persistence import MemoryGateway, StorageError
from services.rental_ledger import RentalLedger
from utils.ledger_helpers import get_ledger, reset_ledger


# ---------------------------------------------------------------------------
# Application lifecycle
# ---------------------------------------------------------------------------

@pytest.fixture(scope='session')
def app():
    """Create a test Flask application."""
    return create_app('testing')


@pytest.fixture(autouse=True)
def fresh_ledger(app):
    """Forget the cached ledger after each test so tests never share state."""
    yield
    reset_ledger(app)


@pytest.fixture
def app_ctx(app):
    ctx = app.app_context()
    ctx.push()
    yield app
    ctx.pop()


@pytest.fixture
def client(app):
    return app.test_client()


# ---------------------------------------------------------------------------
# Ledger helpers
# ---------------------------------------------------------------------------

class FlakyGateway(MemoryGateway):
    """MemoryGateway whose saves fail for the collections listed in ``failing``."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.failing = set()
        self.save_calls = []

    def save(self, collection, records):
        self.save_calls.append(collection)
        if collection in self.failing:
            raise StorageError(collection, 'disk full')
        super().save(collection, records)


@pytest.fixture
def gateway():
    return FlakyGateway()


@pytest.fixture
def ledger(gateway):
    """A seeded ledger over an in-memory gateway, using daily pricing."""
    return RentalLedger(gateway)


@pytest.fixture
def app_ledger(app):
    """The ledger the request layer uses for this test."""
    with app.app_context():
        return get_ledger()


@pytest.fixture
def customer(app_ledger):
    return app_ledger.register('Ayesha Rahman', 'ayesha@mail.com', 'secret-pass',
                               '01700000000', 'Dhaka')


@pytest.fixture
def logged_in_client(client, customer):
    response = client.post('/login', data={'email': 'ayesha@mail.com', 'password': 'secret-pass'})
    assert response.status_code == 200
    return client
