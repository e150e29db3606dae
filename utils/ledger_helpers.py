"""
Access to the application's RentalLedger.

One ledger per application (per process), built on first use from the app
config and cached in ``app.extensions``.  Usage in any route or CLI command::

    from utils.ledger_helpers import get_ledger

    vehicles = get_ledger().list_active_vehicles()
"""
import threading

from flask import current_app

from persistence import create_gateway
from services.pricing import get_pricing_model
from services.rental_ledger import RentalLedger

EXTENSION_KEY = 'rental_ledger'

_build_lock = threading.Lock()


def build_ledger(app):
    """Create a ledger wired to *app*'s configured gateway and pricing model."""
    return RentalLedger(
        gateway=create_gateway(app),
        pricing=get_pricing_model(app.config.get('RENTAL_PRICING_MODEL', 'daily')),
        seed_fleet=app.config.get('RENTAL_SEED_FLEET', True),
    )


def get_ledger():
    """Return the current app's ledger, building it on first call."""
    app = current_app._get_current_object()
    ledger = app.extensions.get(EXTENSION_KEY)
    if ledger is None:
        with _build_lock:
            ledger = app.extensions.get(EXTENSION_KEY)
            if ledger is None:
                ledger = build_ledger(app)
                app.extensions[EXTENSION_KEY] = ledger
    return ledger


def reset_ledger(app):
    """Drop the cached ledger so the next get_ledger() reloads from storage."""
    app.extensions.pop(EXTENSION_KEY, None)
