"""
Tests for RentalLedger.

Each test builds a ledger over a FlakyGateway (an in-memory store that can be
told to fail saves) seeded with the default fleet, so vehicle 1 is the
1500/day Sedan.
"""
from decimal import Decimal

import pytest

from models.accounts import Account
from persistence import MemoryGateway, StorageError
from services.fleet_seed import DEFAULT_FLEET
from services.pricing import HourlyPricing
from services.rental_ledger import RentalLedger


def _snapshot(gateway):
    return {name: gateway.load(name) for name in ('vehicles', 'accounts', 'reservations')}


@pytest.fixture
def account(ledger):
    return ledger.register('Test Customer', 'a@x.com', 'pw123', '0170', 'Dhaka')


# ---------------------------------------------------------------------------
# Bootstrap seeding
# ---------------------------------------------------------------------------

class TestSeeding:
    def test_empty_store_gets_default_fleet(self, ledger, gateway):
        vehicles = ledger.list_vehicles()
        assert [v.name for v in vehicles] == [entry['name'] for entry in DEFAULT_FLEET]
        assert [v.id for v in vehicles] == list(range(1, len(DEFAULT_FLEET) + 1))
        assert len(gateway.load('vehicles')) == len(DEFAULT_FLEET)

    def test_seed_fleet_disabled(self):
        ledger = RentalLedger(MemoryGateway(), seed_fleet=False)
        assert ledger.list_vehicles() == []

    def test_existing_fleet_is_not_reseeded(self, gateway, ledger):
        ledger.add_vehicle('Extra', 1, 2, 3, 4)
        restarted = RentalLedger(gateway)
        assert len(restarted.list_vehicles()) == len(DEFAULT_FLEET) + 1

    def test_fully_deactivated_fleet_is_not_reseeded(self, gateway, ledger):
        for vehicle in ledger.list_vehicles():
            ledger.deactivate_vehicle(vehicle.id)

        restarted = RentalLedger(gateway)
        assert restarted.list_active_vehicles() == []
        assert len(restarted.list_vehicles()) == len(DEFAULT_FLEET)

    def test_seed_failure_is_reported(self, gateway):
        gateway.failing.add('vehicles')
        with pytest.raises(StorageError):
            RentalLedger(gateway)
        assert gateway.load('vehicles') == []


# ---------------------------------------------------------------------------
# Vehicles
# ---------------------------------------------------------------------------

class TestVehicles:
    def test_find_vehicle(self, ledger):
        assert ledger.find_vehicle(1).name == 'Sedan (Toyota)'
        assert ledger.find_vehicle(999) is None

    def test_deactivate_twice(self, ledger):
        assert ledger.deactivate_vehicle(2) is True
        assert ledger.deactivate_vehicle(2) is False

    def test_deactivate_unknown_vehicle(self, ledger, gateway):
        before = _snapshot(gateway)
        assert ledger.deactivate_vehicle(999) is False
        assert _snapshot(gateway) == before

    def test_deactivated_vehicle_leaves_active_list(self, ledger):
        ledger.deactivate_vehicle(2)
        active_ids = [v.id for v in ledger.list_active_vehicles()]
        assert 2 not in active_ids
        assert active_ids == [1, 3, 4, 5, 6, 7]
        # Still known, just inactive
        assert ledger.find_vehicle(2).active is False

    def test_deactivation_is_persisted(self, ledger, gateway):
        ledger.deactivate_vehicle(2)
        record = next(r for r in gateway.load('vehicles') if r['id'] == 2)
        assert record['active'] is False

    def test_added_vehicle_gets_next_id(self, ledger):
        vehicle = ledger.add_vehicle('Compact', 300, 500, 900, 1700, description='City car')
        assert vehicle.id == len(DEFAULT_FLEET) + 1
        assert ledger.find_vehicle(vehicle.id) is vehicle

    def test_add_from_daily_price(self, ledger):
        vehicle = ledger.add_vehicle_from_daily_price('Hatchback', 1000)
        assert vehicle.price_6h == Decimal('600')
        assert vehicle.price_48h == Decimal('2000')

    def test_ids_are_not_reused_after_restart(self, gateway, ledger):
        ledger.deactivate_vehicle(7)
        restarted = RentalLedger(gateway)
        assert restarted.add_vehicle('New', 1, 2, 3, 4).id == 8


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------

class TestAccounts:
    def test_register_and_find_case_insensitively(self, ledger, account):
        assert ledger.find_account_by_email('A@X.COM') is account

    def test_duplicate_registration_is_rejected(self, ledger, account):
        assert ledger.register('Someone Else', 'A@x.com', 'other', '', '') is None
        found = ledger.find_account_by_email('a@x.com')
        assert found.name == 'Test Customer'
        assert found.password == 'pw123'

    def test_empty_fields_are_not_rejected(self, ledger):
        assert ledger.register('', 'blank@x.com', '', '', '') is not None

    def test_registration_is_persisted(self, ledger, gateway, account):
        assert gateway.load('accounts') == [account.to_record()]

    def test_login(self, ledger, account):
        assert ledger.login('a@x.com', 'pw123') is account
        assert ledger.login('A@X.com', 'pw123') is account

    def test_login_wrong_password(self, ledger, account):
        assert ledger.login('a@x.com', 'PW123') is None
        assert ledger.login('a@x.com', '') is None

    def test_login_unknown_email(self, ledger):
        assert ledger.login('nobody@x.com', 'pw123') is None


# ---------------------------------------------------------------------------
# Booking and availability
# ---------------------------------------------------------------------------

class TestBooking:
    def test_sedan_three_days(self, ledger, account):
        reservation = ledger.book(1, account, '2025-06-01', 3, advance_paid=True)

        assert reservation is not None
        assert reservation.total == 4500
        assert reservation.advance == 900
        assert reservation.advance_paid is True
        assert reservation.duration_unit == 'days'

    def test_same_vehicle_same_date_fails(self, ledger, account):
        assert ledger.book(1, account, '2025-06-01', 3, False) is not None
        assert ledger.is_vehicle_available(1, '2025-06-01') is False
        assert ledger.book(1, account, '2025-06-01', 1, False) is None

    def test_different_date_succeeds(self, ledger, account):
        ledger.book(1, account, '2025-06-01', 3, False)
        assert ledger.book(1, account, '2025-06-02', 1, False) is not None

    def test_other_vehicle_same_date_succeeds(self, ledger, account):
        ledger.book(1, account, '2025-06-01', 3, False)
        assert ledger.book(2, account, '2025-06-01', 1, False) is not None

    def test_unknown_vehicle(self, ledger, account):
        assert ledger.is_vehicle_available(999, '2025-06-01') is False
        assert ledger.book(999, account, '2025-06-01', 1, False) is None

    def test_unregistered_account_cannot_book(self, ledger, gateway):
        ghost = Account('Ghost', 'ghost@x.com', 'pw')
        before = _snapshot(gateway)

        assert ledger.book(1, ghost, '2025-06-01', 3, False) is None
        assert ledger.is_vehicle_available(1, '2025-06-01') is True
        assert _snapshot(gateway) == before

        restarted = RentalLedger(gateway)
        assert restarted.is_vehicle_available(1, '2025-06-01') is True

    def test_deactivated_vehicle_cannot_be_booked(self, ledger, account):
        ledger.deactivate_vehicle(2)
        for day in ('2025-06-01', '2030-01-01'):
            assert ledger.is_vehicle_available(2, day) is False
            assert ledger.book(2, account, day, 1, False) is None

    def test_booking_is_persisted(self, ledger, gateway, account):
        ledger.book(1, account, '2025-06-01', 3, False)
        assert gateway.load('reservations') == [{
            'vehicle_id': 1,
            'account_email': 'a@x.com',
            'date': '2025-06-01',
            'duration': 3,
            'duration_unit': 'days',
            'total': '4500',
            'advance': '900',
            'advance_paid': False,
        }]

    def test_hourly_pricing(self, gateway, account):
        ledger = RentalLedger(gateway, pricing=HourlyPricing())
        reservation = ledger.book(1, account, '2025-06-01', 30, False)
        assert reservation.total == 2000
        assert reservation.advance == Decimal('600.00')
        assert reservation.duration_unit == 'hours'

    def test_quote_has_no_side_effects(self, ledger, gateway):
        before = _snapshot(gateway)
        quote = ledger.quote(1, 3)
        assert quote['total'] == 4500
        assert quote['advance'] == 900
        assert ledger.quote(999, 3) is None
        assert _snapshot(gateway) == before


# ---------------------------------------------------------------------------
# Cancellation and listing
# ---------------------------------------------------------------------------

class TestCancel:
    def test_cancel_unknown_booking_changes_nothing(self, ledger, gateway, account):
        ledger.book(1, account, '2025-06-01', 1, False)
        before = _snapshot(gateway)
        saves_before = len(gateway.save_calls)

        assert ledger.cancel('a@x.com', '2025-07-01') is False
        assert ledger.cancel('nobody@x.com', '2025-06-01') is False
        assert _snapshot(gateway) == before
        assert len(gateway.save_calls) == saves_before

    def test_book_then_cancel_restores_state(self, ledger, gateway, account):
        before = _snapshot(gateway)
        ledger.book(3, account, '2025-06-01', 2, True)

        assert ledger.cancel('A@X.COM', '2025-06-01') is True
        assert _snapshot(gateway) == before
        assert ledger.list_reservations_for_account('a@x.com') == []
        assert ledger.is_vehicle_available(3, '2025-06-01') is True

    def test_cancel_removes_first_match_only(self, ledger, account):
        ledger.book(1, account, '2025-06-01', 1, False)
        ledger.book(2, account, '2025-06-01', 1, False)

        assert ledger.cancel('a@x.com', '2025-06-01') is True
        remaining = ledger.list_reservations_for_account('a@x.com')
        assert [r.vehicle_id for r in remaining] == [2]

    def test_list_reservations_for_account_in_storage_order(self, ledger, account):
        other = ledger.register('Other', 'b@x.com', 'pw', '', '')
        ledger.book(1, account, '2025-06-03', 1, False)
        ledger.book(2, other, '2025-06-01', 1, False)
        ledger.book(3, account, '2025-06-02', 1, False)

        mine = ledger.list_reservations_for_account('A@x.com')
        assert [(r.vehicle_id, r.date) for r in mine] == [(1, '2025-06-03'), (3, '2025-06-02')]
        assert len(ledger.list_reservations()) == 3


# ---------------------------------------------------------------------------
# Restart persistence
# ---------------------------------------------------------------------------

class TestRestart:
    def test_state_survives_restart(self, gateway, ledger, account):
        ledger.book(1, account, '2025-06-01', 3, True)
        ledger.deactivate_vehicle(4)

        restarted = RentalLedger(gateway)

        assert restarted.login('a@x.com', 'pw123') is not None
        assert restarted.is_vehicle_available(1, '2025-06-01') is False
        assert restarted.find_vehicle(4).active is False
        booking = restarted.list_reservations_for_account('a@x.com')[0]
        assert booking.total == 4500
        assert booking.advance == 900
        assert booking.account is restarted.find_account_by_email('a@x.com')
        assert booking.vehicle is restarted.find_vehicle(1)

    def test_orphaned_reservations_are_skipped(self, gateway, ledger, account):
        ledger.book(1, account, '2025-06-01', 1, False)
        records = gateway.load('reservations')
        records.append(dict(records[0], vehicle_id=999, date='2025-06-02'))
        records.append(dict(records[0], account_email='ghost@x.com', date='2025-06-03'))
        gateway.save('reservations', records)

        restarted = RentalLedger(gateway)
        assert [r.date for r in restarted.list_reservations()] == ['2025-06-01']


# ---------------------------------------------------------------------------
# Storage failures
# ---------------------------------------------------------------------------

class TestStorageFailure:
    def test_failed_booking_is_rolled_back(self, ledger, gateway, account):
        gateway.failing.add('reservations')

        with pytest.raises(StorageError):
            ledger.book(1, account, '2025-06-01', 3, False)

        assert ledger.list_reservations() == []
        assert ledger.is_vehicle_available(1, '2025-06-01') is True

    def test_failed_cancel_keeps_reservation_in_place(self, ledger, gateway, account):
        ledger.book(1, account, '2025-06-01', 1, False)
        ledger.book(2, account, '2025-06-02', 1, False)
        gateway.failing.add('reservations')

        with pytest.raises(StorageError):
            ledger.cancel('a@x.com', '2025-06-01')

        assert [r.date for r in ledger.list_reservations()] == ['2025-06-01', '2025-06-02']

    def test_failed_registration_is_rolled_back(self, ledger, gateway):
        gateway.failing.add('accounts')

        with pytest.raises(StorageError):
            ledger.register('Name', 'n@x.com', 'pw', '', '')

        assert ledger.find_account_by_email('n@x.com') is None

    def test_failed_deactivation_is_rolled_back(self, ledger, gateway):
        gateway.failing.add('vehicles')

        with pytest.raises(StorageError):
            ledger.deactivate_vehicle(2)

        assert ledger.find_vehicle(2).active is True

    def test_failed_add_does_not_consume_an_id(self, ledger, gateway):
        gateway.failing.add('vehicles')
        with pytest.raises(StorageError):
            ledger.add_vehicle('Lost', 1, 2, 3, 4)

        gateway.failing.clear()
        assert ledger.add_vehicle('Kept', 1, 2, 3, 4).id == len(DEFAULT_FLEET) + 1
