from flask import jsonify, abort
from . import admin_bp
from .forms import VehicleForm
from utils.ledger_helpers import get_ledger


@admin_bp.route('/vehicles')
def vehicles():
    """All vehicles, including deactivated ones"""
    return jsonify(vehicles=[v.to_dict() for v in get_ledger().list_vehicles()])


@admin_bp.route('/vehicles', methods=['POST'])
def add_vehicle():
    form = VehicleForm()
    if not form.validate_on_submit():
        return jsonify(errors=form.errors), 400

    ledger = get_ledger()
    description = form.description.data or None
    if form.daily_price.data is not None:
        vehicle = ledger.add_vehicle_from_daily_price(
            form.name.data.strip(), form.daily_price.data, description=description
        )
    else:
        vehicle = ledger.add_vehicle(form.name.data.strip(), *form.tier_prices(),
                                     description=description)

    return jsonify(vehicle=vehicle.to_dict()), 201


@admin_bp.route('/vehicles/<int:vehicle_id>/deactivate', methods=['POST'])
def deactivate_vehicle(vehicle_id):
    ledger = get_ledger()
    if ledger.deactivate_vehicle(vehicle_id):
        return jsonify(message=f'Vehicle {vehicle_id} deactivated.')

    if ledger.find_vehicle(vehicle_id) is None:
        abort(404)
    return jsonify(error=f'Vehicle {vehicle_id} is already inactive.'), 409


@admin_bp.route('/reservations')
def reservations():
    return jsonify(bookings=[r.summary() for r in get_ledger().list_reservations()])
