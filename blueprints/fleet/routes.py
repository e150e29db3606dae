from flask import jsonify, request, abort
from . import fleet_bp
from utils.dates import normalize_booking_date, InvalidBookingDate
from utils.ledger_helpers import get_ledger


@fleet_bp.route('/')
@fleet_bp.route('/vehicles')
def index():
    """Active vehicles available for booking"""
    ledger = get_ledger()
    return jsonify(
        vehicles=[v.to_dict() for v in ledger.list_active_vehicles()],
        pricing_model=ledger.pricing.name,
    )


@fleet_bp.route('/vehicles/<int:vehicle_id>')
def detail(vehicle_id):
    vehicle = get_ledger().find_vehicle(vehicle_id)
    if vehicle is None:
        abort(404)
    return jsonify(vehicle=vehicle.to_dict())


@fleet_bp.route('/vehicles/<int:vehicle_id>/availability')
def availability(vehicle_id):
    """Whether the vehicle can be booked on ?date="""
    try:
        booking_date = normalize_booking_date(request.args.get('date'))
    except InvalidBookingDate as exc:
        return jsonify(error=str(exc)), 400

    available = get_ledger().is_vehicle_available(vehicle_id, booking_date)
    return jsonify(vehicle_id=vehicle_id, date=booking_date, available=available)


@fleet_bp.route('/vehicles/<int:vehicle_id>/quote')
def quote(vehicle_id):
    """Price a rental of ?duration= days (or hours under hourly pricing)"""
    ledger = get_ledger()
    duration = request.args.get('duration', type=int)
    if duration is None or not 1 <= duration <= ledger.pricing.max_duration:
        return jsonify(
            error=f'duration must be a whole number from 1 to {ledger.pricing.max_duration}'
        ), 400

    result = ledger.quote(vehicle_id, duration)
    if result is None:
        abort(404)

    result['total'] = float(result['total'])
    result['advance'] = float(result['advance'])
    return jsonify(quote=result)
