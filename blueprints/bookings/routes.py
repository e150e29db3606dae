from flask import jsonify
from flask_login import current_user
from . import bookings_bp
from .forms import BookingForm, CancelForm
from utils.ledger_helpers import get_ledger


@bookings_bp.route('/bookings')
def index():
    """The logged-in customer's reservations"""
    reservations = get_ledger().list_reservations_for_account(current_user.email)
    return jsonify(bookings=[r.summary() for r in reservations])


@bookings_bp.route('/bookings', methods=['POST'])
def book():
    form = BookingForm()
    if not form.validate_on_submit():
        return jsonify(errors=form.errors), 400

    reservation = get_ledger().book(
        form.vehicle_id.data,
        current_user._get_current_object(),
        form.date.data,
        form.duration.data,
        advance_paid=form.advance_paid.data,
    )
    if reservation is None:
        return jsonify(
            error=f'The car is not available on {form.date.data}. Please try another car or date.'
        ), 409

    return jsonify(message='Your booking is confirmed.', booking=reservation.summary()), 201


@bookings_bp.route('/bookings/cancel', methods=['POST'])
def cancel():
    form = CancelForm()
    if not form.validate_on_submit():
        return jsonify(errors=form.errors), 400

    if not get_ledger().cancel(current_user.email, form.date.data):
        return jsonify(
            error=f"No booking was found for email '{current_user.email}' on {form.date.data}."
        ), 404

    return jsonify(message=f'Your booking for {form.date.data} has been cancelled.')
