"""
Booking Forms
"""
from flask_wtf import FlaskForm
from wtforms import StringField, IntegerField, BooleanField
from wtforms.validators import DataRequired, NumberRange, ValidationError

from utils.dates import normalize_booking_date, InvalidBookingDate
from utils.ledger_helpers import get_ledger


class BookingDateField(StringField):
    """Text date normalised to YYYY-MM-DD during validation."""

    def pre_validate(self, form):
        if not self.data:
            return
        try:
            self.data = normalize_booking_date(self.data)
        except InvalidBookingDate as exc:
            raise ValidationError(str(exc)) from exc


class BookingForm(FlaskForm):
    vehicle_id = IntegerField('Car', validators=[
        DataRequired(message='Choose a car'),
        NumberRange(min=1, message='Invalid car')
    ])
    date = BookingDateField('Date', validators=[
        DataRequired(message='Date is required')
    ])
    duration = IntegerField('Duration', validators=[
        DataRequired(message='Duration is required'),
        NumberRange(min=1, message='Duration must be at least 1')
    ])
    advance_paid = BooleanField('Advance paid')

    def validate_duration(self, field):
        pricing = get_ledger().pricing
        if field.data > pricing.max_duration:
            raise ValidationError(
                f'Duration must be between 1 and {pricing.max_duration} {pricing.duration_unit}'
            )


class CancelForm(FlaskForm):
    date = BookingDateField('Date', validators=[
        DataRequired(message='Date is required')
    ])
