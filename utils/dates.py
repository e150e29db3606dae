"""
Booking date normalisation.

The ledger compares reservation dates as exact strings, so every date must be
turned into the one canonical form, ``YYYY-MM-DD``, before it reaches
book() / cancel() / is_vehicle_available().

Accepted input::

    normalize_booking_date('2025-06-01')   # HTML date input
    normalize_booking_date('01-06-2025')   # legacy day-first form
    normalize_booking_date(date(2025, 6, 1))
"""
import re
from datetime import date, datetime

from dateutil import parser as date_parser

CANONICAL_FORMAT = '%Y-%m-%d'

_ISO_DATE = re.compile(r'^\d{4}-\d{1,2}-\d{1,2}$')
_DAY_FIRST_DATE = re.compile(r'^\d{1,2}[-/.]\d{1,2}[-/.]\d{4}$')


class InvalidBookingDate(ValueError):
    """The value cannot be read as a calendar date."""


def normalize_booking_date(value):
    """Return *value* as a ``YYYY-MM-DD`` string, or raise InvalidBookingDate."""
    if isinstance(value, datetime):
        return value.date().strftime(CANONICAL_FORMAT)
    if isinstance(value, date):
        return value.strftime(CANONICAL_FORMAT)

    text = (value or '').strip()
    if _ISO_DATE.match(text):
        dayfirst = False
    elif _DAY_FIRST_DATE.match(text):
        dayfirst = True
    else:
        raise InvalidBookingDate(f'Unrecognised date: {value!r}')

    try:
        parsed = date_parser.parse(text, dayfirst=dayfirst, yearfirst=not dayfirst)
    except (ValueError, OverflowError) as exc:
        raise InvalidBookingDate(f'Invalid date: {value!r}') from exc

    return parsed.strftime(CANONICAL_FORMAT)
