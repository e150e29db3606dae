"""
Vehicle record: a rentable car with four price tiers and a soft-delete flag.

Price tiers
-----------
  price_6h   usage up to 6 hours
  price_12h  usage up to 12 hours
  price_24h  usage up to 24 hours (the daily price)
  price_48h  48-hour package, shown on listings

Longer hourly rentals are charged as whole days at price_24h plus the tier
covering the remaining hours.
"""
from decimal import Decimal, ROUND_HALF_UP

CENTS = Decimal('0.01')


def _money(value):
    """Coerce a price to Decimal without going through binary float.

    Anything finer than a cent is rounded half-up to whole cents, the
    precision the price columns store.
    """
    amount = value if isinstance(value, Decimal) else Decimal(str(value))
    if amount.is_finite() and amount.as_tuple().exponent < -2:
        amount = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    return amount


class Vehicle:
    """A car in the rental fleet"""

    # Multipliers applied to a flat daily price by from_daily_price()
    DAILY_TIER_FACTORS = (Decimal('0.6'), Decimal('0.8'), Decimal('1'), Decimal('2'))

    def __init__(self, id, name, price_6h, price_12h, price_24h, price_48h,
                 description=None, active=True):
        self.id = id
        self.name = name
        self.description = description
        self.price_6h = _money(price_6h)
        self.price_12h = _money(price_12h)
        self.price_24h = _money(price_24h)
        self.price_48h = _money(price_48h)
        self.active = active

    @classmethod
    def from_daily_price(cls, id, name, daily_price, description=None):
        """Build a vehicle whose tiers are derived from a flat daily price."""
        daily = _money(daily_price)
        p6, p12, p24, p48 = (daily * factor for factor in cls.DAILY_TIER_FACTORS)
        return cls(id, name, p6, p12, p24, p48, description=description)

    @property
    def daily_price(self):
        return self.price_24h

    def _tier_price(self, hours):
        if hours <= 6:
            return self.price_6h
        if hours <= 12:
            return self.price_12h
        return self.price_24h

    def price_for_hours(self, hours):
        """Cost of renting for *hours*: a single tier, or whole days plus a tier."""
        if hours <= 24:
            return self._tier_price(hours)
        full_days, remaining = divmod(hours, 24)
        cost = full_days * self.price_24h
        if remaining:
            cost += self._tier_price(remaining)
        return cost

    def price_for_days(self, days):
        return self.daily_price * days

    def deactivate(self):
        """Soft delete. Returns False if the vehicle was already inactive."""
        if not self.active:
            return False
        self.active = False
        return True

    # ------------------------------------------------------------------
    # Persistence records
    # ------------------------------------------------------------------

    def to_record(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'price_6h': str(self.price_6h),
            'price_12h': str(self.price_12h),
            'price_24h': str(self.price_24h),
            'price_48h': str(self.price_48h),
            'active': self.active,
        }

    @classmethod
    def from_record(cls, record):
        return cls(
            id=int(record['id']),
            name=record['name'],
            description=record.get('description'),
            price_6h=record['price_6h'],
            price_12h=record['price_12h'],
            price_24h=record['price_24h'],
            price_48h=record['price_48h'],
            active=bool(record.get('active', True)),
        )

    def to_dict(self):
        """JSON-friendly view for the request layer."""
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'daily_price': float(self.daily_price),
            'prices': {
                '6h': float(self.price_6h),
                '12h': float(self.price_12h),
                '24h': float(self.price_24h),
                '48h': float(self.price_48h),
            },
            'active': self.active,
        }

    def __repr__(self):
        return f'<Vehicle {self.id}: {self.name} active={self.active}>'
