"""
Pricing Models
==============
How a reservation's total and advance are derived.  A deployment picks one
model through ``RENTAL_PRICING_MODEL``; a ledger never mixes them.

  daily   total = price_24h x days, advance = 20% of total rounded up to a
          whole unit.  This is the canonical model.
  hourly  total = Vehicle.price_for_hours(hours), advance = 30% of total
          rounded half-up to 2 decimals.

Example: a 1500/day Sedan for 3 days costs 4500 with a 900 advance under the
daily model.
"""
import math
from decimal import Decimal, ROUND_HALF_UP


class PricingModel:
    """Base class: subclasses set ``name``/``duration_unit`` and price totals."""

    name = None
    duration_unit = None
    advance_rate = None
    # Longest rental accepted from a customer, in duration_unit
    max_duration = None

    def total_for(self, vehicle, duration):
        raise NotImplementedError

    def advance_for(self, total):
        raise NotImplementedError

    def quote(self, vehicle, duration):
        """Return (total, advance) for renting *vehicle* for *duration* units."""
        total = self.total_for(vehicle, duration)
        return total, self.advance_for(total)

    def __repr__(self):
        return f'<PricingModel {self.name}>'


class DailyPricing(PricingModel):
    name = 'daily'
    duration_unit = 'days'
    advance_rate = Decimal('0.2')
    max_duration = 365

    def total_for(self, vehicle, duration):
        return vehicle.price_for_days(duration)

    def advance_for(self, total):
        return Decimal(math.ceil(total * self.advance_rate))


class HourlyPricing(PricingModel):
    name = 'hourly'
    duration_unit = 'hours'
    advance_rate = Decimal('0.3')
    max_duration = 365 * 24

    def total_for(self, vehicle, duration):
        return vehicle.price_for_hours(duration)

    def advance_for(self, total):
        return (total * self.advance_rate).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


PRICING_MODELS = {
    DailyPricing.name: DailyPricing,
    HourlyPricing.name: HourlyPricing,
}


def get_pricing_model(name):
    """Look up a pricing model by its config name."""
    try:
        return PRICING_MODELS[name]()
    except KeyError:
        raise ValueError(
            f"Unknown RENTAL_PRICING_MODEL {name!r}; expected one of {sorted(PRICING_MODELS)}"
        ) from None
