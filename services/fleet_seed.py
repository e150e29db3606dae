"""
Default fleet added the first time the ledger starts against an empty store.
"""

DEFAULT_FLEET = [
    {
        'name': 'Sedan (Toyota)',
        'description': 'A reliable, comfortable car perfect for city travel.',
        'price_6h': 500, 'price_12h': 800, 'price_24h': 1500, 'price_48h': 2500,
    },
    {
        'name': 'SUV (Prado)',
        'description': 'Spacious and powerful, ideal for family trips.',
        'price_6h': 700, 'price_12h': 1200, 'price_24h': 2200, 'price_48h': 4000,
    },
    {
        'name': 'Microbus (Hiace)',
        'description': 'The best option for group travel. Seats up to 14.',
        'price_6h': 900, 'price_12h': 1500, 'price_24h': 2800, 'price_48h': 5000,
    },
    {
        'name': 'Electric Sedan (Tesla)',
        'description': 'Go green with a high-tech electric vehicle.',
        'price_6h': 800, 'price_12h': 1400, 'price_24h': 2600, 'price_48h': 4500,
    },
    {
        'name': 'Sports Coupe (Mustang)',
        'description': 'Experience the thrill of a powerful engine.',
        'price_6h': 1200, 'price_12h': 2000, 'price_24h': 3800, 'price_48h': 7000,
    },
    {
        'name': 'Pickup Truck (Hilux)',
        'description': 'Tough and versatile for heavy items.',
        'price_6h': 600, 'price_12h': 1000, 'price_24h': 1900, 'price_48h': 3500,
    },
    {
        'name': 'Luxury Van (Alphard)',
        'description': 'Premium comfort for VIP guests.',
        'price_6h': 1500, 'price_12h': 2500, 'price_24h': 4500, 'price_48h': 8000,
    },
]


def seed_default_fleet(ledger, fleet=None):
    """Populate *ledger* with the default fleet if it has no vehicles at all."""
    return ledger.seed_vehicles(fleet if fleet is not None else DEFAULT_FLEET)
