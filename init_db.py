"""
Initialize database and create tables
Run this script once to set up the relational store (RENTAL_STORAGE_BACKEND=sql)
"""

from app import create_app
from extensions import db
from utils.ledger_helpers import get_ledger

def init_db():
    """Initialize the database and seed the default fleet"""
    app = create_app('development')
    
    with app.app_context():
        print("Creating database tables...")
        db.create_all()
        print("Database tables created successfully!")
        print(f"Database location: {app.config['SQLALCHEMY_DATABASE_URI']}")
        
        # Print all tables
        print("\nTables created:")
        for table in db.metadata.sorted_tables:
            print(f"  - {table.name}")

        # Loading the ledger seeds the fleet on an empty store
        vehicles = get_ledger().list_vehicles()
        print(f"\nFleet: {len(vehicles)} vehicles")

if __name__ == '__main__':
    init_db()
