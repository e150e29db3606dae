import os
import logging
import click
from logging.handlers import RotatingFileHandler
from flask import Flask, jsonify
from flask.logging import default_handler
from flask_wtf.csrf import CSRFError
from config import config
from extensions import db, migrate, login_manager, csrf
from persistence import StorageError


def configure_logging(app):
    """Configure application logging"""
    if not app.debug and not app.testing:
        # Create logs directory if it doesn't exist
        if not os.path.exists('logs'):
            os.mkdir('logs')

        # File handler for errors
        file_handler = RotatingFileHandler(
            'logs/drivenow.log',
            maxBytes=10240000,  # 10MB
            backupCount=10
        )
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s '
            '[in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)
        # Ledger and gateway modules log through their own module loggers
        for name in ('services', 'persistence'):
            logging.getLogger(name).addHandler(file_handler)
            logging.getLogger(name).setLevel(logging.INFO)

        app.logger.setLevel(logging.INFO)
        app.logger.info('DriveNow Rentals startup')
    else:
        # Development logging to console
        app.logger.setLevel(logging.DEBUG)
        for name in ('services', 'persistence'):
            logging.getLogger(name).addHandler(default_handler)
            logging.getLogger(name).setLevel(logging.DEBUG)
        app.logger.info('DriveNow Rentals startup (DEBUG mode)')


def create_app(config_name=None):
    """Application factory pattern"""

    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    config[config_name].init_app(app)

    # Configure logging
    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)

    # Add security headers
    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        headers = app.config.get('SECURITY_HEADERS', {})
        for header, value in headers.items():
            response.headers[header] = value
        return response

    # Import table models so they're registered with SQLAlchemy
    with app.app_context():
        import persistence.sql_gateway  # noqa: F401

    # Register blueprints
    from blueprints.fleet import fleet_bp
    from blueprints.auth import auth_bp
    from blueprints.bookings import bookings_bp
    from blueprints.admin import admin_bp

    app.register_blueprint(fleet_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(bookings_bp)
    app.register_blueprint(admin_bp, url_prefix='/admin')

    # Create database tables
    if app.config.get('RENTAL_STORAGE_BACKEND') == 'sql':
        with app.app_context():
            db.create_all()

    # Register error handlers
    register_error_handlers(app)

    # Register CLI commands
    register_commands(app)

    return app


def register_error_handlers(app):
    """Register global error handlers"""

    @app.errorhandler(StorageError)
    def storage_error(error):
        app.logger.error(f'Storage unavailable: {error}')
        return jsonify(error='storage unavailable'), 503

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify(error='not found'), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify(error='method not allowed'), 405

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        app.logger.error(f'Internal Server Error: {error}')
        return jsonify(error='internal server error'), 500

    @app.errorhandler(CSRFError)
    def handle_csrf_error(error):
        return jsonify(error=f'CSRF token validation failed: {error.description}'), 400


def register_commands(app):
    """Register Flask CLI commands."""
    from utils.ledger_helpers import get_ledger

    @app.cli.group()
    def fleet():
        """Manage the rental fleet and inspect bookings."""
        pass

    @fleet.command('list')
    def list_vehicles():
        """List every vehicle, active or not."""
        vehicles = get_ledger().list_vehicles()
        if not vehicles:
            click.echo('No vehicles found.')
            return
        click.echo(f'{"ID":<5} {"Name":<28} {"Daily":>10} {"Active":<8}')
        click.echo('-' * 55)
        for v in vehicles:
            click.echo(f'{v.id:<5} {v.name:<28} {v.daily_price:>10} {str(v.active):<8}')

    @fleet.command('add')
    @click.argument('name')
    @click.option('--daily', type=click.FLOAT, help='Flat daily price; tiers are derived from it.')
    @click.option('--tiers', type=click.FLOAT, nargs=4, default=None,
                  help='6h 12h 24h 48h prices.')
    @click.option('--description', default=None)
    def add_vehicle(name, daily, tiers, description):
        """Add a vehicle by NAME."""
        if (daily is None) == (not tiers):
            click.echo('ERROR: give exactly one of --daily or --tiers', err=True)
            return
        ledger = get_ledger()
        if daily is not None:
            vehicle = ledger.add_vehicle_from_daily_price(name, str(daily), description=description)
        else:
            vehicle = ledger.add_vehicle(name, *(str(p) for p in tiers), description=description)
        click.echo(f'SUCCESS: added vehicle {vehicle.id} "{vehicle.name}".')

    @fleet.command('deactivate')
    @click.argument('vehicle_id', type=int)
    def deactivate_vehicle(vehicle_id):
        """Deactivate vehicle VEHICLE_ID."""
        ledger = get_ledger()
        if ledger.find_vehicle(vehicle_id) is None:
            click.echo(f'ERROR: No vehicle with id {vehicle_id}', err=True)
            return
        if not ledger.deactivate_vehicle(vehicle_id):
            click.echo(f'Vehicle {vehicle_id} is already inactive.')
            return
        click.echo(f'SUCCESS: vehicle {vehicle_id} deactivated.')

    @fleet.command('bookings')
    def list_bookings():
        """List every reservation."""
        reservations = get_ledger().list_reservations()
        if not reservations:
            click.echo('No bookings found.')
            return
        for r in reservations:
            paid = 'Yes' if r.advance_paid else 'No'
            click.echo(
                f'{r.date}  {r.vehicle.name:<28} {r.duration} {r.duration_unit:<6} '
                f'{r.account.email:<30} total {r.total:>10}  advance {r.advance:>8}  paid {paid}'
            )


if __name__ == '__main__':
    app = create_app()
    # SECURITY: Only bind to localhost in development
    app.run(host='127.0.0.1', port=5000, debug=True)
