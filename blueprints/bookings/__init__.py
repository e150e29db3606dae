from flask import Blueprint
from flask_login import login_required

bookings_bp = Blueprint('bookings', __name__)

# Require authentication for all routes in this blueprint
@bookings_bp.before_request
@login_required
def require_login():
    pass

from . import routes
