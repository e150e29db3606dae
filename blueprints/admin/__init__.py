from flask import Blueprint

# No authentication: any caller may manage the fleet
admin_bp = Blueprint('admin', __name__)

from . import routes
