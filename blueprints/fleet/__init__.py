from flask import Blueprint

fleet_bp = Blueprint('fleet', __name__)

from . import routes
