"""
API Blueprint - JSON endpoints for the single-page client
Handles: Portfolio read/write, project asset listing, contact form relay
"""

from flask import Blueprint

api_bp = Blueprint('api', __name__, url_prefix='/api')

from . import routes
