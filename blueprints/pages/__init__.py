"""
Pages Blueprint - Public page and static assets
Handles: Portfolio page rendering, project and personal asset serving
"""

from flask import Blueprint

pages_bp = Blueprint('pages', __name__, url_prefix='')

from . import routes
