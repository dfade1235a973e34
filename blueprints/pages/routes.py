"""
Pages Routes - Public portfolio page and static assets
"""

import os
from flask import render_template, send_from_directory, abort, current_app
from extensions import store
from models import PROJECT_CATEGORIES
from utils.data import PortfolioNotFoundError
from utils.images import enrich_projects_with_images, resolve_folder
from utils.optimization import generate_optimized_srcset
from utils.helpers import get_optimized_assets_dir, get_project_assets_dir, get_source_assets_dir, skill_dots
from . import pages_bp


def render_portfolio_page():
    try:
        portfolio = store.get()
    except PortfolioNotFoundError:
        return render_template('404.html', message='Portfolio data not found'), 404

    projects = enrich_projects_with_images(portfolio.get('projects', []), get_source_assets_dir())
    categories = [
        c for c in PROJECT_CATEGORIES
        if c != 'all' and any(p.get('category') == c for p in projects)
    ]
    optimized_dir = get_optimized_assets_dir()

    return render_template('index.html',
                           data=portfolio,
                           projects=projects,
                           categories=categories,
                           skill_dots=skill_dots,
                           image_srcset=lambda folder, image: generate_optimized_srcset(
                               folder, image, output_dir=optimized_dir, existing_only=True))


@pages_bp.route('/')
def index():
    """Portfolio single page"""
    return render_portfolio_page()


@pages_bp.route('/project_assets/<folder>/<path:filename>')
def project_asset(folder, filename):
    """Serve project images, optimized versions first when a build exists"""
    directory = resolve_folder(folder, get_project_assets_dir())
    if directory is None:
        abort(404)
    current_app.logger.debug(f"Accessing: /project_assets/{folder}/{filename}")
    return send_from_directory(directory, filename)


@pages_bp.route('/personal_assets/<path:filename>')
def personal_asset(filename):
    """Serve profile photo, resume and other personal files"""
    directory = os.path.abspath(current_app.config['PERSONAL_ASSETS_DIR'])
    return send_from_directory(directory, filename)


@pages_bp.route('/<path:path>')
def client_fallback(path):
    """Fall through to the page for client-side anchors and unknown paths"""
    if path.startswith('api/'):
        abort(404)
    return render_portfolio_page()
