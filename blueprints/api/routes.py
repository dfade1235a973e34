"""
API Routes - JSON endpoints
Handles: Portfolio read/write, project asset listing, contact form relay
"""

import os
from flask import jsonify, request, current_app
from pydantic import ValidationError
from extensions import store
from models import ContactRequest
from utils.data import PortfolioNotFoundError, PortfolioSaveError
from utils.images import discover_project_images, filter_original_images, enrich_projects_with_images, resolve_folder
from utils.optimization import generate_optimized_srcset
from utils.notifications import send_contact_email, ContactConfigError, ContactDeliveryError
from utils.security import check_rate_limit, is_honeypot_filled
from utils.helpers import format_validation_errors, get_optimized_assets_dir, get_source_assets_dir
from . import api_bp


def load_enriched_portfolio():
    """Portfolio document with each project's images taken from its asset folder"""
    portfolio = store.get()
    return {
        **portfolio,
        'projects': enrich_projects_with_images(portfolio.get('projects', []), get_source_assets_dir())
    }


@api_bp.route('/portfolio', methods=['GET'])
def get_portfolio():
    """Get portfolio data"""
    try:
        return jsonify(load_enriched_portfolio())
    except PortfolioNotFoundError:
        return jsonify({'message': 'Portfolio data not found'}), 404


@api_bp.route('/portfolio', methods=['PUT'])
def update_portfolio():
    """Replace the whole portfolio document"""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({'message': 'Invalid portfolio data'}), 400

    try:
        updated = store.replace(payload)
    except ValidationError as e:
        current_app.logger.warning(f"Rejected portfolio update: {e.error_count()} validation errors")
        return jsonify({'message': 'Invalid portfolio data', 'errors': format_validation_errors(e)}), 400
    except PortfolioSaveError:
        return jsonify({'message': 'Failed to save portfolio data'}), 500

    current_app.logger.info(f"✓ Portfolio updated: {len(updated.get('projects', []))} projects")
    return jsonify(updated)


@api_bp.route('/assets/<folder>', methods=['GET'])
def project_assets(folder):
    """List the original images of one project folder with their srcsets"""
    assets_dir = get_source_assets_dir()
    folder_path = resolve_folder(folder, assets_dir)
    if folder_path is None or not os.path.isdir(folder_path):
        current_app.logger.warning(f"Asset folder not found: {folder}")
        return jsonify({'message': f"Failed to read assets from {folder}", 'images': []}), 404

    optimized_dir = get_optimized_assets_dir()
    images = [
        {
            'filename': filename,
            'srcset': generate_optimized_srcset(folder, filename, output_dir=optimized_dir, existing_only=True),
            'path': f"/project_assets/{folder}/{filename}"
        }
        for filename in filter_original_images(discover_project_images(folder, assets_dir))
    ]

    return jsonify({'folder': folder, 'images': images, 'count': len(images)})


@api_bp.route('/contact', methods=['POST'])
def contact():
    """Contact form processing - relays the message by email"""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = request.form.to_dict()

    # Honeypot spam protection
    if is_honeypot_filled(payload):
        current_app.logger.info("Honeypot triggered on contact form, dropping message")
        return jsonify({'message': 'Message sent successfully', 'success': True})

    if not check_rate_limit('contact'):
        return jsonify({'message': 'Too many requests. Please try again later.', 'success': False}), 429

    try:
        submission = ContactRequest.model_validate(payload)
    except ValidationError as e:
        return jsonify({
            'message': 'Missing required fields: firstName, lastName, email and message are required',
            'success': False,
            'errors': format_validation_errors(e)
        }), 400

    try:
        portfolio = store.get()
    except PortfolioNotFoundError:
        portfolio = None

    try:
        send_contact_email(submission, portfolio=portfolio)
    except ContactConfigError:
        return jsonify({'message': 'Email service is not configured', 'success': False}), 500
    except ContactDeliveryError as e:
        return jsonify({'message': str(e), 'success': False}), e.status_code

    return jsonify({'message': 'Message sent successfully', 'success': True})
