"""
Folio - Main Application Entry Point
Built using the Application Factory Pattern

This module initializes the Flask application with its configuration,
the portfolio store and request hooks. All actual route handling is
delegated to blueprints.
"""

import os
from flask import Flask, jsonify, render_template, request
from config import get_config
from extensions import store
from utils.helpers import paragraphs
from utils.notifications import missing_contact_settings

# Import all blueprints
from blueprints.api import api_bp
from blueprints.pages import pages_bp


BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def create_app(config_name=None, **overrides):
    """
    Application Factory Pattern
    Creates and configures Flask application instance

    Args:
        config_name (str): Configuration environment name (optional)
        **overrides: Config values applied on top of the selected config

    Returns:
        Flask: Configured Flask application instance

    Raises:
        RuntimeError: If the build output is required but missing
    """
    conf = get_config(config_name)
    settings = {key: getattr(conf, key) for key in dir(conf) if key.isupper()}
    settings.update(overrides)

    # Production serves the built client bundle instead of the source static folder
    static_folder = os.path.join(BASE_DIR, 'static')
    if settings.get('SERVE_BUILD'):
        static_folder = os.path.abspath(os.path.join(settings['BUILD_DIR'], 'public', 'static'))
        if not os.path.isdir(static_folder):
            raise RuntimeError(
                f"Could not find the build directory: {static_folder}, "
                f"make sure to run scripts/build.py first")

    app = Flask(__name__, static_folder=static_folder)
    app.config.from_mapping(settings)
    app.json.ensure_ascii = False
    app.json.sort_keys = False

    # Initialize extensions with app
    initialize_extensions(app)

    # Register Jinja filters
    app.jinja_env.filters['paragraphs'] = paragraphs

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register request/response hooks
    register_hooks(app)

    check_contact_configuration(app)

    # Health check route
    @app.route('/health')
    def health_check():
        return {'status': 'ok', 'message': 'Folio is running'}, 200

    return app


def initialize_extensions(app):
    """Initialize shared state with the app instance"""
    store.init_app(app)
    app.logger.info(f"✓ Portfolio store bound to {store.data_file}")

    for key in ('PROJECT_ASSETS_DIR', 'PERSONAL_ASSETS_DIR'):
        path = app.config[key]
        if os.path.isdir(path):
            app.logger.info(f"✓ {key}: {os.path.abspath(path)}")
        else:
            app.logger.warning(f"{key} does not exist: {os.path.abspath(path)}")


def register_blueprints(app):
    """Register all application blueprints"""
    app.register_blueprint(api_bp)
    app.register_blueprint(pages_bp)


def check_contact_configuration(app):
    """Warn loudly at startup when the contact form can't send email"""
    with app.app_context():
        missing = missing_contact_settings()
    if missing:
        app.logger.warning(
            f"✗ Contact email disabled, missing configuration: {', '.join(missing)}. "
            f"POST /api/contact will return 500 until it is set.")
    else:
        app.logger.info("✓ Contact email configured")


def wants_json():
    return request.path.startswith('/api/')


def register_error_handlers(app):
    """Register custom error handlers"""

    @app.errorhandler(400)
    def bad_request(e):
        if wants_json():
            return jsonify({'message': 'Bad request'}), 400
        return render_template('404.html', message='Bad request'), 400

    @app.errorhandler(404)
    def page_not_found(e):
        if wants_json():
            return jsonify({'message': 'Not found'}), 404
        return render_template('404.html'), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({'message': 'Method not allowed'}), 405

    @app.errorhandler(413)
    def payload_too_large(e):
        return jsonify({'message': 'Request body is too large'}), 413

    @app.errorhandler(500)
    def internal_server_error(e):
        app.logger.error(f"Server Error: {str(e)}")
        if wants_json():
            return jsonify({'message': 'Internal server error'}), 500
        return render_template('500.html'), 500


def register_hooks(app):
    """Register request/response hooks"""

    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        if request.path.startswith(('/api/', '/health')):
            response.headers['Cache-Control'] = 'no-store'
        elif request.path.startswith(('/project_assets/', '/personal_assets/')):
            response.headers['Cache-Control'] = 'public, max-age=86400'
        return response


if __name__ == '__main__':
    # Get environment
    env = os.environ.get('FLASK_ENV', 'development')

    # Create app
    app = create_app(env)

    # Run development server
    app.run(
        host='0.0.0.0',
        port=int(os.environ.get('PORT', 5000)),
        debug=(env == 'development')
    )
