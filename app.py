"""
Portfolio Site - Main Application Entry Point
Application Factory Pattern

This module initializes the Flask application with all necessary extensions,
configurations, and middleware. All actual route handling is delegated to blueprints.
"""

import os
from datetime import datetime
from flask import Flask, render_template, request, jsonify
from sqlalchemy.exc import SQLAlchemyError
from config import get_config
from extensions import db, connection_cache
from utils.errors import PersistenceError

# Import all blueprints
from blueprints.api import api_bp
from blueprints.discuss import discuss_bp
from blueprints.pages import pages_bp


def create_app(config_name=None):
    """
    Application Factory Pattern
    Creates and configures Flask application instance

    Args:
        config_name (str): Configuration environment name (optional)

    Returns:
        Flask: Configured Flask application instance

    Raises:
        ConfigurationError: If no database URI is configured
    """

    app = Flask(__name__)

    # Load configuration
    conf = get_config(config_name)
    app.config.from_object(conf)

    # Fix PostgreSQL URL if needed
    db_url = app.config.get('SQLALCHEMY_DATABASE_URI')
    if db_url and db_url.startswith("postgres://"):
        app.config['SQLALCHEMY_DATABASE_URI'] = db_url.replace(
            "postgres://", "postgresql://", 1)

    # Initialize extensions with app
    initialize_extensions(app)

    # Register Jinja filters
    from utils.chat import filter_reply
    app.jinja_env.filters['filter_reply'] = filter_reply
    app.logger.info('✓ Registered Jinja filter: filter_reply')

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register request/response hooks
    register_hooks(app)

    # Health check route
    @app.route('/health')
    def health_check():
        return {
            'status': 'ok',
            'message': 'Portfolio application is running',
            'database': connection_cache.is_connected()
        }, 200

    return app


def initialize_extensions(app):
    """Initialize Flask extensions with the app instance"""
    # Fails fast when the database URI is missing
    connection_cache.init_app(app)
    db.init_app(app)

    # Models must be imported before create_all
    import models  # noqa: F401

    # Create tables if they don't exist
    with app.app_context():
        try:
            connection_cache.get_connection()
            db.create_all()
            app.logger.info("✓ Database initialized successfully")
        except (SQLAlchemyError, PersistenceError) as e:
            # The connection cache retries on the first request that needs it
            app.logger.error(f"✗ Database initialization failed: {str(e)}")


def register_blueprints(app):
    """Register all application blueprints"""
    app.register_blueprint(pages_bp)
    app.register_blueprint(discuss_bp)
    app.register_blueprint(api_bp)


def _wants_json():
    return request.path.startswith('/api/')


def register_error_handlers(app):
    """Register custom error handlers"""

    @app.errorhandler(404)
    def page_not_found(e):
        if _wants_json():
            return jsonify({'error': 'Not found'}), 404
        return render_template('404.html'), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        if _wants_json():
            return jsonify({'error': 'Method not allowed'}), 405
        return render_template('404.html'), 405

    @app.errorhandler(500)
    def internal_server_error(e):
        app.logger.error(f"Server Error: {str(e)}")
        if _wants_json():
            return jsonify({'error': 'Internal server error. Please try again.'}), 500
        return render_template('500.html'), 500


def register_hooks(app):
    """Register request/response hooks and context processors"""

    @app.context_processor
    def inject_global_vars():
        """Values shared by every template"""
        return {
            'current_year': datetime.now().year,
            'site_owner': app.config.get('SITE_OWNER'),
            'site_url': app.config.get('SITE_URL'),
        }

    @app.after_request
    def add_security_headers(response):
        """Add security headers to all responses"""
        response.headers['Content-Security-Policy'] = (
            "default-src 'self'; "
            "script-src 'self' 'unsafe-inline'; "
            "style-src 'self' 'unsafe-inline' https://fonts.googleapis.com; "
            "font-src 'self' https://fonts.gstatic.com; "
            "img-src 'self' data: https:; "
            "connect-src 'self'; "
            "frame-ancestors 'none';"
        )
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
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
