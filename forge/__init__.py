"""
Forge Authentication - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os

from flask import Flask, jsonify
from sqlalchemy.engine import make_url

from forge.config import Config
from forge.errors import Conflict, ForgeError
from forge.extensions import db, login_manager

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)

    # Access guard: users come from the server-side session, never from
    # Flask's own signed session cookie
    from forge.auth.guard import load_session_user, unauthorized
    login_manager.session_protection = None
    login_manager.request_loader(load_session_user)
    login_manager.unauthorized_handler(unauthorized)

    # Services injected into the handlers through app.extensions
    from forge.services import build_services
    app.extensions['forge'] = build_services(app, db)

    # Register blueprints
    from forge.auth import auth_bp
    from forge.pages import pages_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(pages_bp)

    @app.errorhandler(ForgeError)
    def handle_forge_error(error):
        return jsonify(error.to_dict()), error.status_code

    # Create database tables; a database that cannot be reached is fatal here
    with app.app_context():
        _ensure_database_dir(app.config['SQLALCHEMY_DATABASE_URI'])
        db.create_all()
        _ensure_default_data(app)

    return app


def _ensure_database_dir(uri):
    """Create the directory of a file-backed SQLite database."""
    url = make_url(uri)
    if url.get_backend_name() == 'sqlite' and url.database and url.database != ':memory:':
        os.makedirs(os.path.dirname(os.path.abspath(url.database)), exist_ok=True)


def _ensure_default_data(app):
    """Ensure the demo account exists (first-or-create)."""
    if not app.config.get('SEED_DEFAULT_USER'):
        return

    services = app.extensions['forge']
    email = app.config['DEFAULT_USER_EMAIL']
    if services.credentials.email_exists(email):
        return

    try:
        services.credentials.create(
            email,
            services.hasher.hash(app.config['DEFAULT_USER_PASSWORD']),
            phone=app.config.get('DEFAULT_USER_PHONE'),
        )
        logger.info('Created default user %s', email)
    except Conflict as e:
        logger.warning('Could not create default user %s: %s', email, e.message)
