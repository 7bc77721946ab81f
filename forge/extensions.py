"""
Flask Extensions

The credential store, password hasher and session manager are built per
application in ``create_app`` and kept in ``app.extensions['forge']``.
"""

from flask import current_app
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Database instance
db = SQLAlchemy()

# Login manager used as the access guard for protected routes
login_manager = LoginManager()


def get_services():
    """Return the service container of the running application."""
    return current_app.extensions['forge']
