"""
Auth Blueprint

JSON endpoints for registration, login, logout and session lookup.
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__, url_prefix='/api')

from forge.auth import routes  # noqa: E402, F401
