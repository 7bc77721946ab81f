"""
Pages Blueprint
"""

from flask import Blueprint

pages_bp = Blueprint('pages', __name__)

from forge.pages import routes  # noqa: E402, F401
