"""
Access Guard

Flask-Login callbacks that resolve the current user from the server-side
session. Routes decorated with ``login_required`` get a 401 JSON response
when the request has no live session carrying a ``user_id``.
"""

import logging

from flask import jsonify
from flask_login import UserMixin

from forge.errors import SessionStoreError
from forge.extensions import get_services

logger = logging.getLogger(__name__)


class SessionUser(UserMixin):
    """The authenticated user as recorded in the session.

    Attributes are read from the session only, so they can be stale if the
    user row changes after login.
    """

    def __init__(self, session):
        self.session = session
        self.id = session.get('user_id')
        self.email = session.get('email')

    def get_id(self):
        return str(self.id)


def load_session_user(request):
    """Flask-Login request loader."""
    try:
        session = get_services().sessions.get(request)
    except SessionStoreError:
        logger.warning('Session store unavailable, treating request as anonymous')
        return None
    if session is None or session.get('user_id') is None:
        return None
    return SessionUser(session)


def unauthorized():
    return jsonify({'error': 'Unauthorized'}), 401
