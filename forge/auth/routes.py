"""
Auth Routes

Registration, login, logout, email availability and current-user lookup.
Every failure ends the request with a JSON error; see ``forge.errors``.
"""

import logging

from flask import request, jsonify
from flask_login import login_required, current_user

from forge.auth import auth_bp
from forge.auth.schemas import AuthResponse, LoginRequest, RegisterRequest
from forge.errors import Conflict, InternalFailure, SessionStoreError, Unauthenticated, ValidationError
from forge.extensions import get_services

logger = logging.getLogger(__name__)


def _start_session(sessions, user):
    """Replace the client's session with one bound to ``user``."""
    try:
        session = sessions.regenerate(request)
    except SessionStoreError as e:
        raise InternalFailure('Session error') from e

    session.set('user_id', user.id)
    session.set('email', user.email)
    try:
        sessions.save(session)
    except SessionStoreError as e:
        raise InternalFailure('Failed to save session') from e
    return session


@auth_bp.route('/register', methods=['POST'])
def register():
    """Create an account and sign it in"""
    services = get_services()
    req = RegisterRequest.from_json(request.get_json(silent=True))

    if services.credentials.email_exists(req.email):
        logger.info('Registration refused, %s already registered', req.email)
        raise Conflict('Email already registered')

    password_hash = services.hasher.hash(req.password)
    user = services.credentials.create(req.email, password_hash)
    logger.info('Registered user %s (%s)', user.email, user.id)

    # The user row stays even if the session cannot be started.
    _start_session(services.sessions, user)

    return jsonify(AuthResponse('Registration successful', user.email).to_dict())


@auth_bp.route('/login', methods=['POST'])
def login():
    """Check credentials and start a session"""
    services = get_services()
    req = LoginRequest.from_json(request.get_json(silent=True))

    user = services.credentials.find_by_email(req.email)
    if user is None:
        services.hasher.verify_dummy(req.password)
        logger.warning('Failed login for unknown email')
        raise Unauthenticated('Invalid credentials')

    if not services.hasher.verify(user.password_hash, req.password):
        logger.warning('Failed login for user %s', user.id)
        raise Unauthenticated('Invalid credentials')

    _start_session(services.sessions, user)
    logger.info('Login: %s (%s)', user.email, user.id)

    response = AuthResponse('Login successful', user.email, phone=user.phone, include_phone=True)
    return jsonify(response.to_dict())


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Destroy the current session, if any"""
    sessions = get_services().sessions
    try:
        session = sessions.get(request)
    except SessionStoreError as e:
        raise InternalFailure('Session error') from e

    if session is None:
        sessions.clear_cookie()
    else:
        try:
            sessions.destroy(session)
        except SessionStoreError as e:
            raise InternalFailure('Failed to destroy session') from e
        logger.info('Logout: user %s', session.get('user_id'))

    return jsonify({'success': True, 'message': 'Logged out'})


@auth_bp.route('/check-email', methods=['GET'])
def check_email():
    """Report whether an email address is still free"""
    email = request.args.get('email', '').strip()
    if not email:
        raise ValidationError('Email required')

    available = not get_services().credentials.email_exists(email)
    return jsonify({'available': available})


@auth_bp.route('/user', methods=['GET'])
@login_required
def get_user():
    """Return the user recorded in the session"""
    return jsonify({'id': current_user.id, 'email': current_user.email})
