"""
Services Package

Builds the per-application services handed to the request handlers.
"""

from forge.services.credentials import CredentialStore
from forge.services.passwords import PasswordHasher
from forge.services.sessions import (
    DatabaseSessionBackend,
    MemorySessionBackend,
    Session,
    SessionManager,
)

__all__ = [
    'CredentialStore',
    'PasswordHasher',
    'Session',
    'SessionManager',
    'MemorySessionBackend',
    'DatabaseSessionBackend',
    'ForgeServices',
    'build_services',
]


class ForgeServices:
    """Credential store, password hasher and session manager of one app."""

    def __init__(self, credentials, hasher, sessions):
        self.credentials = credentials
        self.hasher = hasher
        self.sessions = sessions


def build_services(app, db):
    """Construct the services from ``app.config``."""
    backend_name = app.config.get('FORGE_SESSION_BACKEND', 'memory')
    if backend_name == 'memory':
        backend = MemorySessionBackend()
    elif backend_name == 'database':
        backend = DatabaseSessionBackend(db)
    else:
        raise ValueError(f'Unknown session backend: {backend_name}')

    sessions = SessionManager(
        backend,
        lifetime=app.config['FORGE_SESSION_LIFETIME'],
        cookie_name=app.config['FORGE_SESSION_COOKIE_NAME'],
        cookie_secure=app.config['FORGE_SESSION_COOKIE_SECURE'],
    )
    return ForgeServices(
        credentials=CredentialStore(db),
        hasher=PasswordHasher(app.config['PASSWORD_HASH_METHOD']),
        sessions=sessions,
    )
