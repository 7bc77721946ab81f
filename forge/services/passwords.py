"""
Password Hashing Service

Salted, iterated one-way hashing through Werkzeug.
"""

import logging
import secrets

from werkzeug.security import generate_password_hash, check_password_hash

from forge.errors import InternalFailure

logger = logging.getLogger(__name__)


class PasswordHasher:
    """Turns plaintext passwords into storable digests and checks them."""

    def __init__(self, method='pbkdf2:sha256'):
        self.method = method
        self._dummy_digest = None

    def hash(self, plaintext):
        """Return a freshly salted digest of ``plaintext``."""
        try:
            return generate_password_hash(plaintext, method=self.method)
        except (ValueError, TypeError) as e:
            logger.exception('Password hashing failed: %s', e)
            raise InternalFailure('Failed to hash password') from e

    def verify(self, digest, plaintext):
        """Check ``plaintext`` against a stored digest."""
        if not digest or plaintext is None:
            return False
        try:
            return check_password_hash(digest, plaintext)
        except (ValueError, TypeError):
            return False

    def verify_dummy(self, plaintext):
        """Spend the cost of a verify when there is no digest to check.

        Keeps an unknown email as slow as a wrong password. Always False.
        """
        if self._dummy_digest is None:
            self._dummy_digest = generate_password_hash(secrets.token_urlsafe(16), method=self.method)
        check_password_hash(self._dummy_digest, plaintext or '')
        return False
