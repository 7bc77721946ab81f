"""
Credential Store

User rows keyed by a unique email. Uniqueness is enforced by the database,
so a duplicate insert surfaces as ``Conflict`` even when two registrations
for the same address race each other.
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from forge.errors import Conflict, InternalFailure
from forge.models import User

logger = logging.getLogger(__name__)


class CredentialStore:
    """Persistence boundary for user records."""

    def __init__(self, db):
        self.db = db

    def find_by_email(self, email):
        """Return the user registered under ``email``, or None."""
        if not email:
            return None
        return User.query.filter_by(email=email).first()

    def email_exists(self, email):
        return self.find_by_email(email) is not None

    def count_by_email(self, email):
        return User.query.filter_by(email=email).count()

    def create(self, email, password_hash, phone=None):
        """Insert a new user.

        Raises:
            Conflict: the email (or phone) is already registered
            InternalFailure: any other database error
        """
        user = User(email=email, phone=phone or None, password_hash=password_hash)
        try:
            self.db.session.add(user)
            self.db.session.commit()
        except IntegrityError as e:
            self.db.session.rollback()
            if 'phone' in str(e.orig).lower():
                logger.warning('Rejected duplicate phone for %s', email)
                raise Conflict('Phone already registered') from e
            logger.warning('Rejected duplicate registration for %s', email)
            raise Conflict('Email already registered') from e
        except SQLAlchemyError as e:
            self.db.session.rollback()
            logger.exception('Could not create user %s: %s', email, e)
            raise InternalFailure('Failed to create user') from e
        return user
