"""
Error types

Each error carries the HTTP status it maps to; ``create_app`` registers a
handler that renders them as ``{"error": message}``.
"""


class ForgeError(Exception):
    """Base class for errors that terminate a request."""
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'error': self.message}


class ValidationError(ForgeError):
    """Malformed or too-short input."""
    status_code = 400


class Conflict(ForgeError):
    """Duplicate email."""
    status_code = 409


class Unauthenticated(ForgeError):
    """Bad credentials or missing/invalid session."""
    status_code = 401


class InternalFailure(ForgeError):
    """Store, session or hashing failure."""
    status_code = 500


class SessionStoreError(InternalFailure):
    """The session backing store could not be read or written."""
