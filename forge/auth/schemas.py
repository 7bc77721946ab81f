"""
Request and response schemas for the auth endpoints.

Requests are validated here, before any handler touches a store.
"""

from dataclasses import dataclass
from typing import Optional

from forge.errors import ValidationError

MIN_EMAIL_LENGTH = 5
MIN_PASSWORD_LENGTH = 6


def _read_credentials(payload):
    if not isinstance(payload, dict):
        raise ValidationError('Invalid request')
    email = payload.get('email') or ''
    password = payload.get('password') or ''
    if not isinstance(email, str) or not isinstance(password, str):
        raise ValidationError('Invalid request')
    return email.strip(), password


@dataclass(frozen=True)
class RegisterRequest:
    email: str
    password: str

    @classmethod
    def from_json(cls, payload):
        email, password = _read_credentials(payload)
        if not email or len(email) < MIN_EMAIL_LENGTH:
            raise ValidationError('Invalid email address')
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters')
        return cls(email=email, password=password)


@dataclass(frozen=True)
class LoginRequest:
    email: str
    password: str

    @classmethod
    def from_json(cls, payload):
        email, password = _read_credentials(payload)
        return cls(email=email, password=password)


@dataclass(frozen=True)
class AuthResponse:
    message: str
    email: str
    phone: Optional[str] = None
    include_phone: bool = False

    def to_dict(self):
        user = {'email': self.email}
        if self.include_phone:
            user['phone'] = self.phone or ''
        return {'success': True, 'message': self.message, 'user': user}
