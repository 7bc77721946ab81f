"""
Models Package

Exports all models for easy importing.
"""

from forge.models.user import User, utcnow
from forge.models.session import SessionRecord

__all__ = ['User', 'SessionRecord', 'utcnow']
