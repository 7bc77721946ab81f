"""
User Model
"""

from datetime import datetime, timezone

from forge.extensions import db


def utcnow():
    """Naive UTC timestamp, the form SQLite hands back."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(db.Model):
    """User credentials keyed by a unique email"""
    __tablename__ = 'users'
    
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    phone = db.Column(db.String(32), unique=True)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    
    def __repr__(self):
        return f'<User {self.email}>'
