"""
Session Record Model

Backing table for the database session backend.
"""

from forge.extensions import db


class SessionRecord(db.Model):
    """Server-side session referenced by the session cookie"""
    __tablename__ = 'sessions'
    
    id = db.Column(db.String(64), primary_key=True)
    data = db.Column(db.JSON, nullable=False, default=dict)
    created_at = db.Column(db.DateTime, nullable=False)
    expires_at = db.Column(db.DateTime, nullable=False, index=True)
    
    def __repr__(self):
        return f'<SessionRecord {self.id[:8]} expires {self.expires_at}>'
