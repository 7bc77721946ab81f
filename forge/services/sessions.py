"""
Session Manager

Server-side sessions referenced by an opaque, HTTP-only cookie. A session
holds a small attribute map and expires a fixed time after creation; reading
it never extends the lifetime.

Two backing stores are provided: an in-process dict (the default) and the
``sessions`` table. Handlers only ever go through ``SessionManager``.
"""

import logging
import math
import secrets
import threading
from datetime import timedelta

from flask import after_this_request
from sqlalchemy.exc import SQLAlchemyError

from forge.errors import SessionStoreError
from forge.models import SessionRecord, utcnow

logger = logging.getLogger(__name__)


class Session:
    """A session as seen by request handlers."""

    def __init__(self, sid, data=None, created_at=None, expires_at=None):
        self.id = sid
        self.data = dict(data or {})
        self.created_at = created_at
        self.expires_at = expires_at

    def get(self, key, default=None):
        return self.data.get(key, default)

    def set(self, key, value):
        self.data[key] = value

    def is_expired(self, now):
        return now >= self.expires_at

    def __repr__(self):
        return f'<Session {self.id[:8]} expires {self.expires_at}>'


class MemorySessionBackend:
    """Process-wide session storage in a lock-guarded dict."""

    def __init__(self):
        self._sessions = {}
        self._lock = threading.Lock()

    def load(self, sid):
        with self._lock:
            entry = self._sessions.get(sid)
        if entry is None:
            return None
        data, created_at, expires_at = entry
        return Session(sid, data, created_at, expires_at)

    def store(self, session):
        # Stored as a snapshot: later changes to the Session need another save.
        with self._lock:
            self._sessions[session.id] = (dict(session.data), session.created_at, session.expires_at)

    def delete(self, sid):
        with self._lock:
            self._sessions.pop(sid, None)

    def purge(self, now):
        with self._lock:
            expired = [sid for sid, (_, _, expires_at) in self._sessions.items() if now >= expires_at]
            for sid in expired:
                del self._sessions[sid]
        return len(expired)

    def __len__(self):
        with self._lock:
            return len(self._sessions)


class DatabaseSessionBackend:
    """Session storage in the ``sessions`` table."""

    def __init__(self, db):
        self.db = db

    def load(self, sid):
        try:
            record = self.db.session.get(SessionRecord, sid)
        except SQLAlchemyError as e:
            self.db.session.rollback()
            logger.exception('Session lookup failed: %s', e)
            raise SessionStoreError('Session error') from e
        if record is None:
            return None
        return Session(record.id, record.data, record.created_at, record.expires_at)

    def store(self, session):
        try:
            record = self.db.session.get(SessionRecord, session.id)
            if record is None:
                record = SessionRecord(id=session.id, created_at=session.created_at)
                self.db.session.add(record)
            record.data = dict(session.data)
            record.expires_at = session.expires_at
            self.db.session.commit()
        except SQLAlchemyError as e:
            self.db.session.rollback()
            logger.exception('Session save failed: %s', e)
            raise SessionStoreError('Failed to save session') from e

    def delete(self, sid):
        try:
            SessionRecord.query.filter_by(id=sid).delete()
            self.db.session.commit()
        except SQLAlchemyError as e:
            self.db.session.rollback()
            logger.exception('Session delete failed: %s', e)
            raise SessionStoreError('Failed to destroy session') from e

    def purge(self, now):
        try:
            removed = SessionRecord.query.filter(SessionRecord.expires_at <= now).delete()
            self.db.session.commit()
        except SQLAlchemyError as e:
            self.db.session.rollback()
            logger.exception('Session purge failed: %s', e)
            raise SessionStoreError('Session error') from e
        return removed


class SessionManager:
    """Creates, finds, saves and destroys cookie-referenced sessions.

    Args:
        backend: a session backing store (memory or database)
        lifetime: absolute session lifetime, counted from creation
        cookie_name: name of the cookie carrying the session id
        cookie_secure: whether the cookie is only sent over HTTPS
        clock: callable returning the current naive UTC time
    """

    def __init__(self, backend, lifetime=timedelta(hours=24), cookie_name='session_id',
                 cookie_secure=False, clock=utcnow):
        self.backend = backend
        self.lifetime = lifetime
        self.cookie_name = cookie_name
        self.cookie_secure = cookie_secure
        self.clock = clock

    def create(self):
        """Return a new, unsaved session with a fresh random id."""
        now = self.clock()
        return Session(secrets.token_urlsafe(32), {}, now, now + self.lifetime)

    def get(self, request):
        """Return the live session referenced by ``request``, or None.

        Missing, unknown and expired session ids all come back as None.
        """
        sid = request.cookies.get(self.cookie_name)
        if not sid:
            return None
        session = self.backend.load(sid)
        if session is None:
            return None
        if session.is_expired(self.clock()):
            self.backend.delete(sid)
            return None
        return session

    def regenerate(self, request):
        """Drop whatever session ``request`` carries and start a new one."""
        current = self.get(request)
        if current is not None:
            self.backend.delete(current.id)
        self.purge_expired()
        return self.create()

    def save(self, session):
        """Persist ``session`` and send its cookie with the response."""
        self.backend.store(session)
        max_age = max(math.ceil((session.expires_at - self.clock()).total_seconds()), 0)

        @after_this_request
        def _set_session_cookie(response):
            response.set_cookie(
                self.cookie_name,
                session.id,
                max_age=max_age,
                httponly=True,
                secure=self.cookie_secure,
                samesite='Lax',
            )
            return response

    def destroy(self, session):
        """Delete ``session`` from the store and expire its cookie."""
        self.backend.delete(session.id)
        self.clear_cookie()

    def clear_cookie(self):
        @after_this_request
        def _clear_session_cookie(response):
            response.delete_cookie(
                self.cookie_name,
                httponly=True,
                secure=self.cookie_secure,
                samesite='Lax',
            )
            return response

    def purge_expired(self):
        removed = self.backend.purge(self.clock())
        if removed:
            logger.debug('Purged %d expired sessions', removed)
        return removed
