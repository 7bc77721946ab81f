import threading
from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from forge.services import MemorySessionBackend, SessionManager


class FakeClock:
    def __init__(self):
        self.now = datetime(2026, 1, 1, 12, 0, 0)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


def request_with(sid=None):
    return SimpleNamespace(cookies={'session_id': sid} if sid else {})


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def manager(app, services, clock):
    # Same backend the app is configured with, driven by a fake clock
    with app.test_request_context():
        yield SessionManager(services.sessions.backend, clock=clock)


def test_create_gives_fresh_ids_and_fixed_lifetime(manager, clock):
    first = manager.create()
    second = manager.create()
    assert first.id != second.id
    assert len(first.id) >= 32
    assert first.created_at == clock.now
    assert first.expires_at == clock.now + timedelta(hours=24)
    assert first.data == {}


def test_saved_session_is_found_by_cookie(manager):
    session = manager.create()
    session.set('user_id', 7)
    session.set('email', 'a@b.com')
    manager.save(session)

    found = manager.get(request_with(session.id))
    assert found.id == session.id
    assert found.get('user_id') == 7
    assert found.get('email') == 'a@b.com'


def test_changes_need_a_save(manager):
    session = manager.create()
    manager.save(session)
    session.set('user_id', 1)

    assert manager.get(request_with(session.id)).get('user_id') is None
    manager.save(session)
    assert manager.get(request_with(session.id)).get('user_id') == 1


def test_missing_or_unknown_cookie(manager):
    assert manager.get(request_with()) is None
    assert manager.get(request_with('forged-id')) is None


def test_session_expires_after_lifetime(manager, clock):
    session = manager.create()
    manager.save(session)

    clock.advance(hours=23, minutes=59, seconds=59)
    assert manager.get(request_with(session.id)) is not None

    clock.advance(seconds=1)
    assert manager.get(request_with(session.id)) is None
    assert manager.backend.load(session.id) is None


def test_reading_does_not_extend_lifetime(manager, clock):
    session = manager.create()
    manager.save(session)
    for _ in range(4):
        clock.advance(hours=6)
        manager.get(request_with(session.id))
    assert manager.get(request_with(session.id)) is None


def test_destroy(manager):
    session = manager.create()
    manager.save(session)
    manager.destroy(session)
    assert manager.get(request_with(session.id)) is None


def test_regenerate_drops_current_session(manager):
    old = manager.create()
    manager.save(old)

    new = manager.regenerate(request_with(old.id))
    assert new.id != old.id
    assert manager.get(request_with(old.id)) is None


def test_purge_expired(manager, clock):
    stale = manager.create()
    manager.save(stale)
    clock.advance(hours=12)
    live = manager.create()
    manager.save(live)

    clock.advance(hours=13)
    assert manager.purge_expired() == 1
    assert manager.backend.load(stale.id) is None
    assert manager.backend.load(live.id) is not None


def test_save_sets_http_only_cookie(app, services, clock):
    manager = SessionManager(services.sessions.backend, clock=clock)
    with app.test_request_context():
        session = manager.create()
        manager.save(session)
        response = app.process_response(app.response_class())

    cookie = response.headers['Set-Cookie']
    assert cookie.startswith(f'session_id={session.id}')
    assert 'HttpOnly' in cookie
    assert 'SameSite=Lax' in cookie
    assert 'Max-Age=86400' in cookie
    assert 'Secure' not in cookie


def test_destroy_expires_cookie(app, services, clock):
    manager = SessionManager(services.sessions.backend, clock=clock, cookie_secure=True)
    with app.test_request_context():
        session = manager.create()
        manager.backend.store(session)
        manager.destroy(session)
        response = app.process_response(app.response_class())

    cookie = response.headers['Set-Cookie']
    assert cookie.startswith('session_id=;')
    assert 'Max-Age=0' in cookie
    assert 'Secure' in cookie


def test_memory_backend_concurrent_saves():
    backend = MemorySessionBackend()
    manager = SessionManager(backend, clock=FakeClock())
    sessions = [manager.create() for _ in range(50)]

    threads = [threading.Thread(target=backend.store, args=(s,)) for s in sessions]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(backend) == 50
    assert all(backend.load(s.id) is not None for s in sessions)
