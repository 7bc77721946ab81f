import pytest

from forge import create_app
from forge.config import TestConfig
from forge.extensions import db


class MemorySessionsConfig(TestConfig):
    FORGE_SESSION_BACKEND = 'memory'


class DatabaseSessionsConfig(TestConfig):
    FORGE_SESSION_BACKEND = 'database'


@pytest.fixture(params=[MemorySessionsConfig, DatabaseSessionsConfig], ids=['memory', 'database'])
def app(request):
    app = create_app(request.param)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def services(app):
    # No app context is held here: requests made by the test client must
    # get their own context (Flask-Login caches the user on ``g``).
    return app.extensions['forge']


@pytest.fixture()
def app_context(app):
    with app.app_context():
        yield
