# tests/conftest.py

import pytest

from app import create_app
from client_auth import AuthClient
from config import TestConfig
from models import db
from storage import MemoryStorage


class FakeClock:
    """Millisecond clock that moves forward on every call."""

    def __init__(self, start=1_700_000_000_000):
        self.now = start

    def __call__(self):
        self.now += 1
        return self.now


class FakeResponse:
    def __init__(self, status_code, data):
        self.status_code = status_code
        self.ok = status_code < 400
        self._data = data

    def json(self):
        if self._data is None:
            raise ValueError("No JSON body")
        return self._data


class FlaskSession:
    """Lets AuthClient talk to the Flask test client instead of the network."""

    def __init__(self, test_client):
        self.test_client = test_client

    def post(self, url, json=None, timeout=None):
        path = url.split('://', 1)[-1]
        path = path[path.index('/'):]
        response = self.test_client.post(path, json=json)
        return FakeResponse(response.status_code, response.get_json(silent=True))


@pytest.fixture()
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def storage():
    return MemoryStorage()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def auth_client(client, storage):
    return AuthClient(storage, base_url='http://testserver', session=FlaskSession(client))


@pytest.fixture()
def registered_user(client):
    data = {'username': 'alice', 'email': 'alice@example.com', 'password': 'Password123'}
    response = client.post('/api/auth/register', json=data)
    assert response.status_code == 201
    return data
