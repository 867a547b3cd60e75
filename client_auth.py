"""Client side session handling.

The token and user record live in local storage. ``resolve_route`` only
decides which view to show; it never asks the server whether the token is
still good, so it is a UI convenience and not a security boundary.
"""
import json
import logging

import requests

from config import Config
from errors import AuthenticationError, ConflictError, NetworkError, TaskMasterError, ValidationError

logger = logging.getLogger(__name__)

TOKEN_KEY = 'taskmaster_token'
USER_KEY = 'taskmaster_user'

STATUS_ERRORS = {
    400: ValidationError,
    401: AuthenticationError,
    409: ConflictError,
}


class AuthClient:
    def __init__(self, storage, base_url=None, timeout=None, session=None):
        self.storage = storage
        self.base_url = (base_url or Config.API_BASE_URL).rstrip('/')
        self.timeout = timeout if timeout is not None else Config.HTTP_TIMEOUT
        self.session = session or requests.Session()

    def _post(self, path, payload, fallback_message):
        try:
            response = self.session.post(f"{self.base_url}{path}", json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Request to {path} failed: {e}")
            raise NetworkError("Unable to reach the server")

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if not response.ok:
            error_class = STATUS_ERRORS.get(response.status_code, TaskMasterError)
            raise error_class(data.get('message') or fallback_message, response.status_code)
        return data

    def register_user(self, user_data):
        return self._post('/api/auth/register', user_data, 'Registration failed')

    def login_user(self, user_data):
        data = self._post('/api/auth/login', user_data, 'Login failed')
        if data.get('token'):
            self.storage.set_item(TOKEN_KEY, data['token'])
        if data.get('user'):
            self.storage.set_item(USER_KEY, json.dumps(data['user']))
        return data

    def logout(self):
        self.storage.remove_item(TOKEN_KEY)
        self.storage.remove_item(USER_KEY)

    def get_auth_token(self):
        return self.storage.get_item(TOKEN_KEY)

    def get_current_user(self):
        raw = self.storage.get_item(USER_KEY)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Error parsing user data: {e}")
            return None

    def is_authenticated(self):
        return bool(self.get_auth_token()) and bool(self.get_current_user())


GUEST_ONLY_ROUTES = ('/login', '/register')
PROTECTED_ROUTES = ('/dashboard',)


def resolve_route(path, client):
    """Return the path that should actually be shown for ``path``."""
    authenticated = client.is_authenticated()
    if path == '/':
        return '/dashboard' if authenticated else '/login'
    if path in GUEST_ONLY_ROUTES and authenticated:
        return '/dashboard'
    if path in PROTECTED_ROUTES and not authenticated:
        return '/login'
    return path
