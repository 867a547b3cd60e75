"""Client shell: restores the session at startup and picks the view to show.

Two ways in. A server login through ``LoginForm`` stores a token and user
record; a landing-page login only stores a local profile, with no server
involved. Either way the dashboard is keyed by the username string.
"""
import json
import logging
import time

from client_auth import AuthClient, resolve_route
from components import LandingPage, LoginForm, RegisterForm
from config import Config
from dashboard import DashboardController, now_ms
from storage import JsonFileStorage

logger = logging.getLogger(__name__)

LOCAL_USER_KEY = 'taskApp_user'


class TaskMasterApp:
    def __init__(self, storage=None, auth_client=None, clock=now_ms, sleep=time.sleep):
        self.storage = storage if storage is not None else JsonFileStorage(Config.TASK_STORE_PATH)
        self.auth_client = auth_client or AuthClient(self.storage)
        self.clock = clock
        self.sleep = sleep
        self.route = None
        self.dashboard = None

    def get_local_user(self):
        raw = self.storage.get_item(LOCAL_USER_KEY)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Error parsing local user: {e}")
            return None

    def current_username(self):
        user = self.auth_client.get_current_user() if self.auth_client.is_authenticated() else None
        user = user or self.get_local_user()
        if not isinstance(user, dict):
            return None
        return user.get('username') or user.get('name')

    def navigate(self, path):
        if self.get_local_user() and not self.auth_client.is_authenticated():
            # Local profiles skip the server login screens
            route = '/dashboard' if path in ('/', '/login', '/register', '/dashboard') else path
        else:
            route = resolve_route(path, self.auth_client)

        self.route = route
        if route == '/dashboard':
            self.open_dashboard()
        else:
            self.dashboard = None
        return route

    def start(self):
        return self.navigate('/')

    def open_dashboard(self):
        username = self.current_username()
        if self.dashboard is None or self.dashboard.store.username != username:
            logger.info(f"Opening dashboard for {username}")
            self.dashboard = DashboardController(self.storage, username, clock=self.clock)
        return self.dashboard

    def landing_page(self):
        return LandingPage(on_login=self.landing_login, sleep=self.sleep)

    def landing_login(self, username):
        self.storage.set_item(LOCAL_USER_KEY, json.dumps({'id': self.clock(), 'username': username}))
        return self.navigate('/dashboard')

    def login_form(self):
        return LoginForm(self.auth_client)

    def register_form(self):
        return RegisterForm(self.auth_client)

    def submit_login(self, form):
        next_route = form.submit()
        if next_route:
            return self.navigate(next_route)
        return None

    def logout(self):
        self.auth_client.logout()
        self.storage.remove_item(LOCAL_USER_KEY)
        return self.navigate('/login')
