"""View models for the login, register and landing screens and the task list.

Each component keeps the state a form would render (field values, inline
error, loading flag) and turns user actions into calls on the auth client or
the dashboard controller.
"""
import logging
import time

from config import Config
from errors import TaskMasterError
from validation import check_registration_form

logger = logging.getLogger(__name__)


class LandingPage:
    """Username-only entry screen. The delay before logging in is cosmetic."""

    def __init__(self, on_login, delay=None, sleep=time.sleep):
        self.on_login = on_login
        self.delay = Config.LANDING_DELAY if delay is None else delay
        self.sleep = sleep
        self.loading = False

    def submit(self, username):
        if not username or not username.strip():
            return None
        self.loading = True
        self.sleep(self.delay)
        try:
            return self.on_login(username)
        finally:
            self.loading = False


class LoginForm:
    def __init__(self, client):
        self.client = client
        self.email = ''
        self.password = ''
        self.error = ''
        self.loading = False

    def submit(self):
        """Log in. Returns the route to go to next, or None on failure."""
        self.error = ''
        self.loading = True
        try:
            self.client.login_user({'email': self.email, 'password': self.password})
        except TaskMasterError as e:
            self.error = e.message
            self.loading = False
            return None
        self.loading = False
        return '/dashboard'


class RegisterForm:
    def __init__(self, client):
        self.client = client
        self.username = ''
        self.email = ''
        self.password = ''
        self.confirm_password = ''
        self.error = ''
        self.loading = False

    def submit(self):
        self.error = ''
        message = check_registration_form(self.username, self.password, self.confirm_password)
        if message:
            self.error = message
            return None

        self.loading = True
        try:
            self.client.register_user({
                'username': self.username,
                'email': self.email,
                'password': self.password,
            })
        except TaskMasterError as e:
            self.error = e.message
            self.loading = False
            return None
        self.loading = False
        return '/'


class TaskItemView:
    def __init__(self, task):
        self.task = task

    @property
    def css_class(self):
        return f"task-item {self.task.priority}"

    @property
    def checked(self):
        return self.task.completed

    @property
    def subtask_progress(self):
        if not self.task.subtasks:
            return ''
        done = sum(1 for s in self.task.subtasks if s.completed)
        return f"{done}/{len(self.task.subtasks)}"

    def to_dict(self):
        return {
            'id': self.task.id,
            'title': self.task.title,
            'checked': self.checked,
            'priority': self.task.priority,
            'css_class': self.css_class,
            'subtask_progress': self.subtask_progress,
        }


def render_task_list(controller):
    """Rows for the visible tasks, plus the empty-state text when there are none."""
    rows = [TaskItemView(task).to_dict() for task in controller.visible_tasks]
    return {
        'rows': rows,
        'empty_message': '' if rows else 'No tasks yet. Add one above!',
        'stats': controller.stats(),
    }
