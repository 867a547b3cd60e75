import json
import logging

from pydantic import ValidationError as ModelValidationError

from models import Task

logger = logging.getLogger(__name__)

TASKS_KEY_PREFIX = 'taskApp_tasks_'


def tasks_key(username):
    return f"{TASKS_KEY_PREFIX}{username}"


class TaskStore:
    """A user's task collection, stored whole under one key.

    Tasks are scoped only by the username string.
    """

    def __init__(self, storage, username):
        self.storage = storage
        self.username = username
        self.key = tasks_key(username)

    def load(self):
        raw = self.storage.get_item(self.key)
        if not raw:
            return []
        try:
            items = json.loads(raw)
            return [Task.model_validate(item) for item in items]
        except (json.JSONDecodeError, TypeError, ModelValidationError) as e:
            logger.error(f"Error parsing tasks for {self.username}: {e}")
            return []

    def save(self, tasks):
        self.storage.set_item(self.key, json.dumps([t.to_storage() for t in tasks]))

    def clear(self):
        self.storage.remove_item(self.key)
