import logging
import time

from models import Task
from task_store import TaskStore

logger = logging.getLogger(__name__)

FILTERS = ('all', 'important', 'pending', 'completed')
SORTS = ('date', 'alpha', 'color')

# Important pending tasks first, then plain pending, completed last
PRIORITY_WEIGHTS = {'important': 1, 'normal': 2, 'completed': 3}


def now_ms():
    return int(time.time() * 1000)


def filter_tasks(tasks, filter_name):
    if filter_name == 'important':
        return [t for t in tasks if not t.completed and t.important]
    if filter_name == 'pending':
        return [t for t in tasks if not t.completed]
    if filter_name == 'completed':
        return [t for t in tasks if t.completed]
    return list(tasks)


def sort_tasks(tasks, sort_name):
    if sort_name == 'alpha':
        return sorted(tasks, key=lambda t: t.title.casefold())
    if sort_name == 'color':
        return sorted(tasks, key=lambda t: PRIORITY_WEIGHTS[t.priority])
    return sorted(tasks, key=lambda t: t.created_at, reverse=True)


def derive_view(tasks, filter_name='all', sort_name='date'):
    """Filter, then sort. Pure: the input list is left untouched."""
    return sort_tasks(filter_tasks(tasks, filter_name), sort_name)


class DashboardController:
    """Owns the current user's tasks and mirrors every change to the store."""

    def __init__(self, storage, username, clock=now_ms):
        self.store = TaskStore(storage, username)
        self.clock = clock
        self.tasks = self.store.load()
        self.filter = 'all'
        self.sort = 'date'
        self.selected_task = None

    def _save(self, tasks):
        self.tasks = tasks
        self.store.save(tasks)

    def _find(self, task_id):
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    @property
    def visible_tasks(self):
        return derive_view(self.tasks, self.filter, self.sort)

    def set_filter(self, filter_name):
        if filter_name not in FILTERS:
            raise ValueError(f"Unknown filter: {filter_name}")
        self.filter = filter_name

    def set_sort(self, sort_name):
        if sort_name not in SORTS:
            raise ValueError(f"Unknown sort: {sort_name}")
        self.sort = sort_name

    def add_task(self, title):
        if not title or not title.strip():
            return None
        stamp = self.clock()
        task = Task(id=stamp, title=title, created_at=stamp)
        self._save([task] + self.tasks)
        logger.debug(f"Added task {task.id}")
        return task

    def toggle_task(self, task_id):
        updated = [
            t.model_copy(update={'completed': not t.completed}) if t.id == task_id else t
            for t in self.tasks
        ]
        self._save(updated)
        if self.selected_task is not None and self.selected_task.id == task_id:
            self.selected_task = self._find(task_id)
        return self._find(task_id)

    def delete_task(self, task_id):
        self._save([t for t in self.tasks if t.id != task_id])
        if self.selected_task is not None and self.selected_task.id == task_id:
            self.selected_task = None

    def update_task(self, updated_task):
        if self._find(updated_task.id) is None:
            logger.debug(f"Ignoring update for missing task {updated_task.id}")
            return None
        self._save([updated_task if t.id == updated_task.id else t for t in self.tasks])
        self.selected_task = updated_task
        return updated_task

    def open_task(self, task_id):
        self.selected_task = self._find(task_id)
        return self.selected_task

    def close_task(self):
        self.selected_task = None

    def stats(self):
        completed = sum(1 for t in self.tasks if t.completed)
        return {
            'total': len(self.tasks),
            'completed': completed,
            'pending': len(self.tasks) - completed,
        }
