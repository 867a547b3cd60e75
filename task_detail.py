import logging

from dashboard import now_ms
from models import Subtask

logger = logging.getLogger(__name__)

DEFAULT_REWARD_TEXT = "Well done! Take a break."


class TaskDetailView:
    """The task modal.

    Title, description and importance are edited in a buffer and only reach
    the controller on save(). Subtask and reward changes commit immediately.
    """

    def __init__(self, controller, task_id, clock=now_ms):
        self.controller = controller
        self.clock = clock
        self.active_tab = 'details'
        self.error = ''
        task = controller.open_task(task_id)
        if task is None:
            raise KeyError(task_id)
        self.reset_buffer()

    @property
    def task(self):
        return self.controller.selected_task

    def reset_buffer(self):
        self.title = self.task.title
        self.description = self.task.description
        self.important = self.task.important
        self.reward_text = self.task.reward

    def set_tab(self, tab):
        if tab not in ('details', 'reward'):
            raise ValueError(f"Unknown tab: {tab}")
        self.active_tab = tab

    def _task_missing(self):
        # The task may have been deleted from the list while the modal was open
        if self.task is None:
            self.error = "This task no longer exists"
            return True
        return False

    def save(self):
        if self._task_missing():
            return False
        if not self.title.strip():
            self.error = "Title cannot be empty"
            return False
        self.error = ''
        self.controller.update_task(self.task.model_copy(update={
            'title': self.title,
            'description': self.description,
            'important': self.important,
        }))
        return True

    def cancel(self):
        if self._task_missing():
            return
        self.error = ''
        self.reset_buffer()

    def close(self):
        self.controller.close_task()

    # Subtasks

    def _commit_subtasks(self, subtasks):
        self.controller.update_task(self.task.model_copy(update={'subtasks': subtasks}))

    def add_subtask(self, title):
        if self._task_missing():
            return None
        if not title or not title.strip():
            return None
        subtask = Subtask(id=self.clock(), title=title)
        self._commit_subtasks(self.task.subtasks + [subtask])
        return subtask

    def toggle_subtask(self, subtask_id):
        if self._task_missing():
            return False
        self._commit_subtasks([
            s.model_copy(update={'completed': not s.completed}) if s.id == subtask_id else s
            for s in self.task.subtasks
        ])
        return True

    def delete_subtask(self, subtask_id):
        if self._task_missing():
            return False
        self._commit_subtasks([s for s in self.task.subtasks if s.id != subtask_id])
        return True

    # Reward

    @property
    def reward_mode(self):
        if self.task is None:
            return None
        return 'reveal' if self.task.completed else 'edit'

    def reward_panel(self):
        if self._task_missing():
            return None
        if self.reward_mode == 'edit':
            return {'mode': 'edit', 'reward': self.reward_text}
        return {
            'mode': 'reveal',
            'reward': self.task.reward or DEFAULT_REWARD_TEXT,
            'reward_taken': self.task.reward_taken,
        }

    def save_reward(self):
        if self._task_missing():
            return False
        if self.reward_mode != 'edit':
            logger.debug(f"Reward for task {self.task.id} is locked once completed")
            return False
        self.controller.update_task(self.task.model_copy(update={'reward': self.reward_text}))
        return True

    def toggle_reward_taken(self):
        if self._task_missing():
            return False
        if self.reward_mode != 'reveal':
            return False
        self.controller.update_task(
            self.task.model_copy(update={'reward_taken': not self.task.reward_taken}))
        return True
