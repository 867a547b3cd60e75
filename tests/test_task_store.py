# tests/test_task_store.py

import json
import logging
from pathlib import Path

from models import Subtask, Task
from storage import JsonFileStorage, MemoryStorage
from task_store import TaskStore, tasks_key


def make_task(**overrides):
    fields = {'id': 1, 'title': 'Write report', 'created_at': 1}
    fields.update(overrides)
    return Task(**fields)


def test_save_uses_camel_case_keys(storage):
    store = TaskStore(storage, 'alice')
    store.save([make_task(reward_taken=True, subtasks=[Subtask(id=2, title='Outline')])])

    raw = json.loads(storage.get_item('taskApp_tasks_alice'))
    assert raw[0]['rewardTaken'] is True
    assert raw[0]['createdAt'] == 1
    assert raw[0]['subtasks'] == [{'id': 2, 'title': 'Outline', 'completed': False}]


def test_load_returns_saved_tasks(storage):
    store = TaskStore(storage, 'alice')
    tasks = [make_task(id=1), make_task(id=2, title='Call mom', important=True)]
    store.save(tasks)
    assert TaskStore(storage, 'alice').load() == tasks


def test_collections_are_keyed_by_username(storage):
    TaskStore(storage, 'alice').save([make_task()])
    assert TaskStore(storage, 'bob').load() == []
    assert tasks_key('bob') == 'taskApp_tasks_bob'


def test_malformed_data_reads_as_empty(caplog):
    storage = MemoryStorage({
        tasks_key('alice'): '{not json',
        tasks_key('bob'): json.dumps([{'title': 'missing id'}]),
        tasks_key('carol'): '42',
    })
    assert TaskStore(storage, 'alice').load() == []
    assert TaskStore(storage, 'bob').load() == []
    with caplog.at_level(logging.ERROR, logger='task_store'):
        assert TaskStore(storage, 'carol').load() == []
    assert 'Error parsing tasks for carol' in caplog.text


def test_file_storage_survives_reopen(tmp_path: Path):
    path = tmp_path / 'local_storage.json'
    TaskStore(JsonFileStorage(str(path)), 'alice').save([make_task()])

    reopened = JsonFileStorage(str(path))
    assert TaskStore(reopened, 'alice').load()[0].title == 'Write report'

    reopened.remove_item(tasks_key('alice'))
    assert JsonFileStorage(str(path)).get_item(tasks_key('alice')) is None


def test_corrupt_storage_file_starts_empty(tmp_path: Path):
    path = tmp_path / 'local_storage.json'
    path.write_text('[1, 2', encoding='utf-8')
    assert JsonFileStorage(str(path)).keys() == []


def test_non_string_entries_are_dropped_and_logged(tmp_path: Path, caplog):
    path = tmp_path / 'local_storage.json'
    path.write_text(json.dumps({'keep': '[]', 'bad': 1, 'worse': [1]}), encoding='utf-8')
    with caplog.at_level(logging.ERROR, logger='storage'):
        storage = JsonFileStorage(str(path))
    assert storage.keys() == ['keep']
    assert 'Dropped 2 non-string entries' in caplog.text
