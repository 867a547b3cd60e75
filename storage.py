"""Key-value storage standing in for browser local storage.

Values are strings; callers JSON-encode what they store. Anything with
``get_item``/``set_item``/``remove_item`` can be injected where a storage is
expected.
"""
import json
import logging
import os

logger = logging.getLogger(__name__)


class MemoryStorage:
    def __init__(self, initial=None):
        self._items = dict(initial or {})

    def get_item(self, key):
        return self._items.get(key)

    def set_item(self, key, value):
        self._items[key] = str(value)

    def remove_item(self, key):
        self._items.pop(key, None)

    def keys(self):
        return list(self._items)


class JsonFileStorage(MemoryStorage):
    """Storage persisted to a single JSON file, rewritten on every change."""

    def __init__(self, path):
        self.path = path
        super().__init__(self._read())

    def _read(self):
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Error reading storage file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.error(f"Storage file {self.path} does not hold an object")
            return {}
        items = {k: v for k, v in data.items() if isinstance(v, str)}
        dropped = len(data) - len(items)
        if dropped:
            logger.error(f"Dropped {dropped} non-string entries from storage file {self.path}")
        return items

    def _write(self):
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(self._items, f)

    def set_item(self, key, value):
        super().set_item(key, value)
        self._write()

    def remove_item(self, key):
        super().remove_item(key)
        self._write()
