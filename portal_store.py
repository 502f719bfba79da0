"""
portal_store.py - local, unencrypted key-value store

String keys map to string values, the same shape as a phone's async storage.
With a path the whole map lives in one JSON file that is rewritten on every
change; without one everything stays in memory and is gone when the process
stops.
"""

import os
import json
import logging
import tempfile
import threading
from contextlib import contextmanager

from portal_errors import StoreError

logger = logging.getLogger(__name__)

# keys that belong to a student but are not the account record itself
STUDENT_KEY_PREFIXES = ("schedule_", "homework_", "grades_", "notes_")
# session keys the mobile client kept in the same store
RESERVED_KEYS = ("userToken", "userName", "userRole", "profileData")


def student_key(prefix: str, student_id: str) -> str:
    return f"{prefix}{student_id}"


def is_record_key(key: str) -> bool:
    """True when ``key`` may hold a user record."""
    return key not in RESERVED_KEYS and not key.startswith(STUDENT_KEY_PREFIXES)


class KeyValueStore:
    def __init__(self, path=None):
        self.path = path or None
        self._data = None
        self._lock = threading.RLock()

    @property
    def in_memory(self) -> bool:
        return self.path is None

    @contextmanager
    def transaction(self):
        """Hold the store lock across a read-modify-write."""
        with self._lock:
            yield self

    # --------- raw string API ----------
    def get_item(self, key: str):
        with self._lock:
            return self._load().get(key)

    def set_item(self, key: str, value: str):
        if not isinstance(value, str):
            raise StoreError(f"value for {key!r} must be a string")
        with self._lock:
            data = self._load()
            data[key] = value
            self._flush(data)

    def remove_item(self, key: str):
        with self._lock:
            data = self._load()
            if data.pop(key, None) is not None:
                self._flush(data)

    def get_all_keys(self):
        with self._lock:
            return list(self._load().keys())

    def clear(self):
        with self._lock:
            self._data = {}
            self._flush(self._data)

    # --------- JSON helpers ----------
    def get_json(self, key: str, default=None):
        raw = self.get_item(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError as e:
            raise StoreError(f"stored value for {key!r} is not valid JSON") from e

    def set_json(self, key: str, value):
        self.set_item(key, json.dumps(value))

    # --------- persistence ----------
    def _load(self):
        if self._data is not None:
            return self._data
        if self.in_memory or not os.path.exists(self.path):
            self._data = {}
            return self._data
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error("Could not read store file %s: %s", self.path, e)
            raise StoreError(f"could not read store file {self.path}") from e
        if not isinstance(data, dict) or not all(isinstance(v, str) for v in data.values()):
            raise StoreError(f"store file {self.path} is not a string map")
        self._data = data
        return self._data

    def _flush(self, data):
        if self.in_memory:
            return
        directory = os.path.dirname(os.path.abspath(self.path))
        fd, tmp = tempfile.mkstemp(prefix=".portal-", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp, self.path)
        except OSError as e:
            if os.path.exists(tmp):
                os.unlink(tmp)
            logger.error("Could not write store file %s: %s", self.path, e)
            raise StoreError(f"could not write store file {self.path}") from e
