import json
import logging
from typing import Any, Callable, List

from psycopg import Error

logger = logging.getLogger(__name__)

Listener = Callable[[str, str], None]


class LocalStorage:
    """JSON view over one user's slice of the key/value database.

    Reads never raise: a missing key, a database error or unparseable JSON
    all come back as the supplied default.
    """

    def __init__(self, db, user_id: int):
        self.db = db
        self.user_id = user_id

    def load(self, key: str, default: Any) -> Any:
        try:
            raw = self.db.get_item(self.user_id, key)
            return json.loads(raw) if raw else default
        except (Error, ValueError) as e:
            logger.error(f"Failed to load {key} for user {self.user_id}: {e}")
            return default

    def save(self, key: str, value: Any) -> None:
        try:
            self.db.set_item(self.user_id, key, json.dumps(value))
        except Error as e:
            logger.error(f"Failed to save {key} for user {self.user_id}: {e}")


class Store:
    """Base for persisted stores that notify subscribers after each change."""

    def __init__(self, storage: LocalStorage):
        self.storage = storage
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def notify(self, message: str, level: str = 'success') -> None:
        for listener in self._listeners:
            listener(message, level)

    def load_list(self, key: str) -> List[dict]:
        data = self.storage.load(key, [])
        if not isinstance(data, list):
            logger.warning(f"Ignoring malformed {key} for user {self.storage.user_id}")
            return []
        return [item for item in data if isinstance(item, dict)]
