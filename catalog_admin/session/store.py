"""
Session stores.

Both keep a small string key/value map and hold the serialized session under
SESSION_KEY; the file store survives process restarts.
"""

import json
import os
from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import ValidationError

from catalog_admin.utils import Logger
from .models import Session

SESSION_KEY = "currentUser"

logger = Logger("session.store")


class KeyValueSessionStore(ABC):
    key = SESSION_KEY

    @abstractmethod
    def _read(self) -> dict[str, str]:
        pass

    @abstractmethod
    def _write(self, items: dict[str, str]) -> None:
        pass

    def load(self) -> Session | None:
        raw = self._read().get(self.key)
        if raw is None:
            return None
        try:
            return Session.model_validate_json(raw)
        except ValidationError:
            logger.warning(f"Discarding unreadable session under '{self.key}'")
            return None

    def save(self, session: Session) -> None:
        items = self._read()
        items[self.key] = session.model_dump_json()
        self._write(items)

    def clear(self) -> None:
        items = self._read()
        if items.pop(self.key, None) is not None:
            self._write(items)


class MemorySessionStore(KeyValueSessionStore):
    def __init__(self):
        self.items: dict[str, str] = {}

    def _read(self) -> dict[str, str]:
        return dict(self.items)

    def _write(self, items: dict[str, str]) -> None:
        self.items = dict(items)


class FileSessionStore(KeyValueSessionStore):
    """JSON object on disk; other keys in the file are preserved."""

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError:
            logger.warning(f"Ignoring corrupt session file {self.path}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, items: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(items), encoding="utf-8")
        os.replace(tmp, self.path)
