"""
Key-value persistence backends for the history store.

A backend holds string blobs under string keys, the way browser local
storage does. HistoryStore only ever talks to the abstract interface, so
tests substitute InMemoryBackend for the file-backed one.
"""

from __future__ import annotations

import abc
import json
import logging
import os
import pathlib
import tempfile
from typing import Dict, Optional

LOGGER = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """Raised when a backend cannot read or write its medium."""


class StorageBackend(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        # None when the key is absent
        raise NotImplementedError

    @abc.abstractmethod
    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def remove_item(self, key: str) -> None:
        raise NotImplementedError


class InMemoryBackend(StorageBackend):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileBackend(StorageBackend):
    """
    Stores every key in a single JSON object file: {"<key>": "<blob>", ...}.

    - a missing file reads as an empty store
    - writes go to a temporary sibling file that replaces the original
    - any OSError or unreadable file surfaces as StorageError on read
    - a write over an unreadable file replaces it with a fresh object
    """

    def __init__(self, path: str | os.PathLike):
        self.path = pathlib.Path(path).expanduser()

    def _read_all(self) -> Dict[str, str]:
        if not self.path.is_file():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as in_f:
                payload = json.load(in_f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read {self.path}: {e}") from e
        if not isinstance(payload, dict):
            raise StorageError(f"Storage file {self.path} does not hold a JSON object")
        return payload

    def _read_for_update(self) -> Dict[str, str]:
        try:
            return self._read_all()
        except StorageError as e:
            LOGGER.warning(f"Overwriting unreadable storage file: {e}")
            return {}

    def _write_all(self, items: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as out_f:
                    json.dump(items, out_f, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                pathlib.Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {self.path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return None if value is None else str(value)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_for_update()
        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_for_update()
        if key in items:
            del items[key]
            self._write_all(items)
