"""
History repository.

HistoryStore owns the newest-first sequence of ResultRecord kept under one
backend key as a JSON array. Reads fail soft (corrupt data loads as an empty
history) and writes are best-effort (failures are logged, the in-memory
sequence stays authoritative).
"""

from __future__ import annotations

import json
import logging
from typing import Iterator, List, Optional, Sequence, Tuple

from .record import ResultRecord
from .storage import StorageBackend, StorageError

LOGGER = logging.getLogger(__name__)

DEFAULT_HISTORY_KEY = "bmiHistory"


class HistoryStore:
    def __init__(self, backend: StorageBackend, key: str = DEFAULT_HISTORY_KEY, autoload: bool = True):
        self._backend = backend
        self.key = key
        self._records: List[ResultRecord] = []
        if autoload:
            self.load()

    @property
    def records(self) -> Tuple[ResultRecord, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ResultRecord]:
        return iter(tuple(self._records))

    def get(self, record_id: str) -> Optional[ResultRecord]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def load(self) -> Sequence[ResultRecord]:
        """
        Read the stored collection, replacing the in-memory one.
        Absent or unreadable data yields an empty history; nothing is raised.
        """
        self._records = self._read()
        LOGGER.debug(f"Loaded {len(self._records)} history records from key {self.key!r}")
        return self.records

    def _read(self) -> List[ResultRecord]:
        try:
            blob = self._backend.get_item(self.key)
        except StorageError as e:
            LOGGER.error(f"Could not read history key {self.key!r}: {e}")
            return []
        if blob is None:
            return []
        try:
            payload = json.loads(blob)
            if not isinstance(payload, list):
                raise TypeError(f"expected a JSON array, got {type(payload).__name__}")
            return [ResultRecord.from_dict(item) for item in payload]
        except (ValueError, TypeError, KeyError) as e:
            # json.JSONDecodeError is a ValueError
            LOGGER.error(f"Discarding unreadable history under key {self.key!r}: {e}")
            return []

    def _write(self) -> bool:
        blob = json.dumps([record.to_dict() for record in self._records])
        try:
            self._backend.set_item(self.key, blob)
        except StorageError as e:
            LOGGER.error(f"Could not persist history key {self.key!r}: {e}")
            return False
        return True

    def append(self, record: ResultRecord) -> None:
        """Make `record` the newest entry and persist the full sequence."""
        self._records.insert(0, record)
        self._write()

    def remove(self, record_id: str) -> None:
        """Drop the entry with `record_id`, keeping the others in order. Unknown ids are ignored."""
        remaining = [record for record in self._records if record.id != record_id]
        if len(remaining) == len(self._records):
            LOGGER.debug(f"No history record with id {record_id!r}; nothing removed")
            return
        self._records = remaining
        self._write()

    def clear(self) -> None:
        self._records = []
        try:
            self._backend.remove_item(self.key)
        except StorageError as e:
            LOGGER.error(f"Could not clear history key {self.key!r}: {e}")
