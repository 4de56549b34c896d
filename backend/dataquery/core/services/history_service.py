from __future__ import annotations
import logging
from collections import deque
from threading import Lock
from typing import Deque, Iterable, List

from dataquery.core.entities import HistoryEntry
from dataquery.core.errors import NotFoundError
from dataquery.core.ports.history import IHistoryRepository

logger = logging.getLogger("dataquery.history")

DEFAULT_CAPACITY = 100

class HistoryService:
    """
    Bounded query log. Holds at most `capacity` entries; appending to a full
    log evicts the oldest. Every mutation is built on a copy, flushed through
    the repository, and only then published, all under one lock.
    """

    def __init__(self, repository: IHistoryRepository, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError(f"Invalid history capacity: {capacity}")
        self.repository = repository
        self.capacity = capacity
        self._lock = Lock()
        stored = repository.read_all()[:capacity]  # most-recent-first
        # oldest on the left, newest on the right
        self._entries: Deque[HistoryEntry] = deque(reversed(stored), maxlen=capacity)
        logger.info("🗂️ History loaded | entries=%d | capacity=%d", len(self._entries), capacity)

    def _commit(self, entries: Iterable[HistoryEntry]) -> None:
        candidate = deque(entries, maxlen=self.capacity)
        self.repository.write_all(list(reversed(candidate)))
        self._entries = candidate

    def append(self, entry: HistoryEntry) -> None:
        with self._lock:
            candidate = deque(self._entries, maxlen=self.capacity)
            candidate.append(entry)
            self._commit(candidate)

    def list(self) -> List[HistoryEntry]:
        """Entries most-recent-first."""
        with self._lock:
            return list(reversed(self._entries))

    def delete(self, entry_id: str) -> None:
        with self._lock:
            remaining = [e for e in self._entries if e.id != entry_id]
            if len(remaining) == len(self._entries):
                raise NotFoundError(f"History entry {entry_id} not found")
            self._commit(remaining)

    def clear(self) -> None:
        with self._lock:
            self._commit(())

    def __len__(self) -> int:
        return len(self._entries)
