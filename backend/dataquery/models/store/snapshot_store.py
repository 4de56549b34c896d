from __future__ import annotations
from threading import Lock
from dataquery.core.entities import Snapshot
from dataquery.core.ports.store import ISnapshotStore
from dataquery.models.index.value_index import ExactValueIndex

class SnapshotStore(ISnapshotStore):
    """
    Read-mostly handle to the active Snapshot. Readers take the reference
    without locking; writers publish a fully built snapshot in one assignment.
    Also owns the record id sequence, so every ingester publishing here
    continues the same numbering.
    """
    def __init__(self, initial: Snapshot | None = None) -> None:
        self._snapshot = initial or Snapshot.empty(ExactValueIndex())
        self._publish_lock = Lock()
        self._id_lock = Lock()
        self._next_id = 1

    def current(self) -> Snapshot:
        return self._snapshot

    def swap(self, snapshot: Snapshot) -> Snapshot:
        with self._publish_lock:
            previous, self._snapshot = self._snapshot, snapshot
        return previous

    def reserve_ids(self, count: int) -> range:
        if count < 0:
            raise ValueError(f"Invalid id count: {count}")
        with self._id_lock:
            start = self._next_id
            self._next_id += count
        return range(start, start + count)
