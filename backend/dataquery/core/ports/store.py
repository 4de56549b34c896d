from __future__ import annotations
from abc import ABC, abstractmethod
from dataquery.core.entities import Snapshot

class ISnapshotStore(ABC):
    @abstractmethod
    def current(self) -> Snapshot: ...
    @abstractmethod
    def swap(self, snapshot: Snapshot) -> Snapshot:
        """Publish `snapshot` and return the one it replaced."""
        ...
    @abstractmethod
    def reserve_ids(self, count: int) -> range:
        """Hand out `count` consecutive record ids that were never handed out before."""
        ...
