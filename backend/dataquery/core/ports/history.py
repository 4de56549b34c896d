from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List
from dataquery.core.entities import HistoryEntry

class IHistoryRepository(ABC):
    @abstractmethod
    def read_all(self) -> List[HistoryEntry]:
        """Entries most-recent-first."""
        ...
    @abstractmethod
    def write_all(self, entries: List[HistoryEntry]) -> None:
        """Durably replace the stored entries; raises DataIOError on failure."""
        ...
