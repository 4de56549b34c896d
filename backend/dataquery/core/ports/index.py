from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Iterable, List
from dataquery.core.entities import Location, Record

class IValueIndex(ABC):
    @abstractmethod
    def build(self, records: Iterable[Record]) -> "IValueIndex":
        """Return a new, fully built index; the receiver is left untouched."""
        ...
    @abstractmethod
    def lookup(self, key: str) -> List[Location]:
        """Return locations in (record id ascending, column ascending) order."""
        ...
    @abstractmethod
    def __len__(self) -> int: ...
