from __future__ import annotations
from abc import ABC, abstractmethod
from pathlib import Path
from typing import FrozenSet, Iterator, List

class ITableParser(ABC):
    extensions: FrozenSet[str]

    @abstractmethod
    def iter_rows(self, path: str | Path) -> Iterator[List[str]]:
        """Lazily yield rows; raises ParseError carrying the file name."""
        ...

    def supports(self, path: str | Path) -> bool:
        return Path(path).suffix.lower().lstrip(".") in self.extensions
