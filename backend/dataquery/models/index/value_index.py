from __future__ import annotations
from typing import Dict, Iterable, List, Tuple
from dataquery.core.entities import Location, Record
from dataquery.core.ports.index import IValueIndex

class ExactValueIndex(IValueIndex):
    """
    Exact, case-sensitive map from cell value to every (record, column) holding it.
    Built in one pass over records in id order, so each posting list is already
    sorted by (record id, column). Empty values are not indexed.
    """
    def __init__(self, postings: Dict[str, Tuple[Location, ...]] | None = None):
        self._postings: Dict[str, Tuple[Location, ...]] = postings or {}

    def build(self, records: Iterable[Record]) -> "ExactValueIndex":
        acc: Dict[str, List[Location]] = {}
        for rec in records:
            for col, value in enumerate(rec.columns):
                if not value:
                    continue
                acc.setdefault(value, []).append(Location(record_id=rec.id, column=col))
        return ExactValueIndex({k: tuple(v) for k, v in acc.items()})

    def lookup(self, key: str) -> List[Location]:
        return list(self._postings.get(key, ()))

    def __len__(self) -> int:
        return len(self._postings)
