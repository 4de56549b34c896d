from __future__ import annotations
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from threading import Lock
from typing import Dict, List, Mapping, Optional, Tuple

class VerificationState(str, Enum):
    UNVERIFIED = "unverified"
    VERIFIED = "verified"  # terminal

@dataclass
class Record:
    """
    One ingested row. `columns` keep source order; only `query_count` and the
    verification fields change after ingestion, always under `lock`.
    """
    id: str
    columns: Tuple[str, ...]
    link: str = ""
    query_count: int = 0
    state: VerificationState = VerificationState.UNVERIFIED
    verify_time: Optional[datetime] = None
    lock: Lock = field(default_factory=Lock, init=False, repr=False, compare=False)

    @property
    def is_verified(self) -> bool:
        return self.state is VerificationState.VERIFIED

    def snapshot(self) -> "Record":
        """Detached copy for callers; must be taken while holding `lock`."""
        return replace(self)

@dataclass(frozen=True)
class HistoryEntry:
    id: str
    query_time: datetime
    query_key: str
    query_result: Optional[str]  # matched record's link
    is_verified: bool

@dataclass(frozen=True)
class LoadResult:
    file_count: int
    record_count: int
    skipped_files: List[str]

@dataclass(frozen=True)
class QueryResult:
    found: bool
    record: Optional[Record] = None
    is_duplicate: bool = False
    matched_column: Optional[int] = None
    multiple_matches: bool = False
    match_count: int = 0

@dataclass(frozen=True)
class Location:
    record_id: str
    column: int

@dataclass(frozen=True)
class Snapshot:
    """Record set + index pair, published and replaced as one unit."""
    records: Tuple[Record, ...]
    by_id: Mapping[str, Record]
    index: object  # IValueIndex
    folder: Optional[str] = None
    loaded_at: Optional[datetime] = None
    file_count: int = 0
    skipped_files: Tuple[str, ...] = ()

    @classmethod
    def empty(cls, index: object) -> "Snapshot":
        return cls(records=(), by_id={}, index=index)

def records_by_id(records: Tuple[Record, ...]) -> Dict[str, Record]:
    return {r.id: r for r in records}

def now_local() -> datetime:
    return datetime.now().astimezone()

def mark_verified(record: Record, when: datetime) -> bool:
    """
    UNVERIFIED -> VERIFIED transition. Returns False (and changes nothing) when
    the record is already verified. Caller holds `record.lock`.
    """
    if record.state is VerificationState.VERIFIED:
        return False
    record.state = VerificationState.VERIFIED
    record.verify_time = when
    return True
