from __future__ import annotations
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import List

from dataquery.core.entities import HistoryEntry
from dataquery.core.errors import DataIOError
from dataquery.core.ports.history import IHistoryRepository
from dataquery.models.files.atomic import atomic_write_bytes

log = logging.getLogger("dataquery.history.store")

def _to_json(e: HistoryEntry) -> dict:
    return {
        "id": e.id,
        "query_time": e.query_time.isoformat(),
        "query_key": e.query_key,
        "query_result": e.query_result,
        "is_verified": e.is_verified,
    }

def _from_json(obj: dict) -> HistoryEntry:
    return HistoryEntry(
        id=str(obj["id"]),
        query_time=datetime.fromisoformat(obj["query_time"]),
        query_key=str(obj["query_key"]),
        query_result=obj.get("query_result"),
        is_verified=bool(obj.get("is_verified", False)),
    )

class JsonHistoryRepository(IHistoryRepository):
    """
    Stores the history as one JSON list (most-recent-first):
    [{"id": "...", "query_time": "2026-01-01T10:00:00+08:00", ...}, ...]
    """
    def __init__(self, path: str | Path):
        self.path = Path(path)

    def read_all(self) -> List[HistoryEntry]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            raise DataIOError(f"Cannot read history file {self.path}: {e}") from e

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError("top-level value is not a list")
            return [_from_json(obj) for obj in data]
        except (ValueError, KeyError, TypeError) as e:
            log.warning("⚠️ History file %s is corrupt (%s); starting with empty history", self.path, e)
            return []

    def write_all(self, entries: List[HistoryEntry]) -> None:
        payload = json.dumps([_to_json(e) for e in entries], ensure_ascii=False, indent=2)
        try:
            atomic_write_bytes(self.path, payload.encode("utf-8"))
        except OSError as e:
            log.error("❌ Failed to persist history to %s: %s", self.path, e)
            raise DataIOError(f"Cannot write history file {self.path}: {e}") from e
