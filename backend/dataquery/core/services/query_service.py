from __future__ import annotations
import logging
import uuid
from datetime import datetime
from typing import Callable

from dataquery.core.entities import HistoryEntry, QueryResult, now_local
from dataquery.core.ports.store import ISnapshotStore
from dataquery.core.services.history_service import HistoryService

logger = logging.getLogger("dataquery.query")

class QueryService:
    """Exact-match lookup against the active snapshot; every call is logged to history."""

    def __init__(
        self,
        store: ISnapshotStore,
        history: HistoryService,
        clock: Callable[[], datetime] = now_local,
    ):
        self.store = store
        self.history = history
        self.clock = clock

    def _entry(self, key: str, result: str | None, is_verified: bool) -> HistoryEntry:
        return HistoryEntry(
            id=uuid.uuid4().hex,
            query_time=self.clock(),
            query_key=key,
            query_result=result,
            is_verified=is_verified,
        )

    def query(self, key: str) -> QueryResult:
        snapshot = self.store.current()
        hits = snapshot.index.lookup(key)

        if not hits:
            self.history.append(self._entry(key, None, False))
            logger.info("🔍 No match for key=%r", key)
            return QueryResult(found=False)

        first = hits[0]
        record = snapshot.by_id[first.record_id]
        with record.lock:
            # history first: a failed flush must leave query_count untouched
            self.history.append(self._entry(key, record.link, record.is_verified))
            record.query_count += 1
            view = record.snapshot()

        multiple = len(hits) > 1
        if multiple:
            logger.info("🔍 key=%r matched %d locations; returning record %s", key, len(hits), record.id)
        return QueryResult(
            found=True,
            record=view,
            is_duplicate=multiple,
            matched_column=first.column,
            multiple_matches=multiple,
            match_count=len(hits),
        )
