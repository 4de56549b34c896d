from __future__ import annotations
import logging
from datetime import datetime
from typing import Callable

from dataquery.core.entities import Record, mark_verified, now_local
from dataquery.core.errors import NotFoundError
from dataquery.core.ports.store import ISnapshotStore

logger = logging.getLogger("dataquery.verify")

class VerificationService:
    def __init__(self, store: ISnapshotStore, clock: Callable[[], datetime] = now_local):
        self.store = store
        self.clock = clock

    def verify(self, record_id: str) -> Record:
        """Mark a record verified; repeating it is a no-op returning the same record."""
        record = self.store.current().by_id.get(record_id)
        if record is None:
            raise NotFoundError(f"Record {record_id} not found")
        with record.lock:
            if mark_verified(record, self.clock()):
                logger.info("✅ Record %s verified at %s", record.id, record.verify_time)
            return record.snapshot()
