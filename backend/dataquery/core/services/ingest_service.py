from __future__ import annotations

import logging
import time
from pathlib import Path
from threading import Lock
from typing import List

from dataquery.core.entities import LoadResult, Record, Snapshot, now_local, records_by_id
from dataquery.core.errors import DataIOError, ParseError
from dataquery.core.ports.index import IValueIndex
from dataquery.core.ports.parser import ITableParser
from dataquery.core.ports.store import ISnapshotStore

log = logging.getLogger("dataquery.ingest")


# ================================================================
# Utility functions
# ================================================================
def _list_candidates(folder: Path, parser: ITableParser) -> List[Path]:
    """Supported files directly inside `folder`, sorted by name."""
    if not folder.exists():
        raise DataIOError(f"Folder not found: {folder}")
    if not folder.is_dir():
        raise DataIOError(f"Not a folder: {folder}")
    try:
        entries = list(folder.iterdir())
    except OSError as e:
        raise DataIOError(f"Cannot read folder {folder}: {e}") from e
    return sorted((p for p in entries if p.is_file() and parser.supports(p)), key=lambda p: p.name)


def _link_of(columns: tuple, link_column: int) -> str:
    return columns[link_column] if len(columns) > link_column else ""


# ================================================================
# Ingestion service
# ================================================================
class IngestService:
    """
    Parses a folder into a fresh Record set + index and publishes the pair as
    one Snapshot. Parsing happens on private structures; the store is touched
    only by the final swap.
    """

    def __init__(
        self,
        store: ISnapshotStore,
        parser: ITableParser,
        index: IValueIndex,
        link_column: int = 1,
        skip_header_rows: int = 0,
        strip_values: bool = False,
    ):
        self.store = store
        self.parser = parser
        self.index = index
        self.link_column = link_column
        self.skip_header_rows = skip_header_rows
        self.strip_values = strip_values
        self._load_lock = Lock()

    def _read_rows(self, path: Path) -> List[List[str]]:
        rows = list(self.parser.iter_rows(path))
        return rows[self.skip_header_rows:]

    def _to_record(self, record_id: int, row: List[str]) -> Record:
        values = tuple(v.strip() for v in row) if self.strip_values else tuple(row)
        return Record(
            id=str(record_id),
            columns=values,
            link=_link_of(values, self.link_column),
        )

    def load_folder(self, path: str | Path) -> LoadResult:
        start_time = time.time()
        folder = Path(path)
        candidates = _list_candidates(folder, self.parser)

        # serialise loads so they publish in the order they started
        with self._load_lock:
            rows: List[List[str]] = []
            file_count = 0
            skipped: List[str] = []

            for file_path in candidates:
                try:
                    file_rows = self._read_rows(file_path)
                except ParseError as e:
                    log.warning("⚠️ Skipping %s: %s", file_path.name, e.reason)
                    skipped.append(file_path.name)
                    continue
                file_count += 1
                rows.extend(file_rows)

            # ids come from the store so they stay unique across every ingester and reload
            ids = self.store.reserve_ids(len(rows))
            frozen = tuple(self._to_record(i, row) for i, row in zip(ids, rows))
            snapshot = Snapshot(
                records=frozen,
                by_id=records_by_id(frozen),
                index=self.index.build(frozen),
                folder=str(folder),
                loaded_at=now_local(),
                file_count=file_count,
                skipped_files=tuple(skipped),
            )
            self.store.swap(snapshot)

        duration = round(time.time() - start_time, 3)
        log.info(
            "📥 Load summary | folder=%s | files=%d | records=%d | skipped=%d | keys=%d | took=%.3fs",
            str(folder), file_count, len(frozen), len(skipped), len(snapshot.index), duration,
        )
        return LoadResult(file_count=file_count, record_count=len(frozen), skipped_files=list(skipped))
