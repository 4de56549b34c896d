from __future__ import annotations
import logging
from dataclasses import dataclass

from dataquery.config import Settings
from dataquery.commands import Commands
from dataquery.core.services.export_service import ExportService
from dataquery.core.services.history_service import HistoryService
from dataquery.core.services.ingest_service import IngestService
from dataquery.core.services.query_service import QueryService
from dataquery.core.services.verification_service import VerificationService
from dataquery.models.history.json_history import JsonHistoryRepository
from dataquery.models.index.value_index import ExactValueIndex
from dataquery.models.parser.table_parser import TableFileParser
from dataquery.models.store.snapshot_store import SnapshotStore

logger = logging.getLogger("dataquery.container")

@dataclass
class AppContainer:
    settings: Settings
    store: SnapshotStore
    ingest_service: IngestService
    query_service: QueryService
    verification_service: VerificationService
    history_service: HistoryService
    export_service: ExportService
    commands: Commands

def build_container(settings: Settings) -> AppContainer:
    """
    Wire the engine once per process. The returned container owns all mutable
    state (snapshot handle, history); callers pass it around explicitly.
    """
    logger.info(
        "🔧 Building container - data_dir=%s, link_column=%d, skip_header_rows=%d, strip_values=%s",
        settings.data_dir, settings.link_column, settings.skip_header_rows, settings.strip_values,
    )

    store = SnapshotStore()
    history_service = HistoryService(
        repository=JsonHistoryRepository(settings.history_path),
        capacity=settings.history_capacity,
    )
    ingest_service = IngestService(
        store=store,
        parser=TableFileParser(),
        index=ExactValueIndex(),
        link_column=settings.link_column,
        skip_header_rows=settings.skip_header_rows,
        strip_values=settings.strip_values,
    )
    query_service = QueryService(store=store, history=history_service)
    verification_service = VerificationService(store=store)
    export_service = ExportService(settings.export_dir)

    commands = Commands(
        ingest=ingest_service,
        query=query_service,
        verification=verification_service,
        history=history_service,
        export=export_service,
    )

    logger.info("✅ Container built")
    return AppContainer(
        settings=settings,
        store=store,
        ingest_service=ingest_service,
        query_service=query_service,
        verification_service=verification_service,
        history_service=history_service,
        export_service=export_service,
        commands=commands,
    )
