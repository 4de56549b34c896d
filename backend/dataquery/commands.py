from __future__ import annotations
from pathlib import Path
from typing import List

from dataquery.core.entities import HistoryEntry, LoadResult, QueryResult, Record
from dataquery.core.services.export_service import ExportService
from dataquery.core.services.history_service import HistoryService
from dataquery.core.services.ingest_service import IngestService
from dataquery.core.services.query_service import QueryService
from dataquery.core.services.verification_service import VerificationService

class Commands:
    """
    The request/response surface consumed by the UI. Each method is one
    command; failures are raised as EngineError subclasses or ValueError.
    """

    def __init__(
        self,
        ingest: IngestService,
        query: QueryService,
        verification: VerificationService,
        history: HistoryService,
        export: ExportService,
    ):
        self.ingest = ingest
        self.query = query
        self.verification = verification
        self.history = history
        self.export = export

    def load_data_folder(self, folder_path: str) -> LoadResult:
        return self.ingest.load_folder(folder_path)

    def query_data(self, query_key: str) -> QueryResult:
        return self.query.query(query_key)

    def verify_record(self, record_id: str) -> Record:
        return self.verification.verify(record_id)

    def get_history(self) -> List[HistoryEntry]:
        return self.history.list()

    def clear_history(self) -> None:
        self.history.clear()

    def delete_history_item(self, id: str) -> None:
        self.history.delete(id)

    def save_qrcode_to_data_folder(self, filename: str, base64_data: str) -> Path:
        return self.export.save_base64(filename, base64_data)
