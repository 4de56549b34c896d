from __future__ import annotations
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from dataquery.core.entities import HistoryEntry, LoadResult, QueryResult, Record

# ---------- requests ----------

class LoadFolderRequest(BaseModel):
    folder_path: str = Field(..., min_length=1, description="Folder holding csv/txt/xlsx/xls files")

class QueryRequest(BaseModel):
    query_key: str

class VerifyRequest(BaseModel):
    record_id: str

class DeleteHistoryRequest(BaseModel):
    id: str

class SaveQrCodeRequest(BaseModel):
    filename: str = Field(..., min_length=1)
    base64_data: str = Field(..., description="Image payload without its data-URI prefix")

# ---------- responses ----------

class RecordOut(BaseModel):
    id: str
    link: str
    all_columns: List[str]
    query_count: int
    is_verified: bool
    verify_time: Optional[datetime] = None

    @classmethod
    def from_entity(cls, r: Record) -> "RecordOut":
        return cls(
            id=r.id,
            link=r.link,
            all_columns=list(r.columns),
            query_count=r.query_count,
            is_verified=r.is_verified,
            verify_time=r.verify_time,
        )

class LoadResultOut(BaseModel):
    file_count: int
    record_count: int
    skipped_files: List[str]

    @classmethod
    def from_entity(cls, r: LoadResult) -> "LoadResultOut":
        return cls(file_count=r.file_count, record_count=r.record_count, skipped_files=list(r.skipped_files))

class QueryResultOut(BaseModel):
    found: bool
    record: Optional[RecordOut] = None
    is_duplicate: bool = False
    matched_column: Optional[int] = None
    multiple_matches: bool = False
    match_count: int = 0

    @classmethod
    def from_entity(cls, r: QueryResult) -> "QueryResultOut":
        return cls(
            found=r.found,
            record=RecordOut.from_entity(r.record) if r.record is not None else None,
            is_duplicate=r.is_duplicate,
            matched_column=r.matched_column,
            multiple_matches=r.multiple_matches,
            match_count=r.match_count,
        )

class HistoryEntryOut(BaseModel):
    id: str
    query_time: datetime
    query_key: str
    query_result: Optional[str] = None
    is_verified: bool

    @classmethod
    def from_entity(cls, e: HistoryEntry) -> "HistoryEntryOut":
        return cls(
            id=e.id,
            query_time=e.query_time,
            query_key=e.query_key,
            query_result=e.query_result,
            is_verified=e.is_verified,
        )

class AckResponse(BaseModel):
    ok: bool = True

class SavedFileResponse(AckResponse):
    path: str

class ErrorBody(BaseModel):
    kind: str
    message: str

class ErrorResponse(BaseModel):
    error: ErrorBody

class HealthResponse(BaseModel):
    status: str
    folder: Optional[str] = None
    loaded_at: Optional[datetime] = None
    file_count: int = 0
    record_count: int = 0
    skipped_files: List[str] = []
    history_entries: int = 0
