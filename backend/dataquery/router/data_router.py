# backend/dataquery/router/data_router.py
from __future__ import annotations
import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from dataquery.commands import Commands
from dataquery.core.errors import DataIOError
from dataquery.deps import get_commands
from dataquery.models.schemas import (
    LoadFolderRequest, LoadResultOut, QueryRequest, QueryResultOut, RecordOut, VerifyRequest,
)

logger = logging.getLogger("dataquery.router.data")

router = APIRouter(prefix="/commands", tags=["data"])

@router.post("/load_data_folder", response_model=LoadResultOut)
def load_data_folder(payload: LoadFolderRequest, commands: Commands = Depends(get_commands)):
    try:
        result = commands.load_data_folder(payload.folder_path)
    except DataIOError as e:
        # the folder is caller-chosen, so an unreadable one is a bad request
        logger.error("Load failed for %s: %s", payload.folder_path, e)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": e.to_dict()})
    logger.info(
        "✅ Load done | folder=%s | files=%d | records=%d | skipped=%d",
        payload.folder_path, result.file_count, result.record_count, len(result.skipped_files),
    )
    return LoadResultOut.from_entity(result)

@router.post("/query_data", response_model=QueryResultOut)
def query_data(payload: QueryRequest, commands: Commands = Depends(get_commands)):
    return QueryResultOut.from_entity(commands.query_data(payload.query_key))

@router.post("/verify_record", response_model=RecordOut)
def verify_record(payload: VerifyRequest, commands: Commands = Depends(get_commands)):
    return RecordOut.from_entity(commands.verify_record(payload.record_id))
