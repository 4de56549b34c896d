# backend/dataquery/router/health.py
from __future__ import annotations
import logging
from fastapi import APIRouter, Depends

from dataquery.container import AppContainer
from dataquery.deps import get_container
from dataquery.models.schemas import HealthResponse

router = APIRouter(tags=["health"])
logger = logging.getLogger(__name__)

@router.get("/health", response_model=HealthResponse)
def health_check(container: AppContainer = Depends(get_container)):
    """Service is running; reports the active snapshot."""
    snap = container.store.current()
    return HealthResponse(
        status="ok" if snap.folder else "empty",
        folder=snap.folder,
        loaded_at=snap.loaded_at,
        file_count=snap.file_count,
        record_count=len(snap.records),
        skipped_files=list(snap.skipped_files),
        history_entries=len(container.history_service),
    )
