# backend/dataquery/router/history_router.py
from __future__ import annotations
from typing import List
from fastapi import APIRouter, Depends

from dataquery.commands import Commands
from dataquery.deps import get_commands
from dataquery.models.schemas import AckResponse, DeleteHistoryRequest, HistoryEntryOut

router = APIRouter(prefix="/commands", tags=["history"])

@router.post("/get_history", response_model=List[HistoryEntryOut])
def get_history(commands: Commands = Depends(get_commands)):
    """Most-recent-first."""
    return [HistoryEntryOut.from_entity(e) for e in commands.get_history()]

@router.post("/clear_history", response_model=AckResponse)
def clear_history(commands: Commands = Depends(get_commands)):
    commands.clear_history()
    return AckResponse()

@router.post("/delete_history_item", response_model=AckResponse)
def delete_history_item(payload: DeleteHistoryRequest, commands: Commands = Depends(get_commands)):
    commands.delete_history_item(payload.id)
    return AckResponse()
