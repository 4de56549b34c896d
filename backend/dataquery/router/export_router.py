# backend/dataquery/router/export_router.py
from __future__ import annotations
from fastapi import APIRouter, Depends

from dataquery.commands import Commands
from dataquery.deps import get_commands
from dataquery.models.schemas import SaveQrCodeRequest, SavedFileResponse

router = APIRouter(prefix="/commands", tags=["export"])

@router.post("/save_qrcode_to_data_folder", response_model=SavedFileResponse)
def save_qrcode_to_data_folder(payload: SaveQrCodeRequest, commands: Commands = Depends(get_commands)):
    path = commands.save_qrcode_to_data_folder(payload.filename, payload.base64_data)
    return SavedFileResponse(path=str(path))
