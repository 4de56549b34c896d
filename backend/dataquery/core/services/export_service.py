from __future__ import annotations
import base64
import binascii
import logging
from pathlib import Path

from dataquery.core.errors import DataIOError
from dataquery.models.files.atomic import atomic_write_bytes

logger = logging.getLogger("dataquery.export")

def _safe_name(filename: str) -> str:
    name = (filename or "").strip()
    if not name or name in (".", "..") or "/" in name or "\\" in name or Path(name).name != name:
        raise ValueError(f"Invalid export file name: {filename!r}")
    return name

class ExportService:
    """Writes caller-supplied image payloads into the application export folder."""

    def __init__(self, export_dir: str | Path):
        self.export_dir = Path(export_dir)

    def save(self, filename: str, payload: bytes) -> Path:
        target = self.export_dir / _safe_name(filename)
        try:
            atomic_write_bytes(target, payload)
        except OSError as e:
            logger.error("❌ Export to %s failed: %s", target, e)
            raise DataIOError(f"Cannot write {target}: {e}") from e
        logger.info("💾 Saved %d bytes to %s", len(payload), target)
        return target

    def save_base64(self, filename: str, data: str) -> Path:
        try:
            payload = base64.b64decode((data or "").strip(), validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"Invalid base64 payload: {e}") from e
        return self.save(filename, payload)
