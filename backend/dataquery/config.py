# backend/dataquery/config.py
from __future__ import annotations
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env before reading settings
load_dotenv()

logger = logging.getLogger("dataquery.config")

APP_DIR_NAME = "DataQueryTool"

def default_data_dir() -> Path:
    """Per-user application data directory, e.g. ~/.local/share/DataQueryTool/Data."""
    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA") or Path.home() / "AppData" / "Roaming")
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.environ.get("XDG_DATA_HOME") or Path.home() / ".local" / "share")
    return base / APP_DIR_NAME / "Data"

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DATAQUERY_", extra="ignore")

    data_dir: Path = Field(default_factory=default_data_dir)
    history_file: str = "history.json"
    export_subdir: str = "qrcodes"
    history_capacity: int = Field(100, ge=1)

    # ingestion
    link_column: int = Field(1, ge=0)
    skip_header_rows: int = Field(0, ge=0)
    strip_values: bool = False

    # command surface (loopback only)
    host: str = "127.0.0.1"
    port: int = 8765
    log_level: str = "INFO"

    @property
    def history_path(self) -> Path:
        return self.data_dir / self.history_file

    @property
    def export_dir(self) -> Path:
        return self.data_dir / self.export_subdir

def load_settings(**overrides) -> Settings:
    settings = Settings(**overrides)
    logger.info("Using data directory: %s", settings.data_dir)
    return settings
