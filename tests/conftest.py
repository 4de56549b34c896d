"""
tests/conftest.py

Shared fixtures for the Data Query engine test suite.

Every test gets its own application data directory under tmp_path, so the
persisted history never leaks between tests or into the real user profile.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from dataquery.config import Settings
from dataquery.container import AppContainer, build_container
from helpers import MemoryHistoryRepository


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def data_folder(tmp_path: Path) -> Path:
    folder = tmp_path / "data"
    folder.mkdir()
    return folder


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(data_dir=tmp_path / "appdata")


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    return build_container(settings)


@pytest.fixture
def memory_repo() -> MemoryHistoryRepository:
    return MemoryHistoryRepository()
