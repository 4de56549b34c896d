"""
tests/helpers.py

File writers and an in-memory history repository shared by the test modules.
"""

from __future__ import annotations

from pathlib import Path
from datetime import date, datetime
from typing import Iterable, List, Sequence

import xlwt
from openpyxl import Workbook

from dataquery.core.entities import HistoryEntry
from dataquery.core.errors import DataIOError
from dataquery.core.ports.history import IHistoryRepository


# =============================================================================
# FILE HELPERS
# =============================================================================


def write_text(folder: Path, name: str, text: str, encoding: str = "utf-8") -> Path:
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / name
    path.write_bytes(text.encode(encoding))
    return path


def write_csv(folder: Path, name: str, rows: Iterable[Sequence[str]], delimiter: str = ",") -> Path:
    text = "".join(delimiter.join(row) + "\n" for row in rows)
    return write_text(folder, name, text)


def write_xlsx(folder: Path, name: str, rows: Iterable[Sequence[object]]) -> Path:
    folder.mkdir(parents=True, exist_ok=True)
    wb = Workbook()
    ws = wb.active
    for row in rows:
        ws.append(list(row))
    path = folder / name
    wb.save(str(path))
    return path


def write_xls(folder: Path, name: str, rows: Iterable[Sequence[object]]) -> Path:
    """Legacy .xls workbook; `None` cells are left unwritten, dates get a date format."""
    folder.mkdir(parents=True, exist_ok=True)
    wb = xlwt.Workbook()
    ws = wb.add_sheet("Sheet1")
    date_style = xlwt.easyxf(num_format_str="YYYY-MM-DD")
    for r, row in enumerate(rows):
        for c, value in enumerate(row):
            if value is None:
                continue
            if isinstance(value, (date, datetime)):
                ws.write(r, c, value, date_style)
            else:
                ws.write(r, c, value)
    path = folder / name
    wb.save(str(path))
    return path


def write_garbage(folder: Path, name: str) -> Path:
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / name
    path.write_bytes(b"this is not a spreadsheet")
    return path


# =============================================================================
# IN-MEMORY HISTORY REPOSITORY
# =============================================================================


class MemoryHistoryRepository(IHistoryRepository):
    """Keeps written entries in memory; `fail = True` makes every write fail."""

    def __init__(self, entries: List[HistoryEntry] | None = None):
        self.entries: List[HistoryEntry] = list(entries or [])
        self.writes = 0
        self.fail = False

    def read_all(self) -> List[HistoryEntry]:
        return list(self.entries)

    def write_all(self, entries: List[HistoryEntry]) -> None:
        if self.fail:
            raise DataIOError("disk full")
        self.writes += 1
        self.entries = list(entries)
