from __future__ import annotations

import csv
import io
import logging
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Iterable, Iterator, List

import xlrd
from openpyxl import load_workbook

from dataquery.core.errors import ParseError
from dataquery.core.ports.parser import ITableParser

log = logging.getLogger("dataquery.parser")

TEXT_EXTS = frozenset({"csv", "txt"})
XLSX_EXTS = frozenset({"xlsx"})
XLS_EXTS = frozenset({"xls"})
SUPPORTED_EXTS = TEXT_EXTS | XLSX_EXTS | XLS_EXTS

# tried in order, strictly
ENCODINGS = ("utf-8-sig", "gbk", "gb18030")


# ================================================================
# Text helpers
# ================================================================
def decode_text(raw: bytes, file_name: str) -> str:
    for enc in ENCODINGS:
        try:
            return raw.decode(enc)
        except UnicodeDecodeError:
            continue
    raise ParseError(file_name, f"not decodable as any of {', '.join(ENCODINGS)}")


def detect_delimiter(text: str) -> str:
    """Pick the delimiter from the first line: tab, then semicolon, then comma."""
    lines = text.splitlines()
    first = lines[0] if lines else ""
    if "\t" in first:
        return "\t"
    if ";" in first:
        return ";"
    return ","


def cell_text(value: Any) -> str:
    """Textual representation of a spreadsheet cell value."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value)


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def _spreadsheet_rows(rows: Iterable[Iterable[Any]]) -> Iterator[List[str]]:
    for raw in rows:
        values = list(raw)
        # readers pad rows to the sheet width
        while values and _is_blank(values[-1]):
            values.pop()
        if not values:
            continue
        yield [cell_text(v) for v in values]


# ================================================================
# Parser
# ================================================================
class TableFileParser(ITableParser):
    """
    Reads csv/txt/xlsx/xls files into rows of strings.

    - csv/txt values are taken verbatim from the delimited text
    - spreadsheets are read from their first sheet only
    - every failure is re-raised as ParseError(file_name)
    """
    extensions = SUPPORTED_EXTS

    def iter_rows(self, path: str | Path) -> Iterator[List[str]]:
        p = Path(path)
        ext = p.suffix.lower().lstrip(".")
        if ext in TEXT_EXTS:
            reader = self._iter_delimited
        elif ext in XLSX_EXTS:
            reader = self._iter_xlsx
        elif ext in XLS_EXTS:
            reader = self._iter_xls
        else:
            raise ParseError(p.name, f"unsupported extension '{p.suffix}'")
        return self._guarded(reader, p)

    def _guarded(self, reader, p: Path) -> Iterator[List[str]]:
        try:
            yield from reader(p)
        except ParseError:
            raise
        except Exception as e:
            log.debug("Parse failure in %s: %r", p, e)
            raise ParseError(p.name, f"{type(e).__name__}: {e}") from e

    def _iter_delimited(self, p: Path) -> Iterator[List[str]]:
        text = decode_text(p.read_bytes(), p.name)
        if not text:
            return
        reader = csv.reader(io.StringIO(text, newline=""), delimiter=detect_delimiter(text))
        for row in reader:
            # blank lines and delimiter-only lines carry no values
            if not any(row):
                continue
            yield row

    def _iter_xlsx(self, p: Path) -> Iterator[List[str]]:
        wb = load_workbook(str(p), read_only=True, data_only=True)
        try:
            if not wb.worksheets:
                return
            ws = wb.worksheets[0]
            yield from _spreadsheet_rows(ws.iter_rows(values_only=True))
        finally:
            wb.close()

    def _iter_xls(self, p: Path) -> Iterator[List[str]]:
        book = xlrd.open_workbook(str(p), on_demand=True)
        try:
            if book.nsheets == 0:
                return
            sheet = book.sheet_by_index(0)

            def values():
                for r in range(sheet.nrows):
                    row = []
                    for cell in sheet.row(r):
                        if cell.ctype == xlrd.XL_CELL_DATE:
                            row.append(xlrd.xldate_as_datetime(cell.value, book.datemode))
                        elif cell.ctype == xlrd.XL_CELL_BOOLEAN:
                            row.append(bool(cell.value))
                        elif cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
                            row.append(None)
                        else:
                            row.append(cell.value)
                    yield row

            yield from _spreadsheet_rows(values())
        finally:
            book.release_resources()
