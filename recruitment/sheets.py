"""
Tabular store adapters.

The service only needs a handful of spreadsheet operations: list tabs, read a
header row and data rows, resize, rewrite the header row and append a row.
GoogleSheetStore talks to Google Sheets through gspread; MemoryStore keeps the
same shape in process for local runs and tests.
"""
import logging
import re
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import gspread
from google.oauth2.service_account import Credentials

from recruitment.config import Settings
from recruitment.errors import NotFoundError, TransientIOError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"


def trim_header(cells: List[Any]) -> List[str]:
    """
    Header labels by position. Blank cells in the middle stay as "" so the
    list indexes the sheet's real columns; only trailing blanks are dropped.
    """
    header = [str(cell).strip() for cell in cells]
    while header and not header[-1]:
        header.pop()
    return header


def title_matches(title: str, keyword: str) -> bool:
    """Case-insensitive substring match of ``keyword`` in a tab title"""
    return keyword.lower() in title.lower()


def match_tab(tabs: List[Any], keyword: str):
    """
    Tab for ``keyword``: a title word starting with it wins over a plain
    substring hit, so "core" picks "Core Scores" before "Tech Scores".
    """
    word = re.compile(r"\b" + re.escape(keyword.lower()))
    for tab in tabs:
        if word.search(tab.title.lower()):
            return tab
    for tab in tabs:
        if title_matches(tab.title, keyword):
            return tab
    return None


def rows_to_records(values: List[List[Any]]) -> List[Dict[str, Any]]:
    """First row is the header; blank header cells are skipped"""
    if not values:
        return []
    header = [str(h).strip() for h in values[0]]
    records = []
    for raw in values[1:]:
        if not any(str(cell).strip() for cell in raw):
            continue
        record = {}
        for index, label in enumerate(header):
            if not label:
                continue
            record[label] = raw[index] if index < len(raw) else ""
        records.append(record)
    return records


# ==================== IN-MEMORY STORE ====================
class MemoryWorksheet:
    def __init__(self, title: str, rows: Optional[List[List[Any]]] = None, col_count: int = 26, row_count: int = 1000):
        self.title = title
        self.values: List[List[Any]] = [list(r) for r in (rows or [])]
        self.col_count = col_count
        self.row_count = row_count

    def get_header(self) -> List[str]:
        if not self.values:
            return []
        return trim_header(self.values[0])

    def set_header(self, headers: List[str]) -> None:
        if len(headers) > self.col_count:
            raise TransientIOError(f"Header wider than sheet '{self.title}' ({len(headers)} > {self.col_count})")
        if self.values:
            self.values[0] = list(headers)
        else:
            self.values.append(list(headers))

    def resize(self, cols: int) -> None:
        self.col_count = cols

    def append_row(self, values: List[Any]) -> None:
        if len(values) > self.col_count:
            raise TransientIOError(f"Row wider than sheet '{self.title}'")
        self.values.append(list(values))
        self.row_count = max(self.row_count, len(self.values))

    def get_records(self) -> List[Dict[str, Any]]:
        return rows_to_records(self.values)


class MemoryStore:
    def __init__(self, tabs: Optional[List[MemoryWorksheet]] = None):
        self.tabs = list(tabs) if tabs else [MemoryWorksheet("Responses")]

    def worksheets(self) -> List[MemoryWorksheet]:
        return list(self.tabs)

    def add_tab(self, title: str, rows: Optional[List[List[Any]]] = None) -> MemoryWorksheet:
        tab = MemoryWorksheet(title, rows)
        self.tabs.append(tab)
        return tab


# ==================== GOOGLE SHEETS STORE ====================
@contextmanager
def _sheet_call(action: str) -> Iterator[None]:
    try:
        yield
    except gspread.exceptions.WorksheetNotFound as e:
        raise NotFoundError(f"Sheet tab not found: {e}")
    except (gspread.exceptions.GSpreadException, OSError) as e:
        logger.error("❌ Sheet %s failed: %s", action, e)
        raise TransientIOError()


class GoogleWorksheet:
    def __init__(self, worksheet: "gspread.Worksheet"):
        self._ws = worksheet
        self.title = worksheet.title

    @property
    def col_count(self) -> int:
        return self._ws.col_count

    @property
    def row_count(self) -> int:
        return self._ws.row_count

    def get_header(self) -> List[str]:
        with _sheet_call(f"header read on '{self.title}'"):
            return trim_header(self._ws.row_values(1))

    def set_header(self, headers: List[str]) -> None:
        with _sheet_call(f"header write on '{self.title}'"):
            self._ws.update(range_name="A1", values=[list(headers)])

    def resize(self, cols: int) -> None:
        with _sheet_call(f"resize of '{self.title}'"):
            self._ws.resize(cols=cols)

    def append_row(self, values: List[Any]) -> None:
        with _sheet_call(f"append to '{self.title}'"):
            self._ws.append_row(values, value_input_option="RAW", table_range="A1")

    def get_records(self) -> List[Dict[str, Any]]:
        with _sheet_call(f"read of '{self.title}'"):
            return rows_to_records(self._ws.get_all_values())


class GoogleSheetStore:
    def __init__(self, settings: Settings):
        settings.require_sheet_credentials()
        credentials = Credentials.from_service_account_info(
            {
                "type": "service_account",
                "client_email": settings.google_service_account_email,
                "private_key": settings.google_private_key,
                "token_uri": TOKEN_URI,
            },
            scopes=SCOPES,
        )
        with _sheet_call("connect"):
            client = gspread.authorize(credentials)
            self._spreadsheet = client.open_by_key(settings.google_sheet_id)

    def worksheets(self) -> List[GoogleWorksheet]:
        with _sheet_call("tab listing"):
            return [GoogleWorksheet(ws) for ws in self._spreadsheet.worksheets()]


# ==================== LOOKUPS ====================
def primary_worksheet(store):
    tabs = store.worksheets()
    if not tabs:
        raise NotFoundError("Spreadsheet has no tabs")
    return tabs[0]


def find_worksheet(store, keyword: str):
    """Tab matching ``keyword`` (see match_tab), else None"""
    return match_tab(store.worksheets(), keyword)


_memory_store: Optional[MemoryStore] = None


def open_store(settings: Settings):
    """Open the configured tabular store; a fresh connection per call"""
    global _memory_store
    if settings.sheets_backend == "memory":
        if _memory_store is None:
            logger.info("📁 Using in-memory sheet store")
            _memory_store = MemoryStore()
        return _memory_store
    return GoogleSheetStore(settings)
