"""
Row intake: append a flat record to a sheet tab, growing the header row as
new keys appear.

Header growth is append-only (existing columns are never reordered or
removed). Header extension and the row append for one tab run under a
per-tab lock, which serializes concurrent requests inside this process only;
two server processes can still race on the same tab.
"""
import logging
import threading
from collections import defaultdict
from typing import Any, Dict, List

from recruitment.errors import NotFoundError
from recruitment.sheets import find_worksheet, primary_worksheet

logger = logging.getLogger(__name__)

COLUMN_HEADROOM = 5

_tab_locks: Dict[str, threading.Lock] = defaultdict(threading.Lock)
_tab_locks_guard = threading.Lock()


def _lock_for(title: str) -> threading.Lock:
    with _tab_locks_guard:
        return _tab_locks[title]


def merge_headers(current: List[str], keys: List[str]) -> List[str]:
    """
    Existing header cells in place (blank ones included), followed by any
    keys not already labelled, in row order.
    """
    merged = list(current)
    labelled = {label for label in current if label}
    for key in keys:
        if key not in labelled:
            merged.append(key)
            labelled.add(key)
    return merged


def append_record(worksheet, row: Dict[str, Any]) -> List[str]:
    """
    Ensure the tab can hold the row, make its header a superset of the row's
    keys and append the row. Values are written by header position; blank
    header cells get an empty value. Returns the header used for the append.
    """
    keys = list(row.keys())
    with _lock_for(worksheet.title):
        if worksheet.col_count < len(keys) + COLUMN_HEADROOM:
            worksheet.resize(len(keys) + COLUMN_HEADROOM)

        current = worksheet.get_header()
        headers = merge_headers(current, keys)
        if len(headers) > worksheet.col_count:
            worksheet.resize(len(headers) + COLUMN_HEADROOM)
        if headers != current:
            if current:
                logger.info("📊 Extending headers on '%s' with %d new column(s)", worksheet.title, len(headers) - len(current))
            worksheet.set_header(headers)

        values = ["" if not label or row.get(label) is None else row[label] for label in headers]
        worksheet.append_row(values)
    return headers


def append_to_primary(store, row: Dict[str, Any]) -> List[str]:
    worksheet = primary_worksheet(store)
    headers = append_record(worksheet, row)
    logger.info("✅ Appended submission to '%s'", worksheet.title)
    return headers


def append_to_track(store, keyword: str, row: Dict[str, Any]) -> List[str]:
    """Append to the tab matching ``keyword``; never creates a tab"""
    worksheet = find_worksheet(store, keyword)
    if worksheet is None:
        raise NotFoundError(f"Sheet tab containing '{keyword}' not found in the spreadsheet")
    headers = append_record(worksheet, row)
    logger.info("✅ Appended row to '%s'", worksheet.title)
    return headers


def roll_number_exists(store, roll_number: str, column: str = "Roll Number") -> bool:
    worksheet = primary_worksheet(store)
    if not worksheet.get_header():
        return False
    return any(str(record.get(column, "")).strip() == roll_number.strip() for record in worksheet.get_records())
