import threading

import pytest

from recruitment.errors import NotFoundError, TransientIOError
from recruitment.intake import (
    append_record,
    append_to_primary,
    append_to_track,
    merge_headers,
    roll_number_exists,
)
from recruitment.sheets import MemoryStore, MemoryWorksheet


def test_first_append_writes_header_then_row():
    sheet = MemoryWorksheet("Responses")
    headers = append_record(sheet, {"Name": "Asha", "Roll Number": "1608-25-733-019"})
    assert headers == ["Name", "Roll Number"]
    assert sheet.values == [["Name", "Roll Number"], ["Asha", "1608-25-733-019"]]


def test_header_growth_is_append_only():
    sheet = MemoryWorksheet("Responses", rows=[["Timestamp", "Name", "Legacy"], ["t0", "Old", "x"]])
    append_record(sheet, {"Name": "Asha", "Timestamp": "t1", "Track": "Technical Team"})

    assert sheet.get_header() == ["Timestamp", "Name", "Legacy", "Track"]
    assert sheet.values[1] == ["t0", "Old", "x"]
    assert sheet.values[2] == ["t1", "Asha", "", "Technical Team"]


def test_merge_headers_keeps_existing_order():
    assert merge_headers(["b", "a"], ["a", "c", "b", "d"]) == ["b", "a", "c", "d"]


def test_narrow_sheet_is_resized_before_header_write():
    sheet = MemoryWorksheet("Responses", col_count=3)
    row = {f"Column {i}": i for i in range(10)}
    append_record(sheet, row)
    assert sheet.col_count >= 10
    assert sheet.get_header() == list(row)


def test_store_refuses_rows_wider_than_sheet():
    sheet = MemoryWorksheet("Responses", col_count=2)
    with pytest.raises(TransientIOError):
        sheet.append_row(["a", "b", "c"])


def test_none_values_are_written_as_empty_cells():
    sheet = MemoryWorksheet("Responses")
    append_record(sheet, {"Name": "Asha", "Score": None})
    assert sheet.values[-1] == ["Asha", ""]


def test_append_to_primary_uses_first_tab():
    store = MemoryStore([MemoryWorksheet("Form Responses"), MemoryWorksheet("Tech Scores")])
    append_to_primary(store, {"Name": "Asha"})
    assert store.tabs[0].get_records() == [{"Name": "Asha"}]
    assert store.tabs[1].values == []


def test_append_to_track_matches_title_case_insensitively():
    store = MemoryStore([MemoryWorksheet("Responses"), MemoryWorksheet("OUTREACH Evaluations")])
    append_to_track(store, "outreach", {"Roll Number": "1608-25-733-019", "Total Score": 42})
    assert store.tabs[1].get_records() == [{"Roll Number": "1608-25-733-019", "Total Score": 42}]


def test_append_to_missing_track_tab_never_creates_one():
    store = MemoryStore()
    with pytest.raises(NotFoundError, match="core"):
        append_to_track(store, "core", {"Total Score": 10})
    assert [tab.title for tab in store.worksheets()] == ["Responses"]


def test_concurrent_appends_share_one_header():
    sheet = MemoryWorksheet("Responses", col_count=60)
    rows = [{"Timestamp": str(i), f"Extra {i % 3}": "v"} for i in range(30)]
    threads = [threading.Thread(target=append_record, args=(sheet, row)) for row in rows]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    header = sheet.get_header()
    assert header[0] == "Timestamp"
    assert sorted(header[1:]) == ["Extra 0", "Extra 1", "Extra 2"]
    assert len(sheet.values) == 31


def test_roll_number_exists():
    store = MemoryStore()
    assert roll_number_exists(store, "1608-25-733-019") is False
    append_to_primary(store, {"Roll Number": "1608-25-733-019"})
    assert roll_number_exists(store, " 1608-25-733-019 ") is True
    assert roll_number_exists(store, "1608-25-733-020") is False


def test_blank_header_cell_keeps_columns_in_place():
    sheet = MemoryWorksheet("Responses", rows=[["Timestamp", "", "Name"], ["t0", "note", "Old"]])
    headers = append_record(sheet, {"Timestamp": "t1", "Name": "Asha", "Track": "Technical Team"})

    assert headers == ["Timestamp", "", "Name", "Track"]
    assert sheet.values[0] == ["Timestamp", "", "Name", "Track"]
    assert sheet.values[1] == ["t0", "note", "Old"]
    assert sheet.values[2] == ["t1", "", "Asha", "Technical Team"]
    assert sheet.get_records()[0] == {"Timestamp": "t0", "Name": "Old", "Track": ""}


def test_trailing_blank_header_cells_are_reused():
    sheet = MemoryWorksheet("Responses", rows=[["Timestamp", "Name", "", ""]])
    append_record(sheet, {"Name": "Asha", "Track": "Outreach Team"})
    assert sheet.get_header() == ["Timestamp", "Name", "Track"]
    assert sheet.values[-1] == ["", "Asha", "Outreach Team"]


def test_merge_headers_does_not_fill_blank_cells():
    assert merge_headers(["a", "", "b"], ["b", "c"]) == ["a", "", "b", "c"]


def test_track_tab_prefers_title_word_over_substring():
    store = MemoryStore([
        MemoryWorksheet("Responses"),
        MemoryWorksheet("Tech Scores"),
        MemoryWorksheet("Core Scores"),
    ])
    append_to_track(store, "core", {"Roll Number": "1608-25-733-019", "Total Score": 30})
    assert store.tabs[1].values == []
    assert store.tabs[2].get_records() == [{"Roll Number": "1608-25-733-019", "Total Score": 30}]


def test_track_tab_falls_back_to_substring_match():
    store = MemoryStore([MemoryWorksheet("Responses"), MemoryWorksheet("BioTech Evaluations")])
    append_to_track(store, "tech", {"Total Score": 12})
    assert store.tabs[1].get_records() == [{"Total Score": 12}]
