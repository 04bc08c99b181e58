# tests/unit/test_sanitizer.py
# -*- coding: utf-8 -*-
"""Unit tests for header detection and data row cleanup."""
import pytest

from didadmin.imports.sanitizer import clean_csv_rows, find_header_row, looks_like_header
from didadmin.utils.exceptions import HeaderNotFound, EmptyDataset


def test_title_row_above_header_is_skipped():
    """
    GIVEN a single-cell title row above a DID/Trunk/Forward header
    WHEN the rows are cleaned
    THEN the header is row 1 and exactly one data row is produced.
    """
    rows = [["Report Title"], ["DID#", "Trunk", "Forward"], ["111", "T1", "222"]]

    cleaned = clean_csv_rows(rows)

    assert cleaned.header_index == 1
    assert cleaned.headers == ["DID#", "Trunk", "Forward"]
    assert cleaned.rows == [{"DID#": "111", "Trunk": "T1", "Forward": "222"}]


def test_metadata_rows_are_not_headers():
    rows = [
        ["Provider: Acme", "", "", ""],
        ["Data as of 2024-05-01", "x", "y", "z"],
        ["Phone Number", "Primary Trunk", "Destination", "Status"],
        ["12125550100", "T1", "13055550100", "active"],
    ]
    assert find_header_row(rows) == 2


def test_keywordless_row_needs_index_two_and_four_columns():
    row = ["Alpha", "Beta", "Gamma", "Delta"]
    assert not looks_like_header(row, 0)
    assert not looks_like_header(row, 1)
    assert looks_like_header(row, 2)
    assert not looks_like_header(["Alpha", "Beta", "Gamma"], 2)


def test_numeric_rows_are_not_headers():
    assert not looks_like_header(["111", "222", "333", "444"], 3)


def test_footer_and_blank_rows_are_dropped():
    rows = [
        ["DID", "Trunk", "Forward"],
        ["111", "T1", "222"],
        ["", "", ""],
        ["Total", "1", ""],
        ["END OF REPORT", "", ""],
        ["333", "T2", ""],
    ]

    cleaned = clean_csv_rows(rows)

    assert [row["DID"] for row in cleaned.rows] == ["111", "333"]
    assert cleaned.rows[1]["Forward"] == ""


def test_short_rows_fill_missing_cells_with_empty_string():
    cleaned = clean_csv_rows([["DID", "Trunk", "Forward"], ["111"]])
    assert cleaned.rows == [{"DID": "111", "Trunk": "", "Forward": ""}]


def test_cells_are_trimmed():
    cleaned = clean_csv_rows([[" DID ", "Trunk", "Forward"], ["  111 ", " T1", "222 "]])
    assert cleaned.rows == [{"DID": "111", "Trunk": "T1", "Forward": "222"}]


def test_header_only_outside_scan_window_is_not_found():
    rows = [["x"]] * 15 + [["DID", "Trunk", "Forward"], ["111", "T1", "222"]]
    with pytest.raises(HeaderNotFound):
        clean_csv_rows(rows)


def test_no_header_raises_header_not_found():
    with pytest.raises(HeaderNotFound) as exc:
        clean_csv_rows([["1", "2", "3"], ["4", "5", "6"]])
    assert "Could not identify header row" in str(exc.value)


def test_header_without_data_raises_empty_dataset():
    with pytest.raises(EmptyDataset):
        clean_csv_rows([["DID", "Trunk", "Forward"], ["Total", "", ""]])
