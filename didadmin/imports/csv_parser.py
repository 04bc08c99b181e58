# didadmin/imports/csv_parser.py
# -*- coding: utf-8 -*-
"""
Comma-separated text -> rows of cells.

Handles double-quoted cells with embedded commas and newlines, doubled quotes
inside quoted cells, and both LF and CRLF line endings. The delimiter is always
a comma.
"""
import csv
import io

BOM = '\ufeff'


def parse_csv(text: str) -> list[list[str]]:
    """
    Parse raw CSV text into an ordered list of rows.

    Rows whose cells are all blank (after stripping whitespace) are dropped.
    Cell values are returned untrimmed.
    """
    if not text:
        return []
    if text.startswith(BOM):
        text = text[len(BOM):]

    reader = csv.reader(io.StringIO(text, newline=''), delimiter=',', quotechar='"', doublequote=True)
    return [row for row in reader if any(cell.strip() for cell in row)]
