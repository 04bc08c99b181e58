# didadmin/imports/sanitizer.py
# -*- coding: utf-8 -*-
"""
Locate the real header row of a carrier CSV export and turn the rows below it
into ``{header: value}`` dicts.

Provider exports often carry a title, a "data as of" line or customer metadata
above the table and totals below it. The header is the first row in the first
15 that looks like a header; blank and footer rows under it are discarded.
"""
import math
from dataclasses import dataclass, field

from didadmin.utils.exceptions import HeaderNotFound, EmptyDataset

HEADER_SCAN_LIMIT = 15
MIN_HEADER_COLUMNS = 3
MIN_ROW_WIDTH = 4

HEADER_KEYWORDS = (
    'did', 'trunk', 'trank', 'phone', 'number', 'forward', 'destination',
    'type', 'primary', 'secondary', 'status', 'active', 'company', 'client',
)
METADATA_MARKERS = ('provider', 'customer', 'report', 'data as of')
FOOTER_MARKERS = ('total', 'summary', 'count', 'end of')


@dataclass
class CleanedCsv:
    header_index: int
    headers: list[str]
    rows: list[dict] = field(default_factory=list)


def _is_blank(cell) -> bool:
    return not cell or not cell.strip()


def _is_numeric(cell: str) -> bool:
    value = cell.strip()
    if not value:
        return True
    if '_' in value:
        return False
    try:
        return not math.isnan(float(value))
    except ValueError:
        return False


def _has_header_keywords(row) -> bool:
    return any(not _is_blank(cell) and any(word in cell.lower() for word in HEADER_KEYWORDS)
               for cell in row)


def _is_title_row(row) -> bool:
    if len(row) == 1:
        return True
    return any(not _is_blank(cell) and any(marker in cell.lower() for marker in METADATA_MARKERS)
               for cell in row)


def looks_like_header(row, index: int) -> bool:
    """Heuristic header test for the row at ``index``."""
    if not row or all(_is_blank(cell) for cell in row):
        return False

    filled = [cell for cell in row if not _is_blank(cell)]
    has_keywords = _has_header_keywords(row)
    # keyword rows may be one column narrower than anonymous ones
    min_width = MIN_HEADER_COLUMNS if has_keywords else MIN_ROW_WIDTH

    return (len(filled) >= MIN_HEADER_COLUMNS
            and any(not _is_numeric(cell) for cell in filled)
            and len(row) >= min_width
            and (has_keywords or index >= 2)
            and not _is_title_row(row))


def find_header_row(rows: list[list[str]]) -> int:
    """Return the index of the header row, raising HeaderNotFound when none qualifies."""
    for index, row in enumerate(rows[:HEADER_SCAN_LIMIT]):
        if looks_like_header(row, index):
            return index
    raise HeaderNotFound()


def _is_footer(row) -> bool:
    first = row[0].strip().lower() if row and row[0] else ''
    return first.startswith(FOOTER_MARKERS)


def clean_csv_rows(rows: list[list[str]]) -> CleanedCsv:
    """
    Detect the header and convert the data rows below it.

    Raises:
        HeaderNotFound: No header row in the scanned window, or fewer than 3 named columns.
        EmptyDataset: Nothing but blank/footer rows under the header.
    """
    header_index = find_header_row(rows)
    header_row = rows[header_index]

    # Keep each header at its original column position; unnamed columns are ignored.
    columns = [(position, cell.strip()) for position, cell in enumerate(header_row) if not _is_blank(cell)]
    if len(columns) < MIN_HEADER_COLUMNS:
        raise HeaderNotFound("CSV file must have at least 3 columns with headers.")

    data = []
    for row in rows[header_index + 1:]:
        if not row or all(_is_blank(cell) for cell in row):
            continue
        if _is_footer(row):
            continue
        record = {header: (row[position].strip() if position < len(row) and row[position] else '')
                  for position, header in columns}
        if any(record.values()):
            data.append(record)

    if not data:
        raise EmptyDataset()

    return CleanedCsv(header_index=header_index, headers=[header for _, header in columns], rows=data)
