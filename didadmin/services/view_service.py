# didadmin/services/view_service.py
# -*- coding: utf-8 -*-
"""
View Service
Read-side projection of a record collection: column filters, text search and a
single-column natural sort. Nothing here mutates a store.
"""
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable

SORT_DIRECTIONS = ('asc', 'desc', 'none')

_DIGIT_RUNS = re.compile(r'(\d+)')


@dataclass(frozen=True)
class SortSpec:
    column: str | None = None
    direction: str = 'none'

    def __post_init__(self):
        if self.direction not in SORT_DIRECTIONS:
            raise ValueError(f"Invalid sort direction '{self.direction}'. Allowed: {', '.join(SORT_DIRECTIONS)}.")

    @property
    def active(self) -> bool:
        return bool(self.column) and self.direction != 'none'


def format_value(value) -> str:
    """String form used for filtering, searching and sorting."""
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def natural_sort_key(value) -> tuple:
    """
    Numeric-aware, case-insensitive key: 'DID 9' sorts before 'DID 10'.
    Digit runs compare by value, text runs by casefolded text.
    """
    parts = []
    for chunk in _DIGIT_RUNS.split(format_value(value)):
        if not chunk:
            continue
        if chunk.isdigit():
            parts.append((0, int(chunk), ''))
        else:
            parts.append((1, 0, chunk.casefold()))
    return tuple(parts)


def make_value_getter(columns: dict[str, str]) -> Callable:
    """
    Build a ``(record, column) -> value`` getter from a column-key -> attribute map.
    Columns not in the map fall back to an attribute of the same name.
    """
    def get_value(record, column):
        return getattr(record, columns.get(column, column), None)
    return get_value


def _default_getter(record, column):
    if isinstance(record, dict):
        return record.get(column)
    return getattr(record, column, None)


def filter_records(records, filters: dict | None, value_getter: Callable = _default_getter) -> list:
    """
    Keep records whose value is in the allowed set of every filtered column.
    Columns with an empty allowed set do not filter.
    """
    active = {column: {format_value(v) for v in allowed}
              for column, allowed in (filters or {}).items() if allowed}
    if not active:
        return list(records)
    return [record for record in records
            if all(format_value(value_getter(record, column)) in allowed for column, allowed in active.items())]


def sort_records(records, sort: SortSpec | None, value_getter: Callable = _default_getter) -> list:
    """Stable single-column sort; an inactive SortSpec keeps the input order."""
    if sort is None or not sort.active:
        return list(records)
    return sorted(records,
                  key=lambda record: natural_sort_key(value_getter(record, sort.column)),
                  reverse=sort.direction == 'desc')


def search_records(records, term: str | None, columns, value_getter: Callable = _default_getter) -> list:
    """Case-insensitive substring search over the given columns."""
    if not term or not term.strip():
        return list(records)
    needle = term.strip().casefold()
    return [record for record in records
            if any(needle in format_value(value_getter(record, column)).casefold() for column in columns)]


def apply_view(records, filters: dict | None = None, sort: SortSpec | None = None,
               value_getter: Callable = _default_getter) -> list:
    """Filter, then sort. Returns a new list."""
    return sort_records(filter_records(records, filters, value_getter), sort, value_getter)


def unique_values(records, column: str, value_getter: Callable = _default_getter) -> list[str]:
    """Distinct non-empty values of a column, naturally sorted (filter dropdown options)."""
    values = {format_value(value_getter(record, column)) for record in records}
    values.discard('')
    return sorted(values, key=natural_sort_key)
