# tests/unit/test_view_service.py
# -*- coding: utf-8 -*-
"""Unit tests for filtering, sorting and searching record collections."""
import pytest

from didadmin.services.view_service import (
    SortSpec, apply_view, filter_records, natural_sort_key, search_records,
    sort_records, unique_values, make_value_getter
)
from didadmin.database.records import DidRecord

ROWS = [
    {'name': 'DID 10', 'state': 'Texas', 'active': True},
    {'name': 'DID 9', 'state': 'Ohio', 'active': False},
    {'name': 'did 2', 'state': 'Texas', 'active': True},
]


def test_natural_sort_orders_numbers_by_value():
    assert sorted(['DID 10', 'DID 9', 'DID 100'], key=natural_sort_key) == ['DID 9', 'DID 10', 'DID 100']


def test_sort_ascending_and_descending():
    asc = sort_records(ROWS, SortSpec('name', 'asc'))
    assert [r['name'] for r in asc] == ['did 2', 'DID 9', 'DID 10']

    desc = sort_records(ROWS, SortSpec('name', 'desc'))
    assert [r['name'] for r in desc] == ['DID 10', 'DID 9', 'did 2']


def test_sort_none_keeps_input_order():
    assert sort_records(ROWS, SortSpec('name', 'none')) == ROWS
    assert sort_records(ROWS, None) == ROWS


def test_sort_is_stable_for_equal_keys():
    ordered = sort_records(ROWS, SortSpec('state', 'asc'))
    assert [r['name'] for r in ordered] == ['DID 9', 'DID 10', 'did 2']


def test_invalid_sort_direction():
    with pytest.raises(ValueError):
        SortSpec('name', 'sideways')


def test_filter_by_allowed_values():
    """
    GIVEN records in two states
    WHEN filtering on one state and a boolean column
    THEN only records matching every active filter remain.
    """
    result = filter_records(ROWS, {'state': ['Texas'], 'active': ['true']})
    assert [r['name'] for r in result] == ['DID 10', 'did 2']


def test_empty_filter_set_does_not_filter():
    assert filter_records(ROWS, {'state': []}) == ROWS
    assert filter_records(ROWS, None) == ROWS


def test_search_is_case_insensitive_across_columns():
    assert [r['name'] for r in search_records(ROWS, 'OHIO', ['name', 'state'])] == ['DID 9']
    assert search_records(ROWS, '   ', ['name']) == ROWS


def test_apply_view_filters_then_sorts():
    result = apply_view(ROWS, {'state': ['Texas']}, SortSpec('name', 'asc'))
    assert [r['name'] for r in result] == ['did 2', 'DID 10']


def test_unique_values_skip_empty():
    rows = ROWS + [{'name': 'x', 'state': ''}]
    assert unique_values(rows, 'state') == ['Ohio', 'Texas']


def test_value_getter_maps_column_keys_to_attributes():
    records = [DidRecord(did_number='12125550100', state='New York'),
               DidRecord(did_number='13105551234', state='California')]
    getter = make_value_getter({'didNumber': 'did_number'})

    result = apply_view(records, {'didNumber': ['13105551234']}, value_getter=getter)

    assert [r.state for r in result] == ['California']
