# tests/unit/test_area_code_loader.py
# -*- coding: utf-8 -*-
"""Unit tests for area code CSV loading."""
import pytest

from didadmin.imports.area_code_loader import parse_area_code_csv, region_for_state, timezone_for_state
from didadmin.utils.exceptions import HeaderMismatch, EmptyDataset


def test_parse_area_codes_derives_region_and_timezone():
    records = parse_area_code_csv("Area Code,State,Area Code +1\n212,New York,1212\n800,Toll Free,1800\n")

    assert [r.code for r in records] == ['212', '800']
    assert records[0].region == 'New York Region'
    assert records[0].timezone == 'EST'
    assert records[1].region == 'Toll Free'
    assert records[1].timezone == 'N/A'


def test_duplicate_and_empty_codes_are_skipped():
    records = parse_area_code_csv("State,Area Code\nTexas,214\nOhio,214\nOhio,\n")
    assert len(records) == 1
    assert records[0].state == 'Texas'


def test_missing_state_column():
    with pytest.raises(HeaderMismatch) as exc:
        parse_area_code_csv("Area Code,Region\n212,NY\n")
    assert 'Area Code, State' in str(exc.value)


def test_no_rows():
    with pytest.raises(EmptyDataset):
        parse_area_code_csv("Area Code,State\n")
    with pytest.raises(EmptyDataset):
        parse_area_code_csv("")


def test_unknown_state_defaults():
    assert timezone_for_state('Atlantis') == 'EST'
    assert region_for_state('Atlantis') == 'Atlantis Region'
