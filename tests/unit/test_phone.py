# tests/unit/test_phone.py
# -*- coding: utf-8 -*-
"""Unit tests for phone number normalization and area code extraction."""
import pytest

from didadmin.utils.phone import normalize_phone_number, extract_area_code, match_digits


@pytest.mark.parametrize("raw, expected", [
    ("tel:+1-212-555-0100", "12125550100"),
    ("TEL:2125550100", "12125550100"),
    ("2125550100", "12125550100"),
    ("(212) 555-0100", "12125550100"),
    ("12125550100", "12125550100"),
    ("15552125550100", "12125550100"),
    ("555", "555"),
    ("", ""),
    (None, ""),
])
def test_normalize_phone_number(raw, expected):
    assert normalize_phone_number(raw) == expected


def test_normalize_keeps_eleven_digits_without_country_code_unnormalized():
    """
    GIVEN an 11-digit number that does not start with 1
    WHEN it is normalized
    THEN the bare digits are returned as they are.
    """
    assert normalize_phone_number("22125550100") == "22125550100"


@pytest.mark.parametrize("raw, expected", [
    ("12125550100", "212"),
    ("2125550100", "212"),
    ("tel:+1 (310) 579-6937", "310"),
    ("555", ""),
    ("", ""),
    ("22125550100", ""),
])
def test_extract_area_code(raw, expected):
    assert extract_area_code(raw) == expected


def test_match_digits_drops_country_code():
    assert match_digits("+1 (310) 579-6937") == "3105796937"
    assert match_digits("3105796937") == "3105796937"
    assert match_digits("555-1234") == "5551234"
    assert match_digits(None) == ""
