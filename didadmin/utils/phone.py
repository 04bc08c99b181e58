# didadmin/utils/phone.py
# -*- coding: utf-8 -*-
"""
Phone number helpers.

DIDs are stored as 11-digit NANP strings (country code ``1`` + 10 digits). Nothing
here raises: malformed input degrades to partial or empty output.
"""
import re

_TEL_PREFIX = re.compile(r'^tel:', re.IGNORECASE)
_NON_DIGITS = re.compile(r'\D')


def normalize_phone_number(raw: str | None) -> str:
    """
    Canonicalize a raw phone number string.

    ``tel:+1-212-555-0100`` -> ``12125550100``; ``2125550100`` -> ``12125550100``.
    Numbers longer than 11 digits keep their last 10 digits. Anything shorter than
    10 digits is returned as the bare digits, unnormalized.
    """
    if not raw:
        return ''

    digits = _NON_DIGITS.sub('', _TEL_PREFIX.sub('', raw))

    if len(digits) == 11 and digits.startswith('1'):
        return digits
    if len(digits) == 10:
        return '1' + digits
    if len(digits) > 11:
        return '1' + digits[-10:]
    return digits


def extract_area_code(raw: str | None) -> str:
    """Return the 3-digit area code of a phone number, or '' when it cannot be derived."""
    digits = normalize_phone_number(raw)
    if len(digits) == 11 and digits.startswith('1'):
        return digits[1:4]
    if len(digits) == 10:
        return digits[:3]
    return ''


def match_digits(raw: str | None) -> str:
    """
    Digits used to compare numbers across formats: non-digits stripped and the
    leading country code dropped from 11-digit numbers.
    """
    digits = _NON_DIGITS.sub('', raw or '')
    if len(digits) == 11 and digits.startswith('1'):
        return digits[1:]
    return digits
