# didadmin/imports/column_mapper.py
# -*- coding: utf-8 -*-
"""Guess which CSV column feeds which DID field."""

# Provider and company are chosen by the user at import time, never mapped.
MAPPING_RULES = (
    ('did_number', ('did', 'phone', 'number', 'telephone', 'tn', 'dn')),
    ('trunk_id', ('trunk', 'trank', 'trunk id', 'trank id', 'primary trunk', 'primary', 'secondary trunk')),
    ('did_forward', ('forward', 'forwarding', 'destination', 'target', 'pstn forward', 'pstn backup',
                     'confirmation to call')),
)

MAPPABLE_FIELDS = tuple(field for field, _ in MAPPING_RULES)


def header_matches(header: str, patterns) -> bool:
    """Case-insensitive substring match in either direction."""
    header_lower = header.lower()
    return any(pattern in header_lower or header_lower in pattern for pattern in patterns)


def auto_map_columns(headers: list[str]) -> dict:
    """
    Map each DID field to the first header (in file order) that matches one of its
    keywords, or None. There is no scoring: "Primary Trunk" shadows a later
    "Secondary Trunk" for ``trunk_id``.
    """
    mapping = {}
    for field, patterns in MAPPING_RULES:
        mapping[field] = next((header for header in headers if header and header_matches(header, patterns)), None)
    return mapping
