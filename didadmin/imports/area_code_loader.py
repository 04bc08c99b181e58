# didadmin/imports/area_code_loader.py
# -*- coding: utf-8 -*-
"""
Area code reference data from CSV (``Area Code,State[,Area Code +1]``).

Used both for the bundled seed file and for area-code uploads.
"""
from didadmin.database.records import AreaCodeRecord
from didadmin.imports.csv_parser import parse_csv
from didadmin.utils.exceptions import HeaderMismatch, EmptyDataset

AREA_CODE_HEADERS = ('Area Code', 'State')

# Simplified: one zone per state.
STATE_TIMEZONES = {
    'Alabama': 'CST', 'Alaska': 'AKST', 'Arizona': 'MST', 'Arkansas': 'CST',
    'California': 'PST', 'Colorado': 'MST', 'Connecticut': 'EST', 'Delaware': 'EST',
    'District of Columbia': 'EST', 'Florida': 'EST', 'Georgia': 'EST', 'Hawaii': 'HST',
    'Idaho': 'MST', 'Illinois': 'CST', 'Indiana': 'EST', 'Iowa': 'CST', 'Kansas': 'CST',
    'Kentucky': 'EST', 'Louisiana': 'CST', 'Maine': 'EST', 'Maryland': 'EST',
    'Massachusetts': 'EST', 'Michigan': 'EST', 'Minnesota': 'CST', 'Mississippi': 'CST',
    'Missouri': 'CST', 'Montana': 'MST', 'Nebraska': 'CST', 'Nevada': 'PST',
    'New Hampshire': 'EST', 'New Jersey': 'EST', 'New Mexico': 'MST', 'New York': 'EST',
    'North Carolina': 'EST', 'North Dakota': 'CST', 'Ohio': 'EST', 'Oklahoma': 'CST',
    'Oregon': 'PST', 'Pennsylvania': 'EST', 'Rhode Island': 'EST', 'South Carolina': 'EST',
    'South Dakota': 'CST', 'Tennessee': 'CST', 'Texas': 'CST', 'Utah': 'MST',
    'Vermont': 'EST', 'Virginia': 'EST', 'Washington': 'PST', 'West Virginia': 'EST',
    'Wisconsin': 'CST', 'Wyoming': 'MST',
    'Toll Free': 'N/A', 'Tell Free': 'N/A',
}
DEFAULT_TIMEZONE = 'EST'
TOLL_FREE_STATES = ('Toll Free', 'Tell Free')


def timezone_for_state(state: str) -> str:
    return STATE_TIMEZONES.get(state, DEFAULT_TIMEZONE)


def region_for_state(state: str) -> str:
    if state in TOLL_FREE_STATES:
        return 'Toll Free'
    return f"{state} Region"


def parse_area_code_csv(text: str) -> list[AreaCodeRecord]:
    """
    Build area code records (without ids) from CSV text.

    The first row is the header and must contain 'Area Code' and 'State'. Rows
    with an empty code are skipped; later rows do not override earlier ones.

    Raises:
        HeaderMismatch: A required column is missing.
        EmptyDataset: No usable rows.
    """
    rows = parse_csv(text)
    if not rows:
        raise EmptyDataset()

    headers = [cell.strip() for cell in rows[0]]
    if any(name not in headers for name in AREA_CODE_HEADERS):
        raise HeaderMismatch(AREA_CODE_HEADERS)
    code_at = headers.index('Area Code')
    state_at = headers.index('State')

    records = []
    seen = set()
    for row in rows[1:]:
        code = row[code_at].strip() if code_at < len(row) else ''
        state = row[state_at].strip() if state_at < len(row) else ''
        if not code or code in seen:
            continue
        seen.add(code)
        records.append(AreaCodeRecord(
            code=code,
            region=region_for_state(state),
            state=state,
            timezone=timezone_for_state(state),
        ))

    if not records:
        raise EmptyDataset("No area codes found in CSV file.")
    return records
