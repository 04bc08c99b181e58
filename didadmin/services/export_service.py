# didadmin/services/export_service.py
# -*- coding: utf-8 -*-
"""
Export Service
CSV exports of DID records for provisioning: grouped by company/state/area code,
per selected group, or the bare numbers.
"""
import csv
import io
from datetime import date

UNKNOWN_COMPANY = 'Unknown Company'
UNKNOWN_STATE = 'Unknown State'
UNKNOWN_AREA = 'Unknown Area'
SERIAL = 'serial'


def _group_labels(did) -> tuple[str, str, str]:
    return (did.company_name or UNKNOWN_COMPANY,
            did.state or UNKNOWN_STATE,
            did.area_code or UNKNOWN_AREA)


def _area_code_order(keys) -> list[str]:
    """Digit-only area codes first in numeric order, then the rest as first seen."""
    numeric = sorted((k for k in keys if k.isdigit()), key=int)
    return numeric + [k for k in keys if not k.isdigit()]


def _write_rows(rows) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator='\n')
    writer.writerows(rows)
    return buffer.getvalue()


def export_filename(prefix: str) -> str:
    return f"{prefix}_{date.today().isoformat()}.csv"


class ExportService:

    @staticmethod
    def grouped_rows(records) -> list[list[str]]:
        """
        For every company and state: a '<Company> <State> Default' row with
        '<code>000', then one row per area code with '<code>1<area code>' and the
        DID numbers as trailing columns.
        """
        tree = {}
        for did in records:
            company, state, area_code = _group_labels(did)
            tree.setdefault(company, {}).setdefault(state, {}).setdefault(area_code, []).append(did)

        rows = []
        for company, states in tree.items():
            for state, area_codes in states.items():
                ordered = _area_code_order(list(area_codes))
                # One company code per state group: taken from its first area code group
                company_code = area_codes[ordered[0]][0].company_code or ''
                rows.append([f"{company} {state} Default", SERIAL, f"{company_code}000"])
                for area_code in ordered:
                    dids = area_codes[area_code]
                    rows.append([f"{company} {state} {area_code}", SERIAL, f"{company_code}1{area_code}",
                                 *(did.did_number for did in dids)])
        return rows

    @staticmethod
    def selected_rows(records) -> list[list[str]]:
        """One row per (company, state, area code): '<Company>,serial,<State> <AC>,<code>1<AC>,<dids...>'."""
        groups = {}
        for did in records:
            groups.setdefault(_group_labels(did), []).append(did)

        rows = []
        for (company, state, area_code), dids in groups.items():
            company_code = dids[0].company_code or ''
            rows.append([company, SERIAL, f"{state} {area_code}", f"{company_code}1{area_code}",
                         *(did.did_number for did in dids)])
        return rows

    @staticmethod
    def export_grouped(records) -> str:
        return _write_rows(ExportService.grouped_rows(records))

    @staticmethod
    def export_selected(records) -> str:
        return _write_rows(ExportService.selected_rows(records))

    @staticmethod
    def export_numbers_only(records) -> str:
        """One DID number per line, no header; records without a number are skipped."""
        return _write_rows([did.did_number] for did in records if did.did_number)
