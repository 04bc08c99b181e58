# tests/unit/test_export_service.py
# -*- coding: utf-8 -*-
"""Unit tests for DID CSV exports."""
from didadmin.database.records import DidRecord
from didadmin.services.export_service import ExportService, export_filename


def make_did(number, area_code, state='New York', company='Acme', code='COMP001'):
    return DidRecord(did_number=number, area_code=area_code, state=state,
                     company_name=company, company_code=code)


def test_grouped_rows_default_row_then_area_codes():
    """
    GIVEN DIDs of one company in two area codes of one state
    WHEN the grouped export is built
    THEN a Default row precedes one row per area code, numeric codes ascending.
    """
    records = [
        make_did('13475550100', '347'),
        make_did('12125550100', '212'),
        make_did('12125550101', '212'),
    ]

    rows = ExportService.grouped_rows(records)

    assert rows == [
        ['Acme New York Default', 'serial', 'COMP001000'],
        ['Acme New York 212', 'serial', 'COMP0011212', '12125550100', '12125550101'],
        ['Acme New York 347', 'serial', 'COMP0011347', '13475550100'],
    ]


def test_missing_labels_fall_back_to_unknown():
    rows = ExportService.grouped_rows([DidRecord(did_number='555')])
    assert rows[0] == ['Unknown Company Unknown State Default', 'serial', '000']
    assert rows[1][0] == 'Unknown Company Unknown State Unknown Area'


def test_selected_rows_one_line_per_group():
    records = [
        make_did('12125550100', '212'),
        make_did('13105551234', '310', state='California', company='Globex', code='COMP002'),
        make_did('12125550101', '212'),
    ]

    rows = ExportService.selected_rows(records)

    assert rows == [
        ['Acme', 'serial', 'New York 212', 'COMP0011212', '12125550100', '12125550101'],
        ['Globex', 'serial', 'California 310', 'COMP0021310', '13105551234'],
    ]


def test_export_numbers_only_skips_blank_numbers():
    records = [make_did('12125550100', '212'), DidRecord(), make_did('13105551234', '310')]
    assert ExportService.export_numbers_only(records) == '12125550100\n13105551234\n'


def test_export_selected_quotes_cells_with_commas():
    text = ExportService.export_selected([make_did('12125550100', '212', company='Acme, Inc.')])
    assert text.startswith('"Acme, Inc.",serial,New York 212')


def test_export_filename_has_date_suffix():
    name = export_filename('did_export')
    assert name.startswith('did_export_') and name.endswith('.csv')
