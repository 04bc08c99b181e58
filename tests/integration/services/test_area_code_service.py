# tests/integration/services/test_area_code_service.py
# -*- coding: utf-8 -*-
"""Tests for the area code table."""
import pytest

from didadmin.database.records import AreaCodeRecord
from didadmin.services.area_code_service import AreaCodeService
from didadmin.services.did_service import DidService
from didadmin.services.view_service import SortSpec
from didadmin.utils.exceptions import ConflictError, ResourceNotFound, ValidationError, HeaderMismatch


def test_seeded_from_bundled_csv(app, stores):
    """
    GIVEN a fresh testing app
    WHEN the area code store is read
    THEN it holds the bundled area codes with stable ids.
    """
    record = AreaCodeService.get_by_code('212')

    assert stores.area_codes.count() > 300
    assert record.id == 'ac-212'
    assert record.state == 'New York'
    assert record.region == 'New York Region'
    assert record.timezone == 'EST'


def test_create_defaults_region_and_timezone(app):
    record = AreaCodeService.create_area_code({'code': '999', 'state': 'Oregon'})
    assert (record.region, record.timezone) == ('Oregon Region', 'PST')


def test_create_validates_and_rejects_duplicates(app):
    with pytest.raises(ValidationError):
        AreaCodeService.create_area_code({'code': '999'})
    with pytest.raises(ConflictError):
        AreaCodeService.create_area_code({'code': '212', 'state': 'New York'})


def test_update_to_taken_code_conflicts(app):
    record = AreaCodeService.get_by_code('212')
    with pytest.raises(ConflictError):
        AreaCodeService.update_area_code(record.id, {'code': '310'})
    # same code on itself is fine
    assert AreaCodeService.update_area_code(record.id, {'code': '212'}).code == '212'
    with pytest.raises(ResourceNotFound):
        AreaCodeService.update_area_code('missing', {'state': 'x'})


def test_delete(app):
    record = AreaCodeService.get_by_code('212')
    AreaCodeService.delete_area_code(record.id)
    assert AreaCodeService.get_by_code('212') is None
    with pytest.raises(ResourceNotFound):
        AreaCodeService.delete_area_code(record.id)


def test_bulk_replace_rejects_duplicate_codes(app, stores):
    before = stores.area_codes.count()
    with pytest.raises(ConflictError):
        AreaCodeService.bulk_replace([AreaCodeRecord(code='111'), AreaCodeRecord(code='111')])
    assert stores.area_codes.count() == before


def test_load_from_csv_replaces_table(app, stores):
    records = AreaCodeService.load_from_csv("Area Code,State\n111,Ohio\n222,Texas\n")

    assert [r.code for r in records] == ['111', '222']
    assert stores.area_codes.count() == 2
    with pytest.raises(HeaderMismatch):
        AreaCodeService.load_from_csv("Code,Region\n1,2\n")


def test_recompute_did_counts(app):
    """
    GIVEN two active and one inactive DID in 212
    WHEN counts are recomputed
    THEN 212 reports 3 total and 2 active while other codes report zero.
    """
    DidService.create_did({'did_number': '12125550100'})
    DidService.create_did({'did_number': '12125550101'})
    DidService.create_did({'did_number': '12125550102', 'status': 'inactive'})

    assert AreaCodeService.get_by_code('212').total_dids == 0
    AreaCodeService.recompute_did_counts()

    record = AreaCodeService.get_by_code('212')
    assert (record.total_dids, record.active_dids) == (3, 2)
    assert AreaCodeService.get_by_code('310').total_dids == 0


def test_list_filter_and_sort(app):
    records = AreaCodeService.list_area_codes(filters={'state': ['Texas']}, sort=SortSpec('code', 'desc'))
    codes = [r.code for r in records]
    assert codes == sorted(codes, key=int, reverse=True)
    assert '214' in codes
    assert 'New York' in AreaCodeService.unique_states()
