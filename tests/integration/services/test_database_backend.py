# tests/integration/services/test_database_backend.py
# -*- coding: utf-8 -*-
"""Record stores on the 'database' storage backend (in-memory SQLite)."""
import json

from didadmin.database.models import RecordBlobModel
from didadmin.extensions import db
from didadmin.services.did_service import DidService
from didadmin.storage.registry import get_stores, RecordStores


def test_blob_row_written_on_mutation(db_app):
    """
    GIVEN the database storage backend
    WHEN a DID is created
    THEN the 'didsData' row holds the full collection as JSON.
    """
    DidService.create_did({'did_number': '12125550100'})

    row = db.session.get(RecordBlobModel, 'didsData')
    assert row is not None
    assert json.loads(row.value)[0]['didNumber'] == '12125550100'


def test_new_store_set_reads_persisted_rows(db_app):
    assert get_stores().storage.name == 'database'
    DidService.create_did({'did_number': '12125550100'})

    reloaded = RecordStores(db_app)

    assert [d.did_number for d in reloaded.dids.all()] == ['12125550100']


def test_unpersisted_area_codes_come_from_seed(db_app):
    assert db.session.get(RecordBlobModel, 'areaCodesData') is None
    assert get_stores().area_codes.count() > 300
