# didadmin/storage/registry.py
# -*- coding: utf-8 -*-
"""
StoreRegistry: a Flask extension giving each application its own set of
record stores (``RecordStores``) bound to the configured storage backend.
Request handlers and services reach them through ``get_stores()``.
"""
import json
import logging
import os
from datetime import date, datetime, timezone

from flask import current_app

from didadmin.api.schemas.area_code_schemas import AreaCodeSchema
from didadmin.api.schemas.company_schemas import CompanySchema
from didadmin.api.schemas.dialb_schemas import DialBSchema
from didadmin.api.schemas.did_schemas import DidSchema
from didadmin.api.schemas.upload_schemas import UploadRecordSchema
from didadmin.imports.area_code_loader import parse_area_code_csv
from didadmin.storage.backends import create_blob_storage
from didadmin.storage.record_store import RecordStore
from didadmin.utils.exceptions import CsvImportError

log = logging.getLogger(__name__)

EXTENSION_KEY = 'record_stores'
DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'data')

DIDS_KEY = 'didsData'
COMPANIES_KEY = 'companiesData'
AREA_CODES_KEY = 'areaCodesData'
DIALB_KEY = 'dialBData'
UPLOAD_HISTORY_KEY = 'uploadHistory'


# --- Timestamp hooks ---

def _stamp_did_created(record):
    today = date.today()
    if record.assigned_date is None:
        record.assigned_date = today
    if record.last_updated is None:
        record.last_updated = today


def _stamp_did_updated(record):
    record.last_updated = date.today()


def _stamp_company_created(record):
    today = date.today()
    if record.created_date is None:
        record.created_date = today
    if record.last_updated is None:
        record.last_updated = today


def _stamp_company_updated(record):
    record.last_updated = date.today()


def _stamp_dialb_created(record):
    now = datetime.now(timezone.utc)
    if record.created_at is None:
        record.created_at = now
    if record.updated_at is None:
        record.updated_at = now


def _stamp_dialb_updated(record):
    record.updated_at = datetime.now(timezone.utc)


def _stamp_upload_created(record):
    if record.upload_date is None:
        record.upload_date = datetime.now(timezone.utc)


# --- Seed data ---

def _load_json_seed(filename: str, schema) -> list:
    path = os.path.join(DATA_DIR, filename)
    try:
        with open(path, 'r', encoding='utf-8') as fh:
            return schema.load(json.load(fh), many=True)
    except (OSError, ValueError) as e:
        log.error(f"Could not load seed file '{path}': {e}")
        return []


def _load_area_code_seed(path: str | None) -> list:
    if not path:
        return []
    try:
        with open(path, 'r', encoding='utf-8') as fh:
            records = parse_area_code_csv(fh.read())
    except (OSError, CsvImportError) as e:
        log.error(f"Could not load area code seed file '{path}': {e}")
        return []
    # Seeded codes get stable ids so reloads of an unpersisted store agree
    for record in records:
        record.id = f"ac-{record.code}"
    log.debug(f"Loaded {len(records)} area codes from '{path}'.")
    return records


class RecordStores:
    """
    The record stores of one application, sharing one storage backend.

    Attributes:
        dids, companies, area_codes, dialb, upload_history (RecordStore)
        storage (BlobStorage)
    """

    def __init__(self, app):
        self.storage = create_blob_storage(app)
        seed_samples = app.config.get('SEED_SAMPLE_DATA', False)
        area_code_seed = app.config.get('AREA_CODE_SEED_FILE')

        self.dids = RecordStore(
            DIDS_KEY, DidSchema(), self.storage, id_prefix='did',
            defaults=(lambda: _load_json_seed('sample_dids.json', DidSchema())) if seed_samples else None,
            on_create=_stamp_did_created, on_update=_stamp_did_updated,
        )
        self.companies = RecordStore(
            COMPANIES_KEY, CompanySchema(), self.storage, id_prefix='company',
            defaults=(lambda: _load_json_seed('sample_companies.json', CompanySchema())) if seed_samples else None,
            on_create=_stamp_company_created, on_update=_stamp_company_updated,
        )
        self.area_codes = RecordStore(
            AREA_CODES_KEY, AreaCodeSchema(), self.storage, id_prefix='ac',
            defaults=lambda: _load_area_code_seed(area_code_seed),
        )
        self.dialb = RecordStore(
            DIALB_KEY, DialBSchema(), self.storage, id_prefix='dialb',
            on_create=_stamp_dialb_created, on_update=_stamp_dialb_updated,
        )
        self.upload_history = RecordStore(
            UPLOAD_HISTORY_KEY, UploadRecordSchema(), self.storage, id_prefix='upload',
            on_create=_stamp_upload_created,
        )

    def __iter__(self):
        return iter((self.dids, self.companies, self.area_codes, self.dialb, self.upload_history))


class StoreRegistry:
    """Flask extension creating a ``RecordStores`` for every app it is initialized with."""

    def __init__(self, app=None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app) -> RecordStores:
        """
        Raises:
            ValueError: Propagated from ``create_blob_storage`` for an unusable backend config.
        """
        record_stores = RecordStores(app)
        app.extensions[EXTENSION_KEY] = record_stores
        app.logger.info(f"Record stores initialized with '{record_stores.storage.name}' storage backend.")
        return record_stores


def get_stores() -> RecordStores:
    """The record stores of the current application."""
    return current_app.extensions[EXTENSION_KEY]
