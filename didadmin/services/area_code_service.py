# didadmin/services/area_code_service.py
# -*- coding: utf-8 -*-
"""
Area Code Service
Handles the area code reference table: CRUD with a unique 3-digit code, bulk
replacement, CSV loading and the on-demand DID count aggregates.
"""
from dataclasses import replace

from flask import current_app

from didadmin.database.records import AreaCodeRecord
from didadmin.imports.area_code_loader import parse_area_code_csv, region_for_state, timezone_for_state
from didadmin.services.did_service import DidService
from didadmin.services.view_service import SortSpec, apply_view, search_records, unique_values
from didadmin.storage.registry import get_stores
from didadmin.utils.exceptions import ResourceNotFound, ConflictError, ValidationError

AREA_CODE_COLUMNS = ('code', 'region', 'state', 'timezone', 'totalDIDs', 'activeDIDs')
SEARCH_COLUMNS = ('code', 'region', 'state', 'timezone')
_COLUMN_ATTRS = {'totalDIDs': 'total_dids', 'activeDIDs': 'active_dids'}


def _get_column(record, column):
    return getattr(record, _COLUMN_ATTRS.get(column, column), None)


class AreaCodeService:

    @staticmethod
    def get_all_area_codes() -> list[AreaCodeRecord]:
        return get_stores().area_codes.all()

    @staticmethod
    def get_area_code_by_id(area_code_id: str) -> AreaCodeRecord | None:
        return get_stores().area_codes.get(area_code_id)

    @staticmethod
    def get_by_code(code: str) -> AreaCodeRecord | None:
        return get_stores().area_codes.first(lambda ac: ac.code == code)

    @staticmethod
    def list_area_codes(search: str | None = None, filters: dict | None = None,
                        sort: SortSpec | None = None) -> list[AreaCodeRecord]:
        records = search_records(get_stores().area_codes.all(), search, SEARCH_COLUMNS, _get_column)
        return apply_view(records, filters, sort, _get_column)

    @staticmethod
    def _check_code_free(code: str, exclude_id: str | None = None) -> None:
        existing = AreaCodeService.get_by_code(code)
        if existing is not None and existing.id != exclude_id:
            raise ConflictError(f"Area code '{code}' already exists.")

    @staticmethod
    def create_area_code(data: dict) -> AreaCodeRecord:
        """
        Creates an area code. Region defaults to '<State> Region' and timezone to
        the state's zone.

        Raises:
            ValidationError: Missing code or state.
            ConflictError: The code already exists.
        """
        code = (data.get('code') or '').strip()
        state = (data.get('state') or '').strip()
        if not code or not state:
            raise ValidationError("Area code and state are required.")
        AreaCodeService._check_code_free(code)

        record = AreaCodeRecord(
            code=code,
            state=state,
            region=data.get('region') or region_for_state(state),
            timezone=data.get('timezone') or timezone_for_state(state),
        )
        # The DID state sync listener runs on this add
        record = get_stores().area_codes.add(record)
        current_app.logger.info(f"Area code {record.code} ({record.state}) created (ID: {record.id}).")
        return record

    @staticmethod
    def update_area_code(area_code_id: str, update_data: dict) -> AreaCodeRecord:
        """
        Raises:
            ResourceNotFound: Unknown id.
            ConflictError: The new code belongs to another record.
        """
        stores = get_stores()
        if stores.area_codes.get(area_code_id) is None:
            raise ResourceNotFound(f"Area code with ID {area_code_id} not found.")
        if 'code' in update_data:
            AreaCodeService._check_code_free(update_data['code'], exclude_id=area_code_id)

        record = stores.area_codes.update(area_code_id, update_data)
        current_app.logger.info(f"Area code {area_code_id} updated. Fields: {sorted(update_data.keys())}")
        return record

    @staticmethod
    def delete_area_code(area_code_id: str) -> None:
        if not get_stores().area_codes.delete(area_code_id):
            raise ResourceNotFound(f"Area code with ID {area_code_id} not found.")
        current_app.logger.info(f"Area code {area_code_id} deleted.")

    @staticmethod
    def bulk_replace(records: list[AreaCodeRecord]) -> list[AreaCodeRecord]:
        """
        Replace the whole table, then re-derive the state of every DID from it.

        Raises:
            ConflictError: The list contains the same code twice.
        """
        seen = set()
        for record in records:
            if record.code in seen:
                raise ConflictError(f"Area code '{record.code}' appears more than once.")
            seen.add(record.code)
        stored = get_stores().area_codes.replace_all(records)
        current_app.logger.info(f"Area code table replaced ({len(stored)} records).")
        DidService.synchronize_all_states()
        return stored

    @staticmethod
    def load_from_csv(text: str) -> list[AreaCodeRecord]:
        """Replace the table with the contents of an 'Area Code,State' CSV."""
        return AreaCodeService.bulk_replace(parse_area_code_csv(text))

    @staticmethod
    def recompute_did_counts() -> list[AreaCodeRecord]:
        """
        Recount DIDs per area code by scanning the DID store and persist the totals.
        Counts are only refreshed here; between calls they can be stale.
        """
        stores = get_stores()
        totals, active = {}, {}
        for did in stores.dids.all():
            totals[did.area_code] = totals.get(did.area_code, 0) + 1
            if did.status == 'active':
                active[did.area_code] = active.get(did.area_code, 0) + 1

        refreshed = [replace(ac, total_dids=totals.get(ac.code, 0), active_dids=active.get(ac.code, 0))
                     for ac in stores.area_codes.all()]
        stores.area_codes.replace_all(refreshed)
        current_app.logger.info(f"Recomputed DID counts for {len(refreshed)} area codes.")
        return refreshed

    @staticmethod
    def unique_states() -> list[str]:
        return unique_values(get_stores().area_codes.all(), 'state')
