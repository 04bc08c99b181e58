# didadmin/services/did_service.py
# -*- coding: utf-8 -*-
"""
DID Service
Handles business logic for DID records: CRUD, bulk edits, the import dedup step,
list views and keeping the stored area code/state in line with the DID number
and the area code table.
"""
from flask import current_app

from didadmin.database.records import DidRecord, ImportResult
from didadmin.services.dialb_service import DialBService
from didadmin.services.view_service import (
    SortSpec, apply_view, make_value_getter, search_records, unique_values
)
from didadmin.storage.registry import get_stores
from didadmin.utils.exceptions import ResourceNotFound, ValidationError
from didadmin.utils.phone import extract_area_code

# Column keys used by list filters/sorting -> DidRecord attributes
DID_COLUMNS = {
    'provider': 'provider',
    'didNumber': 'did_number',
    'trunkId': 'trunk_id',
    'didForward': 'did_forward',
    'areaCode': 'area_code',
    'state': 'state',
    'companyId': 'company_code',
    'companyName': 'company_name',
    'status': 'status',
    'assignedDate': 'assigned_date',
    'lastUpdated': 'last_updated',
}
DIALB_STATUS_COLUMN = 'dialBStatus'
SEARCH_COLUMNS = ('didNumber', 'provider', 'trunkId', 'didForward', 'areaCode', 'state', 'companyId', 'companyName')

_get_column = make_value_getter(DID_COLUMNS)


class DidService:

    @staticmethod
    def get_all_dids() -> list[DidRecord]:
        return get_stores().dids.all()

    @staticmethod
    def get_did_by_id(did_id: str) -> DidRecord | None:
        return get_stores().dids.get(did_id)

    @staticmethod
    def state_for_area_code(area_code: str) -> str:
        """State of an area code from the area code table, '' when unknown."""
        if not area_code:
            return ''
        record = get_stores().area_codes.first(lambda ac: ac.code == area_code)
        return record.state if record else ''

    @staticmethod
    def _resolve_company_name(data: dict) -> None:
        if data.get('company_code') and not data.get('company_name'):
            company = get_stores().companies.first(lambda c: c.company_code == data['company_code'])
            if company:
                data['company_name'] = company.name

    @staticmethod
    def create_did(data: dict) -> DidRecord:
        """
        Creates a DID. Area code and state are derived from the number when not supplied.
        Number uniqueness is NOT checked here; only imports deduplicate.

        Raises:
            ValidationError: If the DID number is missing.
        """
        data = dict(data)
        did_number = (data.get('did_number') or '').strip()
        if not did_number:
            raise ValidationError("DID number is required.")
        data['did_number'] = did_number

        if not data.get('area_code'):
            data['area_code'] = extract_area_code(did_number)
        if not data.get('state'):
            data['state'] = DidService.state_for_area_code(data['area_code'])
        DidService._resolve_company_name(data)

        record = get_stores().dids.add(DidRecord(**data))
        current_app.logger.info(f"DID '{record.did_number}' created (ID: {record.id}).")
        return record

    @staticmethod
    def _derive_location(did_number: str, update_data: dict) -> dict:
        changes = dict(update_data)
        if 'area_code' not in update_data:
            changes['area_code'] = extract_area_code(did_number)
        if 'state' not in update_data:
            changes['state'] = DidService.state_for_area_code(changes['area_code'])
        return changes

    @staticmethod
    def update_did(did_id: str, update_data: dict) -> DidRecord:
        """
        Merges a partial patch into a DID and stamps ``last_updated``.
        A new DID number re-derives area code and state unless the patch sets them.

        Raises:
            ResourceNotFound: If the DID does not exist.
        """
        stores = get_stores()
        existing = stores.dids.get(did_id)
        if existing is None:
            raise ResourceNotFound(f"DID with ID {did_id} not found.")

        changes = dict(update_data)
        new_number = changes.get('did_number')
        if new_number is not None and new_number != existing.did_number:
            changes = DidService._derive_location(new_number, changes)
        elif 'area_code' in changes and 'state' not in changes:
            changes['state'] = DidService.state_for_area_code(changes['area_code'])
        DidService._resolve_company_name(changes)

        record = stores.dids.update(did_id, changes)
        current_app.logger.info(f"DID {did_id} updated. Fields: {sorted(update_data.keys())}")
        return record

    @staticmethod
    def delete_did(did_id: str) -> None:
        """Raises ResourceNotFound when the DID does not exist."""
        if not get_stores().dids.delete(did_id):
            raise ResourceNotFound(f"DID with ID {did_id} not found.")
        current_app.logger.info(f"DID {did_id} deleted.")

    @staticmethod
    def bulk_delete(did_ids: list[str]) -> int:
        """Deletes every listed DID that exists; returns how many were removed."""
        removed = get_stores().dids.delete_many(did_ids)
        current_app.logger.info(f"Bulk delete removed {len(removed)} of {len(did_ids)} requested DIDs.")
        return len(removed)

    @staticmethod
    def bulk_update(did_ids: list[str], update_data: dict) -> int:
        """
        Applies the same patch to every listed DID; returns how many were updated.
        The DID number itself cannot be bulk-edited.
        """
        if not update_data:
            raise ValidationError("No fields provided for update.")
        if 'did_number' in update_data:
            raise ValidationError("DID number cannot be changed in a bulk update.")

        changes = dict(update_data)
        if 'area_code' in changes and 'state' not in changes:
            changes['state'] = DidService.state_for_area_code(changes['area_code'])
        DidService._resolve_company_name(changes)

        updated = get_stores().dids.update_many(did_ids, changes)
        current_app.logger.info(f"Bulk update changed {len(updated)} DIDs. Fields: {sorted(update_data.keys())}")
        return len(updated)

    @staticmethod
    def clear_all() -> int:
        removed = get_stores().dids.clear()
        current_app.logger.warning(f"All DID data cleared ({removed} records).")
        return removed

    # --- Import ---

    @staticmethod
    def add_imported_dids(candidates: list[DidRecord], skipped: int = 0) -> ImportResult:
        """
        Partition imported DIDs into accepted and duplicate records and store the accepted ones.
        ``skipped`` is the number of file rows dropped before this step (no DID number);
        they count toward ``total_processed``.

        A candidate is a duplicate when its DID number equals (exact string match) one
        already in the store or one accepted earlier in the same batch. Accepted
        records are committed in a single write.
        """
        stores = get_stores()
        known_numbers = {did.did_number for did in stores.dids.all()}
        result = ImportResult(total_processed=len(candidates) + skipped, skipped_count=skipped)

        for candidate in candidates:
            if candidate.did_number in known_numbers:
                result.duplicates.append(candidate)
            else:
                result.successful.append(candidate)
                known_numbers.add(candidate.did_number)

        stores.dids.add_many(result.successful)
        current_app.logger.info(
            f"Import completed: {result.success_count} successful, {result.duplicate_count} duplicates, "
            f"{result.skipped_count} skipped ({result.total_processed} processed)."
        )
        return result

    # --- Views ---

    @staticmethod
    def list_dids(search: str | None = None, filters: dict | None = None,
                  sort: SortSpec | None = None) -> list[DidRecord]:
        """Search, then column filters, then sort. ``dialBStatus`` is accepted as a column."""
        records = get_stores().dids.all()
        records = search_records(records, search, SEARCH_COLUMNS, _get_column)

        value_getter = _get_column
        uses_dialb = (filters and filters.get(DIALB_STATUS_COLUMN)) or (sort and sort.column == DIALB_STATUS_COLUMN)
        if uses_dialb:
            statuses = DialBService.status_lookup()

            def value_getter(record, column):
                if column == DIALB_STATUS_COLUMN:
                    return DialBService.status_from_lookup(statuses, record.did_number)
                return _get_column(record, column)

        return apply_view(records, filters, sort, value_getter)

    @staticmethod
    def dialb_statuses(records: list[DidRecord]) -> list[str]:
        """DialB status (Clean/Spam/Unknown) of each record, in order."""
        statuses = DialBService.status_lookup()
        return [DialBService.status_from_lookup(statuses, record.did_number) for record in records]

    @staticmethod
    def statistics(records: list[DidRecord]) -> dict:
        return {
            'total': len(records),
            'unique_providers': len({r.provider for r in records}),
            'unique_area_codes': len({r.area_code for r in records}),
            'unique_states': len({r.state for r in records}),
        }

    @staticmethod
    def unique_providers() -> list[str]:
        return unique_values(get_stores().dids.all(), 'provider')

    @staticmethod
    def unique_states() -> list[str]:
        return unique_values(get_stores().dids.all(), 'state')

    # --- Area code / state consistency ---

    @staticmethod
    def sync_states_for_area_code(area_code: str, state: str) -> int:
        """Set ``state`` on every DID of ``area_code`` whose state differs; returns the count."""
        if not area_code:
            return 0
        dids = get_stores().dids
        stale_ids = [d.id for d in dids.find(lambda d: d.area_code == area_code and d.state != state)]
        if not stale_ids:
            return 0
        dids.update_many(stale_ids, {'state': state})
        current_app.logger.info(f"Synchronized state '{state}' onto {len(stale_ids)} DIDs of area code {area_code}.")
        return len(stale_ids)

    @staticmethod
    def synchronize_all_states() -> int:
        """Re-derive the state of every DID from the area code table. Unknown area codes are left alone."""
        stores = get_stores()
        states = {ac.code: ac.state for ac in stores.area_codes.all()}
        updated = 0
        for area_code, state in states.items():
            updated += DidService.sync_states_for_area_code(area_code, state)
        current_app.logger.info(f"State synchronization updated {updated} DIDs.")
        return updated

    @staticmethod
    def register_listeners(stores) -> None:
        """
        Keep DID states following single area code adds and updates. Whole-table
        replaces sync in ``AreaCodeService.bulk_replace``; the replace done by
        ``recompute_did_counts`` changes no state and is ignored here.
        """
        def on_area_codes_changed(event):
            if event.action not in ('add', 'update'):
                return
            for area_code in event.records:
                DidService.sync_states_for_area_code(area_code.code, area_code.state)

        stores.area_codes.subscribe(on_area_codes_changed)
