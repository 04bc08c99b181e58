# didadmin/api/routes/dids.py
# -*- coding: utf-8 -*-
"""
API Routes for DID records: listing with search/filter/sort, CRUD, bulk edits,
statistics and CSV exports.
Service exceptions propagate to the application's ServiceError handler.
"""
from flask import Blueprint, request, jsonify, current_app, abort, Response

from didadmin.api.query import parse_view_args, envelope
from didadmin.api.schemas.did_schemas import (
    DidSchema, CreateDidSchema, UpdateDidSchema, DidIdsSchema, BulkUpdateDidSchema, DidStatsSchema
)
from didadmin.services.did_service import DidService, DID_COLUMNS, DIALB_STATUS_COLUMN
from didadmin.services.export_service import ExportService, export_filename
from didadmin.utils.decorators import json_body

# Create Blueprint
dids_bp = Blueprint('dids_api', __name__)

# Instantiate schemas
did_schema = DidSchema()
create_did_schema = CreateDidSchema()
update_did_schema = UpdateDidSchema()
did_ids_schema = DidIdsSchema()
bulk_update_did_schema = BulkUpdateDidSchema()
did_stats_schema = DidStatsSchema()

LIST_COLUMNS = tuple(DID_COLUMNS) + (DIALB_STATUS_COLUMN,)


def _filtered_dids():
    search, filters, sort = parse_view_args(request.args, LIST_COLUMNS)
    return DidService.list_dids(search=search, filters=filters, sort=sort)


def _dump_with_dialb(records):
    items = did_schema.dump(records, many=True)
    for item, status in zip(items, DidService.dialb_statuses(records)):
        item[DIALB_STATUS_COLUMN] = status
    return items


def _csv_response(content: str, prefix: str) -> Response:
    return Response(
        content,
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename={export_filename(prefix)}'},
    )


@dids_bp.route('', methods=['GET'])
def get_dids():
    """List DIDs. Query: search, sort, direction, and column filters (e.g. ?status=active&state=Texas)."""
    records = _filtered_dids()
    return jsonify(envelope(_dump_with_dialb(records), total=len(records))), 200


@dids_bp.route('/stats', methods=['GET'])
def get_did_stats():
    """Totals over the same filtered view as the list."""
    stats = DidService.statistics(_filtered_dids())
    return jsonify(envelope(did_stats_schema.dump(stats))), 200


@dids_bp.route('/export', methods=['GET'])
def export_dids():
    """CSV of the filtered view. ?format=grouped (default) or numbers."""
    export_format = request.args.get('format', 'grouped')
    records = _filtered_dids()
    if export_format == 'grouped':
        return _csv_response(ExportService.export_grouped(records), 'all_dids_export')
    if export_format == 'numbers':
        return _csv_response(ExportService.export_numbers_only(records), 'did_numbers_only')
    abort(400, description="Invalid export format. Allowed values: grouped, numbers.")


@dids_bp.route('/export/selected', methods=['POST'])
@json_body(did_ids_schema)
def export_selected_dids(data):
    """CSV with one row per company/state/area code of the selected DIDs."""
    wanted = set(data['ids'])
    records = [did for did in DidService.get_all_dids() if did.id in wanted]
    if not records:
        abort(404, description="None of the selected DIDs exist.")
    return _csv_response(ExportService.export_selected(records), 'dids_export')


@dids_bp.route('/<did_id>', methods=['GET'])
def get_did(did_id):
    did = DidService.get_did_by_id(did_id)
    if not did:
        abort(404, description=f"DID with ID {did_id} not found.")
    return jsonify(envelope(_dump_with_dialb([did])[0])), 200


@dids_bp.route('', methods=['POST'])
@json_body(create_did_schema)
def create_did(data):
    new_did = DidService.create_did(data)
    return jsonify(envelope(did_schema.dump(new_did), message="DID created successfully.")), 201


@dids_bp.route('/<did_id>', methods=['PUT', 'PATCH'])
@json_body(update_did_schema)
def update_did(did_id, data):
    updated_did = DidService.update_did(did_id, data)
    return jsonify(envelope(did_schema.dump(updated_did), message="DID updated successfully.")), 200


@dids_bp.route('/<did_id>', methods=['DELETE'])
def delete_did(did_id):
    DidService.delete_did(did_id)
    return jsonify(envelope(message="DID deleted successfully.")), 200


@dids_bp.route('/bulk-delete', methods=['POST'])
@json_body(did_ids_schema)
def bulk_delete_dids(data):
    deleted = DidService.bulk_delete(data['ids'])
    return jsonify(envelope({'deleted': deleted}, message=f"{deleted} DIDs deleted.")), 200


@dids_bp.route('/bulk', methods=['PATCH'])
@json_body(bulk_update_did_schema)
def bulk_update_dids(data):
    updated = DidService.bulk_update(data['ids'], data['updates'])
    current_app.logger.debug(f"Bulk update request for {len(data['ids'])} DIDs changed {updated}.")
    return jsonify(envelope({'updated': updated}, message=f"{updated} DIDs updated.")), 200
