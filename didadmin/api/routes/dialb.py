# didadmin/api/routes/dialb.py
# -*- coding: utf-8 -*-
"""
API Routes for DialB spam/clean records.
"""
from flask import Blueprint, request, jsonify, abort, Response

from didadmin.api.query import parse_view_args, envelope
from didadmin.api.schemas.did_schemas import DidIdsSchema
from didadmin.api.schemas.dialb_schemas import (
    DialBSchema, CreateDialBSchema, UpdateDialBSchema, DialBStatsSchema
)
from didadmin.services.dialb_service import DialBService
from didadmin.services.export_service import export_filename
from didadmin.services.view_service import apply_view, search_records
from didadmin.utils.decorators import json_body

dialb_bp = Blueprint('dialb_api', __name__)

dialb_schema = DialBSchema()
create_dialb_schema = CreateDialBSchema()
update_dialb_schema = UpdateDialBSchema()
dialb_stats_schema = DialBStatsSchema()
dialb_ids_schema = DidIdsSchema()

DIALB_COLUMNS = {
    'phoneNumber': 'phone_number',
    'group': 'group',
    'overallStatus': 'overall_status',
    'tMobileFlag': 'tmobile_flag',
    'attFlag': 'att_flag',
    'thirdPartyFlag': 'third_party_flag',
    'lastChecked': 'last_checked',
}


def _get_column(record, column):
    return getattr(record, DIALB_COLUMNS.get(column, column), None)


@dialb_bp.route('', methods=['GET'])
def get_dialb_records():
    search, filters, sort = parse_view_args(request.args, tuple(DIALB_COLUMNS))
    records = search_records(DialBService.get_all_records(), search, ('phoneNumber', 'group'), _get_column)
    records = apply_view(records, filters, sort, _get_column)
    return jsonify(envelope(dialb_schema.dump(records, many=True), total=len(records))), 200


@dialb_bp.route('/stats', methods=['GET'])
def get_dialb_stats():
    return jsonify(envelope(dialb_stats_schema.dump(DialBService.statistics()))), 200


@dialb_bp.route('/export', methods=['GET'])
def export_dialb():
    return Response(
        DialBService.export_csv(),
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename={export_filename("dialb_export")}'},
    )


@dialb_bp.route('/<record_id>', methods=['GET'])
def get_dialb_record(record_id):
    record = DialBService.get_record_by_id(record_id)
    if not record:
        abort(404, description=f"DialB record with ID {record_id} not found.")
    return jsonify(envelope(dialb_schema.dump(record))), 200


@dialb_bp.route('', methods=['POST'])
@json_body(create_dialb_schema)
def create_dialb_record(data):
    record = DialBService.create_record(data)
    return jsonify(envelope(dialb_schema.dump(record), message="DialB record created successfully.")), 201


@dialb_bp.route('/<record_id>', methods=['PUT', 'PATCH'])
@json_body(update_dialb_schema)
def update_dialb_record(record_id, data):
    record = DialBService.update_record(record_id, data)
    return jsonify(envelope(dialb_schema.dump(record), message="DialB record updated successfully.")), 200


@dialb_bp.route('/<record_id>', methods=['DELETE'])
def delete_dialb_record(record_id):
    DialBService.delete_record(record_id)
    return jsonify(envelope(message="DialB record deleted successfully.")), 200


@dialb_bp.route('/bulk-delete', methods=['POST'])
@json_body(dialb_ids_schema)
def bulk_delete_dialb_records(data):
    deleted = DialBService.delete_many(data['ids'])
    return jsonify(envelope({'deleted': deleted}, message=f"{deleted} DialB records deleted.")), 200
