# didadmin/api/routes/area_codes.py
# -*- coding: utf-8 -*-
"""
API Routes for the area code table, DID count recomputation and DID state sync.
"""
from flask import Blueprint, request, jsonify, abort

from didadmin.api.query import parse_view_args, envelope
from didadmin.api.schemas.area_code_schemas import (
    AreaCodeSchema, CreateAreaCodeSchema, UpdateAreaCodeSchema, BulkAreaCodesSchema
)
from didadmin.services.area_code_service import AreaCodeService, AREA_CODE_COLUMNS
from didadmin.services.did_service import DidService
from didadmin.utils.decorators import json_body

area_codes_bp = Blueprint('area_codes_api', __name__)

area_code_schema = AreaCodeSchema()
create_area_code_schema = CreateAreaCodeSchema()
update_area_code_schema = UpdateAreaCodeSchema()
bulk_area_codes_schema = BulkAreaCodesSchema()


@area_codes_bp.route('', methods=['GET'])
def get_area_codes():
    search, filters, sort = parse_view_args(request.args, AREA_CODE_COLUMNS)
    area_codes = AreaCodeService.list_area_codes(search=search, filters=filters, sort=sort)
    return jsonify(envelope(area_code_schema.dump(area_codes, many=True), total=len(area_codes))), 200


@area_codes_bp.route('/<area_code_id>', methods=['GET'])
def get_area_code(area_code_id):
    area_code = AreaCodeService.get_area_code_by_id(area_code_id)
    if not area_code:
        abort(404, description=f"Area code with ID {area_code_id} not found.")
    return jsonify(envelope(area_code_schema.dump(area_code))), 200


@area_codes_bp.route('', methods=['POST'])
@json_body(create_area_code_schema)
def create_area_code(data):
    area_code = AreaCodeService.create_area_code(data)
    return jsonify(envelope(area_code_schema.dump(area_code), message="Area code created successfully.")), 201


@area_codes_bp.route('/bulk', methods=['POST'])
@json_body(bulk_area_codes_schema)
def replace_area_codes(data):
    """Replace the whole table; DID states are re-derived from it."""
    area_codes = AreaCodeService.bulk_replace(data['area_codes'])
    return jsonify(envelope(area_code_schema.dump(area_codes, many=True), total=len(area_codes),
                            message="Area codes saved successfully.")), 200


@area_codes_bp.route('/recompute', methods=['POST'])
def recompute_area_code_counts():
    area_codes = AreaCodeService.recompute_did_counts()
    return jsonify(envelope(area_code_schema.dump(area_codes, many=True), total=len(area_codes),
                            message="DID counts recomputed.")), 200


@area_codes_bp.route('/sync-states', methods=['POST'])
def sync_did_states():
    updated = DidService.synchronize_all_states()
    return jsonify(envelope({'updated': updated}, message=f"{updated} DIDs synchronized.")), 200


@area_codes_bp.route('/<area_code_id>', methods=['PUT', 'PATCH'])
@json_body(update_area_code_schema)
def update_area_code(area_code_id, data):
    area_code = AreaCodeService.update_area_code(area_code_id, data)
    return jsonify(envelope(area_code_schema.dump(area_code), message="Area code updated successfully.")), 200


@area_codes_bp.route('/<area_code_id>', methods=['DELETE'])
def delete_area_code(area_code_id):
    AreaCodeService.delete_area_code(area_code_id)
    return jsonify(envelope(message="Area code deleted successfully.")), 200
