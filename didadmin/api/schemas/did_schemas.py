# didadmin/api/schemas/did_schemas.py
# -*- coding: utf-8 -*-
"""
Schemas for DID records: persisted representation, API requests and responses.
"""
from marshmallow import Schema, fields, validate, EXCLUDE, pre_load, post_load

from didadmin.database.records import DidRecord, DID_STATUSES


class LegacyTrunkKeyMixin:
    """Older data spells the trunk column 'trankId'."""

    @pre_load
    def rename_legacy_trunk_key(self, data, **kwargs):
        if isinstance(data, dict) and 'trankId' in data and 'trunkId' not in data:
            data = dict(data)
            data['trunkId'] = data.pop('trankId')
        return data


# Schema for a stored DID (persistence + response)
class DidSchema(LegacyTrunkKeyMixin, Schema):
    class Meta:
        unknown = EXCLUDE

    id = fields.Str(load_default='')
    provider = fields.Str(load_default='')
    did_number = fields.Str(load_default='', data_key="didNumber")
    trunk_id = fields.Str(load_default='', data_key="trunkId")
    did_forward = fields.Str(load_default='', data_key="didForward")
    area_code = fields.Str(load_default='', data_key="areaCode")
    state = fields.Str(load_default='')
    company_code = fields.Str(load_default='', data_key="companyId")
    company_name = fields.Str(load_default='', data_key="companyName")
    status = fields.Str(load_default='active', validate=validate.OneOf(DID_STATUSES))
    assigned_date = fields.Date(load_default=None, allow_none=True, data_key="assignedDate")
    last_updated = fields.Date(load_default=None, allow_none=True, data_key="lastUpdated")

    @post_load
    def make_record(self, data, **kwargs):
        return DidRecord(**data)


# Schema for creating a DID (Input)
class CreateDidSchema(LegacyTrunkKeyMixin, Schema):
    class Meta:
        unknown = EXCLUDE

    provider = fields.Str(load_default='')
    did_number = fields.Str(required=True, validate=validate.Length(min=1), data_key="didNumber")
    trunk_id = fields.Str(load_default='', data_key="trunkId")
    did_forward = fields.Str(load_default='', data_key="didForward")
    # Derived from didNumber when omitted
    area_code = fields.Str(allow_none=True, data_key="areaCode")
    state = fields.Str(allow_none=True)
    company_code = fields.Str(load_default='', data_key="companyId")
    company_name = fields.Str(load_default='', data_key="companyName")
    status = fields.Str(load_default='active', validate=validate.OneOf(DID_STATUSES))
    assigned_date = fields.Date(allow_none=True, data_key="assignedDate")


# Schema for updating a DID (Input - Partial)
class UpdateDidSchema(LegacyTrunkKeyMixin, Schema):
    class Meta:
        unknown = EXCLUDE

    provider = fields.Str()
    did_number = fields.Str(validate=validate.Length(min=1), data_key="didNumber")
    trunk_id = fields.Str(data_key="trunkId")
    did_forward = fields.Str(data_key="didForward")
    area_code = fields.Str(data_key="areaCode")
    state = fields.Str()
    company_code = fields.Str(data_key="companyId")
    company_name = fields.Str(data_key="companyName")
    status = fields.Str(validate=validate.OneOf(DID_STATUSES))
    assigned_date = fields.Date(allow_none=True, data_key="assignedDate")


class DidIdsSchema(Schema):
    ids = fields.List(fields.Str(), required=True, validate=validate.Length(min=1))


class BulkUpdateDidSchema(DidIdsSchema):
    updates = fields.Nested(UpdateDidSchema, required=True)


# Import result (Response)
class ImportResultSchema(Schema):
    successful = fields.List(fields.Nested(DidSchema()))
    duplicates = fields.List(fields.Nested(DidSchema()))
    total_processed = fields.Int(data_key="totalProcessed")
    success_count = fields.Int(data_key="successCount")
    duplicate_count = fields.Int(data_key="duplicateCount")
    skipped_count = fields.Int(data_key="skippedCount")


class DidStatsSchema(Schema):
    total = fields.Int()
    unique_providers = fields.Int(data_key="uniqueProviders")
    unique_area_codes = fields.Int(data_key="uniqueAreaCodes")
    unique_states = fields.Int(data_key="uniqueStates")
