# didadmin/api/schemas/upload_schemas.py
# -*- coding: utf-8 -*-
"""
Schemas for CSV uploads: form fields, previews and upload history.
"""
from marshmallow import Schema, fields, validate, EXCLUDE, post_load

from didadmin.database.records import UploadRecord


# Upload history entry (persistence + response)
class UploadRecordSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    id = fields.Str(load_default='')
    original_name = fields.Str(load_default='', data_key="originalName")
    upload_type = fields.Str(load_default='', data_key="uploadType")
    total_processed = fields.Int(load_default=0, data_key="totalProcessed")
    success_count = fields.Int(load_default=0, data_key="successCount")
    duplicate_count = fields.Int(load_default=0, data_key="duplicateCount")
    skipped_count = fields.Int(load_default=0, data_key="skippedCount")
    upload_date = fields.DateTime(load_default=None, allow_none=True, data_key="uploadDate")

    @post_load
    def make_record(self, data, **kwargs):
        return UploadRecord(**data)


# Multipart form fields accompanying a DID CSV upload (Input)
class DidUploadFormSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    provider = fields.Str(required=True, validate=validate.Length(min=1))
    company_id = fields.Str(load_default=None, data_key="companyId")
    new_company_name = fields.Str(load_default=None, data_key="newCompanyName")
    # Optional explicit column choices; auto-mapping fills the rest
    did_number_column = fields.Str(data_key="didNumberColumn")
    trunk_id_column = fields.Str(data_key="trunkIdColumn")
    did_forward_column = fields.Str(data_key="didForwardColumn")


class ColumnMappingSchema(Schema):
    did_number = fields.Str(allow_none=True, data_key="didNumber")
    trunk_id = fields.Str(allow_none=True, data_key="trunkId")
    did_forward = fields.Str(allow_none=True, data_key="didForward")


class PreviewRowSchema(Schema):
    did_number = fields.Str(data_key="didNumber")
    trunk_id = fields.Str(data_key="trunkId")
    did_forward = fields.Str(data_key="didForward")
    area_code = fields.Str(data_key="areaCode")
    state = fields.Str()


class UploadPreviewSchema(Schema):
    headers = fields.List(fields.Str())
    header_index = fields.Int(data_key="headerIndex")
    mapping = fields.Nested(ColumnMappingSchema)
    row_count = fields.Int(data_key="rowCount")
    preview = fields.List(fields.Nested(PreviewRowSchema))
