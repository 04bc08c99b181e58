# didadmin/api/schemas/area_code_schemas.py
# -*- coding: utf-8 -*-
"""
Schemas for Area Code records and API requests.
"""
from marshmallow import Schema, fields, validate, EXCLUDE, post_load

from didadmin.database.records import AreaCodeRecord

area_code_format = validate.Regexp(r'^\d{3}$', error="Area code must be exactly 3 digits.")


# Stored area code (persistence + response)
class AreaCodeSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    id = fields.Str(load_default='')
    code = fields.Str(load_default='')
    region = fields.Str(load_default='')
    state = fields.Str(load_default='')
    timezone = fields.Str(load_default='')
    total_dids = fields.Int(load_default=0, data_key="totalDIDs")
    active_dids = fields.Int(load_default=0, data_key="activeDIDs")

    @post_load
    def make_record(self, data, **kwargs):
        return AreaCodeRecord(**data)


class CreateAreaCodeSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    code = fields.Str(required=True, validate=area_code_format)
    state = fields.Str(required=True, validate=validate.Length(min=1))
    # Defaults to "<state> Region" and the state's timezone
    region = fields.Str()
    timezone = fields.Str()


class UpdateAreaCodeSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    code = fields.Str(validate=area_code_format)
    state = fields.Str()
    region = fields.Str()
    timezone = fields.Str()


class BulkAreaCodesSchema(Schema):
    area_codes = fields.List(fields.Nested(AreaCodeSchema), required=True, data_key="areaCodes")
