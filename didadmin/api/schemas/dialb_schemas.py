# didadmin/api/schemas/dialb_schemas.py
# -*- coding: utf-8 -*-
"""
Schemas for DialB (spam/clean reputation) records and API requests.
"""
from marshmallow import Schema, fields, validate, EXCLUDE, post_load

from didadmin.database.records import DialBRecord, DIALB_STATUSES


# Stored DialB record (persistence + response)
class DialBSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    id = fields.Str(load_default='')
    phone_number = fields.Str(load_default='', data_key="phoneNumber")
    group = fields.Str(load_default='')
    overall_status = fields.Str(load_default='Clean', validate=validate.OneOf(DIALB_STATUSES),
                                data_key="overallStatus")
    tmobile_flag = fields.Bool(load_default=False, data_key="tMobileFlag")
    att_flag = fields.Bool(load_default=False, data_key="attFlag")
    third_party_flag = fields.Bool(load_default=False, data_key="thirdPartyFlag")
    last_checked = fields.Str(load_default='', data_key="lastChecked")
    created_at = fields.DateTime(load_default=None, allow_none=True, data_key="createdAt")
    updated_at = fields.DateTime(load_default=None, allow_none=True, data_key="updatedAt")

    @post_load
    def make_record(self, data, **kwargs):
        return DialBRecord(**data)


class CreateDialBSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    phone_number = fields.Str(required=True, validate=validate.Length(min=1), data_key="phoneNumber")
    group = fields.Str(load_default='')
    overall_status = fields.Str(load_default='Clean', validate=validate.OneOf(DIALB_STATUSES),
                                data_key="overallStatus")
    tmobile_flag = fields.Bool(load_default=False, data_key="tMobileFlag")
    att_flag = fields.Bool(load_default=False, data_key="attFlag")
    third_party_flag = fields.Bool(load_default=False, data_key="thirdPartyFlag")
    last_checked = fields.Str(load_default='', data_key="lastChecked")


class UpdateDialBSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    phone_number = fields.Str(validate=validate.Length(min=1), data_key="phoneNumber")
    group = fields.Str()
    overall_status = fields.Str(validate=validate.OneOf(DIALB_STATUSES), data_key="overallStatus")
    tmobile_flag = fields.Bool(data_key="tMobileFlag")
    att_flag = fields.Bool(data_key="attFlag")
    third_party_flag = fields.Bool(data_key="thirdPartyFlag")
    last_checked = fields.Str(data_key="lastChecked")


class DialBStatsSchema(Schema):
    total = fields.Int()
    clean = fields.Int()
    spam = fields.Int()
    tmobile_flagged = fields.Int(data_key="tMobileFlagged")
    att_flagged = fields.Int(data_key="attFlagged")
    third_party_flagged = fields.Int(data_key="thirdPartyFlagged")
    groups = fields.Int()


class DialBImportResultSchema(Schema):
    success = fields.Bool()
    imported = fields.Int()
    errors = fields.List(fields.Str())
