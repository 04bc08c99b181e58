# didadmin/api/schemas/company_schemas.py
# -*- coding: utf-8 -*-
"""
Schemas for Company records and API requests.
"""
from marshmallow import Schema, fields, validate, EXCLUDE, post_load

from didadmin.database.records import CompanyRecord


# Stored company (persistence + response)
class CompanySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    id = fields.Str(load_default='')
    company_code = fields.Str(load_default='', data_key="companyId")
    name = fields.Str(load_default='', data_key="companyName")
    description = fields.Str(load_default='')
    created_date = fields.Date(load_default=None, allow_none=True, data_key="createdDate")
    last_updated = fields.Date(load_default=None, allow_none=True, data_key="lastUpdated")

    @post_load
    def make_record(self, data, **kwargs):
        return CompanyRecord(**data)


class CreateCompanySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    # A COMP-<timestamp> code is generated when omitted
    company_code = fields.Str(validate=validate.Length(min=1), data_key="companyId")
    name = fields.Str(required=True, validate=validate.Length(min=1), data_key="companyName")
    description = fields.Str(load_default='')


class UpdateCompanySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    company_code = fields.Str(validate=validate.Length(min=1), data_key="companyId")
    name = fields.Str(validate=validate.Length(min=1), data_key="companyName")
    description = fields.Str()


class BulkCompaniesSchema(Schema):
    companies = fields.List(fields.Nested(CompanySchema), required=True)
