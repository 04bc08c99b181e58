# didadmin/api/routes/companies.py
# -*- coding: utf-8 -*-
"""
API Routes for Company records.
"""
from flask import Blueprint, request, jsonify, abort

from didadmin.api.query import parse_view_args, envelope
from didadmin.api.schemas.company_schemas import (
    CompanySchema, CreateCompanySchema, UpdateCompanySchema, BulkCompaniesSchema
)
from didadmin.services.company_service import CompanyService
from didadmin.utils.decorators import json_body

companies_bp = Blueprint('companies_api', __name__)

company_schema = CompanySchema()
create_company_schema = CreateCompanySchema()
update_company_schema = UpdateCompanySchema()
bulk_companies_schema = BulkCompaniesSchema()

COMPANY_COLUMNS = ('companyId', 'companyName', 'description', 'createdDate', 'lastUpdated')


@companies_bp.route('', methods=['GET'])
def get_companies():
    search, filters, sort = parse_view_args(request.args, COMPANY_COLUMNS)
    companies = CompanyService.list_companies(search=search, filters=filters, sort=sort)
    return jsonify(envelope(company_schema.dump(companies, many=True), total=len(companies))), 200


@companies_bp.route('/<company_id>', methods=['GET'])
def get_company(company_id):
    company = CompanyService.get_company_by_id(company_id)
    if not company:
        abort(404, description=f"Company with ID {company_id} not found.")
    return jsonify(envelope(company_schema.dump(company))), 200


@companies_bp.route('', methods=['POST'])
@json_body(create_company_schema)
def create_company(data):
    company = CompanyService.create_company(data)
    return jsonify(envelope(company_schema.dump(company), message="Company created successfully.")), 201


@companies_bp.route('/bulk', methods=['POST'])
@json_body(bulk_companies_schema)
def replace_companies(data):
    """Replace the whole company list."""
    companies = CompanyService.bulk_replace(data['companies'])
    return jsonify(envelope(company_schema.dump(companies, many=True), total=len(companies),
                            message="Companies saved successfully.")), 200


@companies_bp.route('/<company_id>', methods=['PUT', 'PATCH'])
@json_body(update_company_schema)
def update_company(company_id, data):
    company = CompanyService.update_company(company_id, data)
    return jsonify(envelope(company_schema.dump(company), message="Company updated successfully.")), 200


@companies_bp.route('/<company_id>', methods=['DELETE'])
def delete_company(company_id):
    CompanyService.delete_company(company_id)
    return jsonify(envelope(message="Company deleted successfully.")), 200
