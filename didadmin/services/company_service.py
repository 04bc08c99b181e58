# didadmin/services/company_service.py
# -*- coding: utf-8 -*-
"""
Company Service
Handles business logic for companies owning DIDs. The company code is the
business key: it is kept unique here, the store itself accepts anything.
"""
import time

from flask import current_app

from didadmin.database.records import CompanyRecord
from didadmin.services.view_service import SortSpec, apply_view, search_records
from didadmin.storage.registry import get_stores
from didadmin.utils.exceptions import ResourceNotFound, ConflictError, ValidationError

SEARCH_COLUMNS = ('companyId', 'companyName', 'description')
_COLUMN_ATTRS = {'companyId': 'company_code', 'companyName': 'name',
                 'createdDate': 'created_date', 'lastUpdated': 'last_updated'}


def _get_column(record, column):
    return getattr(record, _COLUMN_ATTRS.get(column, column), None)


def generate_company_code() -> str:
    return f"COMP-{int(time.time() * 1000)}"


class CompanyService:

    @staticmethod
    def get_all_companies() -> list[CompanyRecord]:
        return get_stores().companies.all()

    @staticmethod
    def get_company_by_id(company_id: str) -> CompanyRecord | None:
        return get_stores().companies.get(company_id)

    @staticmethod
    def get_by_code(company_code: str) -> CompanyRecord | None:
        return get_stores().companies.first(lambda c: c.company_code == company_code)

    @staticmethod
    def list_companies(search: str | None = None, filters: dict | None = None,
                       sort: SortSpec | None = None) -> list[CompanyRecord]:
        records = search_records(get_stores().companies.all(), search, SEARCH_COLUMNS, _get_column)
        return apply_view(records, filters, sort, _get_column)

    @staticmethod
    def _check_code_free(company_code: str, exclude_id: str | None = None) -> None:
        existing = CompanyService.get_by_code(company_code)
        if existing is not None and existing.id != exclude_id:
            raise ConflictError(f"Company ID '{company_code}' already exists.")

    @staticmethod
    def create_company(data: dict) -> CompanyRecord:
        """
        Creates a company; a COMP-<timestamp> code is generated when none is given.

        Raises:
            ValidationError: The name is missing.
            ConflictError: The company code is taken.
        """
        name = (data.get('name') or '').strip()
        if not name:
            raise ValidationError("Company name is required.")
        company_code = (data.get('company_code') or '').strip() or generate_company_code()
        CompanyService._check_code_free(company_code)

        record = get_stores().companies.add(CompanyRecord(
            company_code=company_code,
            name=name,
            description=data.get('description') or '',
        ))
        current_app.logger.info(f"Company '{record.name}' ({record.company_code}) created (ID: {record.id}).")
        return record

    @staticmethod
    def update_company(company_id: str, update_data: dict) -> CompanyRecord:
        """
        Raises:
            ResourceNotFound: Unknown id.
            ConflictError: The new company code belongs to another company.
        """
        stores = get_stores()
        if stores.companies.get(company_id) is None:
            raise ResourceNotFound(f"Company with ID {company_id} not found.")
        if 'company_code' in update_data:
            CompanyService._check_code_free(update_data['company_code'], exclude_id=company_id)

        record = stores.companies.update(company_id, update_data)
        current_app.logger.info(f"Company {company_id} updated. Fields: {sorted(update_data.keys())}")
        return record

    @staticmethod
    def delete_company(company_id: str) -> None:
        """DIDs keep the company code and name they were assigned."""
        if not get_stores().companies.delete(company_id):
            raise ResourceNotFound(f"Company with ID {company_id} not found.")
        current_app.logger.info(f"Company {company_id} deleted.")

    @staticmethod
    def bulk_replace(records: list[CompanyRecord]) -> list[CompanyRecord]:
        seen = set()
        for record in records:
            if record.company_code in seen:
                raise ConflictError(f"Company ID '{record.company_code}' appears more than once.")
            seen.add(record.company_code)
        stored = get_stores().companies.replace_all(records)
        current_app.logger.info(f"Company list replaced ({len(stored)} records).")
        return stored
