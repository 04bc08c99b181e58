# didadmin/services/import_service.py
# -*- coding: utf-8 -*-
"""
Import Service
The DID CSV import pipeline: parse, locate the header, map columns, build DID
records, deduplicate against the store, and keep an upload history.
Parse errors abort the import before anything is written.
"""
import os
from datetime import date

from flask import current_app

from didadmin.database.records import DidRecord, UploadRecord, ImportResult
from didadmin.imports.column_mapper import auto_map_columns, MAPPABLE_FIELDS
from didadmin.imports.csv_parser import parse_csv
from didadmin.imports.sanitizer import clean_csv_rows
from didadmin.services.company_service import CompanyService, generate_company_code
from didadmin.services.did_service import DidService
from didadmin.storage.registry import get_stores
from didadmin.utils.exceptions import ValidationError, ResourceNotFound, UnsupportedFileType
from didadmin.utils.phone import normalize_phone_number, extract_area_code

PREVIEW_ROWS = 5

UPLOAD_TEMPLATES = {
    'dids': (
        ['Phone Number', 'Area Code', 'Status', 'Provider', 'Assigned Date'],
        ['+1-555-123-4567', '555', 'active', 'Provider A', '2024-01-15'],
    ),
    'areacodes': (
        ['Code', 'Region', 'State', 'Timezone'],
        ['555', 'Sample Region', 'CA', 'PST'],
    ),
}


def decode_upload(raw: bytes) -> str:
    """Uploaded bytes as text; UTF-8 (with or without BOM), falling back to Latin-1."""
    try:
        return raw.decode('utf-8-sig')
    except UnicodeDecodeError:
        return raw.decode('latin-1')


def check_csv_filename(filename: str | None) -> None:
    """
    Only '.csv' files are imported. Other extensions listed in ALLOWED_UPLOAD_EXTENSIONS
    pass the upload filter but are rejected here.

    Raises:
        UnsupportedFileType
    """
    extension = os.path.splitext(filename or '')[1].lower()
    allowed = current_app.config.get('ALLOWED_UPLOAD_EXTENSIONS', {'.csv'})
    if extension not in allowed:
        raise UnsupportedFileType(f"File type '{extension or '(none)'}' is not allowed.")
    if extension != '.csv':
        raise UnsupportedFileType(f"File type '{extension}' is not supported for import yet. Please upload a CSV file.")


class ImportService:

    @staticmethod
    def _merge_mapping(headers: list[str], explicit: dict | None) -> dict:
        """Auto-mapped columns, overridden by explicit (non-empty) choices."""
        mapping = auto_map_columns(headers)
        for field, header in (explicit or {}).items():
            if field not in MAPPABLE_FIELDS or not header:
                continue
            if header not in headers:
                raise ValidationError(f"Column '{header}' mapped to '{field}' is not in the CSV headers.")
            mapping[field] = header
        return mapping

    @staticmethod
    def build_did_records(rows: list[dict], mapping: dict, provider: str,
                          company_code: str = '', company_name: str = '') -> list[DidRecord]:
        """
        Turn mapped CSV rows into new DID records.

        The forward number is normalized; the DID number is kept as written. Area
        code comes from the DID number and state from the area code table. Rows
        without a DID number value are skipped.
        """
        states = {ac.code: ac.state for ac in get_stores().area_codes.all()}
        today = date.today()
        records = []
        for row in rows:
            values = {field: (row.get(header) or '').strip() if header else ''
                      for field, header in mapping.items()}
            did_number = values.get('did_number', '')
            if not did_number:
                continue
            area_code = extract_area_code(did_number)
            records.append(DidRecord(
                provider=provider,
                did_number=did_number,
                trunk_id=values.get('trunk_id', ''),
                did_forward=normalize_phone_number(values.get('did_forward', '')),
                area_code=area_code,
                state=states.get(area_code, ''),
                company_code=company_code,
                company_name=company_name,
                status='active',
                assigned_date=today,
                last_updated=today,
            ))
        skipped = len(rows) - len(records)
        if skipped:
            current_app.logger.warning(f"Skipped {skipped} CSV rows without a DID number value.")
        return records

    @staticmethod
    def preview(text: str, mapping: dict | None = None) -> dict:
        """
        Parse and map a CSV without importing it.

        Returns:
            dict: headers, header_index, mapping, row_count and the first mapped rows.

        Raises:
            HeaderNotFound, EmptyDataset, ValidationError
        """
        cleaned = clean_csv_rows(parse_csv(text))
        resolved = ImportService._merge_mapping(cleaned.headers, mapping)
        sample = ImportService.build_did_records(cleaned.rows[:PREVIEW_ROWS], resolved, provider='')
        return {
            'headers': cleaned.headers,
            'header_index': cleaned.header_index,
            'mapping': resolved,
            'row_count': len(cleaned.rows),
            'preview': [
                {'did_number': r.did_number, 'trunk_id': r.trunk_id, 'did_forward': r.did_forward,
                 'area_code': r.area_code, 'state': r.state}
                for r in sample
            ],
        }

    @staticmethod
    def resolve_company(company_id: str | None = None, new_company_name: str | None = None) -> tuple[str, str]:
        """
        (company code, company name) for an import. ``company_id`` is a stored company's
        id or its company code; otherwise a new company is created from ``new_company_name``.

        Raises:
            ValidationError: ``company_id`` matches no company.
        """
        if company_id:
            company = CompanyService.get_company_by_id(company_id) or CompanyService.get_by_code(company_id)
            if company is None:
                raise ValidationError(f"Company '{company_id}' does not exist.")
            return company.company_code, company.name

        if new_company_name and new_company_name.strip():
            company = CompanyService.create_company({
                'company_code': generate_company_code(),
                'name': new_company_name.strip(),
                'description': f"Company created during DID import - {date.today().isoformat()}",
            })
            return company.company_code, company.name

        return '', ''

    @staticmethod
    def import_dids(text: str, provider: str, mapping: dict | None = None, company_id: str | None = None,
                    new_company_name: str | None = None, filename: str | None = None) -> ImportResult:
        """
        Run the full DID import.

        Raises:
            ValidationError: No provider, unknown company, or no column for the DID number.
            HeaderNotFound, EmptyDataset: The CSV could not be read; nothing is written.
        """
        provider = (provider or '').strip()
        if not provider:
            raise ValidationError("Provider is required.")

        cleaned = clean_csv_rows(parse_csv(text))
        resolved = ImportService._merge_mapping(cleaned.headers, mapping)
        if not resolved.get('did_number'):
            raise ValidationError("Could not find a DID number column. Please map it explicitly.")

        company_code, company_name = ImportService.resolve_company(company_id, new_company_name)
        candidates = ImportService.build_did_records(cleaned.rows, resolved, provider, company_code, company_name)
        result = DidService.add_imported_dids(candidates, skipped=len(cleaned.rows) - len(candidates))

        ImportService.record_upload(filename or 'upload.csv', 'dids', result.total_processed,
                                    result.success_count, result.duplicate_count, result.skipped_count)
        return result

    # --- Upload history ---

    @staticmethod
    def record_upload(original_name: str, upload_type: str, total: int, accepted: int, duplicates: int = 0,
                      skipped: int = 0) -> UploadRecord:
        return get_stores().upload_history.add(UploadRecord(
            original_name=original_name,
            upload_type=upload_type,
            total_processed=total,
            success_count=accepted,
            duplicate_count=duplicates,
            skipped_count=skipped,
        ))

    @staticmethod
    def get_upload_history() -> list[UploadRecord]:
        """Newest first."""
        return list(reversed(get_stores().upload_history.all()))

    @staticmethod
    def delete_upload(upload_id: str) -> None:
        """Removes the history entry only; imported records stay."""
        if not get_stores().upload_history.delete(upload_id):
            raise ResourceNotFound(f"Upload with ID {upload_id} not found.")
        current_app.logger.info(f"Upload history entry {upload_id} deleted.")

    @staticmethod
    def template_csv(template_type: str) -> str:
        """Header plus sample row for a template type; ResourceNotFound for unknown types."""
        template = UPLOAD_TEMPLATES.get(template_type)
        if template is None:
            raise ResourceNotFound(f"Template type '{template_type}' not found. Available: {', '.join(UPLOAD_TEMPLATES)}.")
        headers, sample = template
        return ','.join(headers) + '\n' + ','.join(sample) + '\n'
