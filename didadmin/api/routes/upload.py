# didadmin/api/routes/upload.py
# -*- coding: utf-8 -*-
"""
API Routes for CSV uploads: DID import (with preview), DialB and area code
imports, upload history and CSV templates.
Files arrive as multipart field 'file'.
"""
from flask import Blueprint, request, jsonify, current_app, Response
from marshmallow import ValidationError

from didadmin.api.query import envelope
from didadmin.api.schemas.area_code_schemas import AreaCodeSchema
from didadmin.api.schemas.did_schemas import ImportResultSchema
from didadmin.api.schemas.dialb_schemas import DialBImportResultSchema
from didadmin.api.schemas.upload_schemas import (
    DidUploadFormSchema, UploadPreviewSchema, UploadRecordSchema
)
from didadmin.services.area_code_service import AreaCodeService
from didadmin.services.dialb_service import DialBService
from didadmin.services.import_service import ImportService
from didadmin.utils.decorators import csv_upload

upload_bp = Blueprint('upload_api', __name__)

did_upload_form_schema = DidUploadFormSchema()
upload_preview_schema = UploadPreviewSchema()
upload_record_schema = UploadRecordSchema()
import_result_schema = ImportResultSchema()
dialb_import_result_schema = DialBImportResultSchema()
area_code_schema = AreaCodeSchema()


def _explicit_mapping(form_data: dict) -> dict:
    return {
        'did_number': form_data.get('did_number_column'),
        'trunk_id': form_data.get('trunk_id_column'),
        'did_forward': form_data.get('did_forward_column'),
    }


@upload_bp.route('/preview', methods=['POST'])
@csv_upload
def preview_did_upload(text, filename):
    """Headers found, column mapping and the first rows, without importing."""
    form_data = did_upload_form_schema.load(request.form.to_dict(), partial=('provider',))
    preview = ImportService.preview(text, mapping=_explicit_mapping(form_data))
    return jsonify(envelope(upload_preview_schema.dump(preview))), 200


@upload_bp.route('', methods=['POST'])
@upload_bp.route('/dids', methods=['POST'])
@csv_upload
def upload_dids(text, filename):
    """Import DIDs. Form: provider (required), companyId or newCompanyName, optional column choices."""
    try:
        form_data = did_upload_form_schema.load(request.form.to_dict())
    except ValidationError as err:
        current_app.logger.warning(f"DID upload form validation error: {err.messages}")
        return jsonify(success=False, message="Validation failed.", errors=err.messages), 400

    result = ImportService.import_dids(
        text,
        provider=form_data['provider'],
        mapping=_explicit_mapping(form_data),
        company_id=form_data.get('company_id'),
        new_company_name=form_data.get('new_company_name'),
        filename=filename,
    )
    message = (f"Import completed: {result.success_count} successful, "
               f"{result.duplicate_count} duplicates, {result.skipped_count} skipped out of {result.total_processed}.")
    return jsonify(envelope(import_result_schema.dump(result), message=message)), 200


@upload_bp.route('/dialb', methods=['POST'])
@csv_upload
def upload_dialb(text, filename):
    result = DialBService.import_csv(text)
    ImportService.record_upload(filename, 'dialb', result['imported'] + len(result['errors']), result['imported'])
    return jsonify(envelope(dialb_import_result_schema.dump(result),
                            message=f"Imported {result['imported']} DialB records.")), 200


@upload_bp.route('/areacodes', methods=['POST'])
@csv_upload
def upload_area_codes(text, filename):
    """Replace the area code table with the uploaded 'Area Code,State' CSV."""
    area_codes = AreaCodeService.load_from_csv(text)
    ImportService.record_upload(filename, 'areacodes', len(area_codes), len(area_codes))
    return jsonify(envelope(area_code_schema.dump(area_codes, many=True), total=len(area_codes),
                            message=f"Loaded {len(area_codes)} area codes.")), 200


@upload_bp.route('/history', methods=['GET'])
def get_upload_history():
    uploads = ImportService.get_upload_history()
    return jsonify(envelope(upload_record_schema.dump(uploads, many=True), total=len(uploads))), 200


@upload_bp.route('/<upload_id>', methods=['DELETE'])
def delete_upload(upload_id):
    ImportService.delete_upload(upload_id)
    return jsonify(envelope(message="Upload deleted successfully.")), 200


@upload_bp.route('/template/<template_type>', methods=['GET'])
def download_template(template_type):
    content = ImportService.template_csv(template_type)
    return Response(
        content,
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename={template_type}_template.csv'},
    )
