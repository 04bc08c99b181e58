# didadmin/utils/decorators.py
# -*- coding: utf-8 -*-
"""Custom helper decorators for Flask routes."""

from functools import wraps
from flask import current_app, request, abort, jsonify
from marshmallow import ValidationError

from didadmin.services.import_service import check_csv_filename, decode_upload


# --- Request Body Validation ---

def json_body(schema, partial=False):
    """
    Decorator factory that validates the JSON request body with a marshmallow schema.

    The deserialized data is passed to the view as the ``data`` keyword argument.
    Uses abort() for a missing body and answers 400 with the field errors when
    validation fails.

    Args:
        schema (marshmallow.Schema): Schema instance used to load the body.
        partial (bool): Allow missing required fields (PATCH semantics).
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            json_data = request.get_json(silent=True)
            if json_data is None or json_data == {} or json_data == []:
                abort(400, description="No input data provided.")

            try:
                data = schema.load(json_data, partial=partial)
            except ValidationError as err:
                current_app.logger.warning(f"Validation error on {request.endpoint}: {err.messages}")
                return jsonify(success=False, message="Validation failed.", errors=err.messages), 400

            return f(*args, data=data, **kwargs)
        return decorated_function
    return decorator


# --- CSV Upload Handling ---

def csv_upload(f):
    """
    Decorator requiring a multipart 'file' field.
    Passes the uploaded file's text as ``text`` and its name as ``filename``.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        upload = request.files.get('file')
        if upload is None or not upload.filename:
            abort(400, description="No file uploaded. Send the CSV as multipart field 'file'.")

        check_csv_filename(upload.filename)
        text = decode_upload(upload.read())
        current_app.logger.debug(f"Received upload '{upload.filename}' ({len(text)} characters) on {request.endpoint}.")
        return f(*args, text=text, filename=upload.filename, **kwargs)
    return decorated_function
