# didadmin/__init__.py
# -*- coding: utf-8 -*-
"""Main application package setup."""

import os
import logging
from flask import Flask, jsonify, request
from marshmallow import ValidationError as SchemaValidationError

# Import configurations and extensions
from .config import config
from .extensions import db, migrate, stores
from .utils.exceptions import ServiceError


def _error_body(error, default_message):
    return {"success": False, "message": error.description or default_message, "error": error.name}


def create_app(config_name=None):
    """
    Create and configure an instance of the Flask application using the App Factory pattern.

    Args:
        config_name (str, optional): The name of the configuration to use ('development', 'testing', 'production').
                                     Defaults to FLASK_ENV environment variable or 'default'.

    Returns:
        Flask: The configured Flask application instance.

    Raises:
        ValueError: Unknown configuration name, or the 'database' storage backend without a database URI.
    """

    # Determine configuration name
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'default')
        if config_name not in config:
            print(f"WARNING: Invalid FLASK_ENV '{config_name}', defaulting to 'development'.")
            config_name = 'development'

    app = Flask(__name__)

    # Load configuration from config object
    try:
        app.config.from_object(config[config_name])
        config[config_name].init_app(app)
        print(f"INFO: App created with configuration: '{config_name}'")
    except KeyError:
        print(f"ERROR: Configuration '{config_name}' not found. Check config.py.")
        raise ValueError(f"Invalid configuration name: {config_name}")

    # Hard precondition: a database-backed store needs a connection string
    if not app.config.get('SQLALCHEMY_DATABASE_URI'):
        if (app.config.get('STORAGE_BACKEND') or '').lower() == 'database':
            raise ValueError("STORAGE_BACKEND 'database' requires DATABASE_URI to be set.")
        # Flask-SQLAlchemy refuses to initialize without a URI, even when unused
        app.config['SQLALCHEMY_DATABASE_URI'] = 'sqlite://'

    # Configure logging level
    log_level_name = ('DEBUG' if app.debug else app.config.get('LOG_LEVEL', 'INFO')).upper()
    log_level = getattr(logging, log_level_name, logging.INFO)
    app.logger.setLevel(log_level)
    # Ensure handlers respect the level too (applies to default StreamHandler)
    for handler in app.logger.handlers:
        handler.setLevel(log_level)
    app.logger.info(f"Flask logger initialized with level: {log_level_name}")

    # Initialize Flask extensions
    db.init_app(app)
    migrate.init_app(app, db)
    record_stores = stores.init_app(app)

    # Keep DID states following area code edits
    from .services.did_service import DidService
    DidService.register_listeners(record_stores)

    # --- Register Blueprints ---
    from .api.routes.dids import dids_bp
    app.register_blueprint(dids_bp, url_prefix='/api/dids')
    from .api.routes.companies import companies_bp
    app.register_blueprint(companies_bp, url_prefix='/api/companies')
    from .api.routes.area_codes import area_codes_bp
    app.register_blueprint(area_codes_bp, url_prefix='/api/areacodes')
    from .api.routes.dialb import dialb_bp
    app.register_blueprint(dialb_bp, url_prefix='/api/dialb')
    from .api.routes.upload import upload_bp
    app.register_blueprint(upload_bp, url_prefix='/api/upload')

    # --- Basic Routes & Health Check ---
    @app.route('/health')
    def health_check():
        return {"status": "ok", "message": "Application is running."}, 200

    # --- Service Errors ---
    # Raised by services and the CSV import pipeline; mapped by their status_code.
    @app.errorhandler(ServiceError)
    def handle_service_error(error):
        if error.status_code >= 500:
            app.logger.error(f"Service Error ({error.status_code}): {error}", exc_info=True)
        else:
            app.logger.warning(f"Service Error ({error.status_code}) on {request.path}: {error}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(SchemaValidationError)
    def handle_schema_validation_error(error):
        app.logger.warning(f"Validation error on {request.path}: {error.messages}")
        return jsonify(success=False, message="Validation failed.", errors=error.messages), 400

    # --- Global HTTP Error Handlers ---
    # These handlers catch errors raised by abort() or unhandled HTTP exceptions.
    # They ensure consistent JSON error responses.

    @app.errorhandler(400)
    def bad_request_error(error):
        app.logger.warning(f"Bad Request (400): {error.description}")
        return jsonify(_error_body(error, "Bad request.")), 400

    @app.errorhandler(404)
    def not_found_error(error):
        app.logger.info(f"Not Found (404): {error.description} (Path: {request.path})")
        return jsonify(_error_body(error, "Resource not found.")), 404

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        app.logger.info(f"Method Not Allowed (405): {request.method} {request.path}")
        return jsonify(_error_body(error, "Method not allowed.")), 405

    @app.errorhandler(409)
    def conflict_error(error):
        app.logger.warning(f"Conflict (409): {error.description}")
        return jsonify(_error_body(error, "Conflict.")), 409

    @app.errorhandler(413)
    def payload_too_large_error(error):
        app.logger.warning(f"Payload Too Large (413) on {request.path}")
        return jsonify(success=False, message="Uploaded file is too large.", error=error.name), 413

    @app.errorhandler(500)
    def internal_error(error):
        original_exception = getattr(error, "original_exception", error)
        app.logger.error(f"Internal Server Error (500): {error.description}", exc_info=original_exception)
        return jsonify(success=False, message="Internal server error.", error=error.name), 500

    # --- Shell Context Processor ---
    # Makes variables available in 'flask shell'
    @app.shell_context_processor
    def make_shell_context():
        from .storage.registry import get_stores
        return {'db': db, 'stores': get_stores()}

    return app
