# tests/conftest.py
# -*- coding: utf-8 -*-
"""
Pytest fixtures for unit and integration tests.

Every test gets a fresh Flask application in testing mode (memory storage
backend, bundled area codes) with an application context pushed, so record
stores never leak between tests. ``db_app`` runs the same app on the database
backend over in-memory SQLite.
"""

import pytest
import os
import sys
import logging

# Add the project root directory to the Python path
# This allows imports like 'from didadmin import ...' to work correctly
project_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_dir not in sys.path:
    sys.path.insert(0, project_dir)

from didadmin import create_app  # noqa: E402
from didadmin.extensions import db as _db  # noqa: E402
# Import all models to ensure they are registered with SQLAlchemy metadata
from didadmin.database import models  # noqa: E402,F401
from didadmin.storage.registry import get_stores  # noqa: E402

log = logging.getLogger(__name__)


# ---- Application Fixtures ----

@pytest.fixture(scope='function')
def app():
    """Function-scoped Flask application configured for 'testing', with an app context."""
    _app = create_app(config_name='testing')
    ctx = _app.app_context()
    ctx.push()

    yield _app

    ctx.pop()


@pytest.fixture(scope='function')
def client(app):
    """Test client for the Flask application."""
    return app.test_client()


@pytest.fixture(scope='function')
def stores(app):
    """The record stores of the test application."""
    return get_stores()


# ---- Database Backend Fixtures ----

@pytest.fixture(scope='function')
def db_app(monkeypatch):
    """
    Application using the 'database' storage backend on in-memory SQLite.
    Tables are created before the test and dropped after it.
    """
    from didadmin.config import TestingConfig
    monkeypatch.setattr(TestingConfig, 'STORAGE_BACKEND', 'database')
    monkeypatch.setattr(TestingConfig, 'SQLALCHEMY_DATABASE_URI', 'sqlite://')

    _app = create_app(config_name='testing')
    ctx = _app.app_context()
    ctx.push()
    _db.create_all()
    log.debug("Created record_blobs table on in-memory SQLite.")

    yield _app

    _db.session.remove()
    _db.drop_all()
    ctx.pop()


# ---- Helpers ----

@pytest.fixture
def csv_file():
    """Build a multipart file tuple from CSV text: ``data={'file': csv_file(text)}``."""
    import io

    def _make(text, filename='upload.csv'):
        return (io.BytesIO(text.encode('utf-8')), filename)
    return _make
