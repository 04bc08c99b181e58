# didadmin/storage/backends.py
# -*- coding: utf-8 -*-
"""
Blob storage backends.

A backend persists opaque JSON strings under fixed keys ('didsData',
'companiesData', ...). Which backend a process uses is decided once, from
configuration, by ``create_blob_storage``.
"""
import os

from sqlalchemy.exc import SQLAlchemyError

from didadmin.utils.exceptions import StorageError


class BlobStorage:
    """Interface: read/write a JSON blob by key."""
    name = 'abstract'

    def read(self, key: str) -> str | None:
        raise NotImplementedError

    def write(self, key: str, value: str) -> None:
        raise NotImplementedError


class MemoryBlobStorage(BlobStorage):
    """Process-local storage; contents are lost when the process exits."""
    name = 'memory'

    def __init__(self, initial: dict | None = None):
        self._blobs = dict(initial or {})

    def read(self, key):
        return self._blobs.get(key)

    def write(self, key, value):
        self._blobs[key] = value


class FileBlobStorage(BlobStorage):
    """One '<key>.json' file per key inside a directory."""
    name = 'file'

    def __init__(self, directory: str):
        self.directory = directory

    def _path(self, key):
        return os.path.join(self.directory, f"{key}.json")

    def read(self, key):
        path = self._path(key)
        if not os.path.exists(path):
            return None
        try:
            with open(path, 'r', encoding='utf-8') as fh:
                return fh.read()
        except OSError as e:
            raise StorageError(f"Could not read '{path}': {e}")

    def write(self, key, value):
        path = self._path(key)
        tmp_path = path + '.tmp'
        try:
            os.makedirs(self.directory, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as fh:
                fh.write(value)
            os.replace(tmp_path, path)
        except OSError as e:
            raise StorageError(f"Could not write '{path}': {e}")


class DatabaseBlobStorage(BlobStorage):
    """
    Rows of the 'record_blobs' table via Flask-SQLAlchemy.
    Requires an application context; each write commits on its own.
    """
    name = 'database'

    def read(self, key):
        from didadmin.database.models import RecordBlobModel
        from didadmin.extensions import db
        try:
            row = db.session.get(RecordBlobModel, key)
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StorageError(f"Could not read blob '{key}': {e}")
        return row.value if row is not None else None

    def write(self, key, value):
        from didadmin.database.models import RecordBlobModel
        from didadmin.extensions import db
        try:
            row = db.session.get(RecordBlobModel, key)
            if row is None:
                db.session.add(RecordBlobModel(key=key, value=value))
            else:
                row.value = value
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StorageError(f"Could not write blob '{key}': {e}")


def create_blob_storage(app) -> BlobStorage:
    """
    Pick the backend named by STORAGE_BACKEND.

    Raises:
        ValueError: Unknown backend, or 'database' without SQLALCHEMY_DATABASE_URI.
    """
    backend = (app.config.get('STORAGE_BACKEND') or 'memory').lower()

    if backend == 'memory':
        return MemoryBlobStorage()
    if backend == 'file':
        directory = app.config.get('STORAGE_DIR')
        if not directory:
            raise ValueError("STORAGE_DIR must be set when STORAGE_BACKEND is 'file'.")
        return FileBlobStorage(directory)
    if backend == 'database':
        if not app.config.get('SQLALCHEMY_DATABASE_URI'):
            raise ValueError("STORAGE_BACKEND 'database' requires DATABASE_URI to be set.")
        return DatabaseBlobStorage()

    raise ValueError(f"Unknown STORAGE_BACKEND '{backend}'. Use 'memory', 'file' or 'database'.")
