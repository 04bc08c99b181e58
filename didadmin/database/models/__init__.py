# didadmin/database/models/__init__.py
# -*- coding: utf-8 -*-
"""
Models Package Initialization.

Exposes model classes for easier importing throughout the application,
e.g., `from didadmin.database.models import RecordBlobModel`.
"""

from .record_blob import RecordBlobModel

__all__ = [
    'RecordBlobModel',
]
