# didadmin/database/models/record_blob.py
# -*- coding: utf-8 -*-
"""Key/value row holding one record store's JSON array."""

from sqlalchemy.sql import func
from didadmin.extensions import db


class RecordBlobModel(db.Model):
    """
    One row per record store (e.g. 'didsData', 'companiesData'). The value is the
    full JSON array of the store, rewritten on every mutation.
    """
    __tablename__ = 'record_blobs'

    key = db.Column(db.String(64), primary_key=True)
    value = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        """Represent instance as a unique string."""
        return f"<RecordBlob(key='{self.key}', size={len(self.value or '')})>"
