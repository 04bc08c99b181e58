# didadmin/storage/record_store.py
# -*- coding: utf-8 -*-
"""
Generic record store.

A store keeps its records in memory, mirrors the full collection to one blob key
after every mutation and tells its subscribers what changed. The in-memory list
is authoritative: a blob that cannot be written is logged and otherwise ignored.
"""
import json
import logging
import time
import uuid
from dataclasses import dataclass, field, fields, replace
from typing import Callable

from marshmallow import ValidationError as SchemaValidationError

from didadmin.utils.exceptions import StorageError

log = logging.getLogger(__name__)


def generate_id(prefix: str) -> str:
    """'<prefix>-<epoch ms>-<9 hex chars>'"""
    return f"{prefix}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"


@dataclass
class StoreEvent:
    """Change notification. ``action`` is one of add, update, delete, replace, clear."""
    store_key: str
    action: str
    records: list = field(default_factory=list)


class RecordStore:
    """
    In-memory collection of dataclass records persisted as a JSON array.

    Args:
        key (str): Blob key the collection is persisted under (e.g. 'didsData').
        schema: marshmallow schema converting one record to/from its JSON shape.
        storage: A ``BlobStorage`` backend.
        id_prefix (str): Prefix for generated record ids.
        defaults (callable, optional): Returns the records to start with when nothing
            is persisted yet (or the blob is unreadable). Defaults are not written back
            until the first mutation.
        on_create (callable, optional): Called with each record before it is added.
        on_update (callable, optional): Called with each record after a patch is applied.
    """

    def __init__(self, key: str, schema, storage, id_prefix: str = 'rec',
                 defaults: Callable[[], list] | None = None,
                 on_create: Callable | None = None,
                 on_update: Callable | None = None):
        self.key = key
        self.schema = schema
        self.storage = storage
        self.id_prefix = id_prefix
        self._defaults = defaults
        self._on_create = on_create
        self._on_update = on_update
        self._records = None
        self._subscribers = []

    def __repr__(self):
        state = 'unloaded' if self._records is None else f"{len(self._records)} records"
        return f"<RecordStore(key='{self.key}', {state})>"

    # --- Persistence ---

    def _initial_records(self) -> list:
        return list(self._defaults()) if self._defaults else []

    def load(self) -> list:
        """(Re)read the collection from storage, replacing whatever is in memory."""
        try:
            raw = self.storage.read(self.key)
        except StorageError as e:
            log.error(f"Could not read '{self.key}', starting from defaults: {e}", exc_info=True)
            raw = None

        if raw is None:
            self._records = self._initial_records()
            log.debug(f"No persisted data for '{self.key}'; loaded {len(self._records)} default records.")
            return self._records

        try:
            payload = json.loads(raw)
            if not isinstance(payload, list):
                raise ValueError(f"expected a JSON array, got {type(payload).__name__}")
            self._records = self.schema.load(payload, many=True)
        except (ValueError, SchemaValidationError) as e:
            log.error(f"Persisted data for '{self.key}' is malformed, using defaults: {e}")
            self._records = self._initial_records()
        return self._records

    def save(self) -> bool:
        """
        Write the full collection back to storage.

        Returns:
            bool: False when the backend rejected the write. The error is logged and
                  the in-memory records are kept as they are.
        """
        try:
            payload = json.dumps(self.schema.dump(self._items, many=True))
            self.storage.write(self.key, payload)
            return True
        except (StorageError, OSError, TypeError) as e:
            log.error(f"Failed to persist '{self.key}' ({len(self._items)} records): {e}", exc_info=True)
            return False

    @property
    def _items(self) -> list:
        if self._records is None:
            self.load()
        return self._records

    # --- Subscriptions ---

    def subscribe(self, callback: Callable[[StoreEvent], None]) -> Callable[[StoreEvent], None]:
        """Register ``callback`` for change events; returns it so it can be used as a decorator."""
        if callback not in self._subscribers:
            self._subscribers.append(callback)
        return callback

    def unsubscribe(self, callback) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def _commit(self, action: str, records: list) -> None:
        self.save()
        event = StoreEvent(store_key=self.key, action=action, records=list(records))
        for callback in list(self._subscribers):
            callback(event)

    # --- Queries ---

    def all(self) -> list:
        """Shallow copy of the records in store order."""
        return list(self._items)

    def count(self) -> int:
        return len(self._items)

    def get(self, record_id: str):
        return next((record for record in self._items if record.id == record_id), None)

    def find(self, predicate: Callable) -> list:
        return [record for record in self._items if predicate(record)]

    def first(self, predicate: Callable):
        return next((record for record in self._items if predicate(record)), None)

    # --- Mutations ---

    def _prepare(self, record):
        if not record.id:
            record.id = generate_id(self.id_prefix)
        if self._on_create:
            self._on_create(record)
        return record

    def add(self, record):
        """Append one record, assigning an id when it has none."""
        self._prepare(record)
        self._items.append(record)
        self._commit('add', [record])
        return record

    def add_many(self, records: list) -> list:
        """Append several records with a single write and a single notification."""
        added = [self._prepare(record) for record in records]
        if not added:
            return []
        self._items.extend(added)
        self._commit('add', added)
        return added

    def _apply_patch(self, record, changes: dict):
        known = {f.name for f in fields(record)}
        updates = {name: value for name, value in changes.items() if name in known and name != 'id'}
        patched = replace(record, **updates)
        if self._on_update:
            self._on_update(patched)
        return patched

    def update(self, record_id: str, changes: dict):
        """
        Merge ``changes`` into the record with ``record_id``.

        Unknown attribute names and ``id`` are ignored.

        Returns:
            The updated record, or None when no record has that id.
        """
        items = self._items
        for position, record in enumerate(items):
            if record.id == record_id:
                items[position] = self._apply_patch(record, changes)
                self._commit('update', [items[position]])
                return items[position]
        return None

    def update_many(self, record_ids, changes: dict) -> list:
        """Apply the same patch to every listed record that exists."""
        wanted = set(record_ids)
        items = self._items
        updated = []
        for position, record in enumerate(items):
            if record.id in wanted:
                items[position] = self._apply_patch(record, changes)
                updated.append(items[position])
        if updated:
            self._commit('update', updated)
        return updated

    def delete(self, record_id: str) -> bool:
        """Returns False when no record has ``record_id``."""
        record = self.get(record_id)
        if record is None:
            return False
        self._items.remove(record)
        self._commit('delete', [record])
        return True

    def delete_many(self, record_ids) -> list:
        wanted = set(record_ids)
        removed = [record for record in self._items if record.id in wanted]
        if removed:
            self._records = [record for record in self._items if record.id not in wanted]
            self._commit('delete', removed)
        return removed

    def replace_all(self, records: list) -> list:
        """Swap the whole collection; records without an id get one."""
        for record in records:
            if not record.id:
                record.id = generate_id(self.id_prefix)
        self._records = list(records)
        self._commit('replace', self._records)
        return self.all()

    def clear(self) -> int:
        removed = len(self._items)
        self._records = []
        self._commit('clear', [])
        return removed
