"""
Resource Services
=================

Uniform CRUD pattern shared by every collection. Each entity module
subclasses ``ResourceService`` with its collection name, required fields
and derived-field rules; the storage backend is injected at startup.
"""

import time
from datetime import datetime, timezone

from .errors import BackendFailure, NotFound, ValidationError


def now_millis():
    return int(time.time() * 1000)


def now_iso():
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


class ResourceService:
    """Base service: list / get / create / update / delete / reorder."""

    collection = None
    label = 'Record'
    # Fields that must be non-empty on create
    required_fields = ()
    # Fields accepted from callers on create/update
    editable_fields = ()
    # Folder used for uploaded blobs
    blob_folder = None
    # Record key holding the blob URL, if any
    blob_field = None
    ordered = True

    def __init__(self, storage):
        self.storage = storage

    # ----- helpers -----

    def _sort(self, records):
        if self.ordered:
            return sorted(records, key=lambda r: (r.get('order') or 0, -int(r.get('id') or 0)))
        return sorted(records, key=lambda r: int(r.get('id') or 0), reverse=True)

    def _new_id(self, records):
        """Creation-timestamp id, bumped past the newest existing id."""
        new_id = now_millis()
        if records:
            newest = max(int(r.get('id') or 0) for r in records)
            if new_id <= newest:
                new_id = newest + 1
        return new_id

    def _clean(self, fields):
        """Keep editable fields that were actually supplied."""
        cleaned = {}
        for key in self.editable_fields:
            if key in fields and fields[key] is not None:
                value = fields[key]
                cleaned[key] = value.strip() if isinstance(value, str) else value
        return cleaned

    def _validate_required(self, record):
        missing = [key for key in self.required_fields if not record.get(key)]
        if missing:
            raise ValidationError(f"Missing required field(s): {', '.join(missing)}")

    def derive(self, record):
        """Hook for derived fields, called on every create and update."""
        return record

    def defaults(self):
        return {}

    def _upload(self, upload):
        return self.storage.upload_blob(upload.data, upload.filename, upload.mimetype, self.blob_folder)

    def _release(self, url):
        if url:
            self.storage.delete_blob(url)

    # ----- operations -----

    def list(self):
        return self._sort(self.storage.list_all(self.collection))

    def get(self, record_id):
        record = self.storage.get(self.collection, record_id)
        if record is None:
            raise NotFound(f"{self.label} not found")
        return record

    def create(self, fields, upload=None):
        record = {**self.defaults(), **self._clean(fields)}
        self._validate_required(record)
        record = self.derive(record)

        existing = self.storage.list_all(self.collection)
        record['id'] = self._new_id(existing)
        record.setdefault('createdAt', now_iso())
        if self.ordered:
            record['order'] = 0

        new_blob = None
        if upload is not None and self.blob_field:
            new_blob = record[self.blob_field] = self._upload(upload)

        try:
            return self.storage.insert(self.collection, record)
        except BackendFailure:
            self._release(new_blob)
            raise

    def update(self, record_id, fields, upload=None):
        current = self.get(record_id)
        merged = {**current, **self._clean(fields)}
        self._validate_required(merged)
        merged = self.derive(merged)
        changes = {k: v for k, v in merged.items() if k != 'id' and (k not in current or current[k] != v)}

        old_blob = new_blob = None
        if upload is not None and self.blob_field:
            old_blob = current.get(self.blob_field)
            new_blob = changes[self.blob_field] = self._upload(upload)

        try:
            updated = self.storage.update(self.collection, record_id, changes)
        except BackendFailure:
            self._release(new_blob)
            raise
        if updated is None:
            self._release(new_blob)
            raise NotFound(f"{self.label} not found")
        self._release(old_blob)
        return updated

    def delete(self, record_id):
        removed = self.storage.delete(self.collection, record_id)
        if removed is None:
            raise NotFound(f"{self.label} not found")
        if self.blob_field:
            self._release(removed.get(self.blob_field))
        return removed

    def reorder(self, id_order):
        """Write each record's ``order`` to its position in id_order."""
        if not self.ordered:
            raise ValidationError(f"{self.label} records cannot be reordered")
        if not isinstance(id_order, (list, tuple)) or not id_order:
            raise ValidationError('Order list required')
        try:
            positions = {int(record_id): index for index, record_id in enumerate(id_order)}
        except (TypeError, ValueError):
            raise ValidationError('Order list must contain record ids')

        # Checked against the writable store, never a read-only fallback copy
        for record_id in positions:
            if self.storage.get(self.collection, record_id) is None:
                raise NotFound(f"{self.label} not found: {record_id}")

        for record_id, position in positions.items():
            if self.storage.update(self.collection, record_id, {'order': position}) is None:
                raise NotFound(f"{self.label} not found: {record_id}")
        return self.list()
