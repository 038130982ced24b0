"""
Resume Service
==============

Single-slot resume: uploading a new file replaces the previous record and
releases its blob.
"""

from ...core.errors import BackendFailure, NotFound, ValidationError
from ...core.resources import ResourceService, now_iso


class ResumeService(ResourceService):
    collection = 'resume'
    label = 'Resume'
    blob_folder = 'resume'
    blob_field = 'path'
    ordered = False

    def current(self):
        """The active resume record, or None."""
        records = self.list()
        return records[0] if records else None

    def replace(self, upload):
        """Store a new resume, leaving exactly one record."""
        if upload is None:
            raise ValidationError('Resume file is required')

        previous = self.storage.list_all(self.collection)
        url = self._upload(upload)
        record = {
            'id': self._new_id(previous),
            'path': url,
            'filename': upload.filename or 'resume.pdf',
            'createdAt': now_iso(),
        }
        try:
            self.storage.replace_all(self.collection, [record])
        except BackendFailure:
            self._release(url)
            raise

        for old in previous:
            self._release(old.get('path'))
        return record

    def clear(self):
        """Remove the resume record and its blob."""
        previous = self.storage.list_all(self.collection)
        if not previous:
            raise NotFound('No resume found')
        self.storage.replace_all(self.collection, [])
        for old in previous:
            self._release(old.get('path'))
        return previous

    def create(self, fields, upload=None):
        return self.replace(upload)

    def update(self, record_id, fields, upload=None):
        return self.replace(upload)
