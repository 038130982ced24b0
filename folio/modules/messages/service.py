"""
Messages Service
================

Contact-form submissions: public create, admin list / toggle-read / delete,
plus CSV export for the admin console.
"""

import csv
import io
from datetime import datetime

from ...core.errors import NotFound, ValidationError
from ...core.resources import ResourceService


def format_timestamp(moment=None):
    """Human readable local time, e.g. '3/14/2026, 9:05:00 AM'."""
    moment = moment or datetime.now()
    hour = moment.hour % 12 or 12
    suffix = 'AM' if moment.hour < 12 else 'PM'
    return f"{moment.month}/{moment.day}/{moment.year}, {hour}:{moment:%M:%S} {suffix}"


class MessageService(ResourceService):
    collection = 'messages'
    label = 'Message'
    required_fields = ('name', 'email', 'message')
    editable_fields = ('name', 'email', 'message')
    ordered = False

    def create(self, fields, upload=None):
        record = self._clean(fields)
        self._validate_required(record)
        record['id'] = self._new_id(self.storage.list_all(self.collection))
        record['timestamp'] = format_timestamp()
        record['read'] = False
        return self.storage.insert(self.collection, record)

    def update(self, record_id, fields, upload=None):
        raise ValidationError('Message content cannot be edited')

    def toggle_read(self, record_id):
        """Flip the read flag and return the new value."""
        current = self.get(record_id)
        updated = self.storage.update(self.collection, record_id, {'read': not bool(current.get('read'))})
        if updated is None:
            raise NotFound('Message not found')
        return bool(updated['read'])

    def export_csv(self):
        """Messages as CSV text, newest first."""
        out = io.StringIO()
        writer = csv.writer(out, lineterminator='\n')
        writer.writerow(['Timestamp', 'Name', 'Email', 'Message', 'Read'])
        for m in self.list():
            writer.writerow([
                m.get('timestamp', ''),
                m.get('name', ''),
                m.get('email', ''),
                m.get('message', ''),
                'Yes' if m.get('read') else 'No',
            ])
        return out.getvalue()
