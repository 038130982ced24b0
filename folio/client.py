"""
Admin Client
============

Console-side driver for the Folio admin API. Mirrors the browser admin
panel: the password is kept for the session and sent as the
``x-admin-password`` header on every authenticated call; a 401 clears it
so the caller can prompt again. Every mutation is followed by a re-fetch
of the affected collection.

Usage:
    client = AdminClient('http://localhost:3000')
    client.login('secret')
    client.begin_edit('projects', 1718000000000)
    client.save_project({'title': 'New title'})
"""

import mimetypes
import os
from contextlib import contextmanager

import requests

from .core.auth import ADMIN_HEADER
from .core.errors import BackendFailure, FolioError, NotFound, Unauthorized, ValidationError

ENDPOINTS = {
    'messages': '/api/messages',
    'projects': '/api/projects',
    'videos': '/api/videos',
    'hero_photos': '/api/hero-photos',
    'resume': '/api/resume',
}

_ERRORS = {400: ValidationError, 401: Unauthorized, 404: NotFound}


class AdminClient:
    """Authenticated client for the admin API with UI-local edit state."""

    def __init__(self, base_url, password=None, session=None, timeout=15):
        self.base_url = base_url.rstrip('/')
        self.password = password
        self.session = session or requests.Session()
        self.timeout = timeout

        # UI-local state
        self.editing = {}        # entity -> record id being edited
        self.forms = {}          # entity -> last assembled form fields
        self.collections = {}    # entity -> last fetched records

    # ----- session -----

    def login(self, password):
        """Store the password; verified by fetching the inbox."""
        self.password = password
        return self.list_messages()

    def logout(self):
        self.password = None
        self.editing.clear()
        self.forms.clear()

    @property
    def is_authenticated(self):
        return bool(self.password)

    # ----- transport -----

    def _request(self, method, entity, suffix='', auth=True, **kwargs):
        url = f"{self.base_url}{ENDPOINTS[entity]}{suffix}"
        headers = kwargs.pop('headers', {})
        if auth:
            if not self.password:
                raise Unauthorized('Not logged in')
            headers[ADMIN_HEADER] = self.password

        try:
            resp = self.session.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise BackendFailure(f"Request to {url} failed: {e}") from e

        if resp.status_code == 401:
            self.logout()
            raise Unauthorized('Incorrect password or session expired')
        if resp.status_code >= 400:
            raise _ERRORS.get(resp.status_code, FolioError)(_error_message(resp))
        return resp

    def _json(self, method, entity, suffix='', auth=True, **kwargs):
        return self._request(method, entity, suffix, auth=auth, **kwargs).json()

    def refresh(self, entity):
        """Re-fetch a collection after a mutation."""
        if entity == 'messages':
            records = self._json('GET', 'messages')
        elif entity == 'resume':
            body = self._json('GET', 'resume', auth=False)
            records = [body['data']] if body.get('success') else []
        else:
            records = self._json('GET', entity, auth=False)
        self.collections[entity] = records
        return records

    def _mutate(self, method, entity, suffix='', **kwargs):
        body = self._json(method, entity, suffix, **kwargs)
        self.refresh(entity)
        return body.get('data')

    # ----- messages -----

    def submit_message(self, name, email, message):
        """Public contact form submission."""
        return self._json('POST', 'messages', auth=False,
                          json={'name': name, 'email': email, 'message': message})

    def list_messages(self):
        return self.refresh('messages')

    def toggle_read(self, message_id):
        body = self._json('PATCH', 'messages', f"/{message_id}/read")
        self.refresh('messages')
        return body.get('read')

    def delete_message(self, message_id):
        return self._mutate('DELETE', 'messages', f"/{message_id}")

    def export_messages_csv(self, path=None):
        """Fetch the inbox as CSV; write it to path when given."""
        text = self._request('GET', 'messages', '/export').text
        if path:
            with open(path, 'w', encoding='utf-8', newline='') as f:
                f.write(text)
        return text

    # ----- generic collections -----

    def list(self, entity):
        return self.refresh(entity)

    def delete(self, entity, record_id):
        result = self._mutate('DELETE', entity, f"/{record_id}")
        if self.editing.get(entity) == record_id:
            self.cancel_edit(entity)
        return result

    def reorder(self, entity, id_order):
        return self._mutate('POST', entity, '/reorder', json={'order': list(id_order)})

    # ----- edit state -----

    def begin_edit(self, entity, record_id):
        """Load a record into the form and mark it as being edited."""
        records = self.refresh(entity)
        for record in records:
            if record.get('id') == record_id:
                self.editing[entity] = record_id
                self.forms[entity] = dict(record)
                return record
        raise NotFound(f"{entity} record {record_id} not found")

    def cancel_edit(self, entity):
        self.editing.pop(entity, None)
        self.forms.pop(entity, None)

    def _save(self, entity, fields, files=None, as_json=False):
        """POST a new record, or PUT when a record is mid-edit."""
        payload = {k: v for k, v in fields.items() if v is not None}
        self.forms[entity] = {**self.forms.get(entity, {}), **payload}

        record_id = self.editing.get(entity)
        method, suffix = ('PUT', f"/{record_id}") if record_id is not None else ('POST', '')
        if as_json:
            data = self._mutate(method, entity, suffix, json=payload)
        else:
            data = self._mutate(method, entity, suffix, data=payload, files=files)
        self.cancel_edit(entity)
        return data

    # ----- projects -----

    def save_project(self, fields, image_path=None):
        """fields: title, description, projectUrl."""
        if image_path is None:
            return self._save('projects', fields)
        with _open_upload(image_path) as image:
            return self._save('projects', fields, files={'image': image})

    # ----- videos -----

    def save_video(self, fields):
        """fields: title, description, videoUrl."""
        return self._save('videos', fields, as_json=True)

    # ----- hero photos -----

    def save_hero_photo(self, fields, image_path=None):
        """fields: alt, positionX, positionY."""
        if image_path is None:
            return self._save('hero_photos', fields)
        with _open_upload(image_path) as image:
            return self._save('hero_photos', fields, files={'image': image})

    # ----- resume -----

    def get_resume(self):
        records = self.refresh('resume')
        return records[0] if records else None

    def upload_resume(self, pdf_path):
        with _open_upload(pdf_path, default_type='application/pdf') as pdf:
            return self._mutate('POST', 'resume', files={'resume': pdf})

    def delete_resume(self):
        return self._mutate('DELETE', 'resume')


@contextmanager
def _open_upload(path, default_type='application/octet-stream'):
    """Open a local file as a requests multipart part."""
    mimetype = mimetypes.guess_type(path)[0] or default_type
    with open(path, 'rb') as f:
        yield (os.path.basename(path), f, mimetype)


def _error_message(resp):
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    return body.get('message') or body.get('error') or f"HTTP {resp.status_code}"
