"""
Storage Adapter
===============

One record/blob store interface with two interchangeable backends:

- ``LocalStorage``: one JSON document per collection plus blobs on disk.
- ``RemoteStorage``: one database table per collection (Flask-SQLAlchemy)
  plus blobs in a DigitalOcean Spaces / S3 bucket (boto3).

The backend is chosen once at startup by ``create_storage``.
"""

import json
import logging
import os
import tempfile
import time
import uuid
from urllib.parse import urlparse

from sqlalchemy.exc import SQLAlchemyError

from .errors import BackendFailure

logger = logging.getLogger(__name__)

CONTENT_TYPES = {
    'jpg': 'image/jpeg', 'jpeg': 'image/jpeg',
    'png': 'image/png', 'gif': 'image/gif', 'webp': 'image/webp',
    'pdf': 'application/pdf',
}

# Public collections that may be served from the local JSON copy when the
# remote database is unreachable or empty.
READ_FALLBACK_COLLECTIONS = {'projects', 'videos', 'hero_photos'}


def blob_filename(original_filename):
    """Collision-resistant name: <epoch-millis>-<random><ext>."""
    ext = os.path.splitext(original_filename or '')[1].lower()
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:10]}{ext}"


class StorageBackend:
    """Record and blob store used by the resource services."""

    name = None

    def list_all(self, collection):
        raise NotImplementedError

    def get(self, collection, record_id):
        for record in self.list_all(collection):
            if record.get('id') == record_id:
                return record
        return None

    def insert(self, collection, record):
        raise NotImplementedError

    def update(self, collection, record_id, changes):
        raise NotImplementedError

    def delete(self, collection, record_id):
        raise NotImplementedError

    def replace_all(self, collection, records):
        raise NotImplementedError

    def upload_blob(self, data, filename, mimetype, folder):
        raise NotImplementedError

    def delete_blob(self, url):
        raise NotImplementedError


# ===== Local JSON files =====

class LocalStorage(StorageBackend):
    """Flat-file store: each collection is one JSON array on disk."""

    name = 'local'

    def __init__(self, data_dir, upload_folder, collection_files, url_prefix='/uploads'):
        self.data_dir = data_dir
        self.upload_folder = upload_folder
        self.collection_files = collection_files
        self.url_prefix = url_prefix.rstrip('/')

    def _path(self, collection):
        filename = self.collection_files.get(collection, f"{collection}.json")
        return os.path.join(self.data_dir, filename)

    def list_all(self, collection):
        path = self._path(collection)
        if not os.path.exists(path):
            return []
        try:
            with open(path, 'r', encoding='utf-8') as f:
                records = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Error reading {path}: {e}")
            raise BackendFailure(str(e)) from e
        if not isinstance(records, list):
            raise BackendFailure(f"{os.path.basename(path)} does not contain a list")
        return records

    def replace_all(self, collection, records):
        """Rewrite the whole collection file through a temp file."""
        path = self._path(collection)
        try:
            os.makedirs(self.data_dir, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.data_dir, suffix='.tmp')
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(records, f, indent=2, ensure_ascii=False)
                os.replace(tmp_path, path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            logger.error(f"Error writing {path}: {e}")
            raise BackendFailure(str(e)) from e

    def insert(self, collection, record):
        records = self.list_all(collection)
        records.append(record)
        self.replace_all(collection, records)
        return record

    def update(self, collection, record_id, changes):
        records = self.list_all(collection)
        for index, record in enumerate(records):
            if record.get('id') == record_id:
                records[index] = {**record, **changes, 'id': record_id}
                self.replace_all(collection, records)
                return records[index]
        return None

    def delete(self, collection, record_id):
        records = self.list_all(collection)
        removed = None
        kept = []
        for record in records:
            if removed is None and record.get('id') == record_id:
                removed = record
            else:
                kept.append(record)
        if removed is not None:
            self.replace_all(collection, kept)
        return removed

    def upload_blob(self, data, filename, mimetype, folder):
        name = blob_filename(filename)
        target_dir = os.path.join(self.upload_folder, folder)
        try:
            os.makedirs(target_dir, exist_ok=True)
            with open(os.path.join(target_dir, name), 'wb') as f:
                f.write(data)
        except OSError as e:
            raise BackendFailure(str(e)) from e
        return f"{self.url_prefix}/{folder}/{name}"

    def delete_blob(self, url):
        """Delete a blob previously returned by upload_blob."""
        if not url or not url.startswith(self.url_prefix + '/'):
            return False
        rel_path = url[len(self.url_prefix) + 1:]
        root = os.path.realpath(self.upload_folder)
        full_path = os.path.realpath(os.path.join(root, rel_path))
        if not full_path.startswith(root + os.sep):
            return False
        if os.path.isfile(full_path):
            try:
                os.unlink(full_path)
            except OSError as e:
                raise BackendFailure(str(e)) from e
            return True
        return False


# ===== Remote database + bucket =====

class RemoteStorage(StorageBackend):
    """Database table per collection plus an S3-compatible bucket."""

    name = 'remote'

    def __init__(self, db, models, spaces_config, fallback=None, folder_prefix='portfolio'):
        self.db = db
        self.models = models
        self.spaces = spaces_config
        self.fallback = fallback
        self.folder_prefix = folder_prefix

    def _model(self, collection):
        try:
            return self.models[collection]
        except KeyError:
            raise BackendFailure(f"Unknown collection: {collection}")

    def _fail(self, e):
        if isinstance(e, SQLAlchemyError):
            self.db.session.rollback()
        logger.error(f"Remote storage error: {e}")
        return BackendFailure(str(e))

    def _query_all(self, collection):
        model = self._model(collection)
        try:
            rows = self.db.session.execute(self.db.select(model)).scalars().all()
        except SQLAlchemyError as e:
            raise self._fail(e) from e
        return [row.to_dict() for row in rows]

    def list_all(self, collection):
        if collection not in READ_FALLBACK_COLLECTIONS or self.fallback is None:
            return self._query_all(collection)

        try:
            records = self._query_all(collection)
        except BackendFailure as e:
            logger.warning(f"Remote read failed for {collection}, falling back to local JSON: {e}")
            return self.fallback.list_all(collection)
        if not records:
            logger.info(f"Remote {collection} is empty, falling back to local JSON")
            return self.fallback.list_all(collection)
        return records

    def get(self, collection, record_id):
        try:
            row = self.db.session.get(self._model(collection), record_id)
        except SQLAlchemyError as e:
            raise self._fail(e) from e
        return row.to_dict() if row else None

    def insert(self, collection, record):
        row = self._model(collection).from_dict(record)
        try:
            self.db.session.add(row)
            self.db.session.commit()
        except SQLAlchemyError as e:
            raise self._fail(e) from e
        return row.to_dict()

    def update(self, collection, record_id, changes):
        try:
            row = self.db.session.get(self._model(collection), record_id)
            if row is None:
                return None
            row.apply(changes)
            self.db.session.commit()
        except SQLAlchemyError as e:
            raise self._fail(e) from e
        return row.to_dict()

    def delete(self, collection, record_id):
        try:
            row = self.db.session.get(self._model(collection), record_id)
            if row is None:
                return None
            removed = row.to_dict()
            self.db.session.delete(row)
            self.db.session.commit()
        except SQLAlchemyError as e:
            raise self._fail(e) from e
        return removed

    def replace_all(self, collection, records):
        """Delete every row and insert the given records in one transaction."""
        model = self._model(collection)
        try:
            self.db.session.execute(self.db.delete(model))
            for record in records:
                self.db.session.add(model.from_dict(record))
            self.db.session.commit()
        except SQLAlchemyError as e:
            raise self._fail(e) from e

    # ----- bucket -----

    def _client(self):
        import boto3
        region = self.spaces['region']
        return boto3.client(
            's3',
            region_name=region,
            endpoint_url=f"https://{region}.digitaloceanspaces.com",
            aws_access_key_id=self.spaces['access_key'],
            aws_secret_access_key=self.spaces['secret_key'],
        )

    def _public_base(self):
        return f"https://{self.spaces['space_name']}.{self.spaces['region']}.digitaloceanspaces.com"

    def upload_blob(self, data, filename, mimetype, folder):
        from botocore.exceptions import BotoCoreError, ClientError
        name = blob_filename(filename)
        object_key = f"{self.folder_prefix}/{folder}/{name}"

        ext = name.rsplit('.', 1)[-1].lower() if '.' in name else ''
        content_type = mimetype or CONTENT_TYPES.get(ext, 'application/octet-stream')

        try:
            self._client().put_object(
                Bucket=self.spaces['space_name'],
                Key=object_key,
                Body=data,
                ACL='public-read',
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Bucket upload error: {e}")
            raise BackendFailure(str(e)) from e

        return f"{self._public_base()}/{object_key}"

    def delete_blob(self, url):
        from botocore.exceptions import BotoCoreError, ClientError
        if not url:
            return False
        if not url.startswith(self._public_base() + '/'):
            # Local copies referenced by fallback records
            if self.fallback is not None:
                return self.fallback.delete_blob(url)
            return False

        object_key = urlparse(url).path.lstrip('/')
        try:
            self._client().delete_object(Bucket=self.spaces['space_name'], Key=object_key)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Bucket delete error: {e}")
            raise BackendFailure(str(e)) from e
        return True


def create_storage(app, db=None):
    """Build the storage backend selected by STORAGE_BACKEND."""
    from .config import Config, get_setting

    local = LocalStorage(
        data_dir=get_setting(app, 'DATA_DIR'),
        upload_folder=get_setting(app, 'UPLOAD_FOLDER'),
        collection_files=get_setting(app, 'COLLECTION_FILES', Config.COLLECTION_FILES),
    )

    backend = (get_setting(app, 'STORAGE_BACKEND', 'local') or 'local').strip().lower()
    if backend == 'local':
        return local
    if backend != 'remote':
        raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r} (expected 'local' or 'remote')")

    from .database import MODELS

    spaces = {
        'region': get_setting(app, 'DO_SPACES_REGION'),
        'space_name': get_setting(app, 'DO_SPACES_NAME'),
        'access_key': get_setting(app, 'DO_SPACES_KEY'),
        'secret_key': get_setting(app, 'DO_SPACES_SECRET'),
    }
    missing = [key for key in ('region', 'space_name') if not spaces[key]]
    if missing:
        logger.warning(f"Remote storage bucket is not fully configured (missing {', '.join(missing)})")

    return RemoteStorage(
        db=db,
        models=MODELS,
        spaces_config=spaces,
        fallback=local,
        folder_prefix=get_setting(app, 'SPACES_FOLDER', 'portfolio'),
    )
