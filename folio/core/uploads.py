"""
Upload Validation
=================

Checks uploaded files against the allowed type set and size cap before
anything is stored, and hands services a plain ``Upload`` value.
"""

import os
import re
from collections import namedtuple

from .errors import ValidationError

Upload = namedtuple('Upload', ['data', 'filename', 'mimetype'])

IMAGE_EXTENSIONS = {'jpeg', 'jpg', 'png', 'gif', 'webp'}
_IMAGE_MIME = re.compile(r'jpeg|jpg|png|gif|webp')

DEFAULT_MAX_SIZE = 10 * 1024 * 1024


def _extension(filename):
    return os.path.splitext(filename or '')[1].lower().lstrip('.')


def allowed_image(filename, mimetype):
    """Image check on both the extension and the MIME type."""
    return _extension(filename) in IMAGE_EXTENSIONS and bool(_IMAGE_MIME.search(mimetype or ''))


def allowed_pdf(filename, mimetype):
    return _extension(filename) == 'pdf' and mimetype == 'application/pdf'


def _read(file, max_size):
    data = file.read()
    if len(data) > max_size:
        raise ValidationError(f"File too large (max {max_size // (1024 * 1024)}MB)")
    return Upload(data=data, filename=file.filename, mimetype=file.mimetype)


def read_image(file, max_size=DEFAULT_MAX_SIZE):
    """Validate an uploaded image and return an Upload, or None if no file was sent."""
    if file is None or not file.filename:
        return None
    if not allowed_image(file.filename, file.mimetype):
        raise ValidationError('Only image files allowed!')
    return _read(file, max_size)


def read_pdf(file, max_size=DEFAULT_MAX_SIZE):
    """Validate an uploaded PDF and return an Upload, or None if no file was sent."""
    if file is None or not file.filename:
        return None
    if not allowed_pdf(file.filename, file.mimetype):
        raise ValidationError('Only PDF files allowed!')
    return _read(file, max_size)
