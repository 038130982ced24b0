"""
Site Routes
===========

- GET /uploads/<path>  -- blobs stored by the local backend
- GET /<path>          -- static site file, or the SPA document as fallback
"""

import os

from flask import current_app, jsonify, send_from_directory
from werkzeug.exceptions import NotFound as WerkzeugNotFound

from . import site_bp
from ...core.config import get_setting

INDEX_DOCUMENT = 'index.html'


@site_bp.route('/uploads/<path:filename>')
def uploaded_file(filename):
    return send_from_directory(get_setting(current_app, 'UPLOAD_FOLDER'), filename)


@site_bp.route('/', defaults={'path': ''})
@site_bp.route('/<path:path>')
def spa(path):
    """Serve a site file if it exists, otherwise the SPA document."""
    site_folder = get_setting(current_app, 'SITE_FOLDER')
    if path:
        try:
            return send_from_directory(site_folder, path)
        except WerkzeugNotFound:
            pass
    if not os.path.isfile(os.path.join(site_folder, INDEX_DOCUMENT)):
        return jsonify({'success': False, 'message': 'Not found'}), 404
    return send_from_directory(site_folder, INDEX_DOCUMENT)
