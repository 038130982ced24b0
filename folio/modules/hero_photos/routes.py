"""
Hero Photos Routes
==================

- GET    /api/hero-photos          -- all hero photos (public)
- POST   /api/hero-photos          -- add photo, multipart with image (admin)
- PUT    /api/hero-photos/<id>     -- update alt / focal point / image (admin)
- DELETE /api/hero-photos/<id>     -- delete photo and its image (admin)
- POST   /api/hero-photos/reorder  -- set manual order (admin)
"""

from flask import current_app, jsonify, request

from . import hero_photos_bp
from ...core.auth import admin_required
from ...core.config import get_setting
from ...core.logging_service import LoggingService
from ...core.payload import request_payload
from ...core.uploads import read_image


def _service():
    return current_app.extensions['folio'].service('hero_photos')


def _form_fields():
    return {
        'alt': request.form.get('alt'),
        'positionX': request.form.get('positionX'),
        'positionY': request.form.get('positionY'),
    }


@hero_photos_bp.route('', methods=['GET'])
def list_hero_photos():
    return jsonify(_service().list())


@hero_photos_bp.route('', methods=['POST'])
@admin_required
def create_hero_photo():
    image = read_image(request.files.get('image'), get_setting(current_app, 'MAX_UPLOAD_SIZE'))
    if image is None:
        return jsonify({'success': False, 'message': 'Hero photo image is required'}), 400

    photo = _service().create(_form_fields(), upload=image)
    LoggingService.log_admin_action('hero_photos', f"added hero photo {photo['id']}")
    return jsonify({'success': True, 'message': 'Hero photo added', 'data': photo}), 201


@hero_photos_bp.route('/<int:photo_id>', methods=['PUT'])
@admin_required
def update_hero_photo(photo_id):
    image = read_image(request.files.get('image'), get_setting(current_app, 'MAX_UPLOAD_SIZE'))
    photo = _service().update(photo_id, _form_fields(), upload=image)
    LoggingService.log_admin_action('hero_photos', f"updated hero photo {photo_id}")
    return jsonify({'success': True, 'message': 'Hero photo updated', 'data': photo})


@hero_photos_bp.route('/<int:photo_id>', methods=['DELETE'])
@admin_required
def delete_hero_photo(photo_id):
    _service().delete(photo_id)
    LoggingService.log_admin_action('hero_photos', f"deleted hero photo {photo_id}")
    return jsonify({'success': True, 'message': 'Hero photo deleted'})


@hero_photos_bp.route('/reorder', methods=['POST'])
@admin_required
def reorder_hero_photos():
    data = request_payload()
    photos = _service().reorder(data.get('order', []))
    return jsonify({'success': True, 'data': photos})
