"""
Videos Routes
=============

- GET    /api/videos          -- all videos (public)
- POST   /api/videos          -- add video from a YouTube URL (admin)
- PUT    /api/videos/<id>     -- update (admin)
- DELETE /api/videos/<id>     -- delete (admin)
- POST   /api/videos/reorder  -- set manual order (admin)
"""

from flask import current_app, jsonify

from . import videos_bp
from ...core.auth import admin_required
from ...core.logging_service import LoggingService
from ...core.payload import request_payload


def _service():
    return current_app.extensions['folio'].service('videos')


def _payload():
    data = request_payload()
    return {
        'title': data.get('title'),
        'description': data.get('description'),
        'videoUrl': data.get('videoUrl'),
    }


@videos_bp.route('', methods=['GET'])
def list_videos():
    return jsonify(_service().list())


@videos_bp.route('', methods=['POST'])
@admin_required
def create_video():
    video = _service().create(_payload())
    LoggingService.log_admin_action('videos', f"added video {video['id']}")
    return jsonify({'success': True, 'message': 'Video added', 'data': video}), 201


@videos_bp.route('/<int:video_id>', methods=['PUT'])
@admin_required
def update_video(video_id):
    video = _service().update(video_id, _payload())
    LoggingService.log_admin_action('videos', f"updated video {video_id}")
    return jsonify({'success': True, 'message': 'Video updated', 'data': video})


@videos_bp.route('/<int:video_id>', methods=['DELETE'])
@admin_required
def delete_video(video_id):
    _service().delete(video_id)
    LoggingService.log_admin_action('videos', f"deleted video {video_id}")
    return jsonify({'success': True, 'message': 'Video deleted'})


@videos_bp.route('/reorder', methods=['POST'])
@admin_required
def reorder_videos():
    data = request_payload()
    videos = _service().reorder(data.get('order', []))
    return jsonify({'success': True, 'data': videos})
