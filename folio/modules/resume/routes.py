"""
Resume Routes
=============

- GET    /api/resume  -- current resume (public)
- POST   /api/resume  -- upload a PDF, replacing any existing one (admin)
- DELETE /api/resume  -- remove the resume (admin)
"""

from flask import current_app, jsonify, request

from . import resume_bp
from ...core.auth import admin_required
from ...core.config import get_setting
from ...core.logging_service import LoggingService
from ...core.uploads import read_pdf


def _service():
    return current_app.extensions['folio'].service('resume')


@resume_bp.route('', methods=['GET'])
def get_resume():
    resume = _service().current()
    if not resume:
        return jsonify({'success': False, 'message': 'No resume found'})
    return jsonify({'success': True, 'data': resume})


@resume_bp.route('', methods=['POST'])
@admin_required
def upload_resume():
    pdf = read_pdf(request.files.get('resume'), get_setting(current_app, 'MAX_UPLOAD_SIZE'))
    if pdf is None:
        return jsonify({'success': False, 'message': 'Resume file is required'}), 400

    resume = _service().replace(pdf)
    LoggingService.log_admin_action('resume', f"uploaded resume {resume['filename']}")
    return jsonify({'success': True, 'message': 'Resume uploaded', 'data': resume}), 201


@resume_bp.route('', methods=['DELETE'])
@admin_required
def delete_resume():
    _service().clear()
    LoggingService.log_admin_action('resume', 'deleted resume')
    return jsonify({'success': True, 'message': 'Resume deleted'})
