"""
Projects Routes
===============

- GET    /api/projects          -- all projects (public)
- POST   /api/projects          -- create, multipart with image (admin)
- PUT    /api/projects/<id>     -- update, image optional (admin)
- DELETE /api/projects/<id>     -- delete project and its image (admin)
- POST   /api/projects/reorder  -- set manual order from a list of ids (admin)
"""

from flask import current_app, jsonify, request

from . import projects_bp
from ...core.auth import admin_required
from ...core.config import get_setting
from ...core.logging_service import LoggingService
from ...core.payload import request_payload
from ...core.uploads import read_image


def _service():
    return current_app.extensions['folio'].service('projects')


def _form_fields():
    return {
        'title': request.form.get('title'),
        'description': request.form.get('description'),
        'projectUrl': request.form.get('projectUrl'),
    }


@projects_bp.route('', methods=['GET'])
def list_projects():
    return jsonify(_service().list())


@projects_bp.route('', methods=['POST'])
@admin_required
def create_project():
    image = read_image(request.files.get('image'), get_setting(current_app, 'MAX_UPLOAD_SIZE'))
    if image is None:
        return jsonify({'success': False, 'message': 'Project image is required'}), 400

    project = _service().create(_form_fields(), upload=image)
    LoggingService.log_admin_action('projects', f"created project {project['id']}")
    return jsonify({'success': True, 'message': 'Project created', 'data': project}), 201


@projects_bp.route('/<int:project_id>', methods=['PUT'])
@admin_required
def update_project(project_id):
    image = read_image(request.files.get('image'), get_setting(current_app, 'MAX_UPLOAD_SIZE'))
    project = _service().update(project_id, _form_fields(), upload=image)
    LoggingService.log_admin_action('projects', f"updated project {project_id}")
    return jsonify({'success': True, 'message': 'Project updated', 'data': project})


@projects_bp.route('/<int:project_id>', methods=['DELETE'])
@admin_required
def delete_project(project_id):
    _service().delete(project_id)
    LoggingService.log_admin_action('projects', f"deleted project {project_id}")
    return jsonify({'success': True, 'message': 'Project deleted'})


@projects_bp.route('/reorder', methods=['POST'])
@admin_required
def reorder_projects():
    data = request_payload()
    projects = _service().reorder(data.get('order', []))
    return jsonify({'success': True, 'data': projects})
