"""
Messages Routes
===============

- GET    /api/messages             -- inbox, newest first (admin)
- POST   /api/messages             -- submit a message (public)
- DELETE /api/messages/<id>        -- delete (admin)
- PATCH  /api/messages/<id>/read   -- toggle read flag (admin)
- GET    /api/messages/export      -- CSV download (admin)
"""

from datetime import date

from flask import Response, current_app, jsonify

from . import messages_bp
from ...core.auth import admin_required
from ...core.logging_service import LoggingService
from ...core.payload import request_payload


def _service():
    return current_app.extensions['folio'].service('messages')


@messages_bp.route('', methods=['GET'])
@admin_required
def list_messages():
    return jsonify(_service().list())


@messages_bp.route('', methods=['POST'])
def submit_message():
    """Public contact form submission"""
    data = request_payload()
    _service().create({
        'name': data.get('name'),
        'email': data.get('email'),
        'message': data.get('message'),
    })
    LoggingService.info('messages', 'New contact message received')
    return jsonify({'success': True, 'message': 'Message saved'}), 201


@messages_bp.route('/<int:message_id>', methods=['DELETE'])
@admin_required
def delete_message(message_id):
    _service().delete(message_id)
    LoggingService.log_admin_action('messages', f"deleted message {message_id}")
    return jsonify({'success': True, 'message': 'Message deleted'})


@messages_bp.route('/<int:message_id>/read', methods=['PATCH'])
@admin_required
def toggle_read(message_id):
    read = _service().toggle_read(message_id)
    return jsonify({'success': True, 'message': 'Status updated', 'read': read})


@messages_bp.route('/export', methods=['GET'])
@admin_required
def export_messages():
    """Download the inbox as CSV"""
    filename = f"contact-messages-{date.today().isoformat()}.csv"
    return Response(
        _service().export_csv(),
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename={filename}'},
    )
