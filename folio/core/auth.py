"""
Admin Gate
==========

Shared-secret header check protecting every mutating API route.
"""

import hmac
from functools import wraps

from flask import current_app, jsonify, request

from .config import get_setting
from .logging_service import LoggingService

ADMIN_HEADER = 'x-admin-password'


def check_admin_password(supplied):
    """Byte-for-byte comparison of the supplied header against ADMIN_PASSWORD."""
    expected = get_setting(current_app, 'ADMIN_PASSWORD') or ''
    if supplied is None or not expected:
        return False
    # Header values arrive decoded as latin-1; recover the raw bytes
    try:
        raw = supplied.encode('latin-1')
    except UnicodeEncodeError:
        return False
    return hmac.compare_digest(raw, expected.encode('utf-8'))


def admin_required(f):
    """Decorator to require the admin password header"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not check_admin_password(request.headers.get(ADMIN_HEADER)):
            LoggingService.log_security_event(
                'Rejected admin request',
                {'method': request.method, 'header_present': ADMIN_HEADER in request.headers},
            )
            return jsonify({'success': False, 'message': 'Unauthorized'}), 401
        return f(*args, **kwargs)
    return decorated_function
