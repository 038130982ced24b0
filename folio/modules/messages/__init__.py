"""
Messages Module
===============

Contact form submissions.

Provides:
- Public message submission
- Admin inbox: list, read/unread toggle, delete
- CSV export of the inbox
"""

from flask import Blueprint

messages_bp = Blueprint('messages', __name__, url_prefix='/api/messages')

from . import routes
from .service import MessageService

__all__ = ['messages_bp', 'MessageService']
