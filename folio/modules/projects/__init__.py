"""
Projects Module
===============

Portfolio project management.

Provides:
- Public project listing
- Project creation and editing with image upload
- Manual ordering
"""

from flask import Blueprint

projects_bp = Blueprint('projects', __name__, url_prefix='/api/projects')

from . import routes
from .service import ProjectService

__all__ = ['projects_bp', 'ProjectService']
