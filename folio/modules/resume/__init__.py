"""
Resume Module
=============

Single downloadable resume (PDF).
"""

from flask import Blueprint

resume_bp = Blueprint('resume', __name__, url_prefix='/api/resume')

from . import routes
from .service import ResumeService

__all__ = ['resume_bp', 'ResumeService']
