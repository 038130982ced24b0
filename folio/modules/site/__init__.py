"""
Site Module
===========

Serves the single-page front-end, its static assets, and locally stored
uploads. Registered last so API blueprints take precedence.
"""

from flask import Blueprint

site_bp = Blueprint('site', __name__)

from . import routes

__all__ = ['site_bp']
