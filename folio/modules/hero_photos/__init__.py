"""
Hero Photos Module
==================

Homepage hero image rotation with per-image focal point.
"""

from flask import Blueprint

hero_photos_bp = Blueprint('hero_photos', __name__, url_prefix='/api/hero-photos')

from . import routes
from .service import HeroPhotoService

__all__ = ['hero_photos_bp', 'HeroPhotoService']
