"""
Videos Module
=============

YouTube video showcase with ids and thumbnails derived from the video URL.
"""

from flask import Blueprint

videos_bp = Blueprint('videos', __name__, url_prefix='/api/videos')

from . import routes
from .service import VideoService, extract_youtube_id

__all__ = ['videos_bp', 'VideoService', 'extract_youtube_id']
