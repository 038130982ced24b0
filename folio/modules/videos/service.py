"""
Videos Service
==============

YouTube videos. ``videoId`` and ``thumbnail`` are derived from ``videoUrl``
on every create and update.
"""

import re

from ...core.resources import ResourceService

# youtu.be/<id>, v/<id>, u/<c>/<id>, embed/<id>, watch?v=<id>, &v=<id>
YOUTUBE_ID_REGEX = re.compile(r'^.*(youtu.be/|v/|u/\w/|embed/|watch\?v=|&v=)([^#&?]*).*')

THUMBNAIL_URL = 'https://img.youtube.com/vi/{}/maxresdefault.jpg'


def extract_youtube_id(url):
    """Return the 11-character YouTube id in url, or None."""
    if not url:
        return None
    match = YOUTUBE_ID_REGEX.match(url)
    if match and len(match.group(2)) == 11:
        return match.group(2)
    return None


def thumbnail_for(video_id):
    return THUMBNAIL_URL.format(video_id) if video_id else ''


class VideoService(ResourceService):
    collection = 'videos'
    label = 'Video'
    required_fields = ('videoUrl',)
    editable_fields = ('title', 'description', 'videoUrl')

    def defaults(self):
        return {'title': '', 'description': ''}

    def derive(self, record):
        video_id = extract_youtube_id(record.get('videoUrl'))
        record['videoId'] = video_id
        record['thumbnail'] = thumbnail_for(video_id)
        return record
