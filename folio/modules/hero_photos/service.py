"""
Hero Photos Service
===================

Homepage hero images with a CSS focal point (positionX / positionY as
percentages).
"""

from ...core.errors import ValidationError
from ...core.resources import ResourceService

DEFAULT_ALT = 'Hero Photo'
DEFAULT_POSITION = 50


def parse_position(value, default=DEFAULT_POSITION):
    """Parse a focal-point percentage and clamp it to [0, 100]."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    try:
        position = int(round(float(value)))
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid position value: {value!r}")
    return max(0, min(100, position))


class HeroPhotoService(ResourceService):
    collection = 'hero_photos'
    label = 'Hero photo'
    editable_fields = ('alt', 'positionX', 'positionY')
    blob_folder = 'hero'
    blob_field = 'image'

    def defaults(self):
        return {
            'image': '',
            'alt': DEFAULT_ALT,
            'positionX': DEFAULT_POSITION,
            'positionY': DEFAULT_POSITION,
        }

    def _clean(self, fields):
        cleaned = super()._clean(fields)
        if 'alt' in cleaned and not cleaned['alt']:
            cleaned['alt'] = DEFAULT_ALT
        for key in ('positionX', 'positionY'):
            if key in cleaned:
                cleaned[key] = parse_position(cleaned[key])
        return cleaned
