"""
Request payload helper shared by the JSON-or-form routes.
"""

from flask import request

from .errors import ValidationError


def request_payload():
    """The JSON object body, or the form fields when no JSON was sent."""
    data = request.get_json(silent=True)
    if data is None:
        return request.form
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data
