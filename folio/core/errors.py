"""
Folio Errors
============

Exception taxonomy shared by the storage adapters, resource services,
HTTP boundary and admin client. Each error carries the HTTP status the
boundary answers with.
"""


class FolioError(Exception):
    """Base class for every error surfaced to API callers."""
    status_code = 500

    def __init__(self, message=None):
        super().__init__(message or self.default_message)

    default_message = 'Request failed'

    @property
    def message(self):
        return str(self)


class Unauthorized(FolioError):
    status_code = 401
    default_message = 'Unauthorized'


class NotFound(FolioError):
    status_code = 404
    default_message = 'Not found'


class ValidationError(FolioError):
    status_code = 400
    default_message = 'Invalid request'


class BackendFailure(FolioError):
    """Storage or database error. Carries the raw backend text."""
    status_code = 500
    default_message = 'Storage backend failure'
