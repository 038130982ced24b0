"""
Folio Core
==========

Core utilities shared by the Folio feature modules.
"""

from .config import Config
from .errors import FolioError, Unauthorized, NotFound, ValidationError, BackendFailure
from .logging_service import LoggingService, logger
from .storage import StorageBackend, LocalStorage, RemoteStorage, create_storage

__all__ = [
    'Config', 'LoggingService', 'logger',
    'FolioError', 'Unauthorized', 'NotFound', 'ValidationError', 'BackendFailure',
    'StorageBackend', 'LocalStorage', 'RemoteStorage', 'create_storage',
]
