"""
Innovelous Core
===============

Shared building blocks for the site modules.
"""

from .config import Config, get_config_value
from .errors import (
    InnovelousError, ValidationError, RemoteReadError, NotFoundError,
    RemoteWriteError, StorageError, error_response
)
from .icons import Icon, DEFAULT_ICON, resolve_icon
from .logging_service import LoggingService, logger
from .remote import RemoteClient, RemoteError, get_remote_client
from .resources import ResourceManager, Attachments, Upload

__all__ = [
    'Config', 'get_config_value',
    'InnovelousError', 'ValidationError', 'RemoteReadError', 'NotFoundError',
    'RemoteWriteError', 'StorageError', 'error_response',
    'Icon', 'DEFAULT_ICON', 'resolve_icon',
    'LoggingService', 'logger',
    'RemoteClient', 'RemoteError', 'get_remote_client',
    'ResourceManager', 'Attachments', 'Upload',
]
