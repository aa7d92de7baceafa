"""
FolioCMS Core
=============

Persistence core and shared utilities for FolioCMS modules.
"""

from .config import Config, get_config_value
from .errors import ProjectStoreError, NotFound, MalformedStore, ValidationFailed, IOFailure
from .logging_service import LoggingService, logger
from .project_store import ProjectStore
from .queries import ProjectView

__all__ = [
    'Config', 'get_config_value', 'LoggingService', 'logger', 'ProjectStore', 'ProjectView',
    'ProjectStoreError', 'NotFound', 'MalformedStore', 'ValidationFailed', 'IOFailure',
]
