"""Common utilities for unitypackage_unpacker packages."""

from .config import ConfigLoader
from .config_utils import expand_path_variables
from .logging import setup_logging, LogContext
from .logging_config import LoggingConfig
from .errors import UnpackerError, ConfigurationError
from .path_utils import normalize_path, is_within_directory

__all__ = [
    'ConfigLoader',
    'LoggingConfig',
    'setup_logging',
    'LogContext',
    'UnpackerError',
    'ConfigurationError',
    'expand_path_variables',
    'normalize_path',
    'is_within_directory',
]
