"""
layerconf package initialization.

Re-exports the configuration entry point and the error hierarchy.
"""
import logging

from layerconf.config import (
    initialize,
    ConfigHandle,
    EmbeddedFS,
    DiskFS,
    supported_types,
)
from layerconf.utils.exceptions import (
    CoreException,
    ConfigurationError,
    EnvWriteError,
    EmbeddedEnvError,
    UnmarshalError,
    UnsupportedConfigTypeError,
    InitializationCancelledError,
    InitializationInProgressError,
)

__version__ = "0.1.0"

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

__all__ = [
    'initialize',
    'ConfigHandle',
    'EmbeddedFS',
    'DiskFS',
    'supported_types',
    'CoreException',
    'ConfigurationError',
    'EnvWriteError',
    'EmbeddedEnvError',
    'UnmarshalError',
    'UnsupportedConfigTypeError',
    'InitializationCancelledError',
    'InitializationInProgressError',
]
