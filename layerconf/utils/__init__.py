"""
Utility functions and classes.

This package provides the exception hierarchy, logging helpers and the
component registry shared by the configuration layer.
"""

from layerconf.utils.component_registry import register, get, available
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
from layerconf.utils.logging import configure_logging

__all__ = [
    'register',
    'get',
    'available',
    'CoreException',
    'ConfigurationError',
    'EnvWriteError',
    'EmbeddedEnvError',
    'UnmarshalError',
    'UnsupportedConfigTypeError',
    'InitializationCancelledError',
    'InitializationInProgressError',
    'configure_logging',
]
