"""
layerconf.utils.exceptions
==========================

Custom exceptions raised while initializing the runtime configuration.
"""


class CoreException(Exception):
    """Base exception for all layerconf errors."""
    pass


class ConfigurationError(CoreException):
    """Error while resolving the runtime configuration."""
    pass


class EnvWriteError(ConfigurationError):
    """The process ``TZ`` variable could not be written."""
    pass


class EmbeddedEnvError(ConfigurationError):
    """The embedded default environment file is missing or unreadable."""
    pass


class UnmarshalError(ConfigurationError):
    """Merged configuration cannot be bound to the destination structure."""
    pass


class UnsupportedConfigTypeError(ConfigurationError):
    """The configuration type token names no registered format."""
    pass


class InitializationCancelledError(ConfigurationError):
    """Cancellation was requested before a pipeline step started."""

    def __init__(self, step: str):
        super().__init__(f"Initialization cancelled before step {step!r}")
        self.step = step


class InitializationInProgressError(ConfigurationError):
    """Another initialization run is already in progress in this process."""
    pass
