"""Exceptions for codex-steering."""


class SteeringError(Exception):
    """Base exception for steering errors."""

    pass


class SteeringIOError(SteeringError):
    """Filesystem error that aborts a whole discovery or load operation."""

    pass


class ConfigFileError(SteeringError):
    """Error writing a settings file."""

    pass


class ConfigValidationError(SteeringError):
    """Invalid value in steering settings."""

    pass
