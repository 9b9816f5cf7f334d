"""Custom exception types used across the project."""


class TickProfError(Exception):
    """Base exception for the project."""


class AlreadyWrappedError(TickProfError):
    """Raised when a callable that is already instrumented is wrapped again."""


class RegistryError(TickProfError):
    """Raised when a registry lookup fails."""


class ConfigurationError(TickProfError):
    """Raised when configuration is invalid or incomplete."""
