"""
Exception classes for the movie ranker.

Centralized location for all custom exceptions to avoid circular imports.
"""


class ValidationError(Exception):
    """Base exception for validation-related errors."""
    pass


class ConfigurationError(Exception):
    """Base exception for configuration-related errors."""
    pass


class PersistenceError(Exception):
    """Raised by stores when a read or write cannot be completed."""
    pass
