"""Exception types for semzones."""


class SemzonesError(Exception):
    """Base class for errors raised by semzones."""


class ConfigError(SemzonesError, ValueError):
    """Raised when explicit user configuration cannot be applied."""
