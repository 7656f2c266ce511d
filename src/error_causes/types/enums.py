"""Shared enumerations for error-causes."""

from enum import Enum


class LogLevel(str, Enum):
    """Log verbosity level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class DispatchMode(str, Enum):
    """How a dispatcher treats errors without a usable cause."""

    STRICT = "strict"  # missing cause / cause name raise their own errors
    TOLERANT = "tolerant"  # missing cause is treated as an unknown name


class ValidationMode(str, Enum):
    """When handler tables are checked against the taxonomy."""

    EAGER = "eager"
    LAZY = "lazy"
