"""Shared types for error-causes.

Import from here rather than submodules:
    from error_causes.types import DispatchConfig, DispatchMode, LogLevel
"""

from .config import DispatchConfig
from .enums import DispatchMode, LogLevel, ValidationMode

__all__ = [
    # Enums
    "DispatchMode",
    "LogLevel",
    "ValidationMode",
    # Config
    "DispatchConfig",
]
