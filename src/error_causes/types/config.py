"""Shared configuration types for error-causes."""

from dataclasses import dataclass

from .enums import DispatchMode, LogLevel, ValidationMode


@dataclass(frozen=True)
class DispatchConfig:
    """Dispatcher behavior."""

    mode: DispatchMode = DispatchMode.STRICT
    validation: ValidationMode = ValidationMode.EAGER
    log_unhandled: bool = True
    log_level: LogLevel = LogLevel.WARN
