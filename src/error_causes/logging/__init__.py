"""Structured JSON logging for error-causes."""

from .logger import CausesLogger, StructuredLogFormatter, cause_chain, get_logger, reset_loggers

__all__ = [
    "CausesLogger",
    "StructuredLogFormatter",
    "cause_chain",
    "get_logger",
    "reset_loggers",
]
