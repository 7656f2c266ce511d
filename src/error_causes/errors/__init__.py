"""Structured errors with chainable causes and exhaustive dispatch."""

from .dispatch import ErrorDispatcher, Handler, noop
from .errors import (
    CONFIG_INVALID,
    MISSING_CAUSE,
    MISSING_CAUSE_NAME,
    MISSING_HANDLER,
    UNEXPECTED_ERROR,
    Cause,
    CausedError,
)
from .factory import build_cause, create_error, exists, filter_stack
from .registry import LIBRARY_ERRORS, DispatcherFactory, ErrorTaxonomy, error_causes

__all__ = [
    # Core error types
    "Cause",
    "CausedError",
    # Construction
    "create_error",
    "build_cause",
    "exists",
    "filter_stack",
    # Taxonomy and dispatch
    "error_causes",
    "ErrorTaxonomy",
    "ErrorDispatcher",
    "DispatcherFactory",
    "Handler",
    "noop",
    # Library causes
    "LIBRARY_ERRORS",
    "MISSING_HANDLER",
    "MISSING_CAUSE",
    "MISSING_CAUSE_NAME",
    "UNEXPECTED_ERROR",
    "CONFIG_INVALID",
]
