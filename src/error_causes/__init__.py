"""error-causes - Structured errors with chainable causes.

Build errors that carry a ``cause`` record, declare a closed taxonomy of
cause names, and route caught errors to handlers with a dispatcher that
refuses to start unless every cause is handled.

    from error_causes import create_error, error_causes, noop

    fetch_errors, handle_fetch_errors = error_causes({
        "NotFound": {"code": 404, "message": "The requested resource was not found"},
        "MissingURI": {"code": 400, "message": "URI is required"},
    })
    dispatch = handle_fetch_errors({
        "NotFound": lambda e: e.cause,
        "MissingURI": noop,
    })
    dispatch(create_error(fetch_errors["NotFound"]))
"""

from error_causes.config import load_causes
from error_causes.errors import (
    LIBRARY_ERRORS,
    Cause,
    CausedError,
    ErrorDispatcher,
    ErrorTaxonomy,
    create_error,
    error_causes,
    noop,
)
from error_causes.types import DispatchConfig, DispatchMode, ValidationMode

__version__ = "1.0.0"
__all__ = [
    "__version__",
    "Cause",
    "CausedError",
    "create_error",
    "error_causes",
    "noop",
    "ErrorTaxonomy",
    "ErrorDispatcher",
    "LIBRARY_ERRORS",
    "DispatchConfig",
    "DispatchMode",
    "ValidationMode",
    "load_causes",
]
