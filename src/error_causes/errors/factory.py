"""Error factory for building CausedErrors from option records."""

from collections.abc import Mapping
from typing import Any

from .errors import Cause, CausedError

# Copied into the cause only when present; everything else passes through
RECOGNIZED_FIELDS = ("message", "name", "code", "stack", "cause")


def exists(value: Any) -> bool:
    """Check whether an option value counts as present.

    Args:
        value: Option value

    Returns:
        False for None and the empty string, True otherwise
    """
    return value is not None and not (isinstance(value, str) and value == "")


def build_cause(options: Mapping[str, Any]) -> Cause:
    """Build a cause record from an option mapping.

    Args:
        options: Recognized fields plus arbitrary extras

    Returns:
        New cause dict holding only the present recognized fields and all extras
    """
    cause: Cause = {}
    for key in RECOGNIZED_FIELDS:
        if exists(options.get(key)):
            cause[key] = options[key]

    for key, value in options.items():
        if key not in RECOGNIZED_FIELDS:
            cause[key] = value
    return cause


def filter_stack(error: CausedError) -> CausedError:
    """Remove the second line of the error's stack text.

    That line names the frame that built the error, so the visible trace
    starts at the caller.

    Args:
        error: Error whose stack is rewritten in place

    Returns:
        The same error
    """
    lines = error.stack.split("\n")
    del lines[1:2]
    error.stack = "\n".join(lines)
    return error


def create_error(options: Mapping[str, Any] | None = None, /, **fields: Any) -> CausedError:
    """Create a CausedError from an option record.

    Accepts a mapping (such as a taxonomy definition), keyword fields, or both;
    keyword fields win.

        create_error(NotFound)
        create_error(NotFound, message="User 42 not found", user_id=42)
        create_error(name="Timeout", code=504)

    Args:
        options: Mapping of cause fields
        **fields: Additional or overriding cause fields

    Returns:
        CausedError whose ``cause`` holds the present fields
    """
    merged = {**(options or {}), **fields}
    cause = build_cause(merged)
    message = cause.get("message", "")
    error = CausedError(message if isinstance(message, str) else str(message), cause=cause)
    return filter_stack(error)
