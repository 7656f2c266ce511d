"""Chainable error type and the library's own cause definitions."""

import inspect
import traceback
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

# A cause is a plain record: name, message, code, stack, cause + caller extras.
Cause = dict[str, Any]

CAUSE_SEPARATOR = "\nCAUSE: "


def _stack_of(value: Any) -> str | None:
    """Return the stack text carried by a cause record or an exception.

    Args:
        value: Cause record, CausedError, or any other exception

    Returns:
        Stack text, or None if the value carries none
    """
    if isinstance(value, Mapping):
        stack = value.get("stack")
    else:
        stack = getattr(value, "stack", None)
    if isinstance(stack, str) and stack:
        return stack

    # Plain Python exceptions only have a stack once raised
    if isinstance(value, BaseException) and value.__traceback__ is not None:
        return "".join(traceback.format_exception(value)).rstrip("\n")
    return None


def _caller_frames(error: BaseException) -> traceback.StackSummary:
    """Frames above the ``__init__`` chain that is constructing ``error``.

    Innermost first. Subclass initializers calling ``super().__init__`` are
    skipped along with this one, so the first frame is the constructing code.
    """
    init_codes = {
        getattr(cls.__dict__.get("__init__"), "__code__", None) for cls in type(error).__mro__
    }
    here = inspect.currentframe()
    frames = list(traceback.walk_stack(here.f_back if here else None))
    while frames and frames[0][0].f_code in init_codes:
        frames.pop(0)
    return traceback.StackSummary.extract(frames, lookup_lines=False)


def _format_frames(frames: traceback.StackSummary) -> list[str]:
    """Render frames one line each, in the order given."""
    return [f"    at {frame.name} ({frame.filename}:{frame.lineno})" for frame in frames]


class CausedError(Exception):
    """Exception carrying a structured, chainable ``cause`` record.

    ``stack`` holds a text trace captured at construction. The first line is
    ``"<ErrorType>: <message>"`` followed by one line per frame, starting with
    the frame that constructed the error; ``__init__`` frames of subclasses are
    not listed. When the cause carries a stack of its
    own (or wraps an error that does), it is appended after ``CAUSE:``.
    """

    stack: str

    def __init__(self, message: str = "", *, cause: Any = None):
        """Initialize the error.

        Args:
            message: Human-readable message
            cause: Cause record (or any value) explaining the error
        """
        super().__init__(message)
        self.message = message

        # The header must stay on one line so frame lines keep their positions
        header = f"{type(self).__name__}: {message}".replace("\n", " ")
        self.stack = "\n".join([header, *_format_frames(_caller_frames(self))])

        if cause is not None and "cause" not in vars(self):
            self.cause = cause
            nested_stack = _stack_of(cause)
            nested = cause.get("cause") if isinstance(cause, Mapping) else None
            if nested_stack is None and nested is not None:
                nested_stack = _stack_of(nested)
            if nested_stack:
                self.stack = self.stack + CAUSE_SEPARATOR + nested_stack
            if isinstance(nested, BaseException):
                self.__cause__ = nested

    @property
    def name(self) -> str | None:
        """Cause name, if the error carries one."""
        cause = getattr(self, "cause", None)
        if isinstance(cause, Mapping):
            return cause.get("name")
        return getattr(cause, "name", None)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({getattr(self, 'cause', self.message)!r})"


# Causes raised by the library itself
MISSING_HANDLER = MappingProxyType(
    {"name": "MissingHandler", "message": "Missing error handler"}
)
MISSING_CAUSE = MappingProxyType(
    {"name": "MissingCause", "message": "Missing error cause"}
)
MISSING_CAUSE_NAME = MappingProxyType(
    {"name": "MissingCauseName", "message": "Missing error cause name"}
)
UNEXPECTED_ERROR = MappingProxyType(
    {"name": "UnexpectedError", "message": "An unexpected error was thrown"}
)
CONFIG_INVALID = MappingProxyType(
    {"name": "ConfigInvalid", "message": "Invalid error causes configuration"}
)
