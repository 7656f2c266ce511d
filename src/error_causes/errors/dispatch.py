"""Exhaustive dispatch of caught errors to handlers by cause name."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Generic, NoReturn, TypeVar

from error_causes.logging import get_logger
from error_causes.types import DispatchConfig, DispatchMode, ValidationMode

from .errors import MISSING_CAUSE, MISSING_CAUSE_NAME, MISSING_HANDLER, UNEXPECTED_ERROR
from .factory import create_error

R = TypeVar("R")

Handler = Callable[[BaseException], R]


def noop(*args: Any, **kwargs: Any) -> None:
    """Handler for causes that are deliberately ignored."""


def _cause_name(cause: Any) -> Any:
    if isinstance(cause, Mapping):
        return cause.get("name")
    return getattr(cause, "name", None)


@dataclass(frozen=True, eq=False)
class ErrorDispatcher(Generic[R]):
    """Routes errors to the handler registered for their cause name.

    Built once per handler table. With eager validation (the default) a table
    missing a handler for any taxonomy name is rejected at construction, so
    the mismatch surfaces at startup instead of inside an error path.

        dispatch = ErrorDispatcher(taxonomy, {"NotFound": show_404, "MissingURI": noop})
        try:
            fetch(uri)
        except CausedError as e:
            return dispatch(e)
    """

    taxonomy: Mapping[str, Mapping[str, Any]]
    handlers: Mapping[str, Handler[R]]
    config: DispatchConfig = field(default_factory=DispatchConfig)

    def __post_init__(self) -> None:
        """Freeze the handler table and check it against the taxonomy."""
        object.__setattr__(self, "handlers", MappingProxyType(dict(self.handlers)))
        if self.config.validation == ValidationMode.EAGER:
            self.validate()

    def validate(self) -> None:
        """Check that every taxonomy name has a callable handler.

        Taxonomy names are checked in declaration order, then any extra
        entries in the table; the first miss is reported. An entry that is
        present but not callable counts as missing.

        Raises:
            CausedError: MissingHandler naming the first uncovered cause
        """
        extras = [name for name in self.handlers if name not in self.taxonomy]
        for name in [*self.taxonomy, *extras]:
            if not callable(self.handlers.get(name)):
                get_logger("dispatch").missing_handler(name, self.handlers)
                raise create_error(MISSING_HANDLER, message=f"{MISSING_HANDLER['message']}: {name}")

    def __call__(self, error: BaseException) -> R:
        """Invoke the handler for ``error.cause["name"]``.

        Args:
            error: Caught error, normally built by create_error

        Returns:
            Whatever the matching handler returns

        Raises:
            CausedError: MissingCause, MissingCauseName or UnexpectedError
                chaining ``error`` when it cannot be routed
        """
        if self.config.validation == ValidationMode.LAZY:
            self.validate()

        strict = self.config.mode == DispatchMode.STRICT
        cause = getattr(error, "cause", None)
        if cause is None:
            if strict:
                self._fail(MISSING_CAUSE, error, MISSING_CAUSE["message"])
            cause = {}

        name = _cause_name(cause)
        present = name is not None and name != ""
        if strict and not present:
            self._fail(MISSING_CAUSE_NAME, error, MISSING_CAUSE_NAME["message"])

        handler = None
        if present:
            try:
                handler = self.handlers.get(name)
            except TypeError:
                # Unhashable names, including tuples holding lists
                handler = None
        if handler is None:
            message = f"{UNEXPECTED_ERROR['message']}: {name if present else 'unknown'}"
            self._fail(UNEXPECTED_ERROR, error, message)

        return handler(error)

    def _fail(self, definition: Mapping[str, Any], error: BaseException, message: str) -> NoReturn:
        if self.config.log_unhandled:
            get_logger("dispatch").unhandled(
                self.config.log_level, definition["name"], error, message
            )
        raise create_error(definition, message=message, cause=error) from error
