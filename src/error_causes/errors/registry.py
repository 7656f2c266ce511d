"""Error taxonomy: named cause definitions and their dispatcher factory."""

from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from error_causes.types import DispatchConfig

from .dispatch import ErrorDispatcher, Handler, R
from .errors import (
    CONFIG_INVALID,
    MISSING_CAUSE,
    MISSING_CAUSE_NAME,
    MISSING_HANDLER,
    UNEXPECTED_ERROR,
    CausedError,
)
from .factory import create_error, filter_stack

DispatcherFactory = Callable[..., ErrorDispatcher[Any]]


class ErrorTaxonomy(Mapping[str, Mapping[str, Any]]):
    """Read-only mapping of cause name to cause definition.

    Each definition's ``name`` is its registration key, whatever the template
    said. Iteration follows declaration order.
    """

    def __init__(self, causes: Mapping[str, Mapping[str, Any]] | None = None):
        """Initialize taxonomy from cause templates.

        Args:
            causes: Cause templates keyed by cause name
        """
        self._definitions: dict[str, Mapping[str, Any]] = {
            name: MappingProxyType({**template, "name": name})
            for name, template in (causes or {}).items()
        }

    def __getitem__(self, name: str) -> Mapping[str, Any]:
        return self._definitions[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __repr__(self) -> str:
        definitions = {name: dict(definition) for name, definition in self.items()}
        return f"ErrorTaxonomy({definitions!r})"

    def names(self) -> list[str]:
        """List all registered cause names.

        Returns:
            Cause names in declaration order
        """
        return list(self._definitions)

    def create(self, name: str, **fields: Any) -> CausedError:
        """Create an error from a registered definition.

        Args:
            name: Registered cause name
            **fields: Fields overriding or extending the definition

        Returns:
            CausedError built from the definition

        Raises:
            ValueError: If the name is not registered
        """
        definition = self._definitions.get(name)
        if definition is None:
            msg = f"Unknown error cause: {name}"
            raise ValueError(msg)

        # Overrides may not rename the cause
        fields.pop("name", None)
        return filter_stack(create_error(definition, **fields))

    def handle_errors(
        self,
        handlers: Mapping[str, Handler[R]] | None = None,
        config: DispatchConfig | None = None,
    ) -> ErrorDispatcher[R]:
        """Build a dispatcher for this taxonomy.

        Args:
            handlers: Handler per cause name
            config: Dispatcher behavior (defaults to DispatchConfig())

        Returns:
            ErrorDispatcher bound to this taxonomy

        Raises:
            CausedError: MissingHandler if a cause has no handler (eager validation)
        """
        return ErrorDispatcher(self, handlers or {}, config or DispatchConfig())


def error_causes(
    causes: Mapping[str, Mapping[str, Any]] | None = None,
) -> tuple[ErrorTaxonomy, DispatcherFactory]:
    """Declare a taxonomy of error causes.

        fetch_errors, handle_fetch_errors = error_causes({
            "NotFound": {"code": 404, "message": "The requested resource was not found"},
            "MissingURI": {"code": 400, "message": "URI is required"},
        })
        dispatch = handle_fetch_errors({"NotFound": show_404, "MissingURI": noop})

    Args:
        causes: Cause templates keyed by cause name

    Returns:
        The taxonomy and a factory that builds dispatchers for it
    """
    taxonomy = ErrorTaxonomy(causes)
    return taxonomy, taxonomy.handle_errors


# Errors raised by the library, routable like any other taxonomy
LIBRARY_ERRORS = ErrorTaxonomy(
    {
        definition["name"]: definition
        for definition in (
            MISSING_HANDLER,
            MISSING_CAUSE,
            MISSING_CAUSE_NAME,
            UNEXPECTED_ERROR,
            CONFIG_INVALID,
        )
    }
)
