"""Logging fixtures for unit tests."""

import json
import logging
from collections.abc import Callable, Generator
from io import StringIO
from typing import Any

import pytest

from error_causes.logging import StructuredLogFormatter, reset_loggers


@pytest.fixture(autouse=True)
def reset_logger_state() -> Generator[None, None, None]:
    """Reset logger cache before and after each test."""
    reset_loggers()
    yield
    reset_loggers()


@pytest.fixture
def captured_logs() -> Generator[Callable[[], list[dict[str, Any]]], None, None]:
    """Capture JSON records logged under ``error_causes``.

    Yields a function returning the records logged so far.
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredLogFormatter())
    root = logging.getLogger("error_causes")
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)

    def _records() -> list[dict[str, Any]]:
        return [json.loads(line) for line in stream.getvalue().splitlines() if line]

    yield _records
    root.removeHandler(handler)
