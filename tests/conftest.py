"""
Pytest configuration and shared fixtures for error-causes tests.
"""

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from error_causes.errors import ErrorTaxonomy, error_causes  # noqa: E402


# =============================================================================
# Taxonomy Fixtures
# =============================================================================


FETCH_CAUSES = {
    "NotFound": {
        "code": 404,
        "message": "The requested resource was not found",
    },
    "MissingURI": {
        "code": 400,
        "message": "URI is required",
    },
}


@pytest.fixture
def fetch_causes() -> dict[str, dict[str, Any]]:
    """Return the raw fetch cause templates."""
    return {name: dict(template) for name, template in FETCH_CAUSES.items()}


@pytest.fixture
def fetch_taxonomy(fetch_causes) -> tuple[ErrorTaxonomy, Callable]:
    """Return the fetch taxonomy and its dispatcher factory."""
    return error_causes(fetch_causes)


# =============================================================================
# Markers Configuration
# =============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "property: Property-based tests")
