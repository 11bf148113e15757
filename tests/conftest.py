"""Shared test fixtures."""

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog():
    """CLI tests install a logger bound to the runner's stderr; drop it after each test."""
    yield
    structlog.reset_defaults()
