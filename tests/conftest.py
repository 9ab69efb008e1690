"""Pytest configuration and fixtures."""

from collections.abc import Generator

import pytest
import structlog

# Repository fixtures available project-wide
from tests.fixtures.repos import (  # noqa: F401
    merge_repo,
    rename_repo,
    temp_repo,
)


@pytest.fixture(autouse=True)
def _reset_structlog() -> Generator[None, None, None]:
    """Undo logging configuration applied by CLI tests."""
    yield
    structlog.reset_defaults()
