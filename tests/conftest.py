"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from chuk_tuning.config import reset_settings
from chuk_tuning.intervals import FragileRegistry
from chuk_tuning.models import FormattingContext


@pytest.fixture(autouse=True)
def default_settings():
    """Every test starts and ends with the default engine settings."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def context() -> FormattingContext:
    """Default inflection sizes with C4 at unity."""
    return FormattingContext()


@pytest.fixture
def registry() -> FragileRegistry:
    """An empty fragile registry."""
    return FragileRegistry()
