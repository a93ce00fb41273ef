"""Shared pytest fixtures.

Every test starts from an environment with none of the managed variables
set, so values leaking in from the developer's shell cannot change results.
"""

import pytest

from src.core.config import get_config
from src.core.constants import ENV_NAMES
from src.core.logging import reset_logging


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    """Remove every managed environment variable."""
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    get_config.cache_clear()
    yield monkeypatch
    get_config.cache_clear()


@pytest.fixture
def reset_log_config():
    """Reset structlog before and after a test that configures it."""
    reset_logging()
    yield
    reset_logging()
