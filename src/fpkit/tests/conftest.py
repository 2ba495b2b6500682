from __future__ import annotations

from collections.abc import Iterator

import pytest

from fpkit.logging import reset_logging
from fpkit.settings import clear_settings_cache


@pytest.fixture(autouse=True)
def fresh_config() -> Iterator[None]:
    """Each test sees settings re-read from its own environment and unconfigured logging."""
    clear_settings_cache()
    reset_logging()
    yield
    clear_settings_cache()
    reset_logging()
