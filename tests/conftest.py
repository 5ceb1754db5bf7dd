"""
Root test configuration for all tests.

Provides settings that are independent of the environment and of any .env
file of the developer machine.
"""

from typing import Generator

import pytest

from common.config.settings import Settings, get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Reset the cached settings so environment patches of one test never leak into another."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """
    Provide default merging settings.

    The .env file is ignored, so tests always run against the documented defaults.

    Returns:
        settings: Settings instance with default values.
    """
    return Settings(_env_file=None)
