"""
Global pytest configuration and fixtures.
Provides settings and factory fixtures shared across the test-suite.
"""

import os

import pytest

# Settings are loaded from the environment; keep the test run independent of the caller's shell
for _key in [key for key in os.environ if key.startswith('MODELFACTORY_')]:
    del os.environ[_key]


@pytest.fixture(scope="function", autouse=True)
def reset_global_settings():
    """Reset the global settings before each test to ensure clean state."""
    from modelfactory.config.factory_settings import reset_settings

    reset_settings()

    yield

    reset_settings()


@pytest.fixture(scope="function")
def settings():
    """Provide freshly loaded default settings."""
    from modelfactory.config.factory_settings import load_settings_from_dict
    return load_settings_from_dict({})


@pytest.fixture(scope="function")
def deep_settings():
    """Provide settings that deep-copy blueprint output."""
    from modelfactory.config.factory_settings import FactorySettings
    return FactorySettings(copy_mode='deep')


@pytest.fixture(scope="function")
def player_factory():
    """Provide a fresh PlayerFactory."""
    from tests.factories.model_factories import PlayerFactory
    return PlayerFactory()


@pytest.fixture(scope="function")
def counting_factory():
    """Provide a fresh CountingFactory."""
    from tests.factories.model_factories import CountingFactory
    return CountingFactory()
