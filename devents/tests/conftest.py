"""
Global pytest configuration and fixtures.

This file configures pytest behavior for all tests in the project.
"""

import pytest

from devents.config.settings import reset_settings


# Register custom pytest marks to avoid warnings
def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "interop: mark test as foreign-target test")


@pytest.fixture(autouse=True)
def clean_settings():
    """Each test starts from settings read fresh from the environment."""
    reset_settings()
    yield
    reset_settings()
