"""Pytest configuration for integration tests."""

import pytest

from fittrack.config import get_settings


# Mark all tests in this directory as integration tests
def pytest_collection_modifyitems(items):
    """Add integration marker to all tests in this directory."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point every surface at one throwaway data directory."""
    monkeypatch.setenv("FITTRACK_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("FITTRACK_USER", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
