"""Shared fixtures for the variates test suite."""

import pytest

from variates.defaults import set_default_source
from variates.sources import RandomSource


@pytest.fixture
def source() -> RandomSource:
    """Seeded source so statistical checks are deterministic."""
    return RandomSource(20240607)


@pytest.fixture(autouse=True)
def _fresh_default_source(monkeypatch: pytest.MonkeyPatch):
    """Rebuild the process-wide default source from a fixed seed for every test."""
    monkeypatch.setenv("VARIATES_SEED", "1234")
    set_default_source(None)
    yield
    set_default_source(None)
