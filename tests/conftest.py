"""Shared pytest fixtures for innkeep tests."""
import sys
sys.dont_write_bytecode = True

import pytest  # noqa: E402


@pytest.fixture(autouse=True)
def _hotel_env(monkeypatch):
    """Pin hotel settings so tests do not depend on the host environment."""
    monkeypatch.setenv("HOTEL_TIMEZONE", "UTC")
    monkeypatch.delenv("MAX_RANGE_DAYS", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    yield
