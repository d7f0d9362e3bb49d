"""pytest global fixtures: environment isolation."""

import io

import pytest

from travel_companion.application.context import AppContext, reset_app_context
from travel_companion.infrastructure.logging import StructuredLogger
from travel_companion.persistence.memory_repository import InMemoryTripRepository, InMemoryUserRepository


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep tests off the real database and away from a developer's .env values."""
    monkeypatch.setenv("TRIP_PERSISTENCE_ENABLED", "false")
    monkeypatch.setenv("TRIP_PERSISTENCE_DB", str(tmp_path / "test.sqlite3"))
    monkeypatch.delenv("CORS_ORIGINS", raising=False)
    monkeypatch.delenv("ENABLE_DOCS", raising=False)
    monkeypatch.delenv("LOG_TRACE_PREFIX", raising=False)
    reset_app_context()
    yield
    reset_app_context()


@pytest.fixture
def log_buffer():
    return io.StringIO()


@pytest.fixture
def ctx(log_buffer):
    return AppContext(
        trip_repo=InMemoryTripRepository(),
        user_repo=InMemoryUserRepository(),
        logger=StructuredLogger(trace_id="test", output=log_buffer),
    )
