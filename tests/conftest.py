"""Shared pytest fixtures and configuration."""

import os
import pytest
from unittest.mock import MagicMock, patch
from freezegun import freeze_time

from tests.utils.factories import create_plot_row

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_MEDIA_BUCKET", "plots-media")
os.environ.setdefault("LOCATION_DEBOUNCE_MS", "300")
os.environ.setdefault("BACKEND_TIMEOUT_SECONDS", "5")


@pytest.fixture
def mock_supabase_client():
    """Mock Supabase client wired in place of the real singleton.

    ``client.table(...)`` returns the same builder for every call, and every
    builder method returns the builder, so tests only set
    ``builder.execute.return_value``.
    """
    client = MagicMock()
    builder = MagicMock()
    for method in ("select", "insert", "update", "delete", "eq", "ilike", "gte", "lte", "limit", "order"):
        getattr(builder, method).return_value = builder
    builder.execute.return_value = MagicMock(data=[])
    client.table.return_value = builder

    with patch("src.services.supabase_client.get_supabase_client", return_value=client):
        yield client


@pytest.fixture
def table_builder(mock_supabase_client):
    """The shared query builder behind ``mock_supabase_client.table``."""
    return mock_supabase_client.table.return_value


@pytest.fixture
def sample_plot_row():
    """A complete ``plots`` row as the gateway returns it."""
    return create_plot_row(
        plot_id=42,
        name="Kitengela Half Acre",
        location="Kitengela, Kajiado",
        price=1_200_000,
        category="Residential",
    )


@pytest.fixture
def unconfigured_backend(monkeypatch):
    """Remove Supabase settings for the duration of a test."""
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)
    from src.services.supabase_client import reset_supabase_client
    reset_supabase_client()
    yield
    reset_supabase_client()


@pytest.fixture
def freeze_time_fixture():
    """Fixture for freezing time in tests."""
    with freeze_time("2024-12-09 12:00:00") as frozen_time:
        yield frozen_time
