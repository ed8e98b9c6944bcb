"""Pytest configuration and fixtures."""

import pytest
from datetime import date
from unittest.mock import AsyncMock

from ride_analytics.config import get_settings
from ride_analytics.models import SessionRecord, ZoneControlStatus


TODAY = date(2025, 3, 10)


def _make_session(
    id: str = "s1",
    start_time: str = "2025-01-01T10:00:00Z",
    duration_secs: int = 3600,
    **overrides,
) -> SessionRecord:
    """Session summary with every optional metric unset unless overridden."""
    return SessionRecord(
        id=id,
        start_time=start_time,
        duration_secs=duration_secs,
        **overrides,
    )


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Each test sees settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_session():
    """Factory for session summaries."""
    return _make_session


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def session_api():
    """Session recorder double."""
    api = AsyncMock()
    api.start_session.return_value = "session-1"
    api.stop_session.return_value = None
    api.get_live_metrics.return_value = None
    return api


@pytest.fixture
def actuator():
    """Zone-control actuator double reporting an active power ride."""
    act = AsyncMock()
    act.stop_zone_control.return_value = None
    act.get_zone_control_status.return_value = ZoneControlStatus(
        active=True,
        mode="Power",
        target_zone=3,
        lower_bound=150,
        upper_bound=180,
        commanded_power=165,
        time_in_zone_secs=40,
        elapsed_secs=60,
        phase="holding",
    )
    return act


@pytest.fixture
def zone_store():
    return AsyncMock()
