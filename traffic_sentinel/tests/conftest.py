"""
Pytest Configuration and Shared Fixtures for Traffic Sentinel Tests.

This module provides fixtures and configuration for all tests, supporting:
- Async test execution with pytest-asyncio
- Settings fixtures isolated from the environment and .env file
- Provider row builders producing GA4 runReport-shaped rows
- Unassigned series factories for the detection rules
- Mock external service fixtures (GA4 Data API, Slack)
"""

from datetime import date, timedelta
from typing import Any, Callable, Dict, Generator, List, Optional, Sequence
from unittest.mock import MagicMock, Mock, patch

import pytest

from traffic_sentinel.core.config import Settings
from traffic_sentinel.models.schemas import UnassignedDay
from traffic_sentinel.services.simulation import make_provider_row


# ============================================================
# PYTEST HOOKS
# ============================================================

def pytest_configure(config) -> None:
    """
    Configure custom pytest markers for test organization.

    Custom markers defined:
    - slow: Marks tests as slow (deselect with -m "not slow")
    - integration: Marks integration tests requiring external services
    """
    config.addinivalue_line(
        'markers',
        'slow: marks tests as slow (deselect with -m "not slow")'
    )
    config.addinivalue_line(
        'markers',
        'integration: marks tests requiring external service connectivity'
    )


# ============================================================
# CONSTANTS
# ============================================================

WINDOW_START: date = date(2025, 3, 1)
REPORT_DATE: date = date(2025, 3, 20)
CRON_SECRET: str = 'test-cron-secret'


# ============================================================
# SETTINGS FIXTURES
# ============================================================

@pytest.fixture
def mock_settings() -> Settings:
    """
    Settings with every collaborator configured.

    Built with _env_file=None and explicit values so the developer's
    environment and .env file never leak into tests.
    """
    return Settings(
        _env_file=None,
        ga_property_id='123456789',
        cron_secret=CRON_SECRET,
        resend_api_key='re_test_key',
        resend_api_url='https://email.example.test/emails',
        alert_email_from='alerts@example.test',
        alert_email='team@example.test',
        slack_webhook_url='https://hooks.slack.test/services/T000/B000/XXX',
    )


@pytest.fixture
def bare_settings() -> Settings:
    """Settings without email, Slack, credentials or cron secret."""
    return Settings(
        _env_file=None,
        cron_secret=None,
        resend_api_key=None,
        alert_email=None,
        slack_webhook_url=None,
        google_service_account_key=None,
        google_application_credentials=None,
    )


# ============================================================
# PROVIDER ROW BUILDERS
# ============================================================

def build_window_rows(
    unassigned_pcts: Sequence[float],
    daily_total: int = 1000,
    organic_sessions: int = 400,
    start: date = WINDOW_START,
) -> List[Dict[str, Any]]:
    """
    Build provider rows whose unassigned share follows unassigned_pcts.

    Each day has exactly daily_total sessions split between Unassigned,
    Organic Search and Direct, so the unassigned percentage of day i is
    unassigned_pcts[i] whenever pct * daily_total / 100 is an integer.
    """
    rows: List[Dict[str, Any]] = []
    for offset, pct in enumerate(unassigned_pcts):
        day = start + timedelta(days=offset)
        unassigned = int(round(daily_total * pct / 100))
        direct = daily_total - unassigned - organic_sessions
        rows.append(make_provider_row('Organic Search', day, organic_sessions, organic_sessions))
        rows.append(make_provider_row('Direct', day, direct, direct))
        rows.append(make_provider_row('Unassigned', day, unassigned, unassigned))
    return rows


@pytest.fixture
def provider_row() -> Callable[..., Dict[str, Any]]:
    """Factory for single GA4-shaped rows: provider_row(channel, day, sessions, users)."""
    return make_provider_row


@pytest.fixture
def window_rows() -> Callable[..., List[Dict[str, Any]]]:
    """Factory for a full window of rows with a given unassigned share series."""
    return build_window_rows


@pytest.fixture
def spike_rows() -> List[Dict[str, Any]]:
    """Fourteen days: one week at 2% unassigned, one week at 12%."""
    return build_window_rows([2.0] * 7 + [12.0] * 7)


@pytest.fixture
def flat_rows() -> List[Dict[str, Any]]:
    """Fourteen days at a constant 1% unassigned share."""
    return build_window_rows([1.0] * 14)


# ============================================================
# UNASSIGNED SERIES FACTORY
# ============================================================

@pytest.fixture
def make_unassigned_days() -> Callable[..., List[UnassignedDay]]:
    """
    Factory producing a date-ascending unassigned series from percentages.

    Example:
        days = make_unassigned_days([3.0, 5.0, 7.0])
        assert days[-1].date == '2025-03-03'
    """
    def _make(
        percentages: Sequence[float],
        start: date = WINDOW_START,
        sessions: Optional[Sequence[int]] = None,
    ) -> List[UnassignedDay]:
        result = []
        for offset, pct in enumerate(percentages):
            count = sessions[offset] if sessions is not None else int(round(pct * 10))
            result.append(UnassignedDay(
                date=(start + timedelta(days=offset)).isoformat(),
                sessions=count,
                users=count,
                percentage=pct,
            ))
        return result

    return _make


# ============================================================
# EXTERNAL SERVICE MOCKS
# ============================================================

@pytest.fixture
def mock_analytics_service() -> MagicMock:
    """
    Mock GA4 Data API service.

    service.properties().runReport(...).execute() returns a response with
    two rows; override execute.return_value or side_effect per test.
    """
    service = MagicMock()
    service.properties.return_value.runReport.return_value.execute.return_value = {
        'rows': [
            make_provider_row('Organic Search', WINDOW_START, 400, 350),
            make_provider_row('Unassigned', WINDOW_START, 20, 18),
        ],
        'rowCount': 2,
    }
    return service


@pytest.fixture
def mock_slack_client() -> Generator[Mock, None, None]:
    """
    Patch slack_sdk WebhookClient used by the Slack digest.

    Yields the mocked client instance; send() answers 200 by default.
    """
    with patch('traffic_sentinel.jobs.slack_digest.WebhookClient') as mock_client_cls:
        mock_instance = Mock()
        mock_instance.send.return_value = Mock(status_code=200, body='ok')
        mock_client_cls.return_value = mock_instance
        yield mock_instance
