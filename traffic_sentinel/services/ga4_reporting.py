"""
Google Analytics 4 reporting collaborator.

Fetches per-day, per-channel session and user counts from the GA4 Data API
(runReport) using service account credentials. Token acquisition and refresh
are handled by google-auth; no OAuth flow lives here.

Credentials are taken from GOOGLE_SERVICE_ACCOUNT_KEY (inline JSON) when set,
otherwise from the GOOGLE_APPLICATION_CREDENTIALS file.

Failures of the report call are surfaced as ProviderFetchError carrying the
HTTP status and response body. Nothing here retries: retry and backoff policy
belongs to the scheduler.

Usage:
    from traffic_sentinel.services.ga4_reporting import fetch_channel_window

    rows = fetch_channel_window(14, 1)  # 14daysAgo .. yesterday
"""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from traffic_sentinel.core.config import Settings, get_settings
from traffic_sentinel.core.exceptions import CredentialsError, ProviderFetchError


logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

ANALYTICS_SCOPES = ['https://www.googleapis.com/auth/analytics.readonly']

CHANNEL_DIMENSION = 'sessionDefaultChannelGroup'
DATE_DIMENSION = 'date'

DEFAULT_DIMENSIONS = (CHANNEL_DIMENSION, DATE_DIMENSION)
DEFAULT_METRICS = ('sessions', 'activeUsers')


# =============================================================================
# Request Building
# =============================================================================


def format_relative_date(offset_days: int) -> str:
    """
    Render a day offset in the Data API relative date syntax.

    Example:
        >>> format_relative_date(14), format_relative_date(1), format_relative_date(0)
        ('14daysAgo', 'yesterday', 'today')
    """
    if offset_days < 0:
        raise ValueError("offset_days must not be negative")
    if offset_days == 0:
        return 'today'
    if offset_days == 1:
        return 'yesterday'
    return f"{offset_days}daysAgo"


def build_report_request(
    start_offset_days: int,
    end_offset_days: int = 1,
    dimensions: Sequence[str] = DEFAULT_DIMENSIONS,
    metrics: Sequence[str] = DEFAULT_METRICS,
) -> Dict[str, Any]:
    """
    Build the runReport body for a channel window ordered by date.

    Args:
        start_offset_days: First day of the window, in days before today.
        end_offset_days: Last day of the window, in days before today.
        dimensions: Report dimensions (channel group and date by default).
        metrics: Report metrics (sessions and active users by default).
    """
    if end_offset_days > start_offset_days:
        raise ValueError("window must end on or after its start")

    body: Dict[str, Any] = {
        'dateRanges': [{
            'startDate': format_relative_date(start_offset_days),
            'endDate': format_relative_date(end_offset_days),
        }],
        'dimensions': [{'name': name} for name in dimensions],
        'metrics': [{'name': name} for name in metrics],
    }
    if DATE_DIMENSION in dimensions:
        body['orderBys'] = [{'dimension': {'dimensionName': DATE_DIMENSION}}]
    return body


# =============================================================================
# Service Construction
# =============================================================================


def load_credentials(settings: Settings) -> service_account.Credentials:
    """
    Load service account credentials with the analytics read-only scope.

    Raises:
        CredentialsError: If no credentials are configured or the inline
            JSON cannot be parsed.
    """
    if settings.google_service_account_key:
        try:
            info = json.loads(settings.google_service_account_key)
        except json.JSONDecodeError as e:
            raise CredentialsError(
                "GOOGLE_SERVICE_ACCOUNT_KEY is not valid JSON"
            ) from e
        return service_account.Credentials.from_service_account_info(
            info, scopes=ANALYTICS_SCOPES
        )

    if settings.google_application_credentials:
        return service_account.Credentials.from_service_account_file(
            settings.google_application_credentials, scopes=ANALYTICS_SCOPES
        )

    raise CredentialsError(
        "No Google credentials configured. Set GOOGLE_SERVICE_ACCOUNT_KEY or "
        "GOOGLE_APPLICATION_CREDENTIALS."
    )


def get_analytics_service(settings: Settings):
    """Build a GA4 Data API v1beta service object."""
    credentials = load_credentials(settings)
    return build('analyticsdata', 'v1beta', credentials=credentials, cache_discovery=False)


# =============================================================================
# Fetch
# =============================================================================


def _error_body(error: HttpError) -> str:
    content = error.content
    if isinstance(content, bytes):
        return content.decode('utf-8', errors='replace')
    return str(content)


def fetch_channel_window(
    start_offset_days: int,
    end_offset_days: int = 1,
    settings: Optional[Settings] = None,
    service=None,
) -> List[Dict[str, Any]]:
    """
    Fetch the raw channel x date rows of a window.

    Args:
        start_offset_days: First day of the window, in days before today.
        end_offset_days: Last day of the window, in days before today.
        settings: Settings to use (default: the cached singleton).
        service: Pre-built Data API service (built from settings when omitted).

    Returns:
        Raw report rows; an empty list when the report has no rows.

    Raises:
        ProviderFetchError: If the Data API call fails.
        CredentialsError: If the service has to be built and no credentials
            are configured.
    """
    settings = settings or get_settings()
    service = service or get_analytics_service(settings)
    body = build_report_request(start_offset_days, end_offset_days)

    logger.info(
        f"Fetching GA4 channel report for property {settings.ga_property_id} "
        f"({body['dateRanges'][0]['startDate']} to {body['dateRanges'][0]['endDate']})"
    )

    try:
        response = service.properties().runReport(
            property=f"properties/{settings.ga_property_id}",
            body=body,
        ).execute()
    except HttpError as e:
        raise ProviderFetchError(e.resp.status, _error_body(e)) from e

    rows = response.get('rows') or []
    logger.info(f"GA4 report returned {len(rows)} rows")
    return rows
