"""
Settings and environment management module for the Traffic Sentinel backend.

This module provides centralized configuration management using pydantic-settings,
which automatically loads settings from environment variables and .env files.

Key Features:
- Environment variable validation and type coercion
- Sensible defaults for development
- Singleton pattern via @lru_cache for efficient access
- Optional external service credentials (Google Analytics, Resend, Slack)
- Detection threshold defaults for the unassigned-traffic anomaly rules

Environment Variables:
- GA_PROPERTY_ID: Google Analytics 4 property queried for channel data
- GOOGLE_SERVICE_ACCOUNT_KEY: Inline service account JSON document
- GOOGLE_APPLICATION_CREDENTIALS: Path to a service account JSON file
- CRON_SECRET: Bearer token expected from the external scheduler
- RESEND_API_KEY: Email provider API key
- ALERT_EMAIL / ALERT_EMAIL_FROM: Alert recipient and sender addresses
- SLACK_WEBHOOK_URL: Optional Slack webhook for alert digests

Usage:
    from traffic_sentinel.core.config import get_settings

    settings = get_settings()
    thresholds = settings.detection_thresholds()
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from traffic_sentinel.models.schemas import DetectionThresholds


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        ga_property_id: GA4 property ID used by the reporting collaborator.
        google_service_account_key: Service account JSON content, if provided inline.
        google_application_credentials: Path to a service account JSON file.
        cron_secret: Bearer secret required by the scheduled check endpoints.
        resend_api_key: Email provider API key. Email is disabled without it.
        resend_api_url: Email provider send endpoint.
        alert_email_from: Sender address for alert emails.
        alert_email: Recipient address for alert emails.
        slack_webhook_url: Slack incoming webhook URL for alert digests.
        unassigned_window_days: Days of data analysed by the unassigned report.
        organic_window_days: Days of data summed by the organic traffic check.
        channel_analysis_window_days: Default window of the channel analysis view.
        increase_threshold_pct: Period-over-period increase that raises an alert.
        high_day_threshold_pct: Single-day unassigned share that raises an alert.
        trend_relative_increase_pct: Relative rise required over a 3-day trend.
        organic_min_sessions: Organic sessions at or below this value are "no traffic".
    """

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=False,
    )

    # =========================================================================
    # Google Analytics Data API
    # =========================================================================

    ga_property_id: str = '470974790'

    # Inline JSON wins over the credentials file when both are set
    google_service_account_key: Optional[str] = None
    google_application_credentials: Optional[str] = None

    # =========================================================================
    # Scheduler Authorization
    # =========================================================================

    # When unset, every non-test request to a check endpoint is refused
    cron_secret: Optional[str] = None

    # =========================================================================
    # Notification Delivery
    # =========================================================================

    resend_api_key: Optional[str] = None
    resend_api_url: str = 'https://api.resend.com/emails'
    alert_email_from: str = 'alerts@example.com'
    alert_email: Optional[str] = None

    slack_webhook_url: Optional[str] = None

    # =========================================================================
    # Report Windows (days ending yesterday)
    # =========================================================================

    unassigned_window_days: int = 14
    organic_window_days: int = 5
    channel_analysis_window_days: int = 30

    # =========================================================================
    # Detection Thresholds
    # =========================================================================

    increase_threshold_pct: float = 10.0
    high_day_threshold_pct: float = 5.0
    trend_relative_increase_pct: float = 10.0

    # organic sessions must be strictly greater than this for a normal report
    organic_min_sessions: int = 1

    def detection_thresholds(self) -> DetectionThresholds:
        """Build the anomaly detector thresholds from the configured values."""
        return DetectionThresholds(
            increase_threshold_pct=self.increase_threshold_pct,
            high_day_threshold_pct=self.high_day_threshold_pct,
            trend_relative_increase_pct=self.trend_relative_increase_pct,
        )


@dataclass(frozen=True)
class EmailConfig:
    """
    Explicit delivery configuration handed to the email collaborator.

    Built per call from Settings rather than held in a module-level client, so
    callers (and tests) decide exactly which provider credentials are used.
    """
    api_key: str
    api_url: str
    sender: str
    recipient: str

    @classmethod
    def from_settings(cls, settings: Settings) -> Optional['EmailConfig']:
        """
        Return the email configuration, or None when email is not configured.

        Email requires both RESEND_API_KEY and ALERT_EMAIL.
        """
        if not settings.resend_api_key or not settings.alert_email:
            return None
        return cls(
            api_key=settings.resend_api_key,
            api_url=settings.resend_api_url,
            sender=settings.alert_email_from,
            recipient=settings.alert_email,
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Returns:
        Settings: The cached application settings instance.

    Note:
        To refresh settings in tests, clear the cache:
        >>> get_settings.cache_clear()
    """
    return Settings()
