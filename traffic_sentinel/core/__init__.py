"""
Core infrastructure package for the Traffic Sentinel backend.

Provides:
- Configuration management via pydantic-settings
- Exception types shared by services, jobs and routers
- FastAPI dependency injection utilities

This module re-exports key components from submodules so other modules can use:

    from traffic_sentinel.core import get_settings, SettingsDep, ProviderFetchError
"""

from traffic_sentinel.core.config import EmailConfig, Settings, get_settings
from traffic_sentinel.core.exceptions import (
    CredentialsError,
    MalformedMetricError,
    MalformedRowError,
    NotificationError,
    ProviderFetchError,
    SentinelError,
)
from traffic_sentinel.core.dependencies import (
    CronAuthDep,
    SettingsDep,
    get_settings_dependency,
    verify_cron_authorization,
)

__all__ = [
    # Configuration management (from config.py)
    'EmailConfig',
    'Settings',
    'get_settings',
    # Errors (from exceptions.py)
    'SentinelError',
    'MalformedMetricError',
    'MalformedRowError',
    'ProviderFetchError',
    'CredentialsError',
    'NotificationError',
    # FastAPI dependency injection (from dependencies.py)
    'get_settings_dependency',
    'verify_cron_authorization',
    'SettingsDep',
    'CronAuthDep',
]
