"""
Package initialization file for Traffic Sentinel models.

Exports all Pydantic schemas and enumerations so other modules can import
them from traffic_sentinel.models directly:

    from traffic_sentinel.models import AlertType, ChannelRow, UnassignedDay
"""

# =============================================================================
# Enums
# =============================================================================

from traffic_sentinel.models.enums import (
    AlertType,
    Channel,
    CheckStatus,
)

# =============================================================================
# Schemas
# =============================================================================

from traffic_sentinel.models.schemas import (
    # Pipeline entities
    ChannelRow,
    DailyTotal,
    ChannelTotal,
    UnassignedDay,
    ChannelAggregation,
    ChannelAnalysis,
    # Detection
    DetectionThresholds,
    DateRange,
    PeriodDates,
    TrendPoint,
    HighDay,
    Alert,
    SignificantIncreaseAlert,
    IncreasingTrendAlert,
    HighUnassignedDayAlert,
    # Reporting
    NotificationPayload,
    OrganicTrafficSummary,
    ChannelShare,
    TopDay,
    SessionTrend,
    WindowSummary,
    # Job and API results
    UnassignedCheckResult,
    OrganicCheckResult,
    ChannelAnalysisResponse,
)

__all__ = [
    'AlertType',
    'Channel',
    'CheckStatus',
    'ChannelRow',
    'DailyTotal',
    'ChannelTotal',
    'UnassignedDay',
    'ChannelAggregation',
    'ChannelAnalysis',
    'DetectionThresholds',
    'DateRange',
    'PeriodDates',
    'TrendPoint',
    'HighDay',
    'Alert',
    'SignificantIncreaseAlert',
    'IncreasingTrendAlert',
    'HighUnassignedDayAlert',
    'NotificationPayload',
    'OrganicTrafficSummary',
    'ChannelShare',
    'TopDay',
    'SessionTrend',
    'WindowSummary',
    'UnassignedCheckResult',
    'OrganicCheckResult',
    'ChannelAnalysisResponse',
]
