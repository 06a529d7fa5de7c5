"""
Enumeration definitions for the Traffic Sentinel backend.

All enums inherit from both `str` and `Enum` to ensure JSON serialization
compatibility with Pydantic models, enabling automatic serialization in API
responses.
"""

from enum import Enum


class AlertType(str, Enum):
    """
    Kinds of unassigned-traffic alerts produced by the anomaly detector.

    - SIGNIFICANT_INCREASE: Average unassigned share of the current half of the
      window rose by at least the configured percentage over the previous half.
    - INCREASING_TREND: Unassigned share rose strictly on each of the last
      three days, ending at least the configured relative amount above day one.
    - HIGH_UNASSIGNED_DAY: One of the last seven days exceeded the high-day
      share threshold (the highest such day is reported).
    """
    SIGNIFICANT_INCREASE = "SIGNIFICANT_INCREASE"
    INCREASING_TREND = "INCREASING_TREND"
    HIGH_UNASSIGNED_DAY = "HIGH_UNASSIGNED_DAY"


class CheckStatus(str, Enum):
    """
    Outcome of a scheduled check.

    Unassigned report: no_alert | alerts_detected
    Organic check: daily_report | no_organic_traffic
    """
    NO_ALERT = "no_alert"
    ALERTS_DETECTED = "alerts_detected"
    DAILY_REPORT = "daily_report"
    NO_ORGANIC_TRAFFIC = "no_organic_traffic"


class Channel(str, Enum):
    """
    Channel labels with special meaning to the checks.

    Provider labels follow GA4's default channel grouping. "Unassigned" is
    matched case-insensitively; "Organic Search" is matched exactly.
    """
    UNASSIGNED = "Unassigned"
    ORGANIC_SEARCH = "Organic Search"
    DIRECT = "Direct"
    REFERRAL = "Referral"
    ORGANIC_SOCIAL = "Organic Social"
