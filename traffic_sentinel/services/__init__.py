"""
Traffic Sentinel Services Module

Business logic for the channel-traffic checks. The decoding, aggregation,
detection and formatting services are pure and stateless; ga4_reporting is the
only one performing I/O.

Services:
- decoder: provider rows -> ChannelRow
- aggregation: daily/channel totals, unassigned series, window summary
- anomaly_detection: the three unassigned-share rules
- channel_analysis: decode -> aggregate -> detect in one call
- organic_check: "no organic traffic" guard
- formatting: email payloads for both reports
- simulation: provider-shaped test data
- ga4_reporting: GA4 Data API collaborator
"""

# =============================================================================
# Decoding and Aggregation
# =============================================================================

from traffic_sentinel.services.decoder import (
    decode_row,
    decode_rows,
    format_report_date,
)
from traffic_sentinel.services.aggregation import (
    aggregate_channels,
    is_unassigned,
    summarize_window,
    unassigned_percentage,
)

# =============================================================================
# Detection
# =============================================================================

from traffic_sentinel.services.anomaly_detection import (
    check_high_unassigned_day,
    check_increasing_trend,
    check_period_increase,
    detect_anomalies,
)
from traffic_sentinel.services.channel_analysis import analyze_channel_window
from traffic_sentinel.services.organic_check import summarize_organic_traffic

# =============================================================================
# Reporting
# =============================================================================

from traffic_sentinel.services.formatting import (
    describe_alert,
    format_daily_report_email,
    format_no_organic_alert_email,
    format_organic_report,
    format_unassigned_alert_email,
)
from traffic_sentinel.services.simulation import simulate_channel_rows

__all__ = [
    'decode_row',
    'decode_rows',
    'format_report_date',
    'aggregate_channels',
    'is_unassigned',
    'summarize_window',
    'unassigned_percentage',
    'check_high_unassigned_day',
    'check_increasing_trend',
    'check_period_increase',
    'detect_anomalies',
    'analyze_channel_window',
    'summarize_organic_traffic',
    'describe_alert',
    'format_daily_report_email',
    'format_no_organic_alert_email',
    'format_organic_report',
    'format_unassigned_alert_email',
    'simulate_channel_rows',
]
