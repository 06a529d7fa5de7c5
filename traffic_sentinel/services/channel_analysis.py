"""
Channel analysis entry point.

analyze_channel_window() is the single pure function behind every check:
raw provider rows -> decode -> aggregate -> detect. It performs no I/O and
keeps no state between calls, so repeated runs over the same window return
identical results.
"""

import logging
from typing import Any, Dict, Iterable, Optional

from traffic_sentinel.models.schemas import ChannelAnalysis, DetectionThresholds
from traffic_sentinel.services.aggregation import aggregate_channels
from traffic_sentinel.services.anomaly_detection import detect_anomalies
from traffic_sentinel.services.decoder import decode_rows


logger = logging.getLogger(__name__)


def analyze_channel_window(
    raw_rows: Iterable[Dict[str, Any]],
    thresholds: Optional[DetectionThresholds] = None,
) -> ChannelAnalysis:
    """
    Decode, aggregate and run anomaly detection over one window of rows.

    Args:
        raw_rows: Provider report rows (channel x date, sessions and users).
        thresholds: Detection thresholds; defaults apply when omitted.

    Returns:
        ChannelAnalysis with byDate, byChannel, unassignedDays and alerts.

    Raises:
        MalformedMetricError: If a metric value is not an integer.
        MalformedRowError: If a row lacks dimension or metric values.
    """
    aggregation = aggregate_channels(decode_rows(raw_rows))
    alerts = detect_anomalies(aggregation.unassignedDays, thresholds)

    logger.debug(
        f"Analyzed {len(aggregation.byDate)} days, "
        f"{len(aggregation.unassignedDays)} unassigned days, {len(alerts)} alerts"
    )

    return ChannelAnalysis(
        byDate=aggregation.byDate,
        byChannel=aggregation.byChannel,
        unassignedDays=aggregation.unassignedDays,
        alerts=alerts,
    )
