"""
Unassigned Traffic Anomaly Detection Service.

Consumes the date-ascending unassigned series produced by aggregate_channels()
and evaluates three independent rules. Any number of them may fire in one pass;
results are concatenated in rule order (A, B, C) with no cross-rule suppression
or de-duplication.

Rule A - Significant period increase (SIGNIFICANT_INCREASE):
    Split the series at floor(n/2). The first half is the previous period, the
    second half (which receives the extra day when n is odd) is the current
    period. Fire when the relative increase of the mean share,
    (current - previous) / previous * 100, reaches increase_threshold_pct.
    Needs at least 2 days. A previous mean of 0 never fires.

Rule B - Three-day rising trend (INCREASING_TREND):
    On the last 3 days, fire when the share rises strictly day over day and
    the third day exceeds the first by more than trend_relative_increase_pct
    relative (day3 > day1 * 1.1 with the default 10%).

Rule C - High single-day share (HIGH_UNASSIGNED_DAY):
    Among the last 7 days, keep those whose share exceeds
    high_day_threshold_pct and report the highest one (the earliest wins ties).
    At most one alert per pass.

Rules compare the stored percentages, which are already rounded to 2 decimals.

Usage:
    from traffic_sentinel.services.anomaly_detection import detect_anomalies

    alerts = detect_anomalies(aggregation.unassignedDays)
"""

from typing import List, Optional, Sequence

import numpy as np

from traffic_sentinel.models.schemas import (
    Alert,
    DateRange,
    DetectionThresholds,
    HighDay,
    HighUnassignedDayAlert,
    IncreasingTrendAlert,
    PeriodDates,
    SignificantIncreaseAlert,
    TrendPoint,
    UnassignedDay,
)


# =============================================================================
# Constants
# =============================================================================

# Minimum number of days each rule needs before it can fire
PERIOD_COMPARISON_MIN_DAYS: int = 2
TREND_WINDOW_DAYS: int = 3

# Rule C only looks at the most recent week
RECENT_WINDOW_DAYS: int = 7


# =============================================================================
# Rule A: Period-over-period increase
# =============================================================================


def mean_percentage(days: Sequence[UnassignedDay]) -> float:
    """Arithmetic mean of the daily shares (0.0 for an empty sequence)."""
    if not days:
        return 0.0
    return float(np.mean([day.percentage for day in days]))


def check_period_increase(
    days: Sequence[UnassignedDay],
    threshold_pct: float,
) -> Optional[SignificantIncreaseAlert]:
    """
    Compare the mean unassigned share of both halves of the window.

    Args:
        days: Unassigned series, date-ascending.
        threshold_pct: Minimum relative increase, in percent, that fires.

    Returns:
        SignificantIncreaseAlert, or None when there are fewer than 2 days,
        the previous mean is 0, or the increase is below the threshold.

    Example:
        >>> # 7 days at 2% then 7 days at 12%
        >>> alert = check_period_increase(days, 10.0)
        >>> alert.previousAvg, alert.currentAvg, alert.increasePct
        (2.0, 12.0, 500.0)
    """
    if len(days) < PERIOD_COMPARISON_MIN_DAYS:
        return None

    midpoint = len(days) // 2
    previous_period = days[:midpoint]
    current_period = days[midpoint:]

    previous_avg = mean_percentage(previous_period)
    current_avg = mean_percentage(current_period)

    # Undefined ratio: nothing to compare against
    if previous_avg == 0:
        return None

    increase_pct = (current_avg - previous_avg) / previous_avg * 100
    if increase_pct < threshold_pct:
        return None

    return SignificantIncreaseAlert(
        message=(
            f"Unassigned traffic share up {increase_pct:.1f}% "
            f"versus the previous period"
        ),
        previousAvg=round(previous_avg, 2),
        currentAvg=round(current_avg, 2),
        increasePct=round(increase_pct, 2),
        dates=PeriodDates(
            previous=DateRange(start=previous_period[0].date, end=previous_period[-1].date),
            current=DateRange(start=current_period[0].date, end=current_period[-1].date),
        ),
    )


# =============================================================================
# Rule B: Three-day rising trend
# =============================================================================


def check_increasing_trend(
    days: Sequence[UnassignedDay],
    relative_increase_pct: float,
) -> Optional[IncreasingTrendAlert]:
    """
    Detect a strictly rising share over the last three days.

    The third day must also exceed the first by more than
    relative_increase_pct percent of the first day's share.
    """
    if len(days) < TREND_WINDOW_DAYS:
        return None

    first, second, third = days[-TREND_WINDOW_DAYS:]
    rising = first.percentage < second.percentage < third.percentage
    factor = 1 + relative_increase_pct / 100

    if not (rising and third.percentage > first.percentage * factor):
        return None

    return IncreasingTrendAlert(
        message="Unassigned traffic share rising for 3 consecutive days",
        data=[
            TrendPoint(date=day.date, percentage=day.percentage)
            for day in (first, second, third)
        ],
    )


# =============================================================================
# Rule C: High single-day share
# =============================================================================


def check_high_unassigned_day(
    days: Sequence[UnassignedDay],
    threshold_pct: float,
) -> Optional[HighUnassignedDayAlert]:
    """
    Report the highest recent day whose share exceeds threshold_pct.

    Only the last 7 days are considered. Ties resolve to the earliest date
    since max() keeps the first maximal element of the date-ordered list.
    """
    recent = days[-RECENT_WINDOW_DAYS:]
    qualifying = [day for day in recent if day.percentage > threshold_pct]
    if not qualifying:
        return None

    highest = max(qualifying, key=lambda day: day.percentage)
    return HighUnassignedDayAlert(
        message=(
            f"High unassigned traffic: {highest.percentage}% "
            f"({highest.sessions} sessions)"
        ),
        day=HighDay(
            date=highest.date,
            percentage=highest.percentage,
            sessions=highest.sessions,
        ),
    )


# =============================================================================
# Detector Entry Point
# =============================================================================


def detect_anomalies(
    unassigned_days: Sequence[UnassignedDay],
    thresholds: Optional[DetectionThresholds] = None,
) -> List[Alert]:
    """
    Run all three rules over the unassigned series.

    Args:
        unassigned_days: Unassigned series in ascending date order. The order
            is a precondition and is not re-verified.
        thresholds: Rule thresholds (defaults: 10% increase, 5% high day,
            10% relative trend rise).

    Returns:
        Alerts in rule order A, B, C, omitting rules that did not fire.
    """
    thresholds = thresholds or DetectionThresholds()
    days = list(unassigned_days)

    candidates = [
        check_period_increase(days, thresholds.increase_threshold_pct),
        check_increasing_trend(days, thresholds.trend_relative_increase_pct),
        check_high_unassigned_day(days, thresholds.high_day_threshold_pct),
    ]
    return [alert for alert in candidates if alert is not None]
