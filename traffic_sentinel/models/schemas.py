"""
Pydantic schemas for the Traffic Sentinel backend.

Covers every entity of the channel pipeline and the result shapes returned by
jobs and API endpoints:

- Decoded provider rows: ChannelRow
- Aggregated views: DailyTotal, ChannelTotal, UnassignedDay, ChannelAggregation
- Detection: DetectionThresholds and the three alert shapes (tagged by `type`)
- Reporting: NotificationPayload, OrganicTrafficSummary, WindowSummary
- Job/API results: UnassignedCheckResult, OrganicCheckResult, ChannelAnalysisResponse

Field names of response models use camelCase to match the JSON contract
consumed by the dashboard.

Dates are carried as zero-padded ISO strings (YYYY-MM-DD). Ordering of the
unassigned series relies on this representation: lexicographic order of the
strings equals calendar order.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from traffic_sentinel.models.enums import AlertType, CheckStatus


# =============================================================================
# Decoded Provider Data
# =============================================================================


class ChannelRow(BaseModel):
    """
    One observation: sessions and users of one channel on one day.

    Immutable; created by the decoder and consumed once per aggregation pass.
    Users are typically <= sessions but this is not enforced.
    """
    model_config = ConfigDict(frozen=True)

    channel: str = Field(..., description="Channel label, e.g. 'Organic Search'")
    date: str = Field(..., description="Day in YYYY-MM-DD form")
    sessions: int = Field(..., ge=0, description="Sessions for the channel on the day")
    users: int = Field(..., ge=0, description="Active users for the channel on the day")


# =============================================================================
# Aggregated Views
# =============================================================================


class DailyTotal(BaseModel):
    """Sessions of one date across all channels. total == sum(channels.values())."""
    date: str
    total: int = Field(default=0)
    channels: Dict[str, int] = Field(default_factory=dict)


class ChannelTotal(BaseModel):
    """Sessions of one channel across the window, with the per-date breakdown."""
    channel: str
    total: int = Field(default=0)
    dates: Dict[str, int] = Field(default_factory=dict)


class UnassignedDay(BaseModel):
    """
    The "Unassigned" channel on one date.

    percentage is sessions / DailyTotal.total * 100 rounded to 2 decimals,
    or 0 when the day's total is 0 or absent.
    """
    date: str
    sessions: int
    users: int
    percentage: float = 0.0


class ChannelAggregation(BaseModel):
    """The three derived views built from one window of channel rows."""
    byDate: List[DailyTotal] = Field(
        default_factory=list,
        description="Daily totals ordered by ascending date"
    )
    byChannel: Dict[str, ChannelTotal] = Field(
        default_factory=dict,
        description="Channel totals keyed by channel label"
    )
    unassignedDays: List[UnassignedDay] = Field(
        default_factory=list,
        description="Unassigned series ordered by ascending date"
    )


# =============================================================================
# Detection
# =============================================================================


class DetectionThresholds(BaseModel):
    """
    Thresholds of the unassigned anomaly rules.

    Attributes:
        increase_threshold_pct: Minimum period-over-period relative increase
            (in percent) of the average unassigned share (Rule A).
        high_day_threshold_pct: Unassigned share a single day must exceed to be
            reported (Rule C).
        trend_relative_increase_pct: Relative rise the third trend day must
            exceed over the first (Rule B).
    """
    model_config = ConfigDict(frozen=True)

    increase_threshold_pct: float = Field(default=10.0, ge=0)
    high_day_threshold_pct: float = Field(default=5.0, ge=0)
    trend_relative_increase_pct: float = Field(default=10.0, ge=0)


class DateRange(BaseModel):
    """Inclusive range of dates."""
    start: str
    end: str


class PeriodDates(BaseModel):
    previous: DateRange
    current: DateRange


class SignificantIncreaseAlert(BaseModel):
    """Rule A evidence: averages of both halves of the window and their ranges."""
    type: Literal[AlertType.SIGNIFICANT_INCREASE] = AlertType.SIGNIFICANT_INCREASE
    message: str
    previousAvg: float = Field(..., description="Average share of the first half, 2 decimals")
    currentAvg: float = Field(..., description="Average share of the second half, 2 decimals")
    increasePct: float = Field(..., description="Relative increase in percent, 2 decimals")
    dates: PeriodDates


class TrendPoint(BaseModel):
    date: str
    percentage: float


class IncreasingTrendAlert(BaseModel):
    """Rule B evidence: the three consecutive days of rising share."""
    type: Literal[AlertType.INCREASING_TREND] = AlertType.INCREASING_TREND
    message: str
    data: List[TrendPoint]


class HighDay(BaseModel):
    date: str
    percentage: float
    sessions: int


class HighUnassignedDayAlert(BaseModel):
    """Rule C evidence: the highest-share day among the recent qualifying days."""
    type: Literal[AlertType.HIGH_UNASSIGNED_DAY] = AlertType.HIGH_UNASSIGNED_DAY
    message: str
    day: HighDay


Alert = Annotated[
    Union[SignificantIncreaseAlert, IncreasingTrendAlert, HighUnassignedDayAlert],
    Field(discriminator='type'),
]


class ChannelAnalysis(ChannelAggregation):
    """Aggregated views plus the alerts detected on the unassigned series."""
    alerts: List[Alert] = Field(default_factory=list)


# =============================================================================
# Reporting
# =============================================================================


class NotificationPayload(BaseModel):
    """A rendered notification ready for a delivery collaborator."""
    model_config = ConfigDict(frozen=True)

    subject: str
    body: str = Field(..., description="HTML body")


class OrganicTrafficSummary(BaseModel):
    """Result of the organic-traffic threshold guard."""
    totalSessions: int = 0
    organicSessions: int = 0
    hasOrganic: bool = False


class ChannelShare(BaseModel):
    channel: str
    sessions: int
    percentage: float = Field(..., description="Share of window sessions, 1 decimal")


class TopDay(BaseModel):
    date: str = ""
    sessions: int = 0


class SessionTrend(BaseModel):
    """Change of total sessions between the two halves of the window."""
    value: float = 0.0
    isUp: bool = True


class WindowSummary(BaseModel):
    """Headline statistics of a channel window for the dashboard."""
    totalSessions: int = 0
    channelShares: List[ChannelShare] = Field(default_factory=list)
    topDay: TopDay = Field(default_factory=TopDay)
    sessionTrend: SessionTrend = Field(default_factory=SessionTrend)


# =============================================================================
# Job and API Results
# =============================================================================


class UnassignedCheckResult(BaseModel):
    """Outcome of the unassigned anomaly report."""
    status: CheckStatus
    message: str
    alerts: List[Alert] = Field(default_factory=list)
    unassignedDays: List[UnassignedDay] = Field(default_factory=list)
    windowDays: int = Field(..., ge=1)
    isTest: bool = False
    emailSent: bool = False
    emailConfigured: bool = False
    slackSent: bool = False


class OrganicCheckResult(BaseModel):
    """Outcome of the daily organic traffic check."""
    status: CheckStatus
    message: str
    totalSessions: int = 0
    organicSessions: int = 0
    hasOrganic: bool = False
    windowDays: int = Field(..., ge=1)
    isTest: bool = False
    emailSent: bool = False
    emailConfigured: bool = False


class ChannelAnalysisResponse(BaseModel):
    """Full channel view: aggregated data, alerts, headline stats and raw rows."""
    data: ChannelAggregation
    alerts: List[Alert] = Field(default_factory=list)
    summary: WindowSummary
    rawRows: List[Dict[str, Any]] = Field(default_factory=list)
    windowDays: int = Field(..., ge=1)
    isTest: bool = False
    propertyId: Optional[str] = None
