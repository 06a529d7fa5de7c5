"""
Channel aggregation service.

Builds the derived views of one window of decoded ChannelRow records:

- byDate: DailyTotal per date (total sessions and the channel -> sessions map),
  ordered by ascending date
- byChannel: ChannelTotal per channel label (total sessions and the
  date -> sessions map)
- unassignedDays: the "Unassigned" series with each day's share of that day's
  total sessions, ordered by ascending date

The unassigned channel is recognised by a case-insensitive exact match on the
label "unassigned". Ordering uses plain string comparison of the zero-padded
ISO dates, which matches calendar order.

The module also provides summarize_window(), the headline statistics shown on
the channels dashboard (channel shares, busiest day, period-over-period trend),
computed with pandas.

All functions are pure: empty input yields empty output and nothing here
raises unless upstream decoding failed.
"""

from typing import Dict, Iterable, List

import pandas as pd

from traffic_sentinel.models.enums import Channel
from traffic_sentinel.models.schemas import (
    ChannelAggregation,
    ChannelRow,
    ChannelShare,
    ChannelTotal,
    DailyTotal,
    SessionTrend,
    TopDay,
    UnassignedDay,
    WindowSummary,
)


UNASSIGNED_LABEL: str = Channel.UNASSIGNED.value.lower()


def is_unassigned(channel: str) -> bool:
    """True when the channel label is "unassigned" in any letter case."""
    return channel.lower() == UNASSIGNED_LABEL


def unassigned_percentage(sessions: int, day_total: int) -> float:
    """
    Share of a day's sessions, in percent rounded to 2 decimals.

    Returns 0.0 when the day's total is 0.
    """
    if not day_total:
        return 0.0
    return round(sessions / day_total * 100, 2)


# =============================================================================
# Aggregation
# =============================================================================


def aggregate_channels(rows: Iterable[ChannelRow]) -> ChannelAggregation:
    """
    Aggregate decoded rows into daily totals, channel totals and the
    unassigned series.

    Args:
        rows: Decoded channel rows for one window, in any order.

    Returns:
        ChannelAggregation with byDate and unassignedDays sorted by date.

    Example:
        >>> rows = [
        ...     ChannelRow(channel="Direct", date="2025-03-01", sessions=90, users=80),
        ...     ChannelRow(channel="Unassigned", date="2025-03-01", sessions=10, users=9),
        ... ]
        >>> result = aggregate_channels(rows)
        >>> result.unassignedDays[0].percentage
        10.0
    """
    by_date: Dict[str, DailyTotal] = {}
    by_channel: Dict[str, ChannelTotal] = {}
    unassigned: List[UnassignedDay] = []

    for row in rows:
        daily = by_date.get(row.date)
        if daily is None:
            daily = by_date[row.date] = DailyTotal(date=row.date)
        daily.total += row.sessions
        daily.channels[row.channel] = daily.channels.get(row.channel, 0) + row.sessions

        channel_total = by_channel.get(row.channel)
        if channel_total is None:
            channel_total = by_channel[row.channel] = ChannelTotal(channel=row.channel)
        channel_total.total += row.sessions
        channel_total.dates[row.date] = channel_total.dates.get(row.date, 0) + row.sessions

        if is_unassigned(row.channel):
            unassigned.append(UnassignedDay(
                date=row.date,
                sessions=row.sessions,
                users=row.users,
                percentage=0.0,
            ))

    # Second pass: totals are complete only once every row has been seen
    for day in unassigned:
        daily = by_date.get(day.date)
        day.percentage = unassigned_percentage(day.sessions, daily.total if daily else 0)

    return ChannelAggregation(
        byDate=sorted(by_date.values(), key=lambda d: d.date),
        byChannel=by_channel,
        unassignedDays=sorted(unassigned, key=lambda d: d.date),
    )


# =============================================================================
# Window Summary (dashboard headline statistics)
# =============================================================================


def _channel_shares(by_channel: Dict[str, ChannelTotal]) -> List[ChannelShare]:
    if not by_channel:
        return []

    frame = pd.DataFrame(
        [(c.channel, c.total) for c in by_channel.values()],
        columns=['channel', 'sessions'],
    )
    grand_total = int(frame['sessions'].sum())
    if grand_total:
        frame['percentage'] = (frame['sessions'] / grand_total * 100).round(1)
    else:
        frame['percentage'] = 0.0

    frame = frame.sort_values(
        ['sessions', 'channel'], ascending=[False, True], kind='mergesort'
    )
    return [
        ChannelShare(
            channel=str(record.channel),
            sessions=int(record.sessions),
            percentage=float(record.percentage),
        )
        for record in frame.itertuples(index=False)
    ]


def _top_day(by_date: List[DailyTotal]) -> TopDay:
    top = TopDay()
    for day in by_date:
        # strict comparison keeps the earliest of equal days
        if day.total > top.sessions:
            top = TopDay(date=day.date, sessions=day.total)
    return top


def _session_trend(by_date: List[DailyTotal]) -> SessionTrend:
    if len(by_date) < 2:
        return SessionTrend(value=0.0, isUp=True)

    totals = pd.Series([day.total for day in by_date], dtype='int64')
    midpoint = len(totals) // 2
    previous_total = int(totals.iloc[:midpoint].sum())
    recent_total = int(totals.iloc[midpoint:].sum())

    if previous_total == 0:
        return SessionTrend(value=100.0, isUp=True)

    change = (recent_total - previous_total) / previous_total * 100
    return SessionTrend(value=round(abs(change), 1), isUp=change >= 0)


def summarize_window(aggregation: ChannelAggregation) -> WindowSummary:
    """
    Compute the headline statistics of a channel window.

    Args:
        aggregation: Output of aggregate_channels().

    Returns:
        WindowSummary with:
        - totalSessions: sum of all channel totals
        - channelShares: each channel's share of the window (1 decimal),
          largest first
        - topDay: the date with the most sessions (earliest wins ties)
        - sessionTrend: relative change of total sessions between the second
          and the first half of the window (split at floor(n/2))
    """
    return WindowSummary(
        totalSessions=sum(c.total for c in aggregation.byChannel.values()),
        channelShares=_channel_shares(aggregation.byChannel),
        topDay=_top_day(aggregation.byDate),
        sessionTrend=_session_trend(aggregation.byDate),
    )
