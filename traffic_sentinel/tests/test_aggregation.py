"""
Tests for channel aggregation and the window summary.

Verifies daily totals, channel totals, the unassigned series and its
percentages, and the dashboard headline statistics.
"""

import pytest

from traffic_sentinel.models.schemas import ChannelAggregation, ChannelRow
from traffic_sentinel.services.aggregation import (
    aggregate_channels,
    is_unassigned,
    summarize_window,
    unassigned_percentage,
)


def row(channel: str, day: str, sessions: int, users: int = 0) -> ChannelRow:
    return ChannelRow(channel=channel, date=day, sessions=sessions, users=users)


# =============================================================================
# Helpers
# =============================================================================


class TestUnassignedHelpers:

    @pytest.mark.parametrize('label', ['Unassigned', 'unassigned', 'UNASSIGNED'])
    def test_unassigned_match_ignores_case(self, label: str) -> None:
        assert is_unassigned(label)

    @pytest.mark.parametrize('label', ['Unassigned ', 'Direct', '(not set)'])
    def test_unassigned_match_is_exact(self, label: str) -> None:
        assert not is_unassigned(label)

    def test_percentage_rounded_to_two_decimals(self) -> None:
        assert unassigned_percentage(1, 3) == 33.33
        assert unassigned_percentage(10, 100) == 10.0

    def test_percentage_of_empty_day_is_zero(self) -> None:
        assert unassigned_percentage(5, 0) == 0.0


# =============================================================================
# Aggregation
# =============================================================================


class TestAggregateChannels:

    def test_daily_total_is_sum_of_channels(self) -> None:
        rows = [
            row('Direct', '2025-03-01', 60),
            row('Organic Search', '2025-03-01', 30),
            row('Unassigned', '2025-03-01', 10),
        ]

        result = aggregate_channels(rows)

        assert len(result.byDate) == 1
        day = result.byDate[0]
        assert day.total == 100
        assert day.total == sum(day.channels.values())
        assert day.channels == {'Direct': 60, 'Organic Search': 30, 'Unassigned': 10}

    def test_channel_totals_across_dates(self) -> None:
        rows = [
            row('Direct', '2025-03-01', 60),
            row('Direct', '2025-03-02', 40),
            row('Referral', '2025-03-02', 5),
        ]

        result = aggregate_channels(rows)

        direct = result.byChannel['Direct']
        assert direct.total == 100
        assert direct.dates == {'2025-03-01': 60, '2025-03-02': 40}
        assert result.byChannel['Referral'].total == 5

    def test_duplicate_channel_date_rows_are_summed(self) -> None:
        rows = [
            row('Direct', '2025-03-01', 60),
            row('Direct', '2025-03-01', 15),
        ]

        result = aggregate_channels(rows)

        assert result.byDate[0].channels['Direct'] == 75
        assert result.byDate[0].total == 75
        assert result.byChannel['Direct'].dates['2025-03-01'] == 75

    def test_unassigned_percentage_uses_complete_day_total(self) -> None:
        # Unassigned row comes first: the share must still use the full day
        rows = [
            row('Unassigned', '2025-03-01', 10, 9),
            row('Direct', '2025-03-01', 90),
        ]

        result = aggregate_channels(rows)

        assert len(result.unassignedDays) == 1
        day = result.unassignedDays[0]
        assert day.percentage == 10.0
        assert day.sessions == 10
        assert day.users == 9

    def test_outputs_sorted_by_date(self) -> None:
        rows = [
            row('Unassigned', '2025-03-03', 3),
            row('Direct', '2025-03-03', 97),
            row('Unassigned', '2025-03-01', 1),
            row('Direct', '2025-03-01', 99),
            row('Unassigned', '2025-03-02', 2),
            row('Direct', '2025-03-02', 98),
        ]

        result = aggregate_channels(rows)

        assert [d.date for d in result.byDate] == ['2025-03-01', '2025-03-02', '2025-03-03']
        assert [d.date for d in result.unassignedDays] == ['2025-03-01', '2025-03-02', '2025-03-03']
        assert [d.percentage for d in result.unassignedDays] == [1.0, 2.0, 3.0]

    def test_lowercase_unassigned_label_is_included(self) -> None:
        rows = [
            row('unassigned', '2025-03-01', 5),
            row('Direct', '2025-03-01', 95),
        ]

        result = aggregate_channels(rows)

        assert result.unassignedDays[0].percentage == 5.0
        assert 'unassigned' in result.byChannel

    def test_zero_session_day_gives_zero_percentage(self) -> None:
        rows = [row('Unassigned', '2025-03-01', 0)]

        result = aggregate_channels(rows)

        assert result.byDate[0].total == 0
        assert result.unassignedDays[0].percentage == 0.0

    def test_empty_input(self) -> None:
        result = aggregate_channels([])

        assert result.byDate == []
        assert result.byChannel == {}
        assert result.unassignedDays == []

    def test_days_without_unassigned_row_are_absent(self) -> None:
        rows = [
            row('Direct', '2025-03-01', 50),
            row('Unassigned', '2025-03-02', 5),
            row('Direct', '2025-03-02', 45),
        ]

        result = aggregate_channels(rows)

        assert [d.date for d in result.unassignedDays] == ['2025-03-02']


# =============================================================================
# Window Summary
# =============================================================================


class TestSummarizeWindow:

    def test_summary_of_two_day_window(self) -> None:
        rows = [
            row('Direct', '2025-03-01', 60),
            row('Organic Search', '2025-03-01', 40),
            row('Direct', '2025-03-02', 90),
            row('Organic Search', '2025-03-02', 60),
        ]

        summary = summarize_window(aggregate_channels(rows))

        assert summary.totalSessions == 250
        assert [s.channel for s in summary.channelShares] == ['Direct', 'Organic Search']
        assert summary.channelShares[0].sessions == 150
        assert summary.channelShares[0].percentage == 60.0
        assert summary.channelShares[1].percentage == 40.0
        assert summary.topDay.date == '2025-03-02'
        assert summary.topDay.sessions == 150
        assert summary.sessionTrend.value == 50.0
        assert summary.sessionTrend.isUp is True

    def test_downward_trend(self) -> None:
        rows = [
            row('Direct', '2025-03-01', 200),
            row('Direct', '2025-03-02', 100),
        ]

        trend = summarize_window(aggregate_channels(rows)).sessionTrend

        assert trend.value == 50.0
        assert trend.isUp is False

    def test_top_day_keeps_earliest_tie(self) -> None:
        rows = [
            row('Direct', '2025-03-01', 100),
            row('Direct', '2025-03-02', 100),
        ]

        summary = summarize_window(aggregate_channels(rows))

        assert summary.topDay.date == '2025-03-01'

    def test_equal_channels_ordered_by_name(self) -> None:
        rows = [
            row('Referral', '2025-03-01', 50),
            row('Direct', '2025-03-01', 50),
        ]

        shares = summarize_window(aggregate_channels(rows)).channelShares

        assert [s.channel for s in shares] == ['Direct', 'Referral']

    def test_empty_window(self) -> None:
        summary = summarize_window(ChannelAggregation())

        assert summary.totalSessions == 0
        assert summary.channelShares == []
        assert summary.topDay.date == ''
        assert summary.sessionTrend.value == 0.0

    def test_trend_from_zero_previous_period(self) -> None:
        rows = [
            row('Direct', '2025-03-01', 0),
            row('Direct', '2025-03-02', 40),
        ]

        trend = summarize_window(aggregate_channels(rows)).sessionTrend

        assert trend.value == 100.0
        assert trend.isUp is True
