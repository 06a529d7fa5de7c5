"""
Daily organic traffic guard.

A threshold check rather than a detection rule: sum sessions per channel over
the window and flag the window when "Organic Search" carries at most
min_sessions sessions (1 by default, so a single organic session still counts
as no organic traffic).

Unlike the unassigned series, the organic channel is matched exactly and
case-sensitively on the label "Organic Search".
"""

from typing import Dict

from traffic_sentinel.models.enums import Channel
from traffic_sentinel.models.schemas import ChannelTotal, OrganicTrafficSummary


ORGANIC_CHANNEL: str = Channel.ORGANIC_SEARCH.value

DEFAULT_MIN_ORGANIC_SESSIONS: int = 1


def summarize_organic_traffic(
    by_channel: Dict[str, ChannelTotal],
    min_sessions: int = DEFAULT_MIN_ORGANIC_SESSIONS,
) -> OrganicTrafficSummary:
    """
    Total and organic sessions of a window, and whether organic traffic exists.

    Args:
        by_channel: Channel totals from aggregate_channels().
        min_sessions: Organic sessions must be strictly greater than this.

    Returns:
        OrganicTrafficSummary; hasOrganic is organicSessions > min_sessions.
    """
    total_sessions = sum(channel.total for channel in by_channel.values())
    organic = by_channel.get(ORGANIC_CHANNEL)
    organic_sessions = organic.total if organic else 0

    return OrganicTrafficSummary(
        totalSessions=total_sessions,
        organicSessions=organic_sessions,
        hasOrganic=organic_sessions > min_sessions,
    )
