"""
Simulated channel reports for test mode.

Produces provider-shaped rows (the same structure the GA4 Data API returns)
so test-mode requests exercise the real decode -> aggregate -> detect path
without credentials. Values are drawn from a numpy random Generator; pass a
seed for reproducible windows.

Traffic model per day:
    - total sessions drawn uniformly in [500, 1500]
    - Organic Search: 40% of the day (0 when no_organic is set)
    - Unassigned: 1-2% of the day; with unassigned_spike the second half of the
      window ramps up to 12-15%
    - the remainder split between Direct, Referral and Organic Social
    - users: 60-95% of each channel's sessions
"""

from datetime import date, timedelta
from typing import Any, Dict, List, Optional

import numpy as np

from traffic_sentinel.models.enums import Channel


MIN_DAILY_SESSIONS: int = 500
MAX_DAILY_SESSIONS: int = 1500
ORGANIC_SHARE: float = 0.40

BASELINE_UNASSIGNED_SHARE = (0.01, 0.02)
SPIKE_UNASSIGNED_SHARE = (0.12, 0.15)

# Weights used to split the remaining sessions
OTHER_CHANNEL_WEIGHTS = {
    Channel.DIRECT.value: 0.55,
    Channel.REFERRAL.value: 0.30,
    Channel.ORGANIC_SOCIAL.value: 0.15,
}


def make_provider_row(channel: str, day: date, sessions: int, users: int) -> Dict[str, Any]:
    """Build one row in the GA4 runReport response shape."""
    return {
        'dimensionValues': [
            {'value': channel},
            {'value': day.strftime('%Y%m%d')},
        ],
        'metricValues': [
            {'value': str(sessions)},
            {'value': str(users)},
        ],
    }


def _unassigned_share(
    rng: np.random.Generator,
    index: int,
    days: int,
    unassigned_spike: bool,
) -> float:
    low, high = BASELINE_UNASSIGNED_SHARE
    if unassigned_spike and index >= days // 2:
        # ramp through the second half so the last days keep rising
        span = max(days - days // 2 - 1, 1)
        progress = (index - days // 2) / span
        spike_low, spike_high = SPIKE_UNASSIGNED_SHARE
        return spike_low + (spike_high - spike_low) * progress
    return float(rng.uniform(low, high))


def simulate_channel_rows(
    days: int,
    *,
    seed: Optional[int] = None,
    end_date: Optional[date] = None,
    unassigned_spike: bool = False,
    no_organic: bool = False,
) -> List[Dict[str, Any]]:
    """
    Generate a window of simulated provider rows.

    Args:
        days: Number of consecutive days to simulate.
        seed: Seed of the random generator.
        end_date: Last simulated day (default: yesterday).
        unassigned_spike: Inflate the unassigned share over the second half.
        no_organic: Simulate a window without organic search traffic.

    Returns:
        Provider rows ordered by date, one per channel per day.
    """
    if days < 1:
        raise ValueError("days must be at least 1")

    rng = np.random.default_rng(seed)
    last_day = end_date or (date.today() - timedelta(days=1))
    first_day = last_day - timedelta(days=days - 1)

    rows: List[Dict[str, Any]] = []
    for index in range(days):
        day = first_day + timedelta(days=index)
        total = int(rng.integers(MIN_DAILY_SESSIONS, MAX_DAILY_SESSIONS, endpoint=True))

        organic = 0 if no_organic else int(total * ORGANIC_SHARE)
        unassigned = int(round(total * _unassigned_share(rng, index, days, unassigned_spike)))
        remainder = max(total - organic - unassigned, 0)

        sessions = {Channel.ORGANIC_SEARCH.value: organic}
        allocated = 0
        names = list(OTHER_CHANNEL_WEIGHTS)
        for name in names[:-1]:
            share = int(remainder * OTHER_CHANNEL_WEIGHTS[name])
            sessions[name] = share
            allocated += share
        sessions[names[-1]] = remainder - allocated
        sessions[Channel.UNASSIGNED.value] = unassigned

        for channel, count in sessions.items():
            users = int(count * rng.uniform(0.60, 0.95))
            rows.append(make_provider_row(channel, day, count, users))

    return rows
