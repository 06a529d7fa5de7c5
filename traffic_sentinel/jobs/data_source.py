"""
Channel rows for the scheduled checks.

Test-mode runs simulate a provider-shaped window; normal runs fetch it from
GA4. The GA4 client is blocking, so the fetch runs in a worker thread to keep
the event loop free.
"""

import asyncio
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from traffic_sentinel.core.config import Settings
from traffic_sentinel.services.ga4_reporting import fetch_channel_window
from traffic_sentinel.services.simulation import simulate_channel_rows


logger = logging.getLogger(__name__)


async def load_channel_rows(
    window_days: int,
    settings: Settings,
    test_mode: bool = False,
    end_date: Optional[date] = None,
    **simulation: Any,
) -> List[Dict[str, Any]]:
    """
    Raw rows of a window ending yesterday.

    Args:
        window_days: Number of days in the window.
        settings: Settings used to reach GA4.
        test_mode: Simulate the window instead of fetching it.
        end_date: Last simulated day (test mode only).
        **simulation: Extra simulate_channel_rows() options (test mode only).

    Raises:
        ProviderFetchError: If the GA4 call fails.
    """
    if test_mode:
        logger.info(f"Test mode: simulating {window_days} days of channel data")
        return simulate_channel_rows(window_days, end_date=end_date, **simulation)
    return await asyncio.to_thread(fetch_channel_window, window_days, 1, settings)
