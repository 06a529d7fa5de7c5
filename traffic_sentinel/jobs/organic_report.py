"""
Daily organic traffic report job.

Triggered by the external scheduler through GET /alerts/organic. Sums the
sessions of the last `organic_window_days` days (ending yesterday) per channel
and sends either the normal daily report or, when "Organic Search" carries at
most `organic_min_sessions` sessions, the "no organic traffic" alert.

Unlike the unassigned report, a notification is produced on every run.
Delivery happens outside test mode, or in test mode when send_email is set.
"""

import logging
from datetime import date, timedelta
from typing import Optional

from traffic_sentinel.core.config import EmailConfig, Settings, get_settings
from traffic_sentinel.jobs.data_source import load_channel_rows
from traffic_sentinel.jobs.email_delivery import deliver_email
from traffic_sentinel.models.enums import CheckStatus
from traffic_sentinel.models.schemas import OrganicCheckResult
from traffic_sentinel.services.aggregation import aggregate_channels
from traffic_sentinel.services.decoder import decode_rows
from traffic_sentinel.services.formatting import format_organic_report
from traffic_sentinel.services.organic_check import summarize_organic_traffic


logger = logging.getLogger(__name__)


async def run_daily_organic_check(
    *,
    test_mode: bool = False,
    simulate_no_organic: bool = False,
    send_email: bool = False,
    settings: Optional[Settings] = None,
    report_date: Optional[date] = None,
) -> OrganicCheckResult:
    """
    Run the daily organic traffic check end to end.

    Args:
        test_mode: Use simulated data instead of GA4.
        simulate_no_organic: In test mode, simulate a window without organic traffic.
        send_email: In test mode, deliver the report anyway.
        settings: Settings to use (default: the cached singleton).
        report_date: Date shown in the report (default: today).

    Returns:
        OrganicCheckResult with session counts and delivery flags.

    Raises:
        ProviderFetchError: If the GA4 report call fails.
        MalformedMetricError: If the report contains non-integer metrics.
    """
    settings = settings or get_settings()
    report_date = report_date or date.today()
    window_days = settings.organic_window_days
    email_config = EmailConfig.from_settings(settings)

    rows = await load_channel_rows(
        window_days,
        settings,
        test_mode=test_mode,
        end_date=report_date - timedelta(days=1),
        no_organic=simulate_no_organic,
    )

    aggregation = aggregate_channels(decode_rows(rows))
    summary = summarize_organic_traffic(aggregation.byChannel, settings.organic_min_sessions)
    logger.info(
        f"Organic check: {summary.organicSessions} organic of "
        f"{summary.totalSessions} sessions over {window_days} days"
    )

    email_sent = False
    if not test_mode or send_email:
        payload = format_organic_report(summary, report_date, test_mode)
        email_sent = await deliver_email(payload, email_config)

    if summary.hasOrganic:
        status = CheckStatus.DAILY_REPORT
        message = f"Daily report {'sent' if email_sent else 'generated'}"
    else:
        status = CheckStatus.NO_ORGANIC_TRAFFIC
        message = f"Alert {'sent' if email_sent else 'generated'}: no organic traffic"

    return OrganicCheckResult(
        status=status,
        message=message,
        totalSessions=summary.totalSessions,
        organicSessions=summary.organicSessions,
        hasOrganic=summary.hasOrganic,
        windowDays=window_days,
        isTest=test_mode,
        emailSent=email_sent,
        emailConfigured=email_config is not None,
    )
