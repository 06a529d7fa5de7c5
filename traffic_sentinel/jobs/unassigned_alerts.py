"""
Unassigned traffic anomaly report job.

Triggered by the external scheduler through GET /alerts/unassigned. One run:

1. Fetch the last `unassigned_window_days` days (ending yesterday) from GA4,
   or simulate them in test mode
2. analyze_channel_window() with the configured thresholds
3. No alerts: report "no alert" and deliver nothing
4. Alerts: render the email, deliver it (outside test mode, or when
   send_email is set) and post the Slack digest when a webhook is configured

There is no persisted state: every qualifying run alerts again.

Provider and decoding errors propagate to the caller. Delivery failures are
logged and reported as emailSent/slackSent = False alongside the successful
detection result.
"""

import logging
from datetime import date, timedelta
from typing import Optional

from traffic_sentinel.core.config import EmailConfig, Settings, get_settings
from traffic_sentinel.jobs.data_source import load_channel_rows
from traffic_sentinel.jobs.email_delivery import deliver_email
from traffic_sentinel.jobs.slack_digest import format_slack_blocks, post_slack_digest
from traffic_sentinel.models.enums import CheckStatus
from traffic_sentinel.models.schemas import UnassignedCheckResult
from traffic_sentinel.services.channel_analysis import analyze_channel_window
from traffic_sentinel.services.formatting import format_unassigned_alert_email


logger = logging.getLogger(__name__)


async def run_unassigned_alert_check(
    *,
    test_mode: bool = False,
    simulate_spike: bool = False,
    send_email: bool = False,
    settings: Optional[Settings] = None,
    report_date: Optional[date] = None,
) -> UnassignedCheckResult:
    """
    Run the unassigned anomaly report end to end.

    Args:
        test_mode: Use simulated data instead of GA4.
        simulate_spike: In test mode, simulate a rising unassigned share.
        send_email: In test mode, deliver notifications anyway.
        settings: Settings to use (default: the cached singleton).
        report_date: Date shown in notifications (default: today).

    Returns:
        UnassignedCheckResult with status, alerts and delivery flags.

    Raises:
        ProviderFetchError: If the GA4 report call fails.
        CredentialsError: If GA4 credentials are missing.
        MalformedMetricError: If the report contains non-integer metrics.
    """
    settings = settings or get_settings()
    report_date = report_date or date.today()
    window_days = settings.unassigned_window_days
    email_config = EmailConfig.from_settings(settings)

    rows = await load_channel_rows(
        window_days,
        settings,
        test_mode=test_mode,
        end_date=report_date - timedelta(days=1),
        unassigned_spike=simulate_spike,
    )

    analysis = analyze_channel_window(rows, settings.detection_thresholds())
    alerts = analysis.alerts
    logger.info(f"Unassigned traffic check found {len(alerts)} alert(s)")

    result = UnassignedCheckResult(
        status=CheckStatus.NO_ALERT,
        message="No alert: unassigned traffic is within normal range",
        alerts=alerts,
        unassignedDays=analysis.unassignedDays,
        windowDays=window_days,
        isTest=test_mode,
        emailConfigured=email_config is not None,
    )
    if not alerts:
        return result

    result.status = CheckStatus.ALERTS_DETECTED
    should_deliver = not test_mode or send_email

    if should_deliver:
        payload = format_unassigned_alert_email(alerts, report_date, window_days, test_mode)
        result.emailSent = await deliver_email(payload, email_config)

        if settings.slack_webhook_url:
            blocks = format_slack_blocks(alerts, report_date, window_days, test_mode)
            result.slackSent = post_slack_digest(blocks, settings.slack_webhook_url)

    result.message = (
        f"{len(alerts)} alert(s) detected, "
        f"email {'sent' if result.emailSent else 'not sent'}"
    )
    return result
