"""
Scheduled Jobs for Traffic Sentinel.

This module provides the checks triggered by the external cron scheduler and
the notification collaborators they deliver through:

- Unassigned traffic anomaly report (unassigned_alerts.py)
- Daily organic traffic report (organic_report.py)
- Email delivery through the Resend HTTP API (email_delivery.py)
- Optional Slack digest of alerts (slack_digest.py)

No job keeps state between runs: there is no "last alert" record, so every
qualifying run notifies again. Overlapping runs are safe; at-most-one-run
discipline, if wanted, belongs to the scheduler.

Environment Requirements:
-------------------------
For GA4 data:
- GOOGLE_SERVICE_ACCOUNT_KEY or GOOGLE_APPLICATION_CREDENTIALS
- GA_PROPERTY_ID

For email:
- RESEND_API_KEY and ALERT_EMAIL (ALERT_EMAIL_FROM optional)

For Slack:
- SLACK_WEBHOOK_URL

Usage:
------
    from traffic_sentinel.jobs import run_unassigned_alert_check, run_daily_organic_check

    result = await run_unassigned_alert_check()
    if result.alerts:
        print(result.message)

    # Simulated data, no delivery
    result = await run_daily_organic_check(test_mode=True, simulate_no_organic=True)
"""

from traffic_sentinel.jobs.data_source import load_channel_rows
from traffic_sentinel.jobs.email_delivery import deliver_email, send_notification
from traffic_sentinel.jobs.organic_report import run_daily_organic_check
from traffic_sentinel.jobs.slack_digest import format_slack_blocks, post_slack_digest
from traffic_sentinel.jobs.unassigned_alerts import run_unassigned_alert_check

__all__ = [
    'load_channel_rows',
    'deliver_email',
    'send_notification',
    'format_slack_blocks',
    'post_slack_digest',
    'run_daily_organic_check',
    'run_unassigned_alert_check',
]
