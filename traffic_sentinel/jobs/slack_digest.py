"""
Slack digest notifications for unassigned traffic alerts.

Optional second notification channel next to email. When SLACK_WEBHOOK_URL is
configured, each alert run posts one Block Kit message summarising the alerts
with the same evidence lines as the email.

Delivery is best effort: failures are logged and reported as False, never
raised, so they do not affect the detection result.

Dependencies:
    - slack-sdk (WebhookClient)
"""

import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from slack_sdk.webhook import WebhookClient

from traffic_sentinel.models.schemas import Alert
from traffic_sentinel.services.formatting import describe_alert


logger = logging.getLogger(__name__)


def format_slack_blocks(
    alerts: Sequence[Alert],
    report_date: date,
    window_days: int,
    is_test: bool = False,
) -> List[Dict[str, Any]]:
    """
    Format unassigned alerts into a Slack Block Kit message.

    The message includes:
    - Header with the report date
    - One section per alert: message in bold, evidence lines below
    - Footer with generation timestamp

    Args:
        alerts: Alerts to report.
        report_date: Date of the report.
        window_days: Number of days analysed.
        is_test: Mark the digest as a test run.

    Returns:
        List of Slack Block Kit block dicts ready to send via WebhookClient.
    """
    blocks: List[Dict[str, Any]] = []

    date_str = report_date.strftime('%B %d, %Y')
    blocks.append({
        "type": "header",
        "text": {
            "type": "plain_text",
            "text": f"⚠️ Unassigned traffic alerts - {date_str}",
            "emoji": True
        }
    })

    blocks.append({
        "type": "section",
        "text": {
            "type": "mrkdwn",
            "text": f"*{len(alerts)}* alert(s) over the last *{window_days}* days"
        }
    })

    blocks.append({"type": "divider"})

    for alert in alerts:
        evidence = "\n".join(f"• {line}" for line in describe_alert(alert))
        blocks.append({
            "type": "section",
            "text": {
                "type": "mrkdwn",
                "text": f"*{alert.message}*\n{evidence}"
            }
        })

    timestamp = datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S UTC')
    footer = f"Generated at {timestamp} | Traffic Sentinel"
    if is_test:
        footer += " | test run"
    blocks.append({
        "type": "context",
        "elements": [
            {
                "type": "mrkdwn",
                "text": footer
            }
        ]
    })

    return blocks


def post_slack_digest(
    blocks: List[Dict[str, Any]],
    webhook_url: Optional[str],
    text: str = "Unassigned traffic alerts",
) -> bool:
    """
    Post a Block Kit message to the configured webhook.

    Args:
        blocks: Blocks from format_slack_blocks().
        webhook_url: Slack incoming webhook URL; nothing is sent when None.
        text: Fallback text for notifications.

    Returns:
        True when Slack answered 200, False otherwise.
    """
    if not webhook_url:
        return False

    try:
        client = WebhookClient(webhook_url)
        response = client.send(text=text, blocks=blocks)
    except Exception:
        logger.exception("Failed to send Slack digest")
        return False

    if response.status_code != 200:
        logger.error(
            f"Slack API returned status {response.status_code}: {response.body}"
        )
        return False

    logger.info("Slack digest sent")
    return True
