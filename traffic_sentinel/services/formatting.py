"""
Notification formatting for Traffic Sentinel reports.

Pure functions rendering detection results into NotificationPayload
(subject + HTML body). They make no delivery decisions: whether and where a
payload is sent is the calling job's responsibility.

Reports:
    - Unassigned anomaly report: one section per alert
    - Daily organic report: normal summary when organic traffic exists
    - No-organic alert: warning when organic sessions are at or below the guard
"""

from datetime import date
from typing import List, Sequence

from traffic_sentinel.models.enums import AlertType
from traffic_sentinel.models.schemas import (
    Alert,
    NotificationPayload,
    OrganicTrafficSummary,
)


# =============================================================================
# Shared Fragments
# =============================================================================

_WRAPPER = (
    '<div style="font-family: Arial, sans-serif; padding: 20px; max-width: 600px;">'
    '{content}'
    '</div>'
)

_TEST_NOTICE = (
    "<p><strong>This is a test</strong> - no real problem has been detected.</p>"
)

_FOOTER = (
    '<div style="margin-top: 30px; padding-top: 20px; border-top: 1px solid #eee; '
    'font-size: 12px; color: #666;">'
    "<p>This alert is generated automatically by Traffic Sentinel.</p>"
    "{test_notice}"
    "</div>"
)


def _box(color: str, background: str, content: str) -> str:
    return (
        f'<div style="margin-bottom: 20px; padding: 15px; '
        f'border-left: 4px solid {color}; background-color: {background};">'
        f"{content}</div>"
    )


def _date_label(report_date: date) -> str:
    return report_date.strftime('%Y-%m-%d')


def _footer(is_test: bool) -> str:
    return _FOOTER.format(test_notice=_TEST_NOTICE if is_test else "")


# =============================================================================
# Unassigned Anomaly Report
# =============================================================================


def describe_alert(alert: Alert) -> List[str]:
    """
    Plain-text evidence lines for one alert.

    Shared by the HTML email and the Slack digest so both channels report the
    same numbers.
    """
    if alert.type == AlertType.SIGNIFICANT_INCREASE:
        previous = alert.dates.previous
        current = alert.dates.current
        return [
            f"Previous period ({previous.start} to {previous.end}): {alert.previousAvg}%",
            f"Current period ({current.start} to {current.end}): {alert.currentAvg}%",
        ]
    if alert.type == AlertType.INCREASING_TREND:
        return [f"{point.date}: {point.percentage}%" for point in alert.data]
    if alert.type == AlertType.HIGH_UNASSIGNED_DAY:
        return [
            f"{alert.day.date}: {alert.day.percentage}% ({alert.day.sessions} sessions)"
        ]
    return []


def format_unassigned_alert_email(
    alerts: Sequence[Alert],
    report_date: date,
    window_days: int,
    is_test: bool = False,
) -> NotificationPayload:
    """
    Render the unassigned anomaly report.

    Args:
        alerts: Alerts returned by detect_anomalies(); expected non-empty.
        report_date: Date shown in the subject line.
        window_days: Number of days analysed, shown in the introduction.
        is_test: Append the test-mode notice.

    Returns:
        NotificationPayload with subject and HTML body.
    """
    count = len(alerts)
    noun = "alert" if count == 1 else "alerts"
    subject = (
        f"⚠️ Unassigned traffic: {count} {noun} - {_date_label(report_date)}"
    )

    sections = []
    for alert in alerts:
        items = "".join(f"<li>{line}</li>" for line in describe_alert(alert))
        sections.append(_box(
            "#f44336",
            "#ffebee",
            f'<h3 style="margin-top: 0; color: #d32f2f;">{alert.message}</h3>'
            f"<ul>{items}</ul>",
        ))

    content = (
        '<h2 style="color: #d32f2f;">⚠️ Unassigned traffic alert</h2>'
        f"<p>Analysis of the last {window_days} days found {count} {noun} "
        f"on the share of unassigned traffic.</p>"
        + "".join(sections)
        + "<p>We recommend checking:</p>"
        "<ul>"
        "<li>That UTM parameters are present on campaign links</li>"
        "<li>That the analytics tag fires before redirects and consent banners</li>"
        "</ul>"
        + _footer(is_test)
    )
    return NotificationPayload(subject=subject, body=_WRAPPER.format(content=content))


# =============================================================================
# Daily Organic Traffic Report
# =============================================================================


def format_daily_report_email(
    summary: OrganicTrafficSummary,
    report_date: date,
    is_test: bool = False,
) -> NotificationPayload:
    """Render the normal daily report (organic traffic present)."""
    subject = f"\U0001f4ca Daily traffic report - {_date_label(report_date)}"
    content = (
        '<h2 style="color: #2e7d32;">\U0001f4ca Daily traffic report</h2>'
        "<p>Here is your daily summary of website traffic:</p>"
        + _box(
            "#4caf50",
            "#e8f5e9",
            f'<h3 style="margin-top: 0; color: #2e7d32;">'
            f"{summary.totalSessions} sessions in total "
            f"({summary.organicSessions} organic)</h3>"
            "<ul>"
            f"<li>Total sessions: {summary.totalSessions}</li>"
            f"<li>Organic sessions: {summary.organicSessions}</li>"
            "</ul>"
            '<p>Tracking status: <strong style="color: #2e7d32">'
            "✓ Operational</strong></p>",
        )
        + (_TEST_NOTICE if is_test else "")
    )
    return NotificationPayload(subject=subject, body=_WRAPPER.format(content=content))


def format_no_organic_alert_email(
    summary: OrganicTrafficSummary,
    report_date: date,
    is_test: bool = False,
) -> NotificationPayload:
    """Render the "no organic traffic" alert."""
    subject = (
        f"⚠️ Traffic alert - No organic traffic - {_date_label(report_date)}"
    )
    content = (
        '<h2 style="color: #d32f2f;">⚠️ Traffic alert</h2>'
        "<p>No organic traffic has been detected on your website.</p>"
        + _box(
            "#f44336",
            "#ffebee",
            '<h3 style="margin-top: 0; color: #d32f2f;">No organic traffic detected</h3>'
            "<ul>"
            f"<li>Total sessions: {summary.totalSessions}</li>"
            f"<li>Organic sessions: {summary.organicSessions}</li>"
            "</ul>",
        )
        + "<p>We recommend checking:</p>"
        "<ul>"
        "<li>That your site is correctly indexed by search engines</li>"
        "<li>That the analytics tag is correctly installed</li>"
        "</ul>"
        + _footer(is_test)
    )
    return NotificationPayload(subject=subject, body=_WRAPPER.format(content=content))


def format_organic_report(
    summary: OrganicTrafficSummary,
    report_date: date,
    is_test: bool = False,
) -> NotificationPayload:
    """Pick the daily report or the no-organic alert from the summary."""
    if summary.hasOrganic:
        return format_daily_report_email(summary, report_date, is_test)
    return format_no_organic_alert_email(summary, report_date, is_test)
