"""
Email delivery collaborator (Resend HTTP API).

Delivery is configured explicitly through an EmailConfig built by the caller;
nothing here reads settings or keeps a client between calls.

send_notification() raises NotificationError on any failure.
deliver_email() is the best-effort wrapper used by the jobs: it logs and
returns False instead of raising, so a delivery failure never invalidates a
detection result.
"""

import logging
from typing import Optional

import httpx

from traffic_sentinel.core.config import EmailConfig
from traffic_sentinel.core.exceptions import NotificationError
from traffic_sentinel.models.schemas import NotificationPayload


logger = logging.getLogger(__name__)


DEFAULT_TIMEOUT_SECONDS: float = 15.0


async def send_notification(
    payload: NotificationPayload,
    config: EmailConfig,
    to: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Optional[str]:
    """
    Send one HTML email through the provider.

    Args:
        payload: Rendered subject and HTML body.
        config: Provider credentials and addresses.
        to: Recipient override (default: config.recipient).
        timeout: Request timeout in seconds.

    Returns:
        The provider message id, when the provider returns one.

    Raises:
        NotificationError: On a non-2xx response or a transport error.
    """
    message = {
        'from': config.sender,
        'to': to or config.recipient,
        'subject': payload.subject,
        'html': payload.body,
    }
    headers = {'Authorization': f"Bearer {config.api_key}"}

    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            resp = await client.post(config.api_url, json=message, headers=headers)
            resp.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise NotificationError(
            f"Email provider returned status {e.response.status_code}: {e.response.text}",
            status_code=e.response.status_code,
        ) from e
    except httpx.RequestError as e:
        raise NotificationError(f"Cannot reach email provider at {config.api_url}") from e

    try:
        return resp.json().get('id')
    except ValueError:
        return None


async def deliver_email(
    payload: NotificationPayload,
    config: Optional[EmailConfig],
) -> bool:
    """
    Best-effort email delivery.

    Returns:
        True when the provider accepted the message; False when email is not
        configured or delivery failed (the failure is logged).
    """
    if config is None:
        logger.info("No email provider configured, email not sent")
        return False

    try:
        message_id = await send_notification(payload, config)
    except NotificationError as e:
        logger.error(f"Failed to send email '{payload.subject}': {e}")
        return False

    logger.info(f"Email sent to {config.recipient} (id={message_id})")
    return True
