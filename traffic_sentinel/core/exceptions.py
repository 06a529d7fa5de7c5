"""
Exception types raised by Traffic Sentinel.

The pure channel pipeline raises these and never catches them itself. Jobs let
provider and decoding failures propagate to the API layer, which converts them
into HTTP 500 responses. Delivery failures (NotificationError) are caught by
the jobs and reported as ``emailSent: false``.
"""

from typing import Any, Optional


class SentinelError(Exception):
    """Base class for all Traffic Sentinel errors."""


class MalformedMetricError(SentinelError, ValueError):
    """A provider metric value could not be parsed as an integer."""

    def __init__(self, value: Any, index: int, metric: str = 'metric'):
        self.value = value
        self.index = index
        self.metric = metric
        super().__init__(
            f"Malformed {metric} value {value!r} in provider row {index}"
        )


class MalformedRowError(SentinelError, ValueError):
    """A provider row is missing required dimension or metric values."""

    def __init__(self, index: int, reason: str):
        self.index = index
        self.reason = reason
        super().__init__(f"Malformed provider row {index}: {reason}")


class ProviderFetchError(SentinelError):
    """The analytics provider rejected or failed the report request."""

    def __init__(self, status_code: Optional[int], message: str):
        self.status_code = status_code
        self.message = message
        status = status_code if status_code is not None else 'unknown'
        super().__init__(f"GA4 API error ({status}): {message}")


class CredentialsError(SentinelError):
    """No usable service account credentials are configured."""


class NotificationError(SentinelError):
    """A notification provider failed to accept a message."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
