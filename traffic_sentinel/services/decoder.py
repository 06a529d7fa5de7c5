"""
Provider row decoding for GA4 channel reports.

Converts raw Data API report rows into typed ChannelRow records. Each raw row
holds two dimension values (channel label, date in YYYYMMDD form) and two
metric values (sessions, active users) encoded as decimal-integer strings:

    {
        "dimensionValues": [{"value": "Unassigned"}, {"value": "20250301"}],
        "metricValues": [{"value": "42"}, {"value": "37"}]
    }

No computation happens here. Dates are reformatted to YYYY-MM-DD by fixed
offset slicing without calendar validation, so a malformed date string is
carried through as-is. A metric that is not an integer aborts the whole pass
with MalformedMetricError.
"""

from typing import Any, Dict, Iterable, List

from traffic_sentinel.core.exceptions import MalformedMetricError, MalformedRowError
from traffic_sentinel.models.schemas import ChannelRow


def format_report_date(raw_date: str) -> str:
    """
    Reformat a YYYYMMDD provider date as YYYY-MM-DD.

    Example:
        >>> format_report_date("20250301")
        '2025-03-01'
    """
    return f"{raw_date[0:4]}-{raw_date[4:6]}-{raw_date[6:8]}"


def parse_metric(value: Any, index: int, metric: str) -> int:
    """
    Parse a non-negative decimal-integer metric string.

    Only strings of ASCII digits are accepted: signs, underscores, whitespace,
    floats and booleans raise MalformedMetricError.
    """
    if not isinstance(value, str) or not (value.isascii() and value.isdigit()):
        raise MalformedMetricError(value, index, metric)
    return int(value)


def _values(row: Dict[str, Any], key: str, needed: int, index: int) -> List[str]:
    try:
        values = [item['value'] for item in row[key]]
    except (KeyError, TypeError) as e:
        raise MalformedRowError(index, f"missing {key}") from e
    if len(values) < needed:
        raise MalformedRowError(
            index, f"expected {needed} {key}, got {len(values)}"
        )
    return values


def decode_row(row: Dict[str, Any], index: int = 0) -> ChannelRow:
    """
    Decode one provider row into a ChannelRow.

    Args:
        row: Raw report row with dimensionValues [channel, date] and
            metricValues [sessions, users].
        index: Position of the row in the report, used in error messages.

    Raises:
        MalformedRowError: If dimension or metric values are missing.
        MalformedMetricError: If sessions or users is not an integer string.
    """
    channel, raw_date = _values(row, 'dimensionValues', 2, index)[:2]
    sessions_value, users_value = _values(row, 'metricValues', 2, index)[:2]

    return ChannelRow(
        channel=channel,
        date=format_report_date(raw_date),
        sessions=parse_metric(sessions_value, index, 'sessions'),
        users=parse_metric(users_value, index, 'users'),
    )


def decode_rows(rows: Iterable[Dict[str, Any]]) -> List[ChannelRow]:
    """Decode a sequence of provider rows, preserving their order."""
    return [decode_row(row, index) for index, row in enumerate(rows)]
