"""Timestamp and audit-line formatting for the time cutoff filter."""

from __future__ import annotations

import json
import math
from datetime import datetime, tzinfo
from typing import Any

from timecutoff.models.enums import CutoffAction, RecordAge, TimeFormat

EventTime = int | float

AUDIT_LINE = 'Record caught [{age}, {action}]: "{tag}: {time} {record}".'


def format_iso8601(event_time: EventTime, tz: tzinfo | None = None) -> str:
    """Render an event time as ``YYYY-MM-DDThh:mm:ss±hh:mm``.

    Sub-second digits are dropped, never rounded. With ``tz=None`` the
    host's local zone supplies the offset.
    """
    seconds = math.floor(event_time)
    if tz is None:
        moment = datetime.fromtimestamp(seconds).astimezone()
    else:
        moment = datetime.fromtimestamp(seconds, tz=tz)
    return moment.isoformat(timespec="seconds")


def format_time(
    event_time: EventTime,
    time_format: TimeFormat,
    tz: tzinfo | None = None,
) -> int | float | str:
    """Format an event time for the stashed original-time field.

    Args:
        event_time: Seconds since the epoch.
        time_format: Target encoding.
        tz: Zone for ISO 8601 output (default: local zone).

    Returns:
        Truncated integer seconds, float seconds, or an ISO 8601 string.
    """
    match time_format:
        case TimeFormat.EPOCH:
            return int(event_time)
        case TimeFormat.EPOCH_FLOAT:
            return float(event_time)
        case TimeFormat.ISO8601:
            return format_iso8601(event_time, tz)


def record_to_json(record: dict[str, Any]) -> str:
    """Compact JSON for a record; values JSON can't encode fall back to str()."""
    return json.dumps(record, separators=(",", ":"), ensure_ascii=False, default=str)


def format_audit_line(
    tag: str,
    event_time: EventTime,
    record: dict[str, Any],
    action: CutoffAction,
    age: RecordAge,
    tz: tzinfo | None = None,
) -> str:
    """Build the line logged when a record is caught outside its window.

    The original time is always rendered as ISO 8601, whatever format is
    configured for the stashed field.
    """
    return AUDIT_LINE.format(
        age=age.value,
        action=action.value,
        tag=tag,
        time=format_iso8601(event_time, tz),
        record=record_to_json(record),
    )
