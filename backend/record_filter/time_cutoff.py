"""Time cutoff filter: modify or drop records that are too old or too new.

Each record is compared with the current time. Records older than
``old_cutoff`` seconds are "old", records more than ``new_cutoff`` seconds
in the future are "new", and everything else is on time. On-time records
always pass untouched; old and new records get the action configured for
their bucket:

- pass: emit the record as is
- replace_timestamp: emit a copy stamped with the current time, with the
  original time stored under ``source_time_key``
- drop: emit nothing

When logging is enabled for a bucket, a "Record caught" line is written
to the audit logger before the action is applied, so dropped records
still leave a trace.
"""

from __future__ import annotations

import logging
from datetime import tzinfo
from typing import Any

from record_filter.clock import Clock, SystemClock
from record_filter.formatting import EventTime, format_audit_line, format_time
from timecutoff.core.log_config import get_audit_logger
from timecutoff.models.enums import CutoffAction, RecordAge
from timecutoff.schemas.filter_config import TimeCutoffConfig

logger = logging.getLogger(__name__)

Record = dict[str, Any]
FilterResult = tuple[EventTime, Record]


class TimeCutoffFilter:
    """Classifies records by event time and applies the configured action.

    The filter holds no per-record state: the configuration is frozen and
    the clock and audit logger are only read from, so one instance can be
    shared across threads.

    Example usage:
        flt = TimeCutoffFilter(TimeCutoffConfig(old_cutoff="1h", old_action="drop"))
        result = flt.process("app.logs", event_time, {"msg": "hi"})
        if result is not None:
            new_time, new_record = result
    """

    def __init__(
        self,
        config: TimeCutoffConfig | None = None,
        clock: Clock | None = None,
        audit_logger: logging.Logger | None = None,
        tz: tzinfo | None = None,
    ) -> None:
        """Initialize the filter.

        Args:
            config: Validated configuration (default: all defaults).
            clock: Source of the current time (default: system clock).
            audit_logger: Receives "Record caught" lines
                (default: the time_cutoff.audit logger).
            tz: Zone for ISO 8601 rendering (default: local zone).
        """
        self.config = config or TimeCutoffConfig()
        self.clock = clock or SystemClock()
        self.audit_logger = audit_logger or get_audit_logger()
        self.tz = tz

    @classmethod
    def from_options(cls, **options: Any) -> TimeCutoffFilter:
        """Build a filter from raw option values.

        Raises:
            pydantic.ValidationError: If the options are invalid.
        """
        return cls(TimeCutoffConfig(**options))

    def classify(self, event_time: EventTime, now: int | None = None) -> RecordAge:
        """Decide whether a record is old, new, or on time.

        Both times are truncated to whole seconds and the comparisons are
        strict: a record exactly ``old_cutoff`` seconds old is on time.
        """
        if now is None:
            now = int(self.clock.now())
        event_secs = int(event_time)

        if event_secs < now - self.config.old_cutoff:
            return RecordAge.OLD
        if event_secs > now + self.config.new_cutoff:
            return RecordAge.NEW
        return RecordAge.ON_TIME

    def process(
        self,
        tag: str,
        event_time: EventTime,
        record: Record,
        now: int | None = None,
    ) -> FilterResult | None:
        """Filter a single record.

        Args:
            tag: Routing tag of the record's stream (only used for logging).
            event_time: Event time in seconds since the epoch.
            record: Record fields. Never modified.
            now: Classification time in whole seconds (default: read the clock).
                A replaced timestamp is always read fresh from the clock.

        Returns:
            (event_time, record) to emit, or None if the record is dropped.
        """
        age = self.classify(event_time, now)

        match age:
            case RecordAge.OLD:
                return self._process_record(
                    tag,
                    event_time,
                    record,
                    self.config.old_log,
                    self.config.old_action,
                    age,
                )
            case RecordAge.NEW:
                return self._process_record(
                    tag,
                    event_time,
                    record,
                    self.config.new_log,
                    self.config.new_action,
                    age,
                )
            case RecordAge.ON_TIME:
                return event_time, record

    # =========================================================================
    # Dispositions
    # =========================================================================

    def _process_record(
        self,
        tag: str,
        event_time: EventTime,
        record: Record,
        do_log: bool,
        action: CutoffAction,
        age: RecordAge,
    ) -> FilterResult | None:
        if do_log:
            self._log_record(tag, event_time, record, action, age)

        match action:
            case CutoffAction.PASS:
                return event_time, record
            case CutoffAction.REPLACE_TIMESTAMP:
                return self._replace_timestamp(event_time, record)
            case CutoffAction.DROP:
                return None

    def _replace_timestamp(self, event_time: EventTime, record: Record) -> FilterResult:
        """Stamp a copy of the record with the current time.

        The original time goes into ``source_time_key``, encoded per
        ``source_time_format``.
        """
        new_time = self.clock.now()
        new_record = dict(record)
        new_record[self.config.source_time_key] = format_time(
            event_time, self.config.source_time_format, self.tz
        )
        return new_time, new_record

    def _log_record(
        self,
        tag: str,
        event_time: EventTime,
        record: Record,
        action: CutoffAction,
        age: RecordAge,
    ) -> None:
        # A failing audit sink must not change what happens to the record
        try:
            line = format_audit_line(tag, event_time, record, action, age, self.tz)
            self.audit_logger.warning(line)
        except Exception as e:
            logger.error(f"Failed to write audit line for tag {tag!r}: {e}")

    def __repr__(self) -> str:
        return f"TimeCutoffFilter({self.config!r}, clock={self.clock!r})"
