"""JSON-lines host for the time cutoff filter.

Reads one event per line, hands each to the filter as soon as it is
parsed, and writes the survivors back out as JSON lines. Nothing is
buffered: output for a line is produced before the next line is read.

Input lines look like:
    {"tag": "app.logs", "time": 1700000000.25, "record": {"msg": "hi"}}
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TextIO

from pydantic import ValidationError

from record_filter.time_cutoff import TimeCutoffFilter
from timecutoff.models.enums import CutoffAction, RecordAge
from timecutoff.schemas.event import EventSchema

logger = logging.getLogger(__name__)


@dataclass
class StreamStats:
    """Running tally of what happened to the events in a stream."""

    read: int = 0
    rejected: int = 0
    on_time: int = 0
    old: int = 0
    new: int = 0
    passed: int = 0
    replaced: int = 0
    dropped: int = 0

    @property
    def emitted(self) -> int:
        return self.on_time + self.passed + self.replaced

    def summary(self) -> str:
        return (
            f"Read {self.read} events ({self.rejected} rejected): "
            f"{self.on_time} on time, {self.old} old, {self.new} new; "
            f"{self.passed} passed, {self.replaced} replaced, {self.dropped} dropped"
        )


def read_events(
    lines: Iterable[str], stats: StreamStats | None = None
) -> Iterator[EventSchema]:
    """Parse JSON lines into events, skipping lines that don't parse.

    Args:
        lines: Input lines (e.g. an open file).
        stats: Optional tally updated with read/rejected counts.

    Yields:
        Validated events, in input order.
    """
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        if stats is not None:
            stats.read += 1
        try:
            yield EventSchema.model_validate_json(line)
        except ValidationError as e:
            if stats is not None:
                stats.rejected += 1
            errors = "; ".join(err["msg"] for err in e.errors())
            logger.warning(f"Skipping line {line_number}: {errors}")


def filter_stream(
    cutoff_filter: TimeCutoffFilter,
    events: Iterable[EventSchema],
    stats: StreamStats | None = None,
) -> Iterator[EventSchema]:
    """Run each event through the filter and yield what it emits."""
    for event in events:
        now = int(cutoff_filter.clock.now())
        if stats is not None:
            _tally(cutoff_filter, event, now, stats)

        result = cutoff_filter.process(event.tag, event.time, event.record, now=now)
        if result is None:
            continue

        new_time, new_record = result
        if new_time is event.time and new_record is event.record:
            yield event
        else:
            yield EventSchema(tag=event.tag, time=new_time, record=new_record)


def _tally(
    cutoff_filter: TimeCutoffFilter, event: EventSchema, now: int, stats: StreamStats
) -> None:
    """Count the classification and action an event is about to get."""
    config = cutoff_filter.config
    age = cutoff_filter.classify(event.time, now)

    match age:
        case RecordAge.ON_TIME:
            stats.on_time += 1
            return
        case RecordAge.OLD:
            stats.old += 1
            action = config.old_action
        case RecordAge.NEW:
            stats.new += 1
            action = config.new_action

    match action:
        case CutoffAction.PASS:
            stats.passed += 1
        case CutoffAction.REPLACE_TIMESTAMP:
            stats.replaced += 1
        case CutoffAction.DROP:
            stats.dropped += 1


def write_events(events: Iterable[EventSchema], out: TextIO) -> int:
    """Write events as compact JSON lines.

    Returns:
        Number of events written.
    """
    count = 0
    for event in events:
        out.write(
            json.dumps(
                event.model_dump(),
                separators=(",", ":"),
                ensure_ascii=False,
                default=str,
            )
        )
        out.write("\n")
        count += 1
    return count
