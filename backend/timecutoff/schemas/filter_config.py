"""Pydantic schema for the time cutoff filter configuration.

The configuration is validated once, when the model is built, and is
frozen afterwards. Invalid values (unknown actions or formats, negative
or unparseable cutoffs, unknown options) raise ``pydantic.ValidationError``
before any record is processed.
"""

import re
from datetime import timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from timecutoff.models.enums import CutoffAction, TimeFormat

DEFAULT_CUTOFF = 86_400.0  # 24 hours

# Durations: bare seconds ("30") or a number with an s/m/h/d suffix ("1.5h")
DURATION_PATTERN = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*([smhd]?)\s*$")

DURATION_UNITS = {
    "": 1,
    "s": 1,
    "m": 60,
    "h": 60 * 60,
    "d": 24 * 60 * 60,
}


def parse_duration(value: Any) -> float:
    """Convert a duration setting to seconds.

    Accepts numbers (already in seconds), ``timedelta`` objects, and
    strings such as ``"90"``, ``"90s"``, ``"15m"``, ``"1.5h"`` or ``"1d"``.

    Raises:
        ValueError: If the value cannot be read as a duration.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, timedelta):
        return value.total_seconds()
    if isinstance(value, str):
        match = DURATION_PATTERN.match(value)
        if match:
            amount, unit = match.groups()
            return float(amount) * DURATION_UNITS[unit]
    raise ValueError(f"Invalid duration: {value!r}")


class TimeCutoffConfig(BaseModel):
    """Settings for classifying and disposing of out-of-window records.

    By default nothing is modified or dropped, but every record more than
    24 hours older or newer than the current time is logged.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # =========================================================================
    # "Old" records
    # =========================================================================
    old_cutoff: float = Field(
        default=DEFAULT_CUTOFF,
        ge=0,
        description='Records older than this many seconds are deemed "old"',
    )
    old_action: CutoffAction = Field(
        default=CutoffAction.PASS,
        description='Action performed on all "old" records',
    )
    old_log: bool = Field(
        default=True,
        description='Log "old" records to the audit logger',
    )

    # =========================================================================
    # "New" records
    # =========================================================================
    new_cutoff: float = Field(
        default=DEFAULT_CUTOFF,
        ge=0,
        description='Records newer than this many seconds are deemed "new"',
    )
    new_action: CutoffAction = Field(
        default=CutoffAction.PASS,
        description='Action performed on all "new" records',
    )
    new_log: bool = Field(
        default=True,
        description='Log "new" records to the audit logger',
    )

    # =========================================================================
    # Original time (replace_timestamp action)
    # =========================================================================
    source_time_key: str = Field(
        default="source_time",
        min_length=1,
        description="Field that will hold the original time",
    )
    source_time_format: TimeFormat = Field(
        default=TimeFormat.ISO8601,
        description="Format of the original time field",
    )

    @field_validator("old_cutoff", "new_cutoff", mode="before")
    @classmethod
    def _parse_cutoff(cls, value: Any) -> float:
        return parse_duration(value)
