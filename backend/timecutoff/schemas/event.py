"""Pydantic schema for events read from and written to JSON lines."""

import math
from typing import Any

from pydantic import BaseModel, Field, StrictFloat, StrictInt, field_validator

# Range datetime can render in any UTC offset: years 1-9999, less a day
# of margin on each side.
MIN_EVENT_TIME = -62_135_596_800 + 86_400  # 0001-01-02T00:00:00+00:00
MAX_EVENT_TIME = 253_402_300_799 - 86_400  # 9999-12-30T23:59:59+00:00


class EventSchema(BaseModel):
    """A single tagged, timestamped record.

    Example line:
        {"tag": "app.logs", "time": 1700000000.25, "record": {"msg": "hi"}}
    """

    tag: str = Field(..., description="Routing tag of the stream")
    time: StrictInt | StrictFloat = Field(
        ..., description="Event time in seconds since the epoch"
    )
    record: dict[str, Any] = Field(
        default_factory=dict, description="Record fields, in order"
    )

    @field_validator("time")
    @classmethod
    def _check_time_range(cls, value: int | float) -> int | float:
        # NaN, Infinity and far-off instants can't be classified or formatted
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError(f"Event time out of range: {value!r}")
        if not MIN_EVENT_TIME <= value <= MAX_EVENT_TIME:
            raise ValueError(f"Event time out of range: {value!r}")
        return value
