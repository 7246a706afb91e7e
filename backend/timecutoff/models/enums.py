"""Enumerations shared by the filter configuration and the pipeline."""

from enum import StrEnum


class CutoffAction(StrEnum):
    """What to do with a record that falls outside its cutoff window."""

    PASS = "pass"  # Pass record as is
    REPLACE_TIMESTAMP = "replace_timestamp"  # Replace time with "now" and pass
    DROP = "drop"  # Drop record as invalid


class TimeFormat(StrEnum):
    """Encoding of the original time stashed by ``replace_timestamp``."""

    EPOCH = "epoch"  # UNIX time (integer)
    EPOCH_FLOAT = "epoch_float"  # UNIX time (float)
    ISO8601 = "iso8601"  # ISO 8601 datetime (string)


class RecordAge(StrEnum):
    """Classification of a record relative to the current time."""

    OLD = "old"
    NEW = "new"
    ON_TIME = "on_time"
