"""Enumerations module.

Closed sets of values used by the configuration schema and by the
record filter's dispatch.
"""

from timecutoff.models.enums import CutoffAction, RecordAge, TimeFormat

__all__ = [
    "CutoffAction",
    "RecordAge",
    "TimeFormat",
]
