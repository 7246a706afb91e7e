"""Pydantic schemas module.

This module contains Pydantic models used for:
- Filter configuration (validated once, then frozen)
- Events exchanged with the JSON-lines stream host
"""

from timecutoff.schemas.event import EventSchema
from timecutoff.schemas.filter_config import (
    DEFAULT_CUTOFF,
    TimeCutoffConfig,
    parse_duration,
)

__all__ = [
    "DEFAULT_CUTOFF",
    "EventSchema",
    "TimeCutoffConfig",
    "parse_duration",
]
