"""Logging setup for the filter and its audit trail.

Interventions on out-of-window records are written to a dedicated
logger so operators can route them separately from diagnostics.
"""

import logging

AUDIT_LOGGER_NAME = "time_cutoff.audit"

LOG_FORMAT = "%(levelname)-5.5s [%(name)s] %(message)s"


def get_audit_logger() -> logging.Logger:
    """Return the logger that receives "Record caught" lines."""
    return logging.getLogger(AUDIT_LOGGER_NAME)


def configure_logging(level: str | int = logging.INFO) -> None:
    """Configure root logging once for command-line use.

    Args:
        level: Level name ("DEBUG", "info", ...) or numeric level.

    Raises:
        ValueError: If the level name is unknown.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = resolved

    logging.basicConfig(level=level, format=LOG_FORMAT)
