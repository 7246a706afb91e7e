"""CLI for running the time cutoff filter over JSON-lines event streams."""

from __future__ import annotations

import argparse
import contextlib
import json
import logging
import sys
from collections.abc import Iterator
from datetime import timezone
from pathlib import Path
from typing import Any, TextIO

from pydantic import ValidationError

from record_filter.stream import StreamStats, filter_stream, read_events, write_events
from record_filter.time_cutoff import TimeCutoffFilter
from timecutoff.config import Settings, get_settings
from timecutoff.core.log_config import configure_logging
from timecutoff.models.enums import CutoffAction, TimeFormat
from timecutoff.schemas.filter_config import TimeCutoffConfig

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_CONFIG_ERROR = 2


@contextlib.contextmanager
def _open_input(path: Path | None) -> Iterator[TextIO]:
    if path is None or str(path) == "-":
        yield sys.stdin
    else:
        with path.open(encoding="utf-8") as f:
            yield f


@contextlib.contextmanager
def _open_output(path: Path | None) -> Iterator[TextIO]:
    if path is None or str(path) == "-":
        yield sys.stdout
    else:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yield f


def _filter_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Collect filter options given on the command line."""
    return {
        "old_cutoff": args.old_cutoff,
        "old_action": args.old_action,
        "old_log": args.old_log,
        "new_cutoff": args.new_cutoff,
        "new_action": args.new_action,
        "new_log": args.new_log,
        "source_time_key": args.source_time_key,
        "source_time_format": args.source_time_format,
    }


def _resolve_config(
    settings: Settings, overrides: dict[str, Any]
) -> TimeCutoffConfig | None:
    try:
        return settings.filter_config(**overrides)
    except ValidationError as e:
        logger.error(f"Invalid filter configuration:\n{e}")
        return None


def filter_command(
    settings: Settings,
    overrides: dict[str, Any],
    input_path: Path | None = None,
    output_path: Path | None = None,
    utc: bool = False,
) -> int:
    """Filter a JSON-lines event stream.

    Args:
        settings: Settings loaded from the environment.
        overrides: Filter options from the command line.
        input_path: File to read (default: stdin).
        output_path: File to write (default: stdout).
        utc: Render ISO 8601 times in UTC instead of the local zone.

    Returns:
        Exit code.
    """
    config = _resolve_config(settings, overrides)
    if config is None:
        return EXIT_CONFIG_ERROR

    cutoff_filter = TimeCutoffFilter(config, tz=timezone.utc if utc else None)
    logger.debug(f"Filtering with {cutoff_filter!r}")

    stats = StreamStats()
    with _open_input(input_path) as src, _open_output(output_path) as dst:
        events = read_events(src, stats)
        write_events(filter_stream(cutoff_filter, events, stats), dst)

    logger.info(stats.summary())
    return EXIT_OK


def show_config_command(settings: Settings, overrides: dict[str, Any]) -> int:
    """Print the resolved filter configuration as JSON."""
    config = _resolve_config(settings, overrides)
    if config is None:
        return EXIT_CONFIG_ERROR

    print(json.dumps(config.model_dump(mode="json"), indent=2))
    return EXIT_OK


def _add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    """Options shared by every command that builds a filter configuration."""
    actions = [a.value for a in CutoffAction]

    parser.add_argument(
        "--old-cutoff",
        help='Age beyond which records are "old", e.g. 3600, 90m, 1d',
    )
    parser.add_argument(
        "--old-action",
        choices=actions,
        help='Action for "old" records',
    )
    parser.add_argument(
        "--old-log",
        action=argparse.BooleanOptionalAction,
        default=None,
        help='Log "old" records to the audit logger',
    )
    parser.add_argument(
        "--new-cutoff",
        help='Distance into the future beyond which records are "new"',
    )
    parser.add_argument(
        "--new-action",
        choices=actions,
        help='Action for "new" records',
    )
    parser.add_argument(
        "--new-log",
        action=argparse.BooleanOptionalAction,
        default=None,
        help='Log "new" records to the audit logger',
    )
    parser.add_argument(
        "--source-time-key",
        help="Field that holds the original time after replace_timestamp",
    )
    parser.add_argument(
        "--source-time-format",
        choices=[f.value for f in TimeFormat],
        help="Format of the original time field",
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Modify or drop records that are older or newer than a cutoff"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: TIME_CUTOFF_LOG_LEVEL or INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Filter command
    filter_parser = subparsers.add_parser(
        "filter", help="Filter a JSON-lines event stream"
    )
    filter_parser.add_argument(
        "--input",
        type=Path,
        help="Input file (default: stdin)",
    )
    filter_parser.add_argument(
        "--output",
        type=Path,
        help="Output file (default: stdout)",
    )
    filter_parser.add_argument(
        "--utc",
        action="store_true",
        help="Render ISO 8601 times in UTC instead of the local zone",
    )
    _add_filter_arguments(filter_parser)

    # Show-config command
    show_parser = subparsers.add_parser(
        "show-config", help="Print the resolved filter configuration"
    )
    _add_filter_arguments(show_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_USAGE

    try:
        settings = get_settings()
    except ValidationError as e:
        configure_logging()
        logger.error(f"Invalid settings:\n{e}")
        return EXIT_CONFIG_ERROR

    configure_logging(args.log_level or settings.log_level)
    overrides = _filter_overrides(args)

    if args.command == "filter":
        return filter_command(
            settings,
            overrides,
            input_path=args.input,
            output_path=args.output,
            utc=args.utc,
        )

    elif args.command == "show-config":
        return show_config_command(settings, overrides)

    else:
        parser.print_help()
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
