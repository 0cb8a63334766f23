"""Command Line Interface for the report pipeline.

Commands:
    report ARCHIVE   Build the statistics report of an export archive.
    settings         Print the effective (masked) configuration.

Exit codes: 0 success, 1 unexpected error, 2 invalid input,
130 interrupted.
"""

import argparse
import asyncio
import json
import logging
import sys
import traceback
from pathlib import Path

from boxdstats.etl.extractors.archive import ReportInputError
from boxdstats.etl.pipeline.orchestrator import build_report
from boxdstats.etl.pipeline.stats import ReportStats
from boxdstats.etl.utils import setup_logger
from boxdstats.settings import get_masked_settings

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INPUT_ERROR = 2
EXIT_INTERRUPTED = 130

JSON_INDENT = 2


# =============================================================================
# ARGUMENT PARSING
# =============================================================================


def _parse_cli_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Arguments (default: sys.argv[1:]).

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        prog="boxdstats",
        description="Statistics report from a Letterboxd data export",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    report = subparsers.add_parser("report", help="Build the report of an export ZIP")
    report.add_argument("archive", type=Path, help="Path to the export ZIP archive")
    report.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write the JSON report to this file (default: stdout)",
    )
    report.add_argument(
        "--no-enrichment",
        action="store_true",
        help="Skip TMDB and Letterboxd lookups",
    )
    report.add_argument(
        "--stats",
        action="store_true",
        help="Print run statistics to stderr",
    )

    subparsers.add_parser("settings", help="Print masked configuration")

    return parser.parse_args(argv)


# =============================================================================
# COMMAND HANDLERS
# =============================================================================


def _write_json(payload: object, output: Path | None) -> None:
    """Write JSON to a file or stdout."""
    text = json.dumps(payload, indent=JSON_INDENT, ensure_ascii=False)
    if output is None:
        print(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    logger.info(f"Report written to {output}")


def _handle_report(args: argparse.Namespace) -> None:
    """Handle the report command.

    Args:
        args: Parsed arguments.
    """
    try:
        archive_bytes = args.archive.read_bytes()
    except OSError as e:
        raise ReportInputError(f"Cannot read {args.archive}: {e.strerror or e}") from e

    stats = ReportStats()
    report = asyncio.run(build_report(archive_bytes, enrich=not args.no_enrichment, stats=stats))
    _write_json(report.to_json_dict(), args.output)

    if args.stats:
        print(json.dumps(stats.to_dict(), indent=JSON_INDENT), file=sys.stderr)


def _handle_settings() -> None:
    """Handle the settings command."""
    print(json.dumps(get_masked_settings(), indent=JSON_INDENT, default=str))


def _execute_cli_command(args: argparse.Namespace) -> None:
    """Execute CLI command based on arguments.

    Args:
        args: Parsed command line arguments.
    """
    if args.command == "settings":
        _handle_settings()
        return

    _handle_report(args)


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Args:
        argv: Arguments (default: sys.argv[1:]).
    """
    setup_logger("boxdstats")
    args = _parse_cli_arguments(argv)
    try:
        _execute_cli_command(args)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(EXIT_INTERRUPTED)
    except ReportInputError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_INPUT_ERROR)
    except Exception as e:
        print(f"\nFATAL ERROR: {e}", file=sys.stderr)
        traceback.print_exc()
        logger.error(f"Report failed: {e}")
        sys.exit(EXIT_ERROR)

    sys.exit(EXIT_OK)


if __name__ == "__main__":
    main()
