"""Main module for teamclock."""

import argparse
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from teamclock import __version__
from teamclock.config import ConfigError, Settings, settings

if TYPE_CHECKING:
    from teamclock.directory import SlackDirectoryClient


def setup_logging(log_file: Path | None, level: str) -> None:
    """Configure logging.

    The TUI owns the terminal, so records go to a file when one is given
    and are discarded otherwise.
    """
    handlers: list[logging.Handler]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers = [logging.FileHandler(log_file, mode="w")]
    else:
        handlers = [logging.NullHandler()]

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )
    if log_file is not None:
        logging.info("teamclock %s starting, logging to %s", __version__, log_file)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="teamclock - coworker local times from your Slack workspace"
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Write a debug log to this file (default: $TEAMCLOCK_LOG_FILE)",
    )
    parser.add_argument(
        "--log-level",
        help="Log level (default: $TEAMCLOCK_LOG_LEVEL or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    list_parser = subparsers.add_parser(
        "list",
        help="Print the roster once and exit",
    )
    list_parser.add_argument(
        "--search",
        "-s",
        default="",
        help="Only show people whose name, username or timezone contains TERM",
        metavar="TERM",
    )

    return parser.parse_args(argv)


def build_client(config: Settings) -> "SlackDirectoryClient":
    """Create the directory client.

    Raises:
        ConfigError: If no token is configured.
    """
    from teamclock.directory import SlackDirectoryClient

    return SlackDirectoryClient(
        config.require_slack_token(),
        base_url=config.slack_api_url,
        timeout=config.http_timeout,
    )


def cmd_list(args: argparse.Namespace, config: Settings) -> int:
    """Fetch the roster once and print it as a table."""
    from rich.console import Console
    from rich.table import Table

    from teamclock.directory import FetchError
    from teamclock.models import filter_roster
    from teamclock.tui.presentation import DisplayConfig, build_rows

    try:
        client = build_client(config)
        roster = client.fetch_roster()
    except (ConfigError, FetchError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    display = DisplayConfig()
    table = Table(title=display.title, title_style=display.title_style)
    for column in display.columns:
        table.add_column(column.title)
    for row in build_rows(filter_roster(roster, args.search), datetime.now(UTC)):
        table.add_row(*row)

    Console().print(table)
    return 0


def cmd_tui(args: argparse.Namespace, config: Settings) -> int:
    """Launch the TUI application."""
    from teamclock.tui.app import TeamClockApp

    client = None
    config_error = None
    try:
        client = build_client(config)
    except ConfigError as e:
        config_error = str(e)

    app = TeamClockApp(client, config_error=config_error)
    try:
        app.run()
    except Exception as e:
        logging.exception("Failed to start the terminal UI")
        print(f"Error: could not start the terminal UI: {e}", file=sys.stderr)
        return 1
    return app.return_code or 0


def main(argv: list[str] | None = None) -> None:
    """Entry point for the teamclock application."""
    args = parse_args(argv)

    setup_logging(
        args.log_file or settings.log_file,
        args.log_level or settings.log_level,
    )

    if args.command == "list":
        sys.exit(cmd_list(args, settings))
    else:
        sys.exit(cmd_tui(args, settings))


if __name__ == "__main__":
    main()
