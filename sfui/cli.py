"""SFUI CLI - entry point for the `sfui` command."""

import argparse
import logging
import sys

from rich.console import Console
from rich.markup import escape

from . import __version__
from .app import run
from .config import AppConfig
from .exceptions import ConfigError, SfuiError
from .poller import DEFAULT_TICK_RATE
from .widgets import (
    DEFAULT_BODY,
    DEFAULT_BORDER_COLOR,
    DEFAULT_TEXT_COLOR,
    DEFAULT_TITLE,
    PALETTE,
)

logger = logging.getLogger(__name__)

console = Console(stderr=True)

EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sfui",
        description="Minimal terminal UI shell: one panel, press q to quit",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sfui                                  # Hello World panel, 200 ms ticks
  sfui --tick-rate 50                   # Faster heartbeat
  sfui --title Status --text "All good" --border-color green
  sfui -v --log-file sfui.log           # Debug logging to a file
        """,
    )
    parser.add_argument("--version", "-V", action="version", version=f"sfui {__version__}")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log debug messages"
    )
    parser.add_argument(
        "--log-file", metavar="PATH", help="Write log records to PATH (default: none, or stderr with -v)"
    )
    parser.add_argument(
        "--tick-rate",
        type=int,
        metavar="MS",
        default=int(DEFAULT_TICK_RATE * 1000),
        help="Milliseconds between ticks (default: %(default)s)",
    )
    parser.add_argument("--title", default=DEFAULT_TITLE, help="Panel title")
    parser.add_argument("--text", default=DEFAULT_BODY, help="Centered panel text")
    parser.add_argument(
        "--border-color", choices=PALETTE, default=DEFAULT_BORDER_COLOR, help="Border color"
    )
    parser.add_argument(
        "--text-color", choices=PALETTE, default=DEFAULT_TEXT_COLOR, help="Text color"
    )
    return parser


def configure_logging(config: AppConfig) -> None:
    """
    Send log records to the log file if one is given.

    Without a log file records are dropped, unless --verbose asks for them
    on stderr. Plain runs never write over the full-screen display.
    """
    level = logging.DEBUG if config.verbose else logging.WARNING
    if config.log_file is not None:
        try:
            handler = logging.FileHandler(config.log_file)
        except OSError as e:
            raise ConfigError(f"cannot open log file {config.log_file}: {e}") from e
    elif config.verbose:
        handler = logging.StreamHandler()
    else:
        handler = logging.NullHandler()

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(threadName)s %(name)s: %(message)s",
        handlers=[handler],
        force=True,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = AppConfig.from_args(args)
        config.validate()
        configure_logging(config)
        return run(config)
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED
    except SfuiError as e:
        # Reported once, on the console below
        logger.debug(f"sfui failed: {e!r}")
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
