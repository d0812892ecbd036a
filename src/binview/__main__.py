"""
Command line entry point for binview.
"""

import argparse
import curses
import logging
import os
import sys
from typing import List, Optional

from .config import LOG_LEVELS, Settings, load_settings
from .core.encoding import CharEncoding
from .core.source import ByteSource
from .ui.input_handler import InputHandler
from .ui.window import WindowManager

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""

    parser = argparse.ArgumentParser(
        description="binview - Terminal hex viewer with encoded text preview"
    )
    parser.add_argument("file", type=str, help="File to view")
    parser.add_argument(
        "-e", "--encoding",
        type=str,
        help="Text preview encoding (" + ", ".join(e.display_name for e in CharEncoding) + ")"
    )
    parser.add_argument("-w", "--bytes-per-row", type=int, help="Bytes shown per row")
    parser.add_argument("-d", "--decimal", action="store_true", help="Show decimal addresses")
    parser.add_argument("--log-file", type=str, help="Write log messages to this file")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, help="Log level")
    return parser.parse_args(argv)


def apply_args(settings: Settings, args: argparse.Namespace) -> Settings:
    """Override config file settings with command line flags."""

    if args.encoding:
        settings.encoding = CharEncoding.from_name(args.encoding).value
    if args.bytes_per_row:
        if not 1 <= args.bytes_per_row <= 64:
            raise ValueError("Bytes per row must be between 1 and 64")
        settings.bytes_per_row = args.bytes_per_row
    if args.decimal:
        settings.addr_radix = 10
    if args.log_file:
        settings.log_file = args.log_file
    if args.log_level:
        settings.log_level = args.log_level

    return settings


def configure_logging(settings: Settings) -> None:
    """Send log records to the log file; the terminal belongs to curses."""

    if not settings.log_file:
        logging.getLogger().addHandler(logging.NullHandler())
        return

    os.makedirs(os.path.dirname(os.path.abspath(settings.log_file)), exist_ok=True)
    logging.basicConfig(
        filename=settings.log_file,
        level=getattr(logging, settings.log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run(stdscr: 'curses.window', source: ByteSource, settings: Settings) -> None:
    """Main loop inside curses."""

    curses.use_default_colors()
    curses.curs_set(0)
    stdscr.timeout(100)

    window_manager = WindowManager(stdscr, source, settings)
    input_handler = InputHandler(window_manager)

    while True:
        current_height, current_width = stdscr.getmaxyx()
        if (current_height, current_width) != (window_manager.height, window_manager.width):
            window_manager.resize()

        window_manager.refresh_all()

        try:
            ch = stdscr.getch()
            if ch != -1 and not input_handler.handle_input(ch):
                break
        except KeyboardInterrupt:
            break
        except curses.error:
            continue


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the application."""

    args = parse_args(argv)

    try:
        settings = apply_args(load_settings(), args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    configure_logging(settings)

    try:
        source = ByteSource.from_file(args.file)
    except OSError as e:
        print(f"Error loading {args.file}: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info("Opened %s (%d bytes, %s)", args.file, len(source), settings.encoding)

    try:
        with source:
            curses.wrapper(run, source, settings)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
