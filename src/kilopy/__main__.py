"""
Command line entry point for kilopy.
"""

import argparse
import curses
import logging
import sys
from typing import List, Optional

from .core.editor import Editor
from .core.render import TAB_STOP
from .ui.input_handler import HELP_STATUS_MESSAGE, InputHandler
from .ui.window import WindowManager
from .utils.output import render_highlighted

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""

    parser = argparse.ArgumentParser(
        description="kilopy - small terminal text editor with syntax highlighting"
    )
    parser.add_argument(
        "filename",
        nargs="?",
        type=str,
        help="File to open"
    )
    parser.add_argument(
        "--tab-stop",
        type=int,
        default=TAB_STOP,
        help="Width of a tab stop (default: %(default)s)"
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Write debug logs to this file"
    )
    parser.add_argument(
        "--cat",
        action="store_true",
        help="Print the highlighted file to stdout instead of editing it"
    )
    args = parser.parse_args(argv)

    if args.tab_stop < 1:
        parser.error("--tab-stop must be positive")
    if args.cat and not args.filename:
        parser.error("--cat requires a filename")

    return args


def setup_logging(log_file: Optional[str]) -> Optional[logging.Handler]:
    """Send logs to a file; the terminal belongs to curses."""

    package_logger = logging.getLogger('kilopy')
    if not log_file:
        if not any(isinstance(h, logging.NullHandler) for h in package_logger.handlers):
            package_logger.addHandler(logging.NullHandler())
        return None

    handler = logging.FileHandler(log_file, encoding='utf-8')
    handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(levelname)-8s - %(name)-20s - %(message)s"
    ))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)
    return handler


def run(stdscr: 'curses.window', editor: Editor) -> None:
    """Main loop: draw, read one key, apply it."""

    curses.raw()

    window_manager = WindowManager(stdscr, editor)
    input_handler = InputHandler(window_manager)

    if not editor.current_status_message():
        editor.set_status_message(HELP_STATUS_MESSAGE)

    while True:
        if stdscr.getmaxyx() != (window_manager.height, window_manager.width):
            window_manager.resize()

        window_manager.refresh_all()

        ch = stdscr.getch()
        if ch == curses.KEY_RESIZE:
            window_manager.resize()
            continue

        if not input_handler.handle_input(ch):
            break


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the application."""

    args = parse_args(argv)
    setup_logging(args.log_file)

    editor = Editor(tab_stop=args.tab_stop)
    if args.filename:
        editor.open(args.filename)

    if args.cat:
        sys.stdout.write(render_highlighted(editor.buffer))
        return 0

    logger.debug("Starting editor on %s", args.filename or "a new buffer")
    curses.wrapper(run, editor)
    return 0


if __name__ == "__main__":
    sys.exit(main())
