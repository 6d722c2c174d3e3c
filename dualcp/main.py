"""Main entry point for dualcp."""

import argparse
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from dualcp.controller import DEFAULT_STATUS_TICKS, AppController, PaneFocus
from dualcp.copy_engine import ENGINES, make_copy_engine
from dualcp.listing import normalize_path

console = Console()


@dataclass
class BrowserConfig:
    """Startup configuration."""
    left_root: Path
    right_root: Path
    left_label: str = "Left"
    right_label: str = "Right"
    status_ticks: int = DEFAULT_STATUS_TICKS
    engine: str = "cp"
    refresh_after_transfer: bool = True
    debug: bool = False
    log_file: str = "debug.log"


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def parse_arguments(argv: Optional[List[str]] = None) -> BrowserConfig:
    """Parse command-line arguments.

    Args:
        argv: Argument list, defaults to sys.argv[1:]

    Returns:
        BrowserConfig with parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="dualcp",
        description="📁 Dual-pane terminal file browser with one-key copy between panes",
        usage="dualcp [--engine cp|python] [--lazy-refresh] [--debug] left_root right_root"
    )

    parser.add_argument("left_root", help="Directory shown in the left pane")
    parser.add_argument("right_root", help="Directory shown in the right pane")
    parser.add_argument(
        "--left-label",
        default="Left",
        metavar="label",
        help="Title of the left pane (default: Left)"
    )
    parser.add_argument(
        "--right-label",
        default="Right",
        metavar="label",
        help="Title of the right pane (default: Right)"
    )
    parser.add_argument(
        "--status-ticks",
        type=_positive_int,
        default=DEFAULT_STATUS_TICKS,
        metavar="n",
        help=f"Key presses a status message stays visible (default: {DEFAULT_STATUS_TICKS})"
    )
    parser.add_argument(
        "--engine",
        choices=sorted(ENGINES),
        default="cp",
        help="Copy engine: 'cp' runs cp -r, 'python' copies in-process (default: cp)"
    )
    parser.add_argument(
        "--lazy-refresh",
        action="store_true",
        help="Do not re-list the destination pane after a transfer"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to the log file"
    )
    parser.add_argument(
        "--log-file",
        default="debug.log",
        metavar="path",
        help="Log file used with --debug (default: debug.log)"
    )

    args = parser.parse_args(argv)

    roots = []
    for side, raw in (("left", args.left_root), ("right", args.right_root)):
        root = normalize_path(raw)
        if not root.is_dir():
            parser.error(f"❌ {side} root is not a directory: {raw}")
        roots.append(root)

    return BrowserConfig(
        left_root=roots[0],
        right_root=roots[1],
        left_label=args.left_label,
        right_label=args.right_label,
        status_ticks=args.status_ticks,
        engine=args.engine,
        refresh_after_transfer=not args.lazy_refresh,
        debug=args.debug,
        log_file=args.log_file
    )


def configure_logging(config: BrowserConfig):
    """Send logs to the log file with --debug, otherwise keep the terminal quiet."""
    if config.debug:
        logging.basicConfig(
            filename=config.log_file,
            level=logging.DEBUG,
            format='%(asctime)s - %(levelname)s - %(message)s',
            force=True
        )
    else:
        logging.basicConfig(level=logging.CRITICAL, force=True)


def build_controller(config: BrowserConfig) -> AppController:
    return AppController(
        config.left_root,
        config.right_root,
        engine=make_copy_engine(config.engine),
        labels={PaneFocus.LEFT: config.left_label, PaneFocus.RIGHT: config.right_label},
        status_ticks=config.status_ticks,
        refresh_after_transfer=config.refresh_after_transfer
    )


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    from dualcptui.ui import DualPaneBrowser, display_transfer_summary

    config = parse_arguments(argv)
    configure_logging(config)
    logging.debug(f"Starting with {config}")

    controller = build_controller(config)
    browser = DualPaneBrowser(controller)
    browser.run()

    display_transfer_summary(controller.transfer_records, console)


if __name__ == "__main__":
    main()
