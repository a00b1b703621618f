"""Command-line interface for sierpinski.

Maps command-line flags onto the settings, builds the run configuration
and hands it to the terminal renderer.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from sierpinski import __version__
from sierpinski.domain.models import MAX_ITERATIONS_LIMIT, REFRESH_RATE_LIMIT_MS

logger = logging.getLogger(__name__)


def _bounded_int(low: int, high: int):
    """argparse type accepting integers in ``[low, high]``."""

    def parse(value: str) -> int:
        try:
            number = int(value)
        except ValueError:
            raise argparse.ArgumentTypeError(f"cannot convert '{value}' to an integer")
        if not low <= number <= high:
            raise argparse.ArgumentTypeError(f"{number} is not in {low}..={high}")
        return number

    return parse


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="sierpinski",
        description="A terminal rendering of Sierpinski's triangle",
    )
    parser.add_argument(
        "-i", "--max-iterations",
        type=_bounded_int(1, MAX_ITERATIONS_LIMIT),
        default=None,
        help="max number of simulation iterations (default 10000)",
    )
    parser.add_argument(
        "-r", "--refresh-rate",
        type=_bounded_int(0, REFRESH_RATE_LIMIT_MS),
        default=None,
        help="delay between iterations in milliseconds (default 1)",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/sierpinski.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the sierpinski CLI.

    Returns:
        The process exit status: 0 after a normal quit, 1 on a terminal
        failure.
    """
    args = parse_args(argv)

    from sierpinski.config.settings import build_config, load_settings
    from sierpinski.renderer.loop import TerminalRenderer
    from sierpinski.terminal import AnsiTerminal, TerminalError
    from sierpinski.utils.logging import hold_console_output, setup_logging

    settings = load_settings(args.config)

    if args.max_iterations is not None:
        settings.render.max_iterations = args.max_iterations
    if args.refresh_rate is not None:
        settings.render.refresh_rate_ms = args.refresh_rate
    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    terminal = AnsiTerminal()
    renderer = TerminalRenderer(
        terminal,
        glyph=settings.render.glyph,
        quit_message=settings.render.quit_message,
        poll_interval=settings.terminal.poll_interval_ms / 1000.0,
    )

    try:
        screen_dim = terminal.size()
    except OSError as e:
        print(f"error: cannot determine terminal size: {e}", file=sys.stderr)
        return 1
    config = build_config(settings, screen_dim)

    logger.info(
        "Rendering %d iterations on a %dx%d screen",
        config.max_iterations, config.screen_dim.width, config.screen_dim.height,
    )
    try:
        with hold_console_output():
            renderer.run(config)
    except TerminalError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
