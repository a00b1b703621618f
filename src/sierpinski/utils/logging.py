"""Logging setup utilities for sierpinski.

Configures logging for the whole application from the logging section
of the settings. Anything written to stderr while the alternate screen
is active lands in the drawing, so console output can be held back for
the duration of a run with ``hold_console_output``.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from contextlib import contextmanager
from typing import Iterator

from sierpinski.config.settings import LoggingConfig

CONSOLE_HANDLER_NAME = "sierpinski.console"


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Configure the ``sierpinski`` logger.

    Sets up the package logger with the specified level, format, and
    optional file handler. Calling it again replaces the handlers
    installed by the previous call.

    Args:
        config: Logging configuration. If None, uses defaults
                (WARNING level, stderr output).
    """
    if config is None:
        config = LoggingConfig()

    root_logger = logging.getLogger("sierpinski")
    root_logger.setLevel(getattr(logging, config.level.upper(), logging.WARNING))
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(config.format)

    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.set_name(CONSOLE_HANDLER_NAME)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # File handler (optional)
    if config.file:
        file_handler = logging.FileHandler(config.file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.debug("Logging initialized at %s level", config.level)


@contextmanager
def hold_console_output(logger_name: str = "sierpinski") -> Iterator[None]:
    """Buffer console log records until the ``with`` block exits.

    The console handler installed by ``setup_logging`` is swapped for a
    memory buffer that only flushes on close; the buffered records are
    then written to stderr in order. File handlers keep writing
    immediately.
    """
    logger = logging.getLogger(logger_name)
    console = next(
        (h for h in logger.handlers if h.get_name() == CONSOLE_HANDLER_NAME), None
    )
    if console is None:
        yield
        return

    held = logging.handlers.MemoryHandler(
        capacity=sys.maxsize,
        flushLevel=logging.CRITICAL + 1,
        target=console,
        flushOnClose=True,
    )
    logger.removeHandler(console)
    logger.addHandler(held)
    try:
        yield
    finally:
        logger.removeHandler(held)
        logger.addHandler(console)
        held.close()
