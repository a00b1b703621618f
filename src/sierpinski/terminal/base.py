"""Abstract base class for terminal control.

The renderer drives the terminal only through this interface, so the
ANSI/termios implementation can be swapped for a recording double in
tests without changing any rendering code.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from sierpinski.domain.models import Color, KeyEvent, ScreenDimension

logger = logging.getLogger(__name__)


class TerminalBackend(ABC):
    """Abstract interface over a character terminal.

    Implementations report failures by raising ``OSError``; the renderer
    maps them onto the ``TerminalError`` hierarchy according to the
    phase in which they occur.

    Example usage::

        term = AnsiTerminal()
        term.enable_raw_mode()
        term.enter_alternate_screen()
        term.move_to(3, 4)
        term.set_foreground(Color.RED)
        term.print("*")
        term.flush()
    """

    # -- mode and screen control ------------------------------------------

    @abstractmethod
    def enable_raw_mode(self) -> None:
        """Disable line buffering and echo on the input device."""
        ...

    @abstractmethod
    def disable_raw_mode(self) -> None:
        """Restore the input settings saved by ``enable_raw_mode``."""
        ...

    @abstractmethod
    def enter_alternate_screen(self) -> None:
        ...

    @abstractmethod
    def leave_alternate_screen(self) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        """Erase the whole screen."""
        ...

    @abstractmethod
    def hide_cursor(self) -> None:
        ...

    @abstractmethod
    def show_cursor(self) -> None:
        ...

    @abstractmethod
    def size(self) -> ScreenDimension:
        """Return the current terminal size in cells."""
        ...

    # -- output ------------------------------------------------------------

    @abstractmethod
    def move_to(self, x: int, y: int) -> None:
        """Move the cursor to column ``x``, row ``y`` (zero-based)."""
        ...

    @abstractmethod
    def set_foreground(self, color: Color) -> None:
        ...

    @abstractmethod
    def print(self, text: str) -> None:
        """Write ``text`` at the cursor position."""
        ...

    @abstractmethod
    def flush(self) -> None:
        """Push all buffered output to the device."""
        ...

    # -- input -------------------------------------------------------------

    @abstractmethod
    def poll(self, timeout: float) -> bool:
        """Block up to ``timeout`` seconds for pending input.

        Returns:
            True if a key can be read without blocking.
        """
        ...

    @abstractmethod
    def read_key(self) -> KeyEvent:
        """Read and decode one keypress. Call only after ``poll`` succeeds."""
        ...

    def draw_char(self, x: int, y: int, symbol: str, color: Color) -> None:
        """Move, set the colour and print ``symbol`` in one call."""
        self.move_to(x, y)
        self.set_foreground(color)
        self.print(symbol)
        self.flush()


class TerminalError(Exception):
    """Base class for terminal failures."""

    def __init__(self, message: str, operation: str = "") -> None:
        super().__init__(message)
        self.operation = operation


class TerminalSetupError(TerminalError):
    """Raised when raw mode, the alternate screen or the cursor cannot be controlled."""


class RenderError(TerminalError):
    """Raised when painting to the terminal fails."""


class InputPollError(TerminalError):
    """Raised when polling or reading keyboard input fails."""
