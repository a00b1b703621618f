"""ANSI escape sequence terminal backend for POSIX systems.

Uses termios/tty for raw input mode, select() for timed input polling
and CSI escape sequences for everything drawn on screen.
"""

from __future__ import annotations

import logging
import os
import select
import sys
import termios
import tty
from typing import TextIO

from sierpinski.domain.models import KEY_ESCAPE, KEY_UNKNOWN, Color, KeyEvent, ScreenDimension
from sierpinski.terminal.base import TerminalBackend

logger = logging.getLogger(__name__)

CSI = "\x1b["

ENTER_ALTERNATE_SCREEN = f"{CSI}?1049h"
LEAVE_ALTERNATE_SCREEN = f"{CSI}?1049l"
RESET_ATTRIBUTES = f"{CSI}0m"
CLEAR_SCREEN = f"{CSI}2J"
HIDE_CURSOR = f"{CSI}?25l"
SHOW_CURSOR = f"{CSI}?25h"

FOREGROUND_CODES: dict[Color, int] = {
    Color.RED: 31,
    Color.GREEN: 32,
    Color.YELLOW: 33,
    Color.BLUE: 34,
    Color.MAGENTA: 35,
    Color.CYAN: 36,
    Color.WHITE: 37,
}

# How long to wait for the rest of an escape sequence after a lone ESC byte
ESCAPE_SEQUENCE_TIMEOUT = 0.01


class AnsiTerminal(TerminalBackend):
    """Controls the process's controlling terminal through stdin/stdout."""

    def __init__(
        self,
        input_fd: int | None = None,
        output: TextIO | None = None,
    ) -> None:
        self._input_fd = sys.stdin.fileno() if input_fd is None else input_fd
        self._output = sys.stdout if output is None else output
        self._saved_attrs: list | None = None

    @property
    def is_raw(self) -> bool:
        return self._saved_attrs is not None

    def enable_raw_mode(self) -> None:
        """Save the current termios attributes and switch to raw mode."""
        if self._saved_attrs is not None:
            return
        try:
            saved = termios.tcgetattr(self._input_fd)
            tty.setraw(self._input_fd)
        except termios.error as e:
            raise OSError(f"Cannot enable raw mode: {e}") from e
        self._saved_attrs = saved
        logger.debug("Raw mode enabled on fd %d", self._input_fd)

    def disable_raw_mode(self) -> None:
        """Restore the attributes saved by ``enable_raw_mode``."""
        if self._saved_attrs is None:
            return
        try:
            termios.tcsetattr(self._input_fd, termios.TCSADRAIN, self._saved_attrs)
        except termios.error as e:
            raise OSError(f"Cannot disable raw mode: {e}") from e
        self._saved_attrs = None
        logger.debug("Raw mode disabled on fd %d", self._input_fd)

    def enter_alternate_screen(self) -> None:
        self._execute(ENTER_ALTERNATE_SCREEN)

    def leave_alternate_screen(self) -> None:
        self._execute(RESET_ATTRIBUTES + LEAVE_ALTERNATE_SCREEN)

    def clear(self) -> None:
        self._execute(CLEAR_SCREEN)

    def hide_cursor(self) -> None:
        self._execute(HIDE_CURSOR)

    def show_cursor(self) -> None:
        self._execute(SHOW_CURSOR)

    def size(self) -> ScreenDimension:
        columns, lines = os.get_terminal_size(self._output.fileno())
        return ScreenDimension(width=columns, height=lines)

    def move_to(self, x: int, y: int) -> None:
        # CSI positions are one-based, row first
        self._output.write(f"{CSI}{y + 1};{x + 1}H")

    def set_foreground(self, color: Color) -> None:
        self._output.write(f"{CSI}{FOREGROUND_CODES[color]}m")

    def print(self, text: str) -> None:
        self._output.write(text)

    def flush(self) -> None:
        self._output.flush()

    def poll(self, timeout: float) -> bool:
        try:
            readable, _, _ = select.select([self._input_fd], [], [], timeout)
        except ValueError as e:
            raise OSError(f"Cannot poll input: {e}") from e
        return bool(readable)

    def read_key(self) -> KeyEvent:
        """Read one keypress from the input fd.

        A lone ESC byte is the Escape key; ESC followed immediately by
        more bytes is an escape sequence (arrows, function keys) and is
        reported as ``"Unknown"``. Only the sequence itself is consumed;
        keys typed after it stay buffered.
        """
        lead = self._read(1)
        if lead == b"\x1b":
            if not self.poll(ESCAPE_SEQUENCE_TIMEOUT):
                return KeyEvent(code=KEY_ESCAPE)
            if self._skip_escape_sequence() == b"\x1b":
                return KeyEvent(code=KEY_ESCAPE)
            return KeyEvent(code=KEY_UNKNOWN)

        data = lead + self._read_continuation(lead[0])
        return KeyEvent(code=data.decode("utf-8", errors="replace"))

    def _execute(self, sequence: str) -> None:
        """Write a control sequence and flush it immediately."""
        self._output.write(sequence)
        self._output.flush()

    def _skip_escape_sequence(self) -> bytes:
        """Consume the bytes of a CSI or SS3 sequence after its ESC byte.

        CSI (``ESC [``) runs up to a final byte in 0x40-0x7E, SS3
        (``ESC O``) is followed by exactly one byte. Any other byte is an
        Alt-modified key and is consumed on its own. Returns the byte
        that followed ESC.
        """
        introducer = self._read(1)
        if introducer == b"[":
            while not 0x40 <= self._read(1)[0] <= 0x7E:
                pass
        elif introducer == b"O":
            self._read(1)
        return introducer

    def _read(self, count: int) -> bytes:
        data = os.read(self._input_fd, count)
        if not data:
            raise OSError("Input stream closed")
        return data

    def _read_continuation(self, lead: int) -> bytes:
        """Read the remaining bytes of a multi-byte UTF-8 character."""
        if lead >= 0xF0:
            remaining = 3
        elif lead >= 0xE0:
            remaining = 2
        elif lead >= 0xC0:
            remaining = 1
        else:
            return b""
        data = b""
        while len(data) < remaining:
            data += self._read(remaining - len(data))
        return data
