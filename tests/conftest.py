"""Shared test fixtures for the sierpinski test suite.

Provides a terminal double that records every call made to it, a
scripted random source for exact point sequences, and sample configs.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

import numpy as np
import pytest

from sierpinski.domain.models import Color, Config, KeyEvent, ScreenDimension
from sierpinski.terminal.base import TerminalBackend


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class RecordingTerminal(TerminalBackend):
    """Terminal double that records calls and replays scripted keys.

    ``keys`` holds key codes to deliver in order; a ``None`` entry makes
    one poll time out. Once the script runs dry, ``poll`` raises
    ``OSError`` so a renderer that never quits cannot hang the test.
    Operations named in ``fail_on`` raise ``OSError`` after being
    recorded.
    """

    def __init__(
        self,
        width: int = 10,
        height: int = 10,
        keys: Iterable[str | None] = (),
        fail_on: Iterable[str] = (),
    ) -> None:
        self.width = width
        self.height = height
        self.keys = list(keys)
        self.fail_on = set(fail_on)
        self.calls: list[tuple] = []

    @property
    def names(self) -> list[str]:
        return [call[0] for call in self.calls]

    def _record(self, name: str, *args: object) -> None:
        self.calls.append((name, *args))
        if name in self.fail_on:
            raise OSError(f"{name} failed")

    def enable_raw_mode(self) -> None:
        self._record("enable_raw_mode")

    def disable_raw_mode(self) -> None:
        self._record("disable_raw_mode")

    def enter_alternate_screen(self) -> None:
        self._record("enter_alternate_screen")

    def leave_alternate_screen(self) -> None:
        self._record("leave_alternate_screen")

    def clear(self) -> None:
        self._record("clear")

    def hide_cursor(self) -> None:
        self._record("hide_cursor")

    def show_cursor(self) -> None:
        self._record("show_cursor")

    def size(self) -> ScreenDimension:
        self._record("size")
        return ScreenDimension(width=self.width, height=self.height)

    def move_to(self, x: int, y: int) -> None:
        self._record("move_to", x, y)

    def set_foreground(self, color: Color) -> None:
        self._record("set_foreground", color)

    def print(self, text: str) -> None:
        self._record("print", text)

    def flush(self) -> None:
        self._record("flush")

    def poll(self, timeout: float) -> bool:
        self._record("poll", timeout)
        if not self.keys:
            raise OSError("no more scripted input")
        if self.keys[0] is None:
            self.keys.pop(0)
            return False
        return True

    def read_key(self) -> KeyEvent:
        self._record("read_key")
        return KeyEvent(code=self.keys.pop(0))


class ScriptedRandom:
    """Random source returning predetermined values in order."""

    def __init__(self, values: Iterable[int]) -> None:
        self._values = list(values)
        self.calls: list[tuple[int, int]] = []

    def integers(self, low: int, high: int) -> int:
        self.calls.append((low, high))
        return self._values.pop(0)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_terminal() -> Callable[..., RecordingTerminal]:
    """Factory for RecordingTerminal instances."""
    return RecordingTerminal


@pytest.fixture
def make_scripted_rng() -> Callable[[Iterable[int]], ScriptedRandom]:
    """Factory for ScriptedRandom instances."""
    return ScriptedRandom


@pytest.fixture
def seeded_rng() -> np.random.Generator:
    """A deterministic numpy generator."""
    return np.random.default_rng(1234)


@pytest.fixture
def small_screen() -> ScreenDimension:
    return ScreenDimension(width=10, height=10)


@pytest.fixture
def small_config(small_screen: ScreenDimension) -> Config:
    """Five iterations on a 10x10 screen with no pacing delay."""
    return Config(screen_dim=small_screen, max_iterations=5, refresh_rate_ms=0)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers installed by setup_logging so they never outlive a test."""
    yield
    logger = logging.getLogger("sierpinski")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
