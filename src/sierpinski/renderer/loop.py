"""Render loop: plots chaos-game points on the terminal.

The renderer owns the terminal for the duration of a run. It switches
to raw mode and the alternate screen, paints every generated point as a
coloured glyph, shows a quit hint, waits for ``q`` or Escape and then
puts the terminal back the way it found it. Teardown runs on every exit
path, including failures halfway through painting.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Sequence

from sierpinski.domain.models import (
    PALETTE,
    Color,
    Config,
    KeyEvent,
    RendererState,
    ScreenDimension,
    Triangle,
)
from sierpinski.generator.chaos_game import (
    RandomSource,
    base_triangle,
    default_random_source,
    generate_points,
)
from sierpinski.terminal.base import (
    InputPollError,
    RenderError,
    TerminalBackend,
    TerminalError,
    TerminalSetupError,
)

logger = logging.getLogger(__name__)

DEFAULT_GLYPH = "*"
DEFAULT_QUIT_MESSAGE = "press 'q' to quit"
DEFAULT_POLL_INTERVAL = 0.1


class TerminalRenderer:
    """Draws a Sierpinski triangle on a terminal and waits for the user to quit.

    Example usage::

        renderer = TerminalRenderer(AnsiTerminal())
        renderer.run(config)
    """

    def __init__(
        self,
        terminal: TerminalBackend,
        rng: RandomSource | None = None,
        glyph: str = DEFAULT_GLYPH,
        palette: Sequence[Color] = PALETTE,
        quit_message: str = DEFAULT_QUIT_MESSAGE,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if not palette:
            raise ValueError("palette must contain at least one colour")
        self._terminal = terminal
        self._rng = rng if rng is not None else default_random_source()
        self._glyph = glyph
        self._palette = tuple(palette)
        self._quit_message = quit_message
        self._poll_interval = poll_interval
        self._sleep = sleep
        self._state = RendererState.UNINITIALIZED
        self._raw_mode = False
        self._alternate_screen = False

    @property
    def state(self) -> RendererState:
        return self._state

    def run(self, config: Config) -> None:
        """Render ``config.max_iterations + 1`` points and wait for a quit key.

        Raises:
            TerminalSetupError: If the terminal cannot be prepared or restored.
            RenderError: If painting fails.
            InputPollError: If reading the keyboard fails.
        """
        with self.session():
            triangle = base_triangle(config.screen_dim)
            self.draw_points(triangle, config)
            self.draw_status(config.screen_dim)
            self.wait_for_quit()

    @contextmanager
    def session(self) -> Iterator[TerminalRenderer]:
        """Own the terminal for the duration of the ``with`` block.

        The terminal is restored when the block exits, whether it
        finishes normally or raises.
        """
        self._acquire()
        try:
            yield self
        except BaseException:
            self._restore(raise_errors=False)
            raise
        self._restore(raise_errors=True)

    def draw_points(self, triangle: Triangle, config: Config) -> int:
        """Paint every generated point, pausing between them.

        Returns:
            The number of points painted.
        """
        self._set_state(RendererState.RENDERING)
        max_x = max(config.screen_dim.width - 1, 0)
        max_y = max(config.screen_dim.height - 1, 0)
        delay = config.refresh_delay

        count = 0
        for point in generate_points(triangle, config, self._rng):
            if count and delay:
                self._sleep(delay)
            # Points on the far edge land in the last column/row
            self._call(
                RenderError, "draw_char",
                min(point.x, max_x), min(point.y, max_y), self._glyph, self._pick_color(),
            )
            count += 1
        logger.debug("Painted %d points", count)
        return count

    def draw_status(self, screen_dim: ScreenDimension) -> None:
        """Show the quit hint on the bottom row and flush all output."""
        self._call(RenderError, "move_to", 0, max(screen_dim.height - 1, 0))
        self._call(RenderError, "set_foreground", Color.WHITE)
        self._call(RenderError, "print", self._quit_message)
        self._call(RenderError, "flush")

    def wait_for_quit(self) -> KeyEvent:
        """Poll the keyboard until ``q`` or Escape is pressed.

        Returns:
            The key event that ended the wait.
        """
        self._set_state(RendererState.AWAITING_QUIT)
        while True:
            if not self._call(InputPollError, "poll", self._poll_interval):
                continue
            event = self._call(InputPollError, "read_key")
            if event.is_quit:
                logger.debug("Quit requested with %r", event.code)
                return event
            logger.debug("Ignoring key %r", event.code)

    def _pick_color(self) -> Color:
        return self._palette[int(self._rng.integers(0, len(self._palette)))]

    def _acquire(self) -> None:
        """Enter raw mode and the alternate screen, clear it and hide the cursor."""
        self._set_state(RendererState.UNINITIALIZED)
        self._call(TerminalSetupError, "enable_raw_mode")
        self._raw_mode = True
        self._set_state(RendererState.RAW_MODE_ACTIVE)

        try:
            self._call(TerminalSetupError, "enter_alternate_screen")
            self._alternate_screen = True
            self._set_state(RendererState.ALTERNATE_SCREEN_ACTIVE)
            self._call(TerminalSetupError, "clear")
            self._call(TerminalSetupError, "hide_cursor")
        except TerminalSetupError:
            self._restore(raise_errors=False)
            raise

    def _restore(self, raise_errors: bool) -> None:
        """Undo everything ``_acquire`` did, attempting every step.

        Args:
            raise_errors: Raise the first teardown failure once all steps
                          have been attempted. When False, failures are
                          only logged so they do not mask an error that
                          is already propagating.
        """
        self._set_state(RendererState.RESTORING)
        steps: list[str] = []
        if self._alternate_screen:
            steps += ["clear", "show_cursor", "leave_alternate_screen"]
        if self._raw_mode:
            steps.append("disable_raw_mode")

        first_error: TerminalSetupError | None = None
        for operation in steps:
            try:
                self._call(TerminalSetupError, operation)
            except TerminalSetupError as e:
                logger.error("Terminal teardown step failed: %s", e)
                if first_error is None:
                    first_error = e
            if operation == "leave_alternate_screen":
                self._alternate_screen = False
            elif operation == "disable_raw_mode":
                self._raw_mode = False

        self._set_state(RendererState.TERMINATED)
        if first_error is not None and raise_errors:
            raise first_error

    def _call(self, error_cls: type[TerminalError], operation: str, *args: Any) -> Any:
        """Invoke a terminal operation, mapping I/O failures to ``error_cls``."""
        try:
            return getattr(self._terminal, operation)(*args)
        except (OSError, ValueError) as e:
            raise error_cls(f"Terminal operation {operation} failed: {e}", operation=operation) from e

    def _set_state(self, state: RendererState) -> None:
        if state is not self._state:
            logger.debug("Renderer state %s -> %s", self._state.value, state.value)
            self._state = state
