"""Core domain models for the sierpinski renderer.

These models describe the data flowing from configuration to terminal:
the screen bounds, the run configuration, the base triangle, the points
produced by the chaos game, and the key events read while waiting for
the user to quit.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field

MAX_ITERATIONS_LIMIT = 1_000_000
REFRESH_RATE_LIMIT_MS = 3_600_000


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class Color(str, enum.Enum):
    """Foreground colours a point may be painted with."""

    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    WHITE = "white"


PALETTE: tuple[Color, ...] = tuple(Color)


class RendererState(str, enum.Enum):
    """Lifecycle of a single renderer run."""

    UNINITIALIZED = "uninitialized"
    RAW_MODE_ACTIVE = "raw_mode_active"
    ALTERNATE_SCREEN_ACTIVE = "alternate_screen_active"
    RENDERING = "rendering"
    AWAITING_QUIT = "awaiting_quit"
    RESTORING = "restoring"
    TERMINATED = "terminated"


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------


class ScreenDimension(BaseModel):
    """Size of the drawing area in character cells."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(ge=0, description="Number of columns")
    height: int = Field(ge=0, description="Number of rows")


class Point(BaseModel):
    """A cell coordinate, origin at the top-left corner."""

    model_config = ConfigDict(frozen=True)

    x: int = Field(ge=0)
    y: int = Field(ge=0)


class Triangle(BaseModel):
    """The fixed triangle every chaos-game step contracts toward."""

    model_config = ConfigDict(frozen=True)

    vertices: tuple[Point, Point, Point]

    @classmethod
    def from_screen(cls, screen_dim: ScreenDimension) -> Triangle:
        """Top-left corner, bottom-centre, top-right corner."""
        return cls(
            vertices=(
                Point(x=0, y=0),
                Point(x=screen_dim.width // 2, y=screen_dim.height),
                Point(x=screen_dim.width, y=0),
            )
        )


# ---------------------------------------------------------------------------
# Run configuration
# ---------------------------------------------------------------------------


class Config(BaseModel):
    """Validated, immutable parameters for one renderer run."""

    model_config = ConfigDict(frozen=True)

    screen_dim: ScreenDimension
    max_iterations: int = Field(
        default=10_000, ge=1, le=MAX_ITERATIONS_LIMIT,
        description="Chaos-game steps after the initial point",
    )
    refresh_rate_ms: int = Field(
        default=1, ge=0, le=REFRESH_RATE_LIMIT_MS,
        description="Delay between plotted points in milliseconds",
    )

    @property
    def refresh_delay(self) -> float:
        """The pacing delay in seconds."""
        return self.refresh_rate_ms / 1000.0


# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------


KEY_ESCAPE = "Esc"
KEY_UNKNOWN = "Unknown"


class KeyEvent(BaseModel):
    """A single decoded keypress.

    ``code`` is the typed character, ``"Esc"`` for a lone Escape key or
    ``"Unknown"`` for an escape sequence that is not recognised.
    """

    model_config = ConfigDict(frozen=True)

    code: str

    @property
    def is_quit(self) -> bool:
        return self.code == "q" or self.code == KEY_ESCAPE
