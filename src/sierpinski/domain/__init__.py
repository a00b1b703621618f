"""Domain models for sierpinski.

This package contains the core data structures and enumerations used
throughout the system. All models use Pydantic v2 for validation.
"""

from sierpinski.domain.models import (
    KEY_ESCAPE,
    KEY_UNKNOWN,
    PALETTE,
    Color,
    Config,
    KeyEvent,
    Point,
    RendererState,
    ScreenDimension,
    Triangle,
)

__all__ = [
    "KEY_ESCAPE",
    "KEY_UNKNOWN",
    "PALETTE",
    "Color",
    "Config",
    "KeyEvent",
    "Point",
    "RendererState",
    "ScreenDimension",
    "Triangle",
]
