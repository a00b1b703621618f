"""Terminal control module for sierpinski.

Public API:
    TerminalBackend -- Abstract base class
    AnsiTerminal -- termios + ANSI escape sequence implementation
    TerminalError and its subclasses
"""

from sierpinski.terminal.base import (
    InputPollError,
    RenderError,
    TerminalBackend,
    TerminalError,
    TerminalSetupError,
)

__all__ = [
    "AnsiTerminal",
    "InputPollError",
    "RenderError",
    "TerminalBackend",
    "TerminalError",
    "TerminalSetupError",
]


def __getattr__(name: str) -> type:
    """Lazy import for the POSIX-only implementation."""
    if name == "AnsiTerminal":
        from sierpinski.terminal.ansi import AnsiTerminal
        return AnsiTerminal
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
