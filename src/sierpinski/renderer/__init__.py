"""Terminal rendering for sierpinski."""

from sierpinski.renderer.loop import TerminalRenderer

__all__ = ["TerminalRenderer"]
