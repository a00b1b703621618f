"""sierpinski -- Chaos-game Sierpinski triangle rendered in a terminal.

A point generator walks halfway toward randomly chosen triangle
vertices, and a terminal renderer plots every point as a coloured
glyph on the alternate screen until the user quits.
"""

__version__ = "0.1.0"
