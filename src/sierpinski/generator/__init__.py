"""Point generation for sierpinski.

Public API:
    base_triangle -- Triangle anchored to the screen corners
    generate_points -- Lazy chaos-game point sequence
    RandomSource -- Protocol for injectable randomness
"""

from sierpinski.generator.chaos_game import (
    RandomSource,
    base_triangle,
    default_random_source,
    generate_points,
)

__all__ = ["RandomSource", "base_triangle", "default_random_source", "generate_points"]
