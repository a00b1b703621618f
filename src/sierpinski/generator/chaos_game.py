"""Chaos-game point generation.

Starting from a random point, each step moves halfway toward one of the
three triangle vertices chosen at random. After enough steps the
visited points trace out the Sierpinski triangle:
https://en.wikipedia.org/wiki/Sierpi%C5%84ski_triangle#Chaos_game
"""

from __future__ import annotations

import logging
from typing import Iterator, Protocol

import numpy as np

from sierpinski.domain.models import Config, Point, ScreenDimension, Triangle

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Uniform integer source, matching ``numpy.random.Generator.integers``.

    ``integers(low, high)`` returns an integer in ``[low, high)``.
    """

    def integers(self, low: int, high: int) -> int: ...


def default_random_source() -> RandomSource:
    """An unseeded generator for production runs."""
    return np.random.default_rng()


def base_triangle(screen_dim: ScreenDimension) -> Triangle:
    """Build the triangle the chaos game contracts toward."""
    return Triangle.from_screen(screen_dim)


def _draw(rng: RandomSource, bound: int) -> int:
    if bound <= 0:
        return 0
    return int(rng.integers(0, bound))


def generate_points(
    triangle: Triangle,
    config: Config,
    rng: RandomSource | None = None,
) -> Iterator[Point]:
    """Yield ``config.max_iterations + 1`` chaos-game points.

    The first point is random. Note that ``x`` is drawn from the screen
    height and ``y`` from the screen width; the per-step update treats
    ``x`` as horizontal. The returned iterator is single-use.

    Args:
        triangle: Vertices to contract toward.
        config: Supplies the screen bounds and the iteration count.
        rng: Uniform integer source. Defaults to an unseeded numpy
             generator.

    Yields:
        The initial point followed by one point per iteration.
    """
    if rng is None:
        rng = default_random_source()

    screen_dim = config.screen_dim
    xi = _draw(rng, screen_dim.height)
    yi = _draw(rng, screen_dim.width)
    logger.debug("Chaos game seeded at (%d, %d)", xi, yi)
    yield Point(x=xi, y=yi)

    vertices = triangle.vertices
    for _ in range(config.max_iterations):
        vertex = vertices[_draw(rng, len(vertices))]
        xi = (xi + vertex.x) // 2
        yi = (yi + vertex.y) // 2
        yield Point(x=xi, y=yi)
