"""Bounded per-channel random walk applied to colors as they propagate."""

from __future__ import annotations

from typing import Tuple

from .grid import SeededRNG


def diffuse(value: int, delta: int, rng: SeededRNG) -> int:
    """Offset ``value`` by a non-zero draw from ``[-delta, delta]`` and clamp to a byte.

    ``delta == 0`` leaves the value untouched and draws nothing.
    """

    if delta < 0:
        raise ValueError("delta must be non-negative")
    if not 0 <= value <= 255:
        raise ValueError("value must be in [0, 255]")
    if delta == 0:
        return value

    step = 0
    while step == 0:
        step = rng.randint(-delta, delta)
    return min(255, max(0, value + step))


def diffuse_color(color: Tuple[int, int, int], delta: int, rng: SeededRNG) -> Tuple[int, int, int]:
    r, g, b = color
    r = diffuse(r, delta, rng)
    g = diffuse(g, delta, rng)
    b = diffuse(b, delta, rng)
    return r, g, b


__all__ = ["diffuse", "diffuse_color"]
