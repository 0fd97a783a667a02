"""Grid utilities for frontier growth.

Pixel storage is backed by NumPy arrays so large canvases stay compact; all
coordinates are ``(x, y)`` with ``0 <= x < width`` and ``0 <= y < height``.
"""

from __future__ import annotations

from typing import List, MutableSequence, Tuple, TypeVar

import random

import numpy as np


T = TypeVar("T")

Color = Tuple[int, int, int]
Coords = Tuple[int, int]

MAX_SEED = 1 << 64

NEIGHBOR_OFFSETS: Tuple[Coords, ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)


class SeededRNG:
    """Wrapper around ``random.Random`` with a minimal convenience API.

    A seed must fit in 64 bits; ``None`` seeds from system entropy and is the
    only non-reproducible mode.
    """

    def __init__(self, seed: int | None = None) -> None:
        if seed is not None:
            if isinstance(seed, bool) or not isinstance(seed, int):
                raise TypeError("seed must be an integer")
            if not 0 <= seed < MAX_SEED:
                raise ValueError("seed must be in [0, 2**64)")
        self.seed = seed
        self._rng = random.Random(seed)

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)

    def randrange(self, stop: int) -> int:
        return self._rng.randrange(stop)

    def shuffle(self, seq: MutableSequence[T]) -> None:
        self._rng.shuffle(seq)


def _validate_size(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be positive")


def neighbors(x: int, y: int, width: int, height: int) -> List[Coords]:
    """Return the in-bounds 8-connected neighbours of ``(x, y)`` in fixed order."""

    result: List[Coords] = []
    for dx, dy in NEIGHBOR_OFFSETS:
        nx, ny = x + dx, y + dy
        if 0 <= nx < width and 0 <= ny < height:
            result.append((nx, ny))
    return result


class ClaimGrid:
    """Boolean grid recording which coordinates have entered the frontier."""

    def __init__(self, width: int, height: int) -> None:
        _validate_size(width, height)
        self.width = width
        self.height = height
        self._claimed = np.zeros((height, width), dtype=bool)
        self._count = 0

    def is_claimed(self, x: int, y: int) -> bool:
        return bool(self._claimed[y, x])

    def claim(self, x: int, y: int) -> bool:
        """Mark ``(x, y)`` claimed; return ``False`` if it already was."""

        if self._claimed[y, x]:
            return False
        self._claimed[y, x] = True
        self._count += 1
        return True

    @property
    def count(self) -> int:
        return self._count


class Canvas:
    """Write-once RGB raster of shape ``(height, width, 3)``."""

    def __init__(self, width: int, height: int) -> None:
        _validate_size(width, height)
        self.width = width
        self.height = height
        self._pixels = np.zeros((height, width, 3), dtype=np.uint8)
        self._committed = np.zeros((height, width), dtype=bool)
        self._count = 0

    # ------------------------------------------------------------------ basic
    @property
    def shape(self) -> Tuple[int, int]:
        return self.height, self.width

    @property
    def committed_count(self) -> int:
        return self._count

    @property
    def total(self) -> int:
        return self.width * self.height

    def is_committed(self, x: int, y: int) -> bool:
        return bool(self._committed[y, x])

    def is_complete(self) -> bool:
        return self._count == self.total

    def pixel(self, x: int, y: int) -> Color:
        r, g, b = (int(value) for value in self._pixels[y, x])
        return r, g, b

    # ------------------------------------------------------------ manipulation
    def commit(self, x: int, y: int, color: Color) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise ValueError(f"coordinate ({x}, {y}) is outside the canvas")
        if self._committed[y, x]:
            raise RuntimeError(f"coordinate ({x}, {y}) was already committed")
        self._pixels[y, x] = color
        self._committed[y, x] = True
        self._count += 1

    # ------------------------------------------------------------- conversion
    def to_array(self) -> np.ndarray:
        return self._pixels.copy()

    def to_lists(self) -> List[List[Color]]:
        return [[self.pixel(x, y) for x in range(self.width)] for y in range(self.height)]
