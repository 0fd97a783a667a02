"""Parsing of user-supplied sizes, seed positions and seed colors.

Lists use ``:`` between entries and ``,`` between the values of one entry,
e.g. ``"0.5,0.5:10,-1"`` for positions and ``"255,0,0:0,0,255"`` for colors.
"""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple

from .cell import Cell
from .grid import Color, Coords, SeededRNG

VALUE_SEPARATOR = ","
LIST_SEPARATOR = ":"
SIZE_SEPARATOR = "x"


def _parse_number(text: str, name: str, kind: type) -> int | float:
    try:
        return kind(text.strip())
    except ValueError as exc:
        raise ValueError(f"could not parse {name} '{text.strip()}' into a number") from exc


def _split_entries(text: str) -> List[str]:
    text = text.strip()
    if not text:
        return []
    return text.split(LIST_SEPARATOR)


def parse_size(text: str) -> Tuple[int, int]:
    """Parse ``"WxH"`` into ``(width, height)``."""

    parts = text.strip().lower().split(SIZE_SEPARATOR)
    if len(parts) != 2:
        raise ValueError(f"incorrect size format '{text}' (must be WxH)")
    width = int(_parse_number(parts[0], "width", int))
    height = int(_parse_number(parts[1], "height", int))
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be positive")
    return width, height


def resolve_coordinate(value: float, size: int) -> int:
    """Map a user coordinate onto ``[0, size)``.

    Negative values count back from the far edge, values strictly between
    0 and 1 are fractions of ``size`` and anything else wraps around.
    """

    if not math.isfinite(value):
        raise ValueError("coordinates must be finite")
    if 0.0 < value < 1.0:
        return min(int(value * size), size - 1)
    return math.trunc(value) % size


def parse_positions(text: str, width: int, height: int) -> List[Coords]:
    positions: List[Coords] = []
    for entry in _split_entries(text):
        values = entry.split(VALUE_SEPARATOR)
        if len(values) != 2:
            raise ValueError(f"incorrect point format '{entry}' (must be x{VALUE_SEPARATOR}y)")
        x = resolve_coordinate(float(_parse_number(values[0], "x coordinate", float)), width)
        y = resolve_coordinate(float(_parse_number(values[1], "y coordinate", float)), height)
        positions.append((x, y))
    return positions


def parse_colors(text: str) -> List[Color]:
    colors: List[Color] = []
    for entry in _split_entries(text):
        values = entry.split(VALUE_SEPARATOR)
        if len(values) != 3:
            raise ValueError(
                f"incorrect colour format '{entry}' (must be r{VALUE_SEPARATOR}g{VALUE_SEPARATOR}b)"
            )
        channels = []
        for raw, name in zip(values, ("red channel", "green channel", "blue channel")):
            value = int(_parse_number(raw, name, int))
            if not 0 <= value <= 255:
                raise ValueError(f"{name} must be in [0, 255], got {value}")
            channels.append(value)
        colors.append((channels[0], channels[1], channels[2]))
    return colors


def build_seeds(
    width: int,
    height: int,
    positions: Sequence[Coords],
    colors: Sequence[Color],
    *,
    count: int = 0,
    randomise_colors: bool = False,
    rng: SeededRNG,
) -> List[Cell]:
    """Combine positions and colors into seed cells.

    Without positions and with ``count == 0`` the grid centre is used;
    otherwise random positions are added until there are ``count`` of them.
    Missing colors repeat the last one (black by default) or are random.
    """

    if count < 0:
        raise ValueError("count must be non-negative")

    points = list(positions)
    if count == 0 and not points:
        points.append((width // 2, height // 2))
    while len(points) < count:
        points.append((rng.randrange(width), rng.randrange(height)))

    palette = list(colors)
    if randomise_colors:
        while len(palette) < len(points):
            palette.append((rng.randrange(256), rng.randrange(256), rng.randrange(256)))
    else:
        last = palette[-1] if palette else (0, 0, 0)
        while len(palette) < len(points):
            palette.append(last)

    return [Cell(r, g, b, x, y) for (x, y), (r, g, b) in zip(points, palette)]


__all__ = [
    "LIST_SEPARATOR",
    "VALUE_SEPARATOR",
    "build_seeds",
    "parse_colors",
    "parse_positions",
    "parse_size",
    "resolve_coordinate",
]
