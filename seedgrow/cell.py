"""Cells and the priority key used by ordered frontiers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


REFERENCE_ORDER = "rgbxy"


def _check_channel(name: str, value: int) -> None:
    if not 0 <= value <= 255:
        raise ValueError(f"{name} channel must be in [0, 255], got {value}")


@dataclass(frozen=True)
class Cell:
    """A colored grid coordinate waiting to be (or already) committed."""

    r: int
    g: int
    b: int
    x: int
    y: int

    def __post_init__(self) -> None:
        _check_channel("red", self.r)
        _check_channel("green", self.g)
        _check_channel("blue", self.b)
        if self.x < 0 or self.y < 0:
            raise ValueError("cell coordinates must be non-negative")

    @property
    def color(self) -> Tuple[int, int, int]:
        return self.r, self.g, self.b

    @property
    def position(self) -> Tuple[int, int]:
        return self.x, self.y

    def with_color(self, color: Tuple[int, int, int]) -> "Cell":
        r, g, b = color
        return Cell(r, g, b, self.x, self.y)

    def moved_to(self, x: int, y: int) -> "Cell":
        return Cell(self.r, self.g, self.b, x, y)


class Axis(Enum):
    """Cell attribute that an ordering can compare on."""

    R = "r"
    G = "g"
    B = "b"
    X = "x"
    Y = "y"

    def select(self, cell: Cell) -> int:
        return getattr(cell, self.value)


def canonical_ordering(spec: str) -> str:
    """Return ``spec`` lower-cased with every missing axis letter appended.

    Missing letters are appended in ``rgbxy`` order. Unknown or repeated
    letters are rejected.
    """

    mode = spec.lower()
    seen: set[str] = set()
    for letter in mode:
        if letter not in REFERENCE_ORDER:
            raise ValueError(f"unknown ordering letter '{letter}' (expected letters from '{REFERENCE_ORDER}')")
        if letter in seen:
            raise ValueError(f"ordering letter '{letter}' is repeated in '{spec}'")
        seen.add(letter)

    for letter in REFERENCE_ORDER:
        if letter not in seen:
            mode += letter
    return mode


class PriorityKey:
    """Total order over cells derived from an ordering specification.

    The first letter of the canonical ordering is the most significant axis;
    letters appended for omitted axes only break ties. Every axis compares
    ascending.
    """

    def __init__(self, spec: str = REFERENCE_ORDER) -> None:
        self.canonical = canonical_ordering(spec)
        self.axes: Tuple[Axis, ...] = tuple(Axis(letter) for letter in self.canonical)

    def key(self, cell: Cell) -> Tuple[int, ...]:
        return tuple(axis.select(cell) for axis in self.axes)

    def compare(self, a: Cell, b: Cell) -> int:
        for axis in self.axes:
            left, right = axis.select(a), axis.select(b)
            if left != right:
                return -1 if left < right else 1
        return 0

    def __repr__(self) -> str:
        return f"PriorityKey({self.canonical!r})"


__all__ = ["Axis", "Cell", "PriorityKey", "REFERENCE_ORDER", "canonical_ordering"]
