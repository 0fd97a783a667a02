"""Tests for the random source, canvas and claim grid."""

from __future__ import annotations

import numpy as np
import pytest

from seedgrow import Canvas, ClaimGrid, SeededRNG, neighbors


def test_seeded_rng_reproducible() -> None:
    rng_a = SeededRNG(42)
    rng_b = SeededRNG(42)

    draws_a = [rng_a.randint(-4, 4) for _ in range(20)]
    draws_b = [rng_b.randint(-4, 4) for _ in range(20)]
    assert draws_a == draws_b

    seq_a, seq_b = list(range(8)), list(range(8))
    rng_a.shuffle(seq_a)
    rng_b.shuffle(seq_b)
    assert seq_a == seq_b


def test_seeded_rng_accepts_full_64_bit_range() -> None:
    SeededRNG(0)
    SeededRNG((1 << 64) - 1)

    with pytest.raises(ValueError):
        SeededRNG(1 << 64)
    with pytest.raises(ValueError):
        SeededRNG(-1)
    with pytest.raises(TypeError):
        SeededRNG("7")  # type: ignore[arg-type]


def test_neighbors_fixed_order_and_bounds() -> None:
    assert neighbors(1, 1, 3, 3) == [
        (0, 0),
        (0, 1),
        (0, 2),
        (1, 0),
        (1, 2),
        (2, 0),
        (2, 1),
        (2, 2),
    ]
    assert neighbors(0, 0, 3, 3) == [(0, 1), (1, 0), (1, 1)]
    assert neighbors(0, 0, 1, 1) == []


def test_claim_grid_claims_once() -> None:
    grid = ClaimGrid(2, 2)
    assert not grid.is_claimed(1, 0)
    assert grid.claim(1, 0)
    assert grid.is_claimed(1, 0)
    assert not grid.claim(1, 0)
    assert grid.count == 1


def test_canvas_is_write_once() -> None:
    canvas = Canvas(3, 2)
    assert canvas.shape == (2, 3)
    assert canvas.total == 6

    canvas.commit(2, 1, (10, 20, 30))
    assert canvas.pixel(2, 1) == (10, 20, 30)
    assert canvas.is_committed(2, 1)
    assert canvas.committed_count == 1

    with pytest.raises(RuntimeError):
        canvas.commit(2, 1, (0, 0, 0))
    with pytest.raises(ValueError):
        canvas.commit(3, 0, (0, 0, 0))


def test_canvas_conversions() -> None:
    canvas = Canvas(2, 1)
    canvas.commit(0, 0, (1, 2, 3))
    canvas.commit(1, 0, (4, 5, 6))

    assert canvas.is_complete()
    assert canvas.to_lists() == [[(1, 2, 3), (4, 5, 6)]]

    array = canvas.to_array()
    assert array.dtype == np.uint8
    assert array.shape == (1, 2, 3)
    array[0, 0] = 0
    assert canvas.pixel(0, 0) == (1, 2, 3)


def test_grids_reject_empty_sizes() -> None:
    with pytest.raises(ValueError):
        Canvas(0, 3)
    with pytest.raises(ValueError):
        ClaimGrid(3, 0)
