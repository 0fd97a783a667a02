"""Tests for the claim-then-commit growth engine."""

from __future__ import annotations

import numpy as np
import pytest

from seedgrow import (
    Cell,
    GrowthEngine,
    LifoFrontier,
    SeededRNG,
    build_strategy,
    grow,
)

KINDS = ["default", "37", "100", "tree", "treerev", "heap"]


class RecordingLifo(LifoFrontier):
    def __init__(self, chance: int = 0) -> None:
        super().__init__(chance)
        self.inserted = []

    def insert(self, cell: Cell) -> None:
        self.inserted.append(cell)
        super().insert(cell)


class ConstantRNG:
    """Every ``randint`` returns ``step``; ``randrange`` returns 0."""

    def __init__(self, step: int) -> None:
        self.step = step
        self.shuffles = 0

    def randint(self, a: int, b: int) -> int:
        return self.step

    def randrange(self, stop: int) -> int:
        return 0

    def shuffle(self, seq) -> None:
        self.shuffles += 1
        seq.reverse()


@pytest.mark.parametrize("kind", KINDS)
def test_every_coordinate_committed_exactly_once(kind: str) -> None:
    seeds = [Cell(200, 10, 90, 0, 0), Cell(5, 250, 120, 6, 4)]
    result = grow(7, 5, seeds, kind=kind, ordering="gx", delta=6, seed=1234)

    assert result.canvas.is_complete()
    assert result.commits == 35
    assert result.insertions == 35
    assert (result.width, result.height) == (7, 5)


@pytest.mark.parametrize("kind", KINDS)
def test_identical_configuration_is_deterministic(kind: str) -> None:
    seeds = [Cell(128, 64, 32, 3, 3)]
    first = grow(9, 6, seeds, kind=kind, ordering="by", delta=5, seed=2024)
    second = grow(9, 6, seeds, kind=kind, ordering="by", delta=5, seed=2024)

    assert np.array_equal(first.canvas.to_array(), second.canvas.to_array())


def test_different_seeds_change_the_image() -> None:
    seeds = [Cell(128, 128, 128, 10, 10)]
    first = grow(20, 20, seeds, delta=8, seed=1)
    second = grow(20, 20, seeds, delta=8, seed=2)

    assert not np.array_equal(first.canvas.to_array(), second.canvas.to_array())


def test_zero_delta_paints_seed_color_everywhere() -> None:
    result = grow(3, 3, [Cell(128, 128, 128, 1, 1)], delta=0, seed=0)

    assert result.canvas.to_lists() == [[(128, 128, 128)] * 3] * 3


def test_single_cell_grid_commits_once() -> None:
    strategy = RecordingLifo()
    engine = GrowthEngine(1, 1, strategy, SeededRNG(3), delta=4)
    result = engine.run([Cell(50, 60, 70, 0, 0)])

    assert result.commits == 1
    assert result.insertions == 1
    assert len(strategy.inserted) == 1
    assert strategy.is_empty()


def test_single_cell_grid_identical_across_strategies() -> None:
    outputs = [
        grow(1, 1, [Cell(10, 200, 30, 0, 0)], kind=kind, delta=7, seed=99).canvas.to_lists()
        for kind in ["default", "0", "tree", "treerev", "heap"]
    ]
    assert all(output == outputs[0] for output in outputs)


def test_neighbors_are_claimed_before_they_are_committed() -> None:
    strategy = RecordingLifo()
    engine = GrowthEngine(6, 4, strategy, SeededRNG(8), delta=3)
    result = engine.run([Cell(0, 0, 0, 2, 2), Cell(255, 255, 255, 3, 2)])

    positions = [cell.position for cell in strategy.inserted]
    assert len(positions) == len(set(positions)) == 24
    assert result.insertions == 24
    assert engine.claimed.count == 24


def test_diffused_color_is_committed_and_propagated() -> None:
    strategy = RecordingLifo()
    engine = GrowthEngine(2, 1, strategy, ConstantRNG(1), delta=4)
    result = engine.run([Cell(100, 100, 100, 0, 0)])

    assert result.canvas.pixel(0, 0) == (101, 101, 101)
    assert strategy.inserted[1] == Cell(101, 101, 101, 1, 0)
    assert result.canvas.pixel(1, 0) == (102, 102, 102)


def test_shuffle_chance_reorders_neighbours() -> None:
    rng = ConstantRNG(1)
    strategy = RecordingLifo(100)
    engine = GrowthEngine(3, 1, strategy, rng, delta=1)
    engine.run([Cell(0, 0, 0, 1, 0)])

    # neighbours of (1, 0) are [(0, 0), (2, 0)]; the fake shuffle reverses them
    assert [cell.position for cell in strategy.inserted[1:3]] == [(2, 0), (0, 0)]
    assert rng.shuffles == 3


def test_zero_shuffle_chance_never_shuffles() -> None:
    rng = ConstantRNG(1)
    engine = GrowthEngine(3, 3, RecordingLifo(0), rng, delta=1)
    engine.run([Cell(0, 0, 0, 1, 1)])
    assert rng.shuffles == 0


def test_duplicate_seed_coordinates_claimed_once() -> None:
    result = grow(4, 4, [Cell(1, 1, 1, 2, 2), Cell(9, 9, 9, 2, 2)], delta=0, seed=5)

    assert result.insertions == 16
    assert result.canvas.pixel(2, 2) == (1, 1, 1)


def test_run_requires_seeds_inside_grid() -> None:
    with pytest.raises(ValueError):
        grow(3, 3, [], seed=0)
    with pytest.raises(ValueError):
        grow(3, 3, [Cell(0, 0, 0, 3, 0)], seed=0)


def test_engine_runs_only_once() -> None:
    engine = GrowthEngine(2, 2, build_strategy("default"), SeededRNG(0), delta=1)
    engine.run([Cell(0, 0, 0, 0, 0)])
    with pytest.raises(RuntimeError):
        engine.run([Cell(0, 0, 0, 0, 0)])


def test_engine_validates_arguments() -> None:
    with pytest.raises(ValueError):
        GrowthEngine(2, 2, build_strategy("default"), SeededRNG(0), delta=-1)
    with pytest.raises(ValueError):
        GrowthEngine(2, 2, build_strategy("default"), SeededRNG(0), delta=1, report_every=0)
    with pytest.raises(ValueError):
        grow(2, 2, [Cell(0, 0, 0, 0, 0)], rng=SeededRNG(0), seed=1)


def test_observer_receives_progress() -> None:
    calls = []
    grow(
        3,
        3,
        [Cell(0, 0, 0, 0, 0)],
        delta=2,
        seed=4,
        observer=lambda done, total: calls.append((done, total)),
        report_every=4,
    )

    assert calls == [(0, 9), (4, 9), (8, 9), (9, 9)]
