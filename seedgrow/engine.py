"""Claim-then-commit growth loop producing a fully painted canvas."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .cell import REFERENCE_ORDER, Cell
from .diffusion import diffuse_color
from .frontier import FrontierStrategy, StrategySelection, build_strategy
from .grid import Canvas, ClaimGrid, SeededRNG, neighbors


ProgressObserver = Callable[[int, int], None]

DEFAULT_REPORT_EVERY = 10_000


@dataclass(frozen=True)
class GrowthResult:
    """Outcome of a growth run."""

    canvas: Canvas
    commits: int
    insertions: int

    @property
    def width(self) -> int:
        return self.canvas.width

    @property
    def height(self) -> int:
        return self.canvas.height


class GrowthEngine:
    """Grows seed colors across the grid using one frontier strategy.

    Coordinates are claimed the moment they are inserted into the frontier,
    so each coordinate is inserted and committed exactly once.
    """

    def __init__(
        self,
        width: int,
        height: int,
        strategy: FrontierStrategy,
        rng: SeededRNG,
        delta: int,
        *,
        observer: Optional[ProgressObserver] = None,
        report_every: int = DEFAULT_REPORT_EVERY,
    ) -> None:
        if delta < 0:
            raise ValueError("delta must be non-negative")
        if report_every <= 0:
            raise ValueError("report_every must be positive")
        if not strategy.is_empty():
            raise ValueError("strategy must start empty")

        self.canvas = Canvas(width, height)
        self.claimed = ClaimGrid(width, height)
        self.strategy = strategy
        self.rng = rng
        self.delta = delta
        self.observer = observer
        self.report_every = report_every
        self._insertions = 0
        self._started = False

    @property
    def width(self) -> int:
        return self.canvas.width

    @property
    def height(self) -> int:
        return self.canvas.height

    # ---------------------------------------------------------------- running
    def run(self, seeds: Sequence[Cell]) -> GrowthResult:
        if self._started:
            raise RuntimeError("GrowthEngine.run can only be called once")
        if not seeds:
            raise ValueError("at least one seed cell is required")
        for seed in seeds:
            if not (0 <= seed.x < self.width and 0 <= seed.y < self.height):
                raise ValueError(f"seed ({seed.x}, {seed.y}) lies outside the {self.width}x{self.height} grid")
        self._started = True

        for seed in seeds:
            self._claim_and_insert(seed)

        total = self.canvas.total
        done = 0
        while not self.strategy.is_empty():
            if done % self.report_every == 0:
                self._notify(done, total)
            self._step()
            done += 1

        self._notify(done, total)
        return GrowthResult(canvas=self.canvas, commits=done, insertions=self._insertions)

    def _step(self) -> None:
        cell = self.strategy.extract_one(self.rng)
        color = diffuse_color(cell.color, self.delta, self.rng)
        self.canvas.commit(cell.x, cell.y, color)

        candidates = neighbors(cell.x, cell.y, self.width, self.height)
        chance = self.strategy.neighbor_shuffle_chance()
        if chance and self.rng.randrange(100) < chance:
            self.rng.shuffle(candidates)

        grown = cell.with_color(color)
        for x, y in candidates:
            self._claim_and_insert(grown.moved_to(x, y))

    def _claim_and_insert(self, cell: Cell) -> bool:
        if not self.claimed.claim(cell.x, cell.y):
            return False
        self.strategy.insert(cell)
        self._insertions += 1
        return True

    def _notify(self, done: int, total: int) -> None:
        if self.observer is not None:
            self.observer(done, total)


def grow(
    width: int,
    height: int,
    seeds: Sequence[Cell],
    *,
    kind: StrategySelection | str | int = "default",
    ordering: str = REFERENCE_ORDER,
    delta: int = 4,
    rng: SeededRNG | None = None,
    seed: int | None = None,
    observer: Optional[ProgressObserver] = None,
    report_every: int = DEFAULT_REPORT_EVERY,
) -> GrowthResult:
    """Build a strategy for ``kind`` and run a single growth pass."""

    if rng is not None and seed is not None:
        raise ValueError("pass either rng or seed, not both")
    rng = rng or SeededRNG(seed)
    engine = GrowthEngine(
        width,
        height,
        build_strategy(kind, ordering),
        rng,
        delta,
        observer=observer,
        report_every=report_every,
    )
    return engine.run(seeds)


__all__ = ["DEFAULT_REPORT_EVERY", "GrowthEngine", "GrowthResult", "ProgressObserver", "grow"]
