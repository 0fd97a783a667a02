"""Frontier strategies deciding which pending cell grows next."""

from __future__ import annotations

import heapq
from abc import ABC, abstractmethod
from bisect import insort
from dataclasses import dataclass
from itertools import count
from operator import itemgetter
from typing import Callable, Dict, Iterable, List, Tuple

from .cell import REFERENCE_ORDER, Cell, PriorityKey
from .grid import SeededRNG


class EmptyFrontierError(RuntimeError):
    """Raised when a cell is extracted from an empty frontier."""


class FrontierStrategy(ABC):
    """Pending-cell container with a fixed selection policy."""

    name: str = ""

    @abstractmethod
    def insert(self, cell: Cell) -> None:
        ...

    @abstractmethod
    def _extract(self, rng: SeededRNG) -> Cell:
        ...

    @abstractmethod
    def __len__(self) -> int:
        ...

    def extract_one(self, rng: SeededRNG) -> Cell:
        if self.is_empty():
            raise EmptyFrontierError(f"extract_one called on an empty '{self.name}' frontier")
        return self._extract(rng)

    def is_empty(self) -> bool:
        return len(self) == 0

    def neighbor_shuffle_chance(self) -> int:
        return 0


class UniformRandomFrontier(FrontierStrategy):
    name = "random"

    def __init__(self) -> None:
        self._cells: List[Cell] = []

    def insert(self, cell: Cell) -> None:
        self._cells.append(cell)

    def _extract(self, rng: SeededRNG) -> Cell:
        # a lone member is taken without drawing so the random stream is untouched
        if len(self._cells) == 1:
            return self._cells.pop()
        return self._cells.pop(rng.randrange(len(self._cells)))

    def __len__(self) -> int:
        return len(self._cells)


class LifoFrontier(FrontierStrategy):
    """Stack frontier; neighbours are shuffled with ``chance`` percent probability."""

    name = "lifo"

    def __init__(self, chance: int = 0) -> None:
        if not 0 <= chance <= 100:
            raise ValueError("shuffle chance must be in [0, 100]")
        self._cells: List[Cell] = []
        self._chance = chance

    def insert(self, cell: Cell) -> None:
        self._cells.append(cell)

    def _extract(self, rng: SeededRNG) -> Cell:
        return self._cells.pop()

    def __len__(self) -> int:
        return len(self._cells)

    def neighbor_shuffle_chance(self) -> int:
        return self._chance


class _SortedFrontier(FrontierStrategy):
    """Keeps cells sorted so the next cell to extract is always last."""

    def __init__(self, key: PriorityKey | None = None) -> None:
        self.key = key or PriorityKey()
        self._entries: List[Tuple[Tuple[int, ...], Cell]] = []

    def _sort_key(self, cell: Cell) -> Tuple[int, ...]:
        return self.key.key(cell)

    def insert(self, cell: Cell) -> None:
        insort(self._entries, (self._sort_key(cell), cell), key=itemgetter(0))

    def _extract(self, rng: SeededRNG) -> Cell:
        return self._entries.pop()[1]

    def __len__(self) -> int:
        return len(self._entries)


class AscendingFrontier(_SortedFrontier):
    name = "ascending"

    def _sort_key(self, cell: Cell) -> Tuple[int, ...]:
        # negated so that the minimum sorts last
        return tuple(-value for value in self.key.key(cell))


class DescendingFrontier(_SortedFrontier):
    name = "descending"


class MaxHeapFrontier(FrontierStrategy):
    name = "heap"

    def __init__(self, key: PriorityKey | None = None) -> None:
        self.key = key or PriorityKey()
        self._heap: List[Tuple[Tuple[int, ...], int, Cell]] = []
        self._counter = count()

    def insert(self, cell: Cell) -> None:
        priority = tuple(-value for value in self.key.key(cell))
        heapq.heappush(self._heap, (priority, next(self._counter), cell))

    def _extract(self, rng: SeededRNG) -> Cell:
        return heapq.heappop(self._heap)[2]

    def __len__(self) -> int:
        return len(self._heap)


# Registry ---------------------------------------------------------------------

StrategyFactory = Callable[[PriorityKey, int], FrontierStrategy]


@dataclass(frozen=True)
class StrategySpec:
    """Registered frontier strategy entry."""

    name: str
    factory: StrategyFactory
    description: str = ""
    aliases: Tuple[str, ...] = ()
    ordered: bool = False

    def build(self, key: PriorityKey, chance: int = 0) -> FrontierStrategy:
        return self.factory(key, chance)


class StrategyRegistry:
    """Registry mapping selector names to frontier strategy factories."""

    def __init__(self) -> None:
        self._entries: Dict[str, StrategySpec] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        name: str,
        *,
        description: str = "",
        aliases: Iterable[str] = (),
        ordered: bool = False,
    ) -> Callable[[StrategyFactory], StrategyFactory]:
        """Decorator to register a strategy factory."""

        aliases_tuple = tuple(aliases)
        for label in (name, *aliases_tuple):
            if label in self._entries or label in self._aliases:
                raise ValueError(f"strategy '{label}' is already registered")

        def decorator(factory: StrategyFactory) -> StrategyFactory:
            self._entries[name] = StrategySpec(
                name=name,
                factory=factory,
                description=description,
                aliases=aliases_tuple,
                ordered=ordered,
            )
            for alias in aliases_tuple:
                self._aliases[alias] = name
            return factory

        return decorator

    def get(self, name: str) -> StrategySpec:
        key = self._aliases.get(name, name)
        try:
            return self._entries[key]
        except KeyError as exc:
            raise KeyError(f"unknown frontier strategy '{name}'") from exc

    def __contains__(self, name: str) -> bool:
        return name in self._entries or name in self._aliases

    def list(self) -> List[StrategySpec]:
        return list(self._entries.values())

    def names(self) -> List[str]:
        return sorted(self._entries)


REGISTRY = StrategyRegistry()


@REGISTRY.register(
    "random",
    description="Extract a uniformly random pending cell.",
    aliases=("default",),
)
def _build_random(key: PriorityKey, chance: int) -> FrontierStrategy:
    return UniformRandomFrontier()


@REGISTRY.register(
    "lifo",
    description="Extract the most recently inserted cell, shuffling neighbours with a percent chance.",
)
def _build_lifo(key: PriorityKey, chance: int) -> FrontierStrategy:
    return LifoFrontier(chance)


@REGISTRY.register(
    "ascending",
    description="Extract the smallest cell under the priority key.",
    aliases=("tree",),
    ordered=True,
)
def _build_ascending(key: PriorityKey, chance: int) -> FrontierStrategy:
    return AscendingFrontier(key)


@REGISTRY.register(
    "descending",
    description="Extract the largest cell under the priority key.",
    aliases=("treerev",),
    ordered=True,
)
def _build_descending(key: PriorityKey, chance: int) -> FrontierStrategy:
    return DescendingFrontier(key)


@REGISTRY.register(
    "heap",
    description="Max-heap over the priority key.",
    ordered=True,
)
def _build_heap(key: PriorityKey, chance: int) -> FrontierStrategy:
    return MaxHeapFrontier(key)


# Selection --------------------------------------------------------------------


@dataclass(frozen=True)
class StrategySelection:
    """Strategy chosen for a run, with the LIFO shuffle chance where relevant."""

    name: str
    chance: int = 0

    def __post_init__(self) -> None:
        if self.name not in REGISTRY:
            raise ValueError(f"unknown frontier strategy '{self.name}'")
        object.__setattr__(self, "name", REGISTRY.get(self.name).name)
        if not 0 <= self.chance <= 100:
            raise ValueError("shuffle chance must be in [0, 100]")


def parse_strategy(selector: str | int) -> StrategySelection:
    """Resolve a user selector: an integer 0..100 picks LIFO with that shuffle chance."""

    text = str(selector).strip().lower()
    try:
        chance = int(text)
    except ValueError:
        chance = None

    if chance is not None:
        if not 0 <= chance <= 100:
            raise ValueError(f"shuffle chance must be in [0, 100], got {chance}")
        return StrategySelection("lifo", chance)

    if text not in REGISTRY:
        names = ", ".join(REGISTRY.names())
        raise ValueError(f"unknown frontier kind '{selector}' (expected 0-100 or one of: {names})")
    return StrategySelection(REGISTRY.get(text).name)


def build_strategy(selection: StrategySelection | str | int, ordering: str = REFERENCE_ORDER) -> FrontierStrategy:
    if not isinstance(selection, StrategySelection):
        selection = parse_strategy(selection)
    spec = REGISTRY.get(selection.name)
    return spec.build(PriorityKey(ordering), selection.chance)


__all__ = [
    "AscendingFrontier",
    "DescendingFrontier",
    "EmptyFrontierError",
    "FrontierStrategy",
    "LifoFrontier",
    "MaxHeapFrontier",
    "REGISTRY",
    "StrategyRegistry",
    "StrategySelection",
    "StrategySpec",
    "UniformRandomFrontier",
    "build_strategy",
    "parse_strategy",
]
