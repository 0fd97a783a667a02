"""Core modules for seed-grown color diffusion images."""

from .cell import Axis, Cell, PriorityKey, canonical_ordering
from .config import GrowthConfig, config_from_mapping, load_config
from .diffusion import diffuse, diffuse_color
from .engine import GrowthEngine, GrowthResult, grow
from .frontier import (
    REGISTRY as STRATEGY_REGISTRY,
    AscendingFrontier,
    DescendingFrontier,
    EmptyFrontierError,
    FrontierStrategy,
    LifoFrontier,
    MaxHeapFrontier,
    StrategyRegistry,
    StrategySelection,
    UniformRandomFrontier,
    build_strategy,
    parse_strategy,
)
from .grid import Canvas, ClaimGrid, SeededRNG, neighbors
from .image import canvas_to_image, save_canvas
from .progress import PrintProgress
from .seeds import build_seeds, parse_colors, parse_positions, parse_size

__all__ = [
    "Axis",
    "Cell",
    "PriorityKey",
    "canonical_ordering",
    "GrowthConfig",
    "config_from_mapping",
    "load_config",
    "diffuse",
    "diffuse_color",
    "GrowthEngine",
    "GrowthResult",
    "grow",
    "STRATEGY_REGISTRY",
    "AscendingFrontier",
    "DescendingFrontier",
    "EmptyFrontierError",
    "FrontierStrategy",
    "LifoFrontier",
    "MaxHeapFrontier",
    "StrategyRegistry",
    "StrategySelection",
    "UniformRandomFrontier",
    "build_strategy",
    "parse_strategy",
    "Canvas",
    "ClaimGrid",
    "SeededRNG",
    "neighbors",
    "canvas_to_image",
    "save_canvas",
    "PrintProgress",
    "build_seeds",
    "parse_colors",
    "parse_positions",
    "parse_size",
]
