"""Run configuration: dataclass, YAML loading and mapping conversion."""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from .cell import REFERENCE_ORDER, canonical_ordering
from .engine import DEFAULT_REPORT_EVERY
from .frontier import StrategySelection, parse_strategy
from .grid import MAX_SEED
from .seeds import parse_size


@dataclass(frozen=True)
class GrowthConfig:
    """Configuration controlling a single image growth run."""

    width: int = 500
    height: int = 500
    delta: int = 4
    kind: str = "default"
    ordering: str = REFERENCE_ORDER
    seed: int | None = None
    point_count: int = 0
    positions: str = ""
    colors: str = ""
    randomise_colors: bool = False
    output: str = "output.png"
    verbose: bool = False
    report_every: int = DEFAULT_REPORT_EVERY

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be positive")
        if self.delta < 0:
            raise ValueError("delta must be non-negative")
        if self.seed is not None and not 0 <= self.seed < MAX_SEED:
            raise ValueError("seed must be in [0, 2**64)")
        if self.point_count < 0:
            raise ValueError("point_count must be non-negative")
        if self.report_every <= 0:
            raise ValueError("report_every must be positive")
        parse_strategy(self.kind)
        canonical_ordering(self.ordering)

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def strategy(self) -> StrategySelection:
        return parse_strategy(self.kind)


_INT_FIELDS = {"width", "height", "delta", "point_count", "report_every"}
_BOOL_FIELDS = {"randomise_colors", "verbose"}
_KEY_ALIASES = {
    "colours": "colors",
    "randomise_colours": "randomise_colors",
    "randomize_colors": "randomise_colors",
    "number": "point_count",
    "fixed_seed": "seed",
}


def load_config(path: Path | str) -> Dict[str, Any]:
    path = Path(path)
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle)
        except yaml.YAMLError as exc:
            raise ValueError(f"could not parse YAML configuration {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError(f"configuration must be a mapping: {path}")
    return dict(data)


def normalise_keys(mapping: Mapping[str, Any]) -> Dict[str, Any]:
    """Apply key aliases and expand ``size: WxH`` into width and height."""

    allowed = {field.name for field in fields(GrowthConfig)}
    values: Dict[str, Any] = {}
    for raw_key, value in mapping.items():
        key = _KEY_ALIASES.get(str(raw_key).replace("-", "_"), str(raw_key).replace("-", "_"))
        if key == "size":
            if value is None:
                continue
            if not isinstance(value, str):
                raise ValueError(f"configuration key 'size' must be a WxH string, got {value!r}")
            values["width"], values["height"] = parse_size(value)
            continue
        if key not in allowed:
            raise ValueError(f"unknown configuration key '{raw_key}'")
        values[key] = value
    return values


def _coerce(key: str, value: Any) -> Any:
    """Check the type of one configuration value; nothing is silently converted."""

    if key in _INT_FIELDS or key == "seed":
        if value is None and key == "seed":
            return None
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"configuration key '{key}' must be an integer, got {value!r}")
        return value
    if key in _BOOL_FIELDS:
        if not isinstance(value, bool):
            raise ValueError(f"configuration key '{key}' must be true or false, got {value!r}")
        return value
    if key == "kind" and isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, str):
        raise ValueError(f"configuration key '{key}' must be a string, got {value!r}")
    return value


def config_from_mapping(mapping: Mapping[str, Any], base: GrowthConfig | None = None) -> GrowthConfig:
    """Build a ``GrowthConfig`` from ``mapping``, falling back to ``base`` for missing keys."""

    merged: Dict[str, Any] = {}
    if base is not None:
        merged.update({field.name: getattr(base, field.name) for field in fields(GrowthConfig)})

    for key, value in normalise_keys(mapping).items():
        if value is None and key != "seed":
            continue
        merged[key] = _coerce(key, value)

    return GrowthConfig(**merged)


__all__ = ["GrowthConfig", "config_from_mapping", "load_config", "normalise_keys"]
