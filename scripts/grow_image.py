"""Grow a color-diffusion image from seed points and write it to disk."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List, Mapping, Sequence

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from seedgrow import (
    STRATEGY_REGISTRY,
    GrowthConfig,
    GrowthResult,
    PrintProgress,
    SeededRNG,
    build_seeds,
    config_from_mapping,
    grow,
    load_config,
    parse_colors,
    parse_positions,
    save_canvas,
)
from seedgrow.cell import Cell, canonical_ordering

PREFIX = "[grow_image]"


def kind_help() -> str:
    """Describe the accepted frontier kinds from the strategy registry."""

    entries = []
    for spec in STRATEGY_REGISTRY.list():
        names = "/".join((spec.name, *spec.aliases))
        entries.append(f"{names}: {spec.description}")
    intro = "Frontier kind: an integer 0-100 selects lifo with that percent chance to shuffle neighbours."
    return " ".join([intro, *entries])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Create images by growing colors outward from seed points",
    )
    parser.add_argument("--config", type=Path, default=None, help="Optional YAML run configuration")
    parser.add_argument("-v", "--verbose", action="store_true", default=None, help="Report progress")
    parser.add_argument("-s", "--size", default=None, help="Image size in WxH format (default 500x500)")
    parser.add_argument(
        "-n",
        "--number",
        dest="point_count",
        type=int,
        default=None,
        help=(
            "Add random seed points until there are this many; points landing on an "
            "already used coordinate are dropped, so fewer seeds may grow"
        ),
    )
    parser.add_argument(
        "-p",
        "--positions",
        default=None,
        help="Colon-separated list of x,y points; repeated coordinates keep only the first",
    )
    parser.add_argument(
        "-c",
        "--colours",
        "--colors",
        dest="colors",
        default=None,
        help="Colon-separated list of r,g,b colors; the last one repeats for remaining points",
    )
    parser.add_argument(
        "-r",
        "--random",
        dest="randomise_colors",
        action="store_true",
        default=None,
        help="Randomise missing colors instead of repeating the last one",
    )
    parser.add_argument("-o", "--output", default=None, help="Output filename (default output.png)")
    parser.add_argument("-d", "--delta", type=int, default=None, help="Maximum color offset per step (default 4)")
    parser.add_argument(
        "-k",
        "--kind",
        default=None,
        help=kind_help(),
    )
    parser.add_argument("-f", "--fixed-seed", dest="seed", type=int, default=None, help="Random generator seed")
    parser.add_argument(
        "-g",
        "--ordering",
        default=None,
        help="Letters from 'rgbxy' giving the comparison order for tree and heap kinds",
    )
    parser.add_argument("--summary", type=Path, default=None, help="Optional path for a JSON run summary")
    return parser


def resolve_config(args: argparse.Namespace) -> GrowthConfig:
    """Merge defaults, the optional YAML file and command line flags (flags win)."""

    config = GrowthConfig()
    if args.config is not None:
        config = config_from_mapping(load_config(args.config), base=config)

    overrides = {
        "size": args.size,
        "point_count": args.point_count,
        "positions": args.positions,
        "colors": args.colors,
        "randomise_colors": args.randomise_colors,
        "output": args.output,
        "delta": args.delta,
        "kind": args.kind,
        "ordering": args.ordering,
        "verbose": args.verbose,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if args.seed is not None:
        overrides["seed"] = args.seed
    return config_from_mapping(overrides, base=config)


def prepare_seeds(config: GrowthConfig, rng: SeededRNG) -> List[Cell]:
    positions = parse_positions(config.positions, config.width, config.height)
    colors = parse_colors(config.colors)
    return build_seeds(
        config.width,
        config.height,
        positions,
        colors,
        count=config.point_count,
        randomise_colors=config.randomise_colors,
        rng=rng,
    )


def run(config: GrowthConfig, seeds: Sequence[Cell], rng: SeededRNG) -> GrowthResult:
    """Grow the canvas; ``rng`` must be the generator that produced ``seeds``."""

    observer = PrintProgress(PREFIX) if config.verbose else None
    return grow(
        config.width,
        config.height,
        seeds,
        kind=config.strategy,
        ordering=config.ordering,
        delta=config.delta,
        rng=rng,
        observer=observer,
        report_every=config.report_every,
    )


def summarise(config: GrowthConfig, result: GrowthResult, seeds: Sequence[Cell] | None = None) -> Dict[str, object]:
    pixels = result.canvas.to_array().reshape(-1, 3)
    mean_color = [round(float(value), 3) for value in pixels.mean(axis=0)]
    selection = config.strategy

    summary: Dict[str, object] = {
        "size": [config.width, config.height],
        "kind": selection.name,
        "shuffle_chance": selection.chance,
        "ordering": canonical_ordering(config.ordering),
        "delta": config.delta,
        "seed": config.seed,
        "commits": result.commits,
        "insertions": result.insertions,
        "mean_color": mean_color,
    }
    if seeds is not None:
        summary["seeds"] = [{"position": list(cell.position), "color": list(cell.color)} for cell in seeds]
    return summary


def write_summary(path: Path, summary: Mapping[str, object]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(summary, handle, indent=2)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = resolve_config(args)
        rng = SeededRNG(config.seed)
        seeds = prepare_seeds(config, rng)
    except (OSError, ValueError) as exc:
        parser.error(str(exc))

    result = run(config, seeds, rng)

    if config.verbose:
        print(f"{PREFIX} Saving {config.output}...")
    output_path = save_canvas(result.canvas, config.output)
    if config.verbose:
        print(f"{PREFIX} Wrote {config.width}x{config.height} image to {output_path}")

    if args.summary is not None:
        write_summary(args.summary, summarise(config, result, seeds))
        if config.verbose:
            print(f"{PREFIX} Summary written to {args.summary}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
