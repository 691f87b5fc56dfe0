"""Command line terrain generator: regenerate an island and save its heightmap."""

import argparse
import sys
from typing import List, Optional

import structlog

from .config import get_settings
from .core.generator import IslandGenerator
from .core.options import GeneratorConfig, IslandGeneratorSettings
from .errors import ConfigError, HeightmapExportError
from .log import configure_logging

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    """Argument parser; unset options fall back to ISLANDGEN_* settings."""
    parser = argparse.ArgumentParser(
        prog="islandgen",
        description="Generate a procedural island and save it as a heightmap image",
    )
    parser.add_argument("--seed", help="Seed text (hashed into the RNG seed)")
    parser.add_argument("--points", type=int, help="Number of Voronoi cells")
    parser.add_argument("--lloyd", type=int, help="Lloyd relaxation iterations")
    parser.add_argument("--box-size", type=float, help="Map side length in pixels")
    parser.add_argument("--seed-height", type=float, help="Height of the start cell")
    parser.add_argument("--decay", type=float, help="Per-hop height decay")
    parser.add_argument("--jitter", type=float, help="Coastline randomization")
    parser.add_argument("--output", help="Output PNG path")
    parser.add_argument("--log-level", help="Logging level")
    parser.add_argument("--log-format", choices=["console", "json"], help="Logging format")
    return parser


def _pick(value, default):
    return default if value is None else value


def main(argv: Optional[List[str]] = None) -> int:
    """Main function."""
    args = build_parser().parse_args(argv)
    settings = get_settings()

    configure_logging(
        _pick(args.log_level, settings.log_level),
        _pick(args.log_format, settings.log_format),
    )

    shaping = {
        name: value
        for name, value in (
            ("seed_height", args.seed_height),
            ("decay", args.decay),
            ("jitter", args.jitter),
        )
        if value is not None
    }

    try:
        config = GeneratorConfig(
            num_points=_pick(args.points, settings.num_points),
            num_lloyd_iterations=_pick(args.lloyd, settings.num_lloyd_iterations),
            box_size=_pick(args.box_size, settings.box_size),
        )
        island_settings = IslandGeneratorSettings(**shaping)
    except ConfigError as exc:
        logger.error("Invalid configuration", error=str(exc))
        return 2

    seed_text = _pick(args.seed, settings.seed_text)
    generator = IslandGenerator.from_seed(seed_text)
    cells = generator.gen_voronoi(config)
    generator.create_island(config, island_settings, cells)

    output = _pick(args.output, settings.output_path)
    try:
        path = generator.save_heightmap_image(config, output, cells)
    except HeightmapExportError as exc:
        logger.error("Could not save heightmap", error=str(exc))
        return 1

    logger.info("Island generated", seed=seed_text, cells=len(cells), output=str(path))
    return 0


if __name__ == "__main__":
    sys.exit(main())
