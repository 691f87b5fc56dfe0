"""
Island generation pipeline.

config -> sample -> relax -> tessellate -> adjacency -> cell map -> shape

Every stage runs to completion before the next one starts; the cell map is
handed back to the caller and not retained.
"""

from pathlib import Path
from typing import Optional, Union

import numpy as np
import structlog

from ..utils.random import make_rng, seed_from_string
from .cell_map import Cell, CellData, CellKey, CellMap, check_cell_map
from .island import shape_island
from .neighbors import build_neighbor_graph
from .options import GeneratorConfig, IslandGeneratorSettings
from .points import merge_close_points, relax_points, sample_points
from .voronoi import build_voronoi_cells

logger = structlog.get_logger()


def assemble_cell_map(points: np.ndarray, box_size: float) -> CellMap:
    """
    Build a cell map (geometry and adjacency, default payloads) for points.

    Near-duplicate points are merged first, keeping the earliest one, so
    coincident inputs end up as a single cell.

    Args:
        points: (n, 2) array of sites inside [0, box_size]
        box_size: Side length of the bounding square

    Returns:
        Cell map in point order
    """
    sites = merge_close_points(points, box_size)
    polygons = build_voronoi_cells(sites, box_size)
    graph = build_neighbor_graph(sites)

    cells: CellMap = {}
    for site, polygon in polygons:
        key = CellKey.from_point(site)
        cells[key] = Cell(key=key, polygon=polygon, neighbors=graph[key], payload=CellData())

    check_cell_map(cells)
    logger.info("Cell map assembled", cells=len(cells))
    return cells


class IslandGenerator:
    """
    Runs the generation pipeline against one owned random generator.

    All stages draw from ``self.rng`` in a fixed order, so two generators
    built from the same seed produce identical maps.
    """

    def __init__(self, rng: np.random.Generator):
        self.rng = rng

    @classmethod
    def from_seed(cls, seed: Union[bytes, str]) -> "IslandGenerator":
        """Create a generator from a 32-byte seed or from seed text."""
        if isinstance(seed, str):
            seed = seed_from_string(seed)
        return cls(make_rng(seed))

    def gen_voronoi(self, config: GeneratorConfig) -> CellMap:
        """Sample, relax and tessellate points into an unshaped cell map."""
        logger.info(
            "Generating Voronoi cells",
            num_points=config.num_points,
            lloyd_iterations=config.num_lloyd_iterations,
            box_size=config.box_size,
        )
        points = sample_points(config.num_points, config.box_size, self.rng)
        points = merge_close_points(points, config.box_size)
        points = relax_points(points, config.box_size, config.num_lloyd_iterations)
        return assemble_cell_map(points, config.box_size)

    def create_island(
        self,
        config: GeneratorConfig,
        settings: IslandGeneratorSettings,
        cells: CellMap,
    ) -> CellMap:
        """Shape island heights into ``cells`` in place."""
        return shape_island(cells, config.box_size, settings, self.rng)

    def save_heightmap_image(
        self, config: GeneratorConfig, path: Union[str, Path], cells: CellMap
    ) -> Path:
        """Write the heightmap of ``cells`` as a PNG."""
        # Imported here so generation does not pull in matplotlib
        from ..export import export_heightmap

        return export_heightmap(cells, config.box_size, path)


def generate_island(
    seed: Union[bytes, str],
    config: Optional[GeneratorConfig] = None,
    settings: Optional[IslandGeneratorSettings] = None,
) -> CellMap:
    """
    Generate a shaped island in one call.

    Args:
        seed: 32-byte seed, or text hashed into one
        config: Point and tessellation parameters (defaults if omitted)
        settings: Island shaping parameters (defaults if omitted)

    Returns:
        Cell map with heights assigned
    """
    config = config or GeneratorConfig()
    settings = settings or IslandGeneratorSettings()

    generator = IslandGenerator.from_seed(seed)
    cells = generator.gen_voronoi(config)
    return generator.create_island(config, settings, cells)
