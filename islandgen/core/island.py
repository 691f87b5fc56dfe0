"""
Island shaping by randomized breadth-first height spreading.

Starting from the cell nearest the middle of the map, height flows outward
along the neighbor graph, shrinking by ``decay`` per hop and randomized by
``jitter``. Cells the flood never reaches stay at height 0 (open water).

The traversal is strictly sequential: random draws are consumed in queue
order, one per unvisited neighbor, so the same generator state always yields
the same island.
"""

from typing import Optional

import numpy as np
import structlog

from .cell_map import CellKey, CellMap
from .options import IslandGeneratorSettings

logger = structlog.get_logger()

# Spreading stops once the per-hop contribution drops below this
MIN_LEVEL_HEIGHT = 0.01


def find_start_cell(cells: CellMap, box_size: float) -> Optional[CellKey]:
    """
    Find the cell whose site is closest to the center of the map.

    Ties go to the cell that comes first in map order.

    Returns:
        Key of the start cell, or None for an empty map
    """
    if not cells:
        return None

    center = box_size / 2.0
    return min(cells, key=lambda key: (key.x - center) ** 2 + (key.y - center) ** 2)


def shape_island(
    cells: CellMap,
    box_size: float,
    settings: IslandGeneratorSettings,
    rng: np.random.Generator,
) -> CellMap:
    """
    Assign heights in [0, 1] to the cells of a map, in place.

    Args:
        cells: Cell map with CellData payloads
        box_size: Side length of the map square (locates the center)
        settings: Seed height, decay and jitter
        rng: Generator consumed once per unvisited neighbor when jitter > 0

    Returns:
        The same cell map, for chaining
    """
    start = find_start_cell(cells, box_size)
    if start is None:
        logger.info("Empty cell map, nothing to shape")
        return cells

    for cell in cells.values():
        cell.payload.visited = False

    start_cell = cells[start]
    start_cell.payload.height = settings.seed_height
    start_cell.payload.visited = True
    queue = [start_cell]

    i = 0
    while i < len(queue):
        current = queue[i]
        level_height = current.payload.height * settings.decay
        if level_height < MIN_LEVEL_HEIGHT:
            break

        for key in current.neighbors:
            neighbor = cells[key]
            if neighbor.payload.visited:
                continue

            if settings.jitter == 0:
                modifier = 1.0
            else:
                modifier = rng.random() * settings.jitter + (1.1 - settings.jitter)

            neighbor.payload.height = min(
                neighbor.payload.height + level_height * modifier, 1.0
            )
            neighbor.payload.visited = True
            queue.append(neighbor)

        i += 1

    land = sum(1 for cell in cells.values() if cell.payload.height >= 0.5)
    logger.info(
        "Island shaped",
        start_x=start.x,
        start_y=start.y,
        reached=len(queue),
        land_cells=land,
        total_cells=len(cells),
    )
    return cells
