"""Point sampling, deduplication and Lloyd relaxation."""

import numpy as np
import structlog
from scipy.spatial import cKDTree

from ..errors import ConfigError
from .voronoi import build_voronoi_cells, polygon_centroid

logger = structlog.get_logger()

# Points closer than this fraction of the box size are treated as the same site
MERGE_EPSILON = 2e-9


def _check_box_size(box_size: float) -> None:
    if not np.isfinite(box_size) or box_size <= 0:
        raise ConfigError(f"box_size must be a positive finite number, got {box_size}")


def sample_points(count: int, box_size: float, rng: np.random.Generator) -> np.ndarray:
    """
    Draw uniform random points in the bounding square.

    Values are drawn as one row-major block, so the generator is consumed x
    then y, point by point.

    Args:
        count: Number of points
        box_size: Side length of the bounding square
        rng: Seeded generator

    Returns:
        (count, 2) array with coordinates in [0, box_size)
    """
    if count < 0:
        raise ConfigError(f"point count must not be negative, got {count}")
    _check_box_size(box_size)

    return rng.random((count, 2)) * box_size


def merge_close_points(
    points: np.ndarray, box_size: float, epsilon: float = MERGE_EPSILON
) -> np.ndarray:
    """
    Collapse points closer than epsilon * box_size onto one representative.

    The first point in input order wins; everything within range of a kept
    point is dropped. The result is deterministic for a given input order.

    Args:
        points: (n, 2) array of points
        box_size: Side length of the bounding square
        epsilon: Merge distance as a fraction of box_size

    Returns:
        Array of the surviving points, in their original order
    """
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    if len(points) < 2:
        return points.copy()

    radius = epsilon * box_size
    tree = cKDTree(points)
    dropped = np.zeros(len(points), dtype=bool)
    for i in range(len(points)):
        if dropped[i]:
            continue
        for j in tree.query_ball_point(points[i], radius):
            if j > i:
                dropped[j] = True

    merged = int(dropped.sum())
    if merged:
        logger.info("Merged near-duplicate points", merged=merged, remaining=len(points) - merged)
    return points[~dropped]


def relax_points(points: np.ndarray, box_size: float, iterations: int) -> np.ndarray:
    """Apply Lloyd's relaxation to improve point distribution.

    Each iteration moves every point to the centroid of its Voronoi cell,
    clamped into the bounding square. Iterations are strictly sequential;
    within one iteration no point sees another point's update.

    Args:
        points: Distinct points to relax
        box_size: Side length of the bounding square
        iterations: Number of relaxation passes (0 returns the input)

    Returns:
        Relaxed point coordinates
    """
    if iterations < 0:
        raise ConfigError(f"iterations must not be negative, got {iterations}")
    _check_box_size(box_size)

    points = np.array(points, dtype=np.float64).reshape(-1, 2)
    if iterations == 0 or len(points) == 0:
        return points

    logger.info("Starting Lloyd's relaxation", iterations=iterations, points=len(points))

    for iteration in range(iterations):
        cells = build_voronoi_cells(points, box_size)
        centroids = np.array([polygon_centroid(polygon) for _, polygon in cells])
        points = np.clip(centroids, 0.0, box_size)
        logger.debug("Relaxation iteration complete", iteration=iteration + 1)

    return points
