"""
Voronoi tessellation clipped to the bounding square.

Each cell is built by starting from the full square and cutting it with the
perpendicular bisector between its site and every Delaunay neighbor. Because
the square itself is the starting polygon, cells on the map edge come out with
the clipped boundary edges already in place and the cells tile the square
exactly (up to floating point).
"""

from typing import List, Tuple

import numpy as np
import structlog
from scipy.spatial import Delaunay, QhullError

logger = structlog.get_logger()

# Consecutive polygon vertices closer than this (relative to box size) are merged
VERTEX_TOLERANCE = 1e-12


def box_polygon(box_size: float) -> np.ndarray:
    """Counter-clockwise corners of the bounding square."""
    return np.array(
        [[0.0, 0.0], [box_size, 0.0], [box_size, box_size], [0.0, box_size]]
    )


def polygon_area(polygon: np.ndarray) -> float:
    """Signed shoelace area; positive for counter-clockwise polygons."""
    if len(polygon) < 3:
        return 0.0
    x, y = polygon[:, 0], polygon[:, 1]
    return float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y)) / 2.0


def polygon_centroid(polygon: np.ndarray) -> np.ndarray:
    """
    Compute the centroid of a polygon.

    Falls back to the vertex mean for degenerate (zero area) polygons.

    Args:
        polygon: Array of [x, y] vertex coordinates

    Returns:
        [x, y] centroid coordinates
    """
    if len(polygon) < 3:
        return np.mean(polygon, axis=0)

    x, y = polygon[:, 0], polygon[:, 1]
    x_next, y_next = np.roll(x, -1), np.roll(y, -1)
    cross = x * y_next - x_next * y
    area = cross.sum() / 2.0

    if abs(area) < 1e-12:
        return np.mean(polygon, axis=0)

    cx = np.sum((x + x_next) * cross) / (6.0 * area)
    cy = np.sum((y + y_next) * cross) / (6.0 * area)
    return np.array([cx, cy])


def clip_half_plane(polygon: np.ndarray, normal: np.ndarray, offset: float) -> np.ndarray:
    """
    Clip a convex polygon to the half plane ``p . normal <= offset``.

    Sutherland-Hodgman against a single edge; vertex order is preserved.
    """
    if len(polygon) == 0:
        return polygon

    dist = polygon @ normal - offset
    if np.all(dist <= 0):
        return polygon

    clipped = []
    n = len(polygon)
    for i in range(n):
        j = (i + 1) % n
        d_cur, d_next = dist[i], dist[j]
        if d_cur <= 0:
            clipped.append(polygon[i])
        if (d_cur < 0 < d_next) or (d_next < 0 < d_cur):
            t = d_cur / (d_cur - d_next)
            clipped.append(polygon[i] + t * (polygon[j] - polygon[i]))

    if not clipped:
        return np.empty((0, 2))
    return np.array(clipped)


def _drop_repeated_vertices(polygon: np.ndarray, tolerance: float) -> np.ndarray:
    """Remove consecutive (and wrap-around) vertices closer than tolerance."""
    kept = []
    for vertex in polygon:
        if kept and np.all(np.abs(vertex - kept[-1]) <= tolerance):
            continue
        kept.append(vertex)
    while len(kept) > 1 and np.all(np.abs(kept[0] - kept[-1]) <= tolerance):
        kept.pop()
    return np.array(kept) if kept else np.empty((0, 2))


def _candidate_neighbors(points: np.ndarray) -> List[np.ndarray]:
    """
    Sites whose bisectors can bound each cell.

    The Delaunay neighbors of a site are exactly the sites sharing a Voronoi
    edge with it, so only those need to cut its polygon. Inputs Qhull cannot
    triangulate (fewer than four sites or all collinear) use every other site.
    """
    n = len(points)
    everyone = np.arange(n)
    if n < 4:
        return [np.delete(everyone, i) for i in range(n)]

    try:
        tri = Delaunay(points)
    except QhullError:
        logger.debug("Delaunay failed, clipping against all sites", points=n)
        return [np.delete(everyone, i) for i in range(n)]

    indptr, indices = tri.vertex_neighbor_vertices
    candidates = []
    for i in range(n):
        neighbors = indices[indptr[i]:indptr[i + 1]]
        # Sites Qhull left out of the triangulation fall back to brute force
        candidates.append(neighbors if len(neighbors) else np.delete(everyone, i))
    return candidates


def build_voronoi_cells(
    points: np.ndarray, box_size: float
) -> List[Tuple[np.ndarray, np.ndarray]]:
    """
    Build one clipped Voronoi polygon per point.

    Points must already be deduplicated (see merge_close_points). Polygons are
    counter-clockwise with no repeated consecutive vertices.

    Args:
        points: (n, 2) array of sites inside [0, box_size]
        box_size: Side length of the bounding square

    Returns:
        List of (site, polygon) pairs in input order
    """
    points = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    square = box_polygon(box_size)
    tolerance = VERTEX_TOLERANCE * box_size

    cells = []
    for i, neighbor_ids in enumerate(_candidate_neighbors(points)):
        site = points[i]
        polygon = square
        for j in neighbor_ids:
            other = points[j]
            normal = other - site
            offset = float(np.dot((site + other) / 2.0, normal))
            polygon = clip_half_plane(polygon, normal, offset)
        cells.append((site.copy(), _drop_repeated_vertices(polygon, tolerance)))

    logger.debug("Voronoi cells built", cells=len(cells), box_size=box_size)
    return cells
