"""Cell adjacency from a Delaunay triangulation of the cell sites."""

from typing import Dict, List, Set, Tuple

import numpy as np
import structlog
from scipy.spatial import Delaunay, QhullError

from .cell_map import CellKey

logger = structlog.get_logger()


def _collinear_edges(keys: List[CellKey]) -> List[Tuple[int, int]]:
    """Sites on one line form a path in (x, y) order."""
    order = sorted(range(len(keys)), key=lambda i: keys[i])
    return list(zip(order, order[1:]))


def build_neighbor_graph(centroids: np.ndarray) -> Dict[CellKey, Tuple[CellKey, ...]]:
    """
    Derive cell adjacency from a triangulation of the cell centroids.

    Two cells are neighbors when their sites share a triangle. The relation
    is symmetric by construction. Neighbor tuples are sorted by x, then y.

    Args:
        centroids: (n, 2) array of distinct cell sites

    Returns:
        Mapping from each site's key to its sorted neighbor keys
    """
    centroids = np.asarray(centroids, dtype=np.float64).reshape(-1, 2)
    keys = [CellKey.from_point(p) for p in centroids]
    adjacency: List[Set[int]] = [set() for _ in keys]

    if len(keys) == 2:
        edges = [(0, 1)]
    elif len(keys) > 2:
        try:
            tri = Delaunay(centroids)
            edges = []
            for a, b, c in tri.simplices:
                edges.extend(((a, b), (b, c), (c, a)))
        except QhullError:
            logger.info("Sites are collinear, linking them as a path", sites=len(keys))
            edges = _collinear_edges(keys)
    else:
        edges = []

    for a, b in edges:
        adjacency[a].add(int(b))
        adjacency[b].add(int(a))

    graph = {
        keys[i]: tuple(sorted(keys[j] for j in neighbors))
        for i, neighbors in enumerate(adjacency)
    }

    logger.debug("Neighbor graph built", cells=len(graph), edges=sum(map(len, adjacency)) // 2)
    return graph
