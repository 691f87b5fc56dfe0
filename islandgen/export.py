"""
Heightmap image export.

Renders every cell polygon as a flat colored patch on a box_size x box_size
pixel canvas: water below height 0.5, land shaded linearly by height.
"""

from pathlib import Path
from typing import Tuple, Union

import matplotlib

matplotlib.use("Agg")

from matplotlib.backends.backend_agg import FigureCanvasAgg  # noqa: E402
from matplotlib.collections import PolyCollection  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402
import structlog  # noqa: E402

from .core.cell_map import CellMap  # noqa: E402
from .errors import HeightmapExportError  # noqa: E402

logger = structlog.get_logger()

WATER_LEVEL = 0.5
WATER_COLOR = (0.0, 0.2, 0.6)
LAND_COLOR = (0.35, 0.8, 0.25)


def cell_color(height: float) -> Tuple[float, float, float]:
    """Color of a cell with the given height."""
    if height < WATER_LEVEL:
        return WATER_COLOR
    return tuple(channel * height for channel in LAND_COLOR)


def export_heightmap(cells: CellMap, box_size: float, path: Union[str, Path]) -> Path:
    """
    Write a PNG heightmap of a shaped cell map.

    The cell map is only read. Pixel rows run top to bottom along y, matching
    image coordinates.

    Args:
        cells: Shaped cell map
        box_size: Side length of the map square, in pixels
        path: Output file

    Returns:
        Path that was written

    Raises:
        HeightmapExportError: If the image cannot be written
    """
    path = Path(path)
    pixels = max(int(round(box_size)), 1)

    # A 1x1 inch figure at dpi=pixels yields exactly pixels x pixels
    fig = Figure(figsize=(1, 1), dpi=pixels)
    FigureCanvasAgg(fig)
    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_xlim(0, box_size)
    ax.set_ylim(box_size, 0)
    ax.axis("off")
    ax.set_facecolor(WATER_COLOR)
    fig.patch.set_facecolor(WATER_COLOR)

    polygons = [cell.polygon for cell in cells.values()]
    colors = [cell_color(cell.payload.height) for cell in cells.values()]
    ax.add_collection(
        PolyCollection(
            polygons,
            facecolors=colors,
            edgecolors=colors,
            linewidths=0,
            antialiaseds=False,
        )
    )

    try:
        fig.savefig(path, dpi=pixels, format="png", facecolor=fig.get_facecolor())
    except OSError as exc:
        logger.error("Heightmap export failed", path=str(path), error=str(exc))
        raise HeightmapExportError(f"could not write heightmap to {path}: {exc}") from exc

    logger.info("Heightmap exported", path=str(path), size=pixels, cells=len(cells))
    return path
