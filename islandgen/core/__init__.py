"""
Core island generation functionality.
"""

from .cell_map import Cell, CellData, CellKey, CellMap, check_cell_map
from .generator import IslandGenerator, assemble_cell_map, generate_island
from .island import find_start_cell, shape_island
from .neighbors import build_neighbor_graph
from .options import GeneratorConfig, IslandGeneratorSettings
from .points import merge_close_points, relax_points, sample_points
from .voronoi import build_voronoi_cells, polygon_area, polygon_centroid

__all__ = ['Cell', 'CellData', 'CellKey', 'CellMap', 'check_cell_map',
           'IslandGenerator', 'assemble_cell_map', 'generate_island',
           'find_start_cell', 'shape_island', 'build_neighbor_graph',
           'GeneratorConfig', 'IslandGeneratorSettings',
           'merge_close_points', 'relax_points', 'sample_points',
           'build_voronoi_cells', 'polygon_area', 'polygon_centroid']
