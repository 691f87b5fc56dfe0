"""
islandgen - procedural island terrain generation on relaxed Voronoi cells.
"""

__version__ = "0.1.0"
