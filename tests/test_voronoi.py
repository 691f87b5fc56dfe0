"""Tests for clipped Voronoi tessellation."""

import numpy as np
import pytest
from shapely.geometry import LinearRing, Point, Polygon

from islandgen.core.points import sample_points
from islandgen.core.voronoi import (
    build_voronoi_cells, clip_half_plane, polygon_area, polygon_centroid
)
from islandgen.utils.random import make_rng

BOX = 500.0


@pytest.fixture
def random_cells():
    points = sample_points(60, BOX, make_rng(bytes(32)))
    return build_voronoi_cells(points, BOX)


class TestPolygonHelpers:
    """Test polygon area and centroid."""

    def test_square_area(self):
        """Test area sign follows orientation."""
        square = np.array([[0.0, 0.0], [2.0, 0.0], [2.0, 2.0], [0.0, 2.0]])
        assert polygon_area(square) == pytest.approx(4.0)
        assert polygon_area(square[::-1]) == pytest.approx(-4.0)

    def test_centroid(self):
        """Test centroid of a rectangle and a triangle."""
        rect = np.array([[0.0, 0.0], [4.0, 0.0], [4.0, 2.0], [0.0, 2.0]])
        np.testing.assert_allclose(polygon_centroid(rect), [2.0, 1.0])

        tri = np.array([[0.0, 0.0], [3.0, 0.0], [0.0, 3.0]])
        np.testing.assert_allclose(polygon_centroid(tri), [1.0, 1.0])

    def test_clip_half_plane(self):
        """Test clipping a square in half."""
        square = np.array([[0.0, 0.0], [2.0, 0.0], [2.0, 2.0], [0.0, 2.0]])
        half = clip_half_plane(square, np.array([1.0, 0.0]), 1.0)

        assert polygon_area(half) == pytest.approx(2.0)
        assert np.all(half[:, 0] <= 1.0)


class TestBuildVoronoiCells:
    """Test tessellation of the bounding square."""

    def test_one_cell_per_point(self, random_cells):
        """Test that each input point gets a cell in order."""
        points = sample_points(60, BOX, make_rng(bytes(32)))
        assert len(random_cells) == 60
        for point, (site, _) in zip(points, random_cells):
            np.testing.assert_array_equal(site, point)

    def test_partition_area(self, random_cells):
        """Test that cell areas add up to the box area."""
        total = sum(polygon_area(poly) for _, poly in random_cells)
        assert total == pytest.approx(BOX * BOX, rel=1e-9)

    def test_no_overlap(self, random_cells):
        """Test that no two cells overlap with positive area."""
        shapes = [Polygon(poly) for _, poly in random_cells]
        for i in range(len(shapes)):
            for j in range(i + 1, len(shapes)):
                assert shapes[i].intersection(shapes[j]).area < 1e-6

    def test_polygons_well_formed(self, random_cells):
        """Test orientation, simplicity and vertex uniqueness."""
        for _, poly in random_cells:
            assert len(poly) >= 3
            assert polygon_area(poly) > 0
            assert LinearRing(poly).is_simple
            following = np.roll(poly, -1, axis=0)
            assert not np.any(np.all(poly == following, axis=1))

    def test_polygons_inside_box(self, random_cells):
        """Test that clipped vertices stay within the square."""
        for _, poly in random_cells:
            assert np.all(poly >= -1e-9)
            assert np.all(poly <= BOX + 1e-9)

    def test_site_inside_own_cell(self, random_cells):
        """Test that each site lies in its own polygon."""
        for site, poly in random_cells:
            assert Polygon(poly).buffer(1e-9).contains(Point(site))

    def test_corners_are_vertices(self, random_cells):
        """Test that boundary cells carry the clipped square corners."""
        vertices = np.vstack([poly for _, poly in random_cells])
        for corner in ([0, 0], [BOX, 0], [BOX, BOX], [0, BOX]):
            assert np.any(np.all(vertices == corner, axis=1))

    def test_single_point(self):
        """Test that one point owns the whole square."""
        cells = build_voronoi_cells(np.array([[10.0, 10.0]]), 100.0)
        assert len(cells) == 1
        assert polygon_area(cells[0][1]) == pytest.approx(100.0 * 100.0)

    def test_two_points(self):
        """Test that two points split the square along their bisector."""
        cells = build_voronoi_cells(np.array([[100.0, 250.0], [400.0, 250.0]]), BOX)

        left, right = cells[0][1], cells[1][1]
        assert polygon_area(left) == pytest.approx(BOX * BOX / 2)
        assert polygon_area(right) == pytest.approx(BOX * BOX / 2)
        assert np.all(left[:, 0] <= 250.0 + 1e-9)
        assert np.all(right[:, 0] >= 250.0 - 1e-9)

    def test_collinear_points(self):
        """Test that collinear sites give vertical strips."""
        points = np.array([[50.0, 250.0], [150.0, 250.0], [250.0, 250.0],
                           [350.0, 250.0], [450.0, 250.0]])
        cells = build_voronoi_cells(points, BOX)

        for _, poly in cells:
            assert polygon_area(poly) == pytest.approx(100.0 * BOX)

    def test_empty(self):
        """Test that no points give no cells."""
        assert build_voronoi_cells(np.empty((0, 2)), BOX) == []
