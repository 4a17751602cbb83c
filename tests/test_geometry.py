"""Tests for models and geometry helpers."""

import math

import pytest

from polycut.geometry import (
    compute_bounds,
    point_in_polygon,
    polygon_area,
    polygon_centroid,
    polygon_signed_area,
    rotate_point,
    rotate_points,
    segment_intersection,
)
from polycut.models import CanvasSize, Point, PuzzlePiece

SQUARE = (Point(0, 0), Point(100, 0), Point(100, 100), Point(0, 100))


class TestBounds:
    def test_square_bounds(self):
        b = compute_bounds(SQUARE)
        assert b.center_x == 50
        assert b.center_y == 50
        assert abs(b.diagonal - 141.42) < 0.01
        assert b.width == 100
        assert b.height == 100

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            compute_bounds([])


class TestArea:
    def test_square_area(self):
        assert polygon_area(SQUARE) == 10000

    def test_winding_sign(self):
        assert polygon_signed_area(SQUARE) > 0
        assert polygon_signed_area(tuple(reversed(SQUARE))) < 0

    def test_centroid(self):
        cx, cy = polygon_centroid(SQUARE)
        assert abs(cx - 50) < 1e-10
        assert abs(cy - 50) < 1e-10

    def test_degenerate_centroid_is_vertex_mean(self):
        line = (Point(0, 0), Point(10, 0), Point(20, 0))
        assert polygon_centroid(line) == (10, 0)


class TestPointInPolygon:
    def test_inside(self):
        assert point_in_polygon(50, 50, SQUARE)

    def test_outside(self):
        assert not point_in_polygon(150, 50, SQUARE)
        assert not point_in_polygon(-1, -1, SQUARE)

    def test_on_edge_counts_as_inside(self):
        assert point_in_polygon(0, 50, SQUARE)
        assert point_in_polygon(100, 100, SQUARE)

    def test_concave(self):
        # L-shape with the top-right quadrant missing
        ell = (
            Point(0, 0), Point(100, 0), Point(100, 50),
            Point(50, 50), Point(50, 100), Point(0, 100),
        )
        assert point_in_polygon(25, 75, ell)
        assert not point_in_polygon(75, 75, ell)


class TestRotation:
    def test_quarter_turn(self):
        x, y = rotate_point(10, 0, 0, 0, 90)
        assert abs(x) < 1e-10
        assert abs(y - 10) < 1e-10

    def test_about_centre(self):
        x, y = rotate_point(60, 50, 50, 50, 180)
        assert abs(x - 40) < 1e-10
        assert abs(y - 50) < 1e-10

    def test_full_turn_is_identity(self):
        assert rotate_points(SQUARE, 50, 50, 360) == list(SQUARE)

    def test_keeps_original_flag(self):
        pts = rotate_points([Point(1, 0, True)], 0, 0, 45)
        assert pts[0].is_original


class TestSegmentIntersection:
    def test_crossing(self):
        p = segment_intersection((0, 0), (10, 10), (0, 10), (10, 0))
        assert p is not None
        assert abs(p[0] - 5) < 1e-10
        assert abs(p[1] - 5) < 1e-10

    def test_parallel(self):
        assert segment_intersection((0, 0), (10, 0), (0, 1), (10, 1)) is None

    def test_disjoint(self):
        assert segment_intersection((0, 0), (1, 1), (5, 0), (6, -1)) is None


class TestModels:
    def test_canvas_properties(self):
        c = CanvasSize(800, 600)
        assert c.center_x == 400
        assert c.center_y == 300
        assert c.min_edge == 600
        assert c.is_valid()

    @pytest.mark.parametrize("w,h", [(0, 100), (100, -1), (math.inf, 10), (math.nan, 10)])
    def test_invalid_canvas(self, w, h):
        assert not CanvasSize(w, h).is_valid()

    def test_point_finite(self):
        assert Point(1, 2).is_finite()
        assert not Point(math.nan, 2).is_finite()

    def test_piece_dict_round_trip(self):
        piece = PuzzlePiece(
            points=(Point(0, 0, True), Point(10, 0), Point(0, 10, True)),
            x=3.0, y=3.0, rotation=45.0, is_completed=True,
        )
        data = piece.to_dict()
        assert data["isCompleted"] is True
        assert data["points"][0]["isOriginal"] is True
        assert PuzzlePiece.from_dict(data) == piece
