"""Tests for scatter.py — random piece placement."""

import random

import pytest

from polycut.cutting import CuttingEngine
from polycut.geometry import compute_bounds
from polycut.integrity import displayed_outline
from polycut.models import CanvasSize, Point, PuzzlePiece
from polycut.scatter import ScatterConfig, move_piece_to, rotated_extents, scatter_pieces
from polycut.shapes import generate_shape


@pytest.fixture
def pieces():
    shape = generate_shape("cloud", rng=random.Random(5))
    return CuttingEngine(rng=random.Random(5)).cut(shape, "straight", 4)


CANVAS = CanvasSize(1000, 1000)


class TestScatter:
    def test_rotations_in_steps(self, pieces):
        out = scatter_pieces(pieces, CANVAS, rng=random.Random(1))
        for piece in out:
            assert piece.rotation % 15 == 0
            assert 0 <= piece.rotation < 360

    def test_inside_safe_area(self, pieces):
        out = scatter_pieces(pieces, CANVAS, rng=random.Random(2))
        for piece in out:
            b = compute_bounds(displayed_outline(piece))
            assert b.min_x >= 10 - 1e-6
            assert b.min_y >= 10 - 1e-6
            assert b.max_x <= 990 + 1e-6
            assert b.max_y <= 990 + 1e-6

    def test_contour_moves_with_centre(self, pieces):
        out = scatter_pieces(pieces, CANVAS, rng=random.Random(3))
        for before, after in zip(pieces, out):
            dx = after.x - before.x
            dy = after.y - before.y
            for p, q in zip(before.points, after.points):
                assert abs(q.x - (p.x + dx)) < 1e-9
                assert abs(q.y - (p.y + dy)) < 1e-9

    def test_completed_pieces_stay(self, pieces):
        pieces = [pieces[0].with_changes(is_completed=True)] + pieces[1:]
        out = scatter_pieces(pieces, CANVAS, rng=random.Random(4))
        assert out[0] == pieces[0]

    def test_no_rotation(self, pieces):
        out = scatter_pieces(pieces, CANVAS, config=ScatterConfig(rotate=False), rng=random.Random(4))
        assert all(p.rotation == 0 for p in out)

    def test_same_count_and_order(self, pieces):
        out = scatter_pieces(pieces, CANVAS, rng=random.Random(6))
        assert len(out) == len(pieces)
        for before, after in zip(pieces, out):
            assert len(before.points) == len(after.points)

    def test_empty(self):
        assert scatter_pieces([], CANVAS) == []

    def test_oversized_piece_centred(self):
        big = PuzzlePiece(
            points=(Point(0, 0), Point(400, 0), Point(400, 400), Point(0, 400)),
            x=200, y=200,
        )
        (out,) = scatter_pieces([big], CanvasSize(300, 300), config=ScatterConfig(rotate=False))
        assert out.x == 150
        assert out.y == 150


class TestHelpers:
    def test_move_piece_to(self):
        piece = PuzzlePiece(points=(Point(0, 0), Point(2, 0), Point(2, 2)), x=1, y=1)
        moved = move_piece_to(piece, 11, 21)
        assert moved.points[0] == Point(10, 20)
        assert (moved.x, moved.y) == (11, 21)

    def test_rotated_extents_square(self):
        piece = PuzzlePiece(
            points=(Point(-1, -1), Point(1, -1), Point(1, 1), Point(-1, 1)), x=0, y=0,
        )
        left, right, up, down = rotated_extents(piece, 45)
        assert abs(left - 2 ** 0.5) < 1e-9
        assert abs(down - 2 ** 0.5) < 1e-9
        assert rotated_extents(piece, 0) == (1, 1, 1, 1)
