"""Tests for preservation.py — snapshot-based drift-free adaptation."""

import itertools
import logging

import pytest

from polycut.adaptation import CanvasSizeError, adapt_pieces, adapt_xy
from polycut.models import CanvasSize, Point, PuzzlePiece
from polycut.preservation import StatePreservationEngine


def _square_piece(cx, cy, half=10.0, **kwargs):
    pts = (
        Point(cx - half, cy - half),
        Point(cx + half, cy - half),
        Point(cx + half, cy + half),
        Point(cx - half, cy + half),
    )
    return PuzzlePiece(points=pts, x=cx, y=cy, **kwargs)


A = CanvasSize(800, 600)
B = CanvasSize(1024, 768)
C = CanvasSize(375, 667)
D = CanvasSize(1920, 1080)


def _fake_clock():
    counter = itertools.count(1)
    return lambda: float(next(counter))


@pytest.fixture
def pieces():
    return [
        _square_piece(123.456, 78.9, rotation=45),
        _square_piece(700.1, 500.7, rotation=300),
        _square_piece(400, 300, rotation=15),
    ]


@pytest.fixture
def engine(pieces):
    eng = StatePreservationEngine(clock=_fake_clock())
    eng.save_absolute_states(pieces, A)
    return eng


class TestDriftFreedom:
    def test_path_back_to_scatter_size(self, engine, pieces):
        current = pieces
        for size in (B, C, D, A):
            current = engine.adapt_to_new_canvas_size(current, size)
        assert current == adapt_pieces(pieces, A, A)
        assert current == pieces

    def test_single_hop_matches_direct_adapt(self, engine, pieces):
        current = pieces
        for size in (B, D, C):
            current = engine.adapt_to_new_canvas_size(current, size)
        assert current == adapt_pieces(pieces, A, C)

    def test_many_resizes(self, engine, pieces):
        current = pieces
        for _ in range(50):
            for size in (B, C, D):
                current = engine.adapt_to_new_canvas_size(current, size)
        assert current == adapt_pieces(pieces, A, D)

    def test_rotation_from_snapshot(self, engine, pieces):
        tampered = [p.with_changes(rotation=0) for p in pieces]
        out = engine.adapt_to_new_canvas_size(tampered, B)
        assert [p.rotation for p in out] == [45, 300, 15]


class TestCompletedLock:
    def test_completed_piece_scales_like_others(self, pieces):
        eng = StatePreservationEngine()
        eng.save_absolute_states(pieces, A, completed_indices=[1])
        current = pieces
        for size in (B, C, D):
            current = eng.adapt_to_new_canvas_size(current, size)
            assert current[1].is_completed
            assert current[1].rotation == 300
            assert not current[0].is_completed
            x, y = adapt_xy(pieces[1].x, pieces[1].y, A, size)
            assert current[1].x == x
            assert current[1].y == y

    def test_completed_flag_from_piece(self):
        eng = StatePreservationEngine()
        eng.save_absolute_states([_square_piece(10, 10, is_completed=True)], A)
        assert eng.get_absolute_state(0).is_completed


class TestMissingState:
    def test_unknown_index_passes_through(self, engine, pieces, caplog):
        extra = _square_piece(50, 50)
        with caplog.at_level(logging.WARNING, logger="polycut.preservation"):
            out = engine.adapt_to_new_canvas_size(pieces + [extra], B)
        assert out[3] is extra
        assert "no absolute state for piece 3" in caplog.text

    def test_before_any_save(self, pieces):
        eng = StatePreservationEngine()
        assert eng.adapt_to_new_canvas_size(pieces, B) == pieces


class TestInvalidSize:
    def test_zero_area_raises(self, engine, pieces):
        with pytest.raises(CanvasSizeError):
            engine.adapt_to_new_canvas_size(pieces, CanvasSize(0, 600))

    def test_save_rejects_invalid(self, pieces):
        with pytest.raises(CanvasSizeError):
            StatePreservationEngine().save_absolute_states(pieces, CanvasSize(800, 0))


class TestUpdateAbsoluteState:
    def test_move_in_current_frame(self, engine, pieces):
        current = engine.adapt_to_new_canvas_size(pieces, B)
        assert engine.update_absolute_state(0, x=512.0, y=384.0)
        state = engine.get_absolute_state(0)
        # centre of B maps to centre of A
        assert abs(state.absolute_x - 400) < 1e-9
        assert abs(state.absolute_y - 300) < 1e-9
        current = engine.adapt_to_new_canvas_size(current, B)
        assert abs(current[0].x - 512) < 1e-9
        assert abs(current[0].y - 384) < 1e-9

    def test_move_translates_contour(self, engine, pieces):
        engine.update_absolute_state(2, x=410, y=290)
        state = engine.get_absolute_state(2)
        assert state.points[0] == Point(400, 280)

    def test_partial_move(self, engine, pieces):
        engine.update_absolute_state(1, y=100)
        state = engine.get_absolute_state(1)
        assert abs(state.absolute_x - 700.1) < 1e-9
        assert state.absolute_y == 100

    def test_rotation_and_completion(self, engine, pieces):
        engine.update_absolute_state(0, rotation=90, is_completed=True)
        out = engine.adapt_to_new_canvas_size(pieces, C)
        assert out[0].rotation == 90
        assert out[0].is_completed
        assert engine.get_absolute_state(0).scatter_canvas_size == A

    def test_missing_index(self, engine):
        assert engine.update_absolute_state(99, x=1) is False

    def test_timestamp_refreshed(self, engine):
        before = engine.get_absolute_state(0).timestamp
        engine.update_absolute_state(0, rotation=30)
        assert engine.get_absolute_state(0).timestamp > before


class TestBookkeeping:
    def test_stats(self, engine):
        engine.update_absolute_state(1, is_completed=True)
        stats = engine.stats()
        assert stats.total_states == 3
        assert stats.completed_pieces == 1
        assert stats.oldest_timestamp == 1.0
        assert stats.newest_timestamp == 2.0

    def test_clear(self, engine):
        engine.clear_states()
        assert len(engine) == 0
        assert engine.current_canvas_size is None
        stats = engine.stats()
        assert stats.total_states == 0
        assert stats.oldest_timestamp is None

    def test_save_replaces_states(self, engine, pieces):
        engine.save_absolute_states(pieces[:1], B)
        assert len(engine) == 1
        assert engine.get_absolute_state(0).scatter_canvas_size == B
        assert engine.current_canvas_size == B
