"""Tests for integrity.py — coverage checks."""

from polycut.integrity import check_coverage, displayed_outline
from polycut.models import Point, PuzzlePiece

SQUARE = (Point(0, 0), Point(100, 0), Point(100, 100), Point(0, 100))


def _rect(x0, y0, x1, y1, **kwargs):
    pts = (Point(x0, y0), Point(x1, y0), Point(x1, y1), Point(x0, y1))
    return PuzzlePiece(points=pts, x=(x0 + x1) / 2, y=(y0 + y1) / 2, **kwargs)


class TestCoverage:
    def test_halves_tile(self):
        report = check_coverage(SQUARE, [_rect(0, 0, 50, 100), _rect(50, 0, 100, 100)])
        assert report.ok
        assert report.area_ratio == 1.0
        assert report.midpoints_checked == 8

    def test_gap_detected(self):
        report = check_coverage(SQUARE, [_rect(0, 0, 50, 100)])
        assert not report.ok
        assert abs(report.area_ratio - 0.5) < 1e-12

    def test_overlap_detected(self):
        pieces = [_rect(0, 0, 60, 100), _rect(40, 0, 100, 100)]
        report = check_coverage(SQUARE, pieces)
        assert abs(report.overlap_area - 2000) < 1e-6
        assert not report.ok

    def test_piece_outside(self):
        pieces = [_rect(0, 0, 50, 100), _rect(60, 0, 110, 100)]
        report = check_coverage(SQUARE, pieces)
        assert report.outside_midpoints == [1]

    def test_small_excursion_tolerated(self):
        pieces = [_rect(0, 0, 50, 100.5), _rect(50, 0, 100, 100)]
        assert check_coverage(SQUARE, pieces, tolerance=1.0).outside_midpoints == []

    def test_rotated_piece_uses_solved_orientation(self):
        pieces = [_rect(0, 0, 50, 100, rotation=90), _rect(50, 0, 100, 100)]
        assert check_coverage(SQUARE, pieces).ok


class TestDisplayedOutline:
    def test_rotation_about_centre(self):
        piece = _rect(0, 0, 20, 10, rotation=90)
        outline = displayed_outline(piece)
        xs = [p.x for p in outline]
        ys = [p.y for p in outline]
        assert abs(max(xs) - min(xs) - 10) < 1e-9
        assert abs(max(ys) - min(ys) - 20) < 1e-9
