"""Coverage checks for a cut puzzle.

Pieces in their solved orientation must tile the shape.  Two checks are
combined: every edge midpoint of every piece has to lie inside the shape
(or within *tolerance* of its boundary), and the pieces' total area has
to match the shape's area with no overlap between pieces.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from shapely.ops import unary_union

from .geometry import point_in_polygon, polygon_area, polygon_distance, rotate_points
from .models import Point, PuzzlePiece
from .splitting import to_shapely


@dataclass(frozen=True)
class CoverageReport:
    shape_area: float
    pieces_area: float
    overlap_area: float
    midpoints_checked: int
    outside_midpoints: List[int] = field(default_factory=list)
    area_tolerance: float = 1e-6

    @property
    def area_ratio(self) -> float:
        return self.pieces_area / self.shape_area if self.shape_area else 0.0

    @property
    def ok(self) -> bool:
        return (
            not self.outside_midpoints
            and abs(self.area_ratio - 1.0) <= self.area_tolerance
            and self.overlap_area <= self.area_tolerance * self.shape_area
        )


def displayed_outline(piece: PuzzlePiece) -> List[Point]:
    """Contour of *piece* as drawn, rotated about its centre."""
    return rotate_points(piece.points, piece.x, piece.y, piece.rotation)


def solved_outline(piece: PuzzlePiece) -> List[Point]:
    return rotate_points(piece.points, piece.x, piece.y, piece.original_rotation)


def check_coverage(
    shape: Sequence[Point],
    pieces: Sequence[PuzzlePiece],
    tolerance: float = 1.0,
    area_tolerance: float = 1e-6,
) -> CoverageReport:
    """Check that *pieces*, in solved orientation, tile *shape*.

    ``outside_midpoints`` lists the indices of pieces with at least one
    edge midpoint further than *tolerance* outside the shape.
    """
    outlines = [solved_outline(p) for p in pieces]
    outside: List[int] = []
    checked = 0
    for i, outline in enumerate(outlines):
        n = len(outline)
        for j in range(n):
            a = outline[j]
            b = outline[(j + 1) % n]
            mx = (a.x + b.x) / 2
            my = (a.y + b.y) / 2
            checked += 1
            if point_in_polygon(mx, my, shape):
                continue
            if polygon_distance(mx, my, shape) <= tolerance:
                continue
            outside.append(i)
            break

    pieces_area = sum(polygon_area(o) for o in outlines)
    union_area = unary_union([to_shapely(o) for o in outlines if len(o) >= 3]).area if outlines else 0.0
    return CoverageReport(
        shape_area=polygon_area(shape),
        pieces_area=pieces_area,
        overlap_area=max(0.0, pieces_area - union_area),
        midpoints_checked=checked,
        outside_midpoints=outside,
        area_tolerance=area_tolerance,
    )
