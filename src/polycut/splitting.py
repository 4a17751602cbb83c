"""Polygon splitting along cut lines.

Splitting is delegated to Shapely's line split, which handles the
non-convex cloud and jagged contours as well as plain polygons.  Each
cut is applied to every current fragment in turn, so the fragments
always tile the input shape.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from shapely.geometry import LineString, Polygon
from shapely.geometry.polygon import orient
from shapely.ops import split

from .models import Cut, Point

_KEY_DIGITS = 6


def _key(x: float, y: float) -> Tuple[float, float]:
    return round(x, _KEY_DIGITS), round(y, _KEY_DIGITS)


def to_shapely(points: Sequence[Point]) -> Polygon:
    return Polygon([(p.x, p.y) for p in points])


def from_shapely(poly: Polygon, originals: Iterable[Tuple[float, float]] = ()) -> Tuple[Point, ...]:
    """Convert a Shapely polygon to a counter-clockwise point tuple.

    Vertices whose coordinates match one of *originals* keep the
    ``is_original`` flag; everything else was introduced by a cut.
    """
    lookup = set(originals)
    coords = list(orient(poly, 1.0).exterior.coords)[:-1]
    return tuple(Point(x, y, _key(x, y) in lookup) for x, y in coords)


def _split_once(piece: Polygon, line: LineString, min_area: float) -> List[Polygon]:
    if not line.intersects(piece):
        return [piece]
    fragments = [
        g for g in split(piece, line).geoms
        if isinstance(g, Polygon) and not g.is_empty and g.area > 0
    ]
    if len(fragments) < 2:
        return [piece]
    # keep the piece whole rather than create a sliver
    if any(f.area < min_area for f in fragments):
        return [piece]
    return fragments


def split_polygon(
    shape: Sequence[Point],
    cuts: Sequence[Cut],
    *,
    min_piece_area_ratio: float = 0.05,
) -> List[Tuple[Point, ...]]:
    """Split *shape* along every cut in *cuts*.

    A fragment is only split further when every resulting part has an
    area of at least ``min_piece_area_ratio`` times the shape's area.
    Raises ``ValueError`` when *shape* is not a valid simple polygon.
    """
    if len(shape) < 3:
        raise ValueError(f"Shape needs at least 3 points, got {len(shape)}")
    poly = to_shapely(shape)
    if not poly.is_valid or poly.area <= 0:
        raise ValueError("Shape is not a valid simple polygon")

    min_area = poly.area * min_piece_area_ratio
    pieces: List[Polygon] = [poly]
    for cut in cuts:
        line = LineString(cut.endpoints())
        next_pieces: List[Polygon] = []
        for piece in pieces:
            next_pieces.extend(_split_once(piece, line, min_area))
        pieces = next_pieces

    originals = [_key(p.x, p.y) for p in shape if p.is_original]
    return [from_shapely(piece, originals) for piece in pieces]
