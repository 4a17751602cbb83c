"""Geometry helper functions used across the package."""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence, Tuple

from .models import Bounds, Point

_ON_SEGMENT_EPS = 1e-9


def all_finite(points: Iterable[Point]) -> bool:
    return all(p.is_finite() for p in points)


def compute_bounds(points: Sequence[Point]) -> Bounds:
    """Bounding box, centre and diagonal of *points*.

    Raises ``ValueError`` on an empty sequence.
    """
    if not points:
        raise ValueError("Cannot compute bounds of an empty point sequence")
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    min_x, max_x = min(xs), max(xs)
    min_y, max_y = min(ys), max(ys)
    return Bounds(
        min_x=min_x,
        max_x=max_x,
        min_y=min_y,
        max_y=max_y,
        center_x=(min_x + max_x) / 2,
        center_y=(min_y + max_y) / 2,
        diagonal=math.hypot(max_x - min_x, max_y - min_y),
    )


def polygon_signed_area(points: Sequence[Point]) -> float:
    """Shoelace area; positive for counter-clockwise winding (y up)."""
    n = len(points)
    if n < 3:
        return 0.0
    total = 0.0
    for i in range(n):
        a = points[i]
        b = points[(i + 1) % n]
        total += a.x * b.y - b.x * a.y
    return total / 2


def polygon_area(points: Sequence[Point]) -> float:
    return abs(polygon_signed_area(points))


def polygon_centroid(points: Sequence[Point]) -> Tuple[float, float]:
    """Area centroid of a simple polygon.

    Falls back to the vertex mean for degenerate (near zero-area) input.
    """
    if not points:
        raise ValueError("Cannot compute centroid of an empty point sequence")
    area = polygon_signed_area(points)
    if abs(area) < 1e-12:
        return (
            sum(p.x for p in points) / len(points),
            sum(p.y for p in points) / len(points),
        )
    cx = cy = 0.0
    n = len(points)
    for i in range(n):
        a = points[i]
        b = points[(i + 1) % n]
        cross = a.x * b.y - b.x * a.y
        cx += (a.x + b.x) * cross
        cy += (a.y + b.y) * cross
    return cx / (6 * area), cy / (6 * area)


def point_segment_distance(
    px: float, py: float, ax: float, ay: float, bx: float, by: float,
) -> float:
    dx = bx - ax
    dy = by - ay
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return math.hypot(px - ax, py - ay)
    t = ((px - ax) * dx + (py - ay) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return math.hypot(px - (ax + t * dx), py - (ay + t * dy))


def point_in_polygon(x: float, y: float, polygon: Sequence[Point]) -> bool:
    """Ray-casting containment test.  Points on an edge count as inside."""
    n = len(polygon)
    if n < 3:
        return False
    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y
        if point_segment_distance(x, y, xi, yi, xj, yj) <= _ON_SEGMENT_EPS:
            return True
        if (yi > y) != (yj > y):
            x_cross = (xj - xi) * (y - yi) / (yj - yi) + xi
            if x < x_cross:
                inside = not inside
        j = i
    return inside


def polygon_distance(x: float, y: float, polygon: Sequence[Point]) -> float:
    """Distance from (x, y) to the nearest edge of *polygon*."""
    n = len(polygon)
    return min(
        point_segment_distance(
            x, y, polygon[i].x, polygon[i].y,
            polygon[(i + 1) % n].x, polygon[(i + 1) % n].y,
        )
        for i in range(n)
    )


def rotate_point(
    x: float, y: float, cx: float, cy: float, angle_deg: float,
) -> Tuple[float, float]:
    """Rotate (x, y) by *angle_deg* degrees around (cx, cy)."""
    rad = math.radians(angle_deg)
    cos_a = math.cos(rad)
    sin_a = math.sin(rad)
    dx = x - cx
    dy = y - cy
    return cx + dx * cos_a - dy * sin_a, cy + dx * sin_a + dy * cos_a


def rotate_points(
    points: Sequence[Point], cx: float, cy: float, angle_deg: float,
) -> List[Point]:
    if angle_deg % 360 == 0:
        return list(points)
    out: List[Point] = []
    for p in points:
        rx, ry = rotate_point(p.x, p.y, cx, cy, angle_deg)
        out.append(Point(rx, ry, p.is_original))
    return out


def segment_intersection(
    a1: Tuple[float, float],
    a2: Tuple[float, float],
    b1: Tuple[float, float],
    b2: Tuple[float, float],
) -> Optional[Tuple[float, float]]:
    """Intersection point of segments a1-a2 and b1-b2, or ``None``.

    Parallel and collinear segments return ``None``.
    """
    d1x, d1y = a2[0] - a1[0], a2[1] - a1[1]
    d2x, d2y = b2[0] - b1[0], b2[1] - b1[1]
    denom = d1x * d2y - d1y * d2x
    if abs(denom) < 1e-12:
        return None
    t = ((b1[0] - a1[0]) * d2y - (b1[1] - a1[1]) * d2x) / denom
    u = ((b1[0] - a1[0]) * d1y - (b1[1] - a1[1]) * d1x) / denom
    if 0.0 <= t <= 1.0 and 0.0 <= u <= 1.0:
        return a1[0] + t * d1x, a1[1] + t * d1y
    return None
