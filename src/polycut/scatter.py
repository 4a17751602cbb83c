"""Random piece placement for the start of a round.

Each piece gets a rotation in 15° steps and a position on a coarse grid
over the canvas.  Up to ``placement_attempts`` grid cells are tried per
piece and the one whose rotated bounding box overlaps the already
placed pieces least is kept.  Positions are clamped so the rotated
piece stays ``margin`` pixels inside the canvas; a piece too large to
fit is centred on that axis.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .geometry import compute_bounds, rotate_points
from .models import CanvasSize, PuzzlePiece

Box = Tuple[float, float, float, float]


@dataclass
class ScatterConfig:
    rotation_step: float = 15.0
    margin: float = 10.0
    placement_attempts: int = 10
    jitter: float = 0.5
    rotate: bool = True


def rotated_extents(piece: PuzzlePiece, rotation: float) -> Tuple[float, float, float, float]:
    """Extents of the rotated contour relative to the piece centre.

    Returns ``(left, right, up, down)`` distances, all non-negative.
    """
    pts = rotate_points(piece.points, piece.x, piece.y, rotation)
    b = compute_bounds(pts)
    return (
        max(0.0, piece.x - b.min_x),
        max(0.0, b.max_x - piece.x),
        max(0.0, piece.y - b.min_y),
        max(0.0, b.max_y - piece.y),
    )


def _overlap(a: Box, b: Box) -> float:
    w = min(a[2], b[2]) - max(a[0], b[0])
    h = min(a[3], b[3]) - max(a[1], b[1])
    if w <= 0 or h <= 0:
        return 0.0
    return w * h


def _clamp(value: float, low: float, high: float) -> float:
    if low > high:
        return (low + high) / 2
    return max(low, min(high, value))


def _grid(n: int, canvas: CanvasSize) -> Tuple[int, int]:
    cols = math.ceil(math.sqrt(n * 1.5))
    if canvas.width > canvas.height * 1.5:
        cols = math.ceil(math.sqrt(n * 2))
    elif canvas.height > canvas.width * 1.5:
        rows = math.ceil(math.sqrt(n * 2))
        return max(1, math.ceil(n / rows)), rows
    return max(1, cols), max(1, math.ceil(n / cols))


def move_piece_to(piece: PuzzlePiece, x: float, y: float) -> PuzzlePiece:
    """Translate a piece (centre and contour) to (x, y)."""
    dx = x - piece.x
    dy = y - piece.y
    return piece.with_changes(
        x=x, y=y, points=tuple(p.translated(dx, dy) for p in piece.points),
    )


def scatter_pieces(
    pieces: Sequence[PuzzlePiece],
    canvas: CanvasSize,
    *,
    config: Optional[ScatterConfig] = None,
    rng: Optional[random.Random] = None,
) -> List[PuzzlePiece]:
    """Return the pieces randomly rotated and spread over *canvas*.

    Completed pieces are left where they are.
    """
    config = config or ScatterConfig()
    if rng is None:
        rng = random.Random(42)
    if not pieces:
        return []

    cols, rows = _grid(len(pieces), canvas)
    cell_w = (canvas.width - 2 * config.margin) / cols
    cell_h = (canvas.height - 2 * config.margin) / rows

    out: List[Optional[PuzzlePiece]] = [None] * len(pieces)
    placed: List[Box] = []
    order = list(range(len(pieces)))
    rng.shuffle(order)

    for index in order:
        piece = pieces[index]
        if piece.is_completed:
            out[index] = piece
            continue

        rotation = 0.0
        if config.rotate:
            steps = int(round(360 / config.rotation_step))
            rotation = rng.randrange(steps) * config.rotation_step
        left, right, up, down = rotated_extents(piece, rotation)

        best: Optional[Tuple[float, float, Box]] = None
        best_overlap = math.inf
        for _ in range(config.placement_attempts):
            gx = rng.randrange(cols)
            gy = rng.randrange(rows)
            cx = config.margin + (gx + 0.5) * cell_w + (rng.random() - 0.5) * cell_w * config.jitter
            cy = config.margin + (gy + 0.5) * cell_h + (rng.random() - 0.5) * cell_h * config.jitter
            cx = _clamp(cx, config.margin + left, canvas.width - config.margin - right)
            cy = _clamp(cy, config.margin + up, canvas.height - config.margin - down)
            box = (cx - left, cy - up, cx + right, cy + down)
            overlap = sum(_overlap(box, other) for other in placed)
            if overlap < best_overlap:
                best, best_overlap = (cx, cy, box), overlap
            if overlap == 0:
                break

        cx, cy, box = best
        placed.append(box)
        out[index] = move_piece_to(piece, cx, cy).with_changes(rotation=rotation)

    return list(out)
