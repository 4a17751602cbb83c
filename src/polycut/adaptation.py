"""Centre-relative scaling between canvas sizes.

Every point is moved by the same transform::

    new = to_center + (old - from_center) * scale
    scale = min(to.width, to.height) / min(from.width, from.height)

Scaling by the minimum edge keeps the shape inside the shorter axis
whatever the aspect ratio.  Rotation, completion and every other
non-geometric field pass through untouched.  When ``from == to`` the
input is returned as is.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, TypeVar

import numpy as np

from .models import LOGICAL_CANVAS, CanvasSize, Point, PuzzlePiece

log = logging.getLogger(__name__)

Positioned = TypeVar("Positioned", Point, PuzzlePiece)


class CanvasSizeError(ValueError):
    """Raised for zero, negative or non-finite canvas sizes."""


@dataclass(frozen=True)
class AdaptOutcome:
    """Result of adapting a single piece: a value or an error message."""

    value: Optional[PuzzlePiece] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def validate_canvas(size: CanvasSize, name: str = "canvas") -> None:
    if not size.is_valid():
        raise CanvasSizeError(f"Invalid {name} size {size.width}x{size.height}")


def scale_factor(from_size: CanvasSize, to_size: CanvasSize) -> float:
    validate_canvas(from_size, "source canvas")
    validate_canvas(to_size, "target canvas")
    return to_size.min_edge / from_size.min_edge


def _transform(
    coords: np.ndarray, from_size: CanvasSize, to_size: CanvasSize, scale: float,
) -> np.ndarray:
    from_center = np.array([from_size.center_x, from_size.center_y], dtype=float)
    to_center = np.array([to_size.center_x, to_size.center_y], dtype=float)
    return to_center + (coords - from_center) * scale


def adapt_xy(
    x: float, y: float, from_size: CanvasSize, to_size: CanvasSize,
) -> Tuple[float, float]:
    """Adapt a single coordinate pair."""
    scale = scale_factor(from_size, to_size)
    if from_size == to_size:
        return x, y
    return (
        to_size.center_x + (x - from_size.center_x) * scale,
        to_size.center_y + (y - from_size.center_y) * scale,
    )


def _adapt_contour(
    points: Sequence[Point], from_size: CanvasSize, to_size: CanvasSize, scale: float,
) -> Tuple[Point, ...]:
    if not points:
        return ()
    coords = np.array([[p.x, p.y] for p in points], dtype=float)
    out = _transform(coords, from_size, to_size, scale)
    return tuple(
        Point(float(x), float(y), p.is_original) for (x, y), p in zip(out, points)
    )


def adapt_points(
    points: Sequence[Point],
    from_size: CanvasSize,
    to_size: CanvasSize,
    logger: Optional[logging.Logger] = None,
) -> List[Point]:
    """Adapt a contour.  Non-finite points are dropped."""
    scale = scale_factor(from_size, to_size)
    if from_size == to_size:
        return list(points)
    finite = [p for p in points if p.is_finite()]
    if len(finite) != len(points):
        (logger or log).warning("dropped %d non-finite points", len(points) - len(finite))
    return list(_adapt_contour(finite, from_size, to_size, scale))


def try_adapt_piece(
    piece: PuzzlePiece, from_size: CanvasSize, to_size: CanvasSize,
) -> AdaptOutcome:
    """Adapt one piece, reporting bad geometry instead of raising.

    Canvas sizes are still validated eagerly; an invalid size is a
    caller bug and raises :class:`CanvasSizeError`.
    """
    scale = scale_factor(from_size, to_size)
    if not (math.isfinite(piece.x) and math.isfinite(piece.y)):
        return AdaptOutcome(error=f"non-finite position ({piece.x}, {piece.y})")
    finite = [p for p in piece.points if p.is_finite()]
    if len(finite) < 3:
        return AdaptOutcome(error=f"only {len(finite)} finite contour points")
    if from_size == to_size and len(finite) == len(piece.points):
        return AdaptOutcome(value=piece)
    cx, cy = _transform(np.array([piece.x, piece.y], dtype=float), from_size, to_size, scale)
    return AdaptOutcome(value=piece.with_changes(
        x=float(cx),
        y=float(cy),
        points=_adapt_contour(finite, from_size, to_size, scale),
    ))


def adapt_pieces(
    pieces: Sequence[PuzzlePiece],
    from_size: CanvasSize,
    to_size: CanvasSize,
    logger: Optional[logging.Logger] = None,
) -> List[PuzzlePiece]:
    """Adapt every piece; malformed pieces pass through unchanged."""
    logger = logger or log
    scale_factor(from_size, to_size)
    if from_size == to_size:
        return list(pieces)
    out: List[PuzzlePiece] = []
    for i, piece in enumerate(pieces):
        outcome = try_adapt_piece(piece, from_size, to_size)
        if outcome.ok:
            out.append(outcome.value)
        else:
            logger.warning("piece %d not adapted: %s", i, outcome.error)
            out.append(piece)
    return out


def adapt(
    elements: Sequence[Positioned],
    from_size: CanvasSize,
    to_size: CanvasSize,
    logger: Optional[logging.Logger] = None,
) -> List[Positioned]:
    """Adapt a mixed sequence of points and pieces."""
    logger = logger or log
    scale = scale_factor(from_size, to_size)
    if from_size == to_size:
        return list(elements)
    out: list = []
    for i, element in enumerate(elements):
        if isinstance(element, PuzzlePiece):
            outcome = try_adapt_piece(element, from_size, to_size)
            if not outcome.ok:
                logger.warning("element %d not adapted: %s", i, outcome.error)
            out.append(outcome.value if outcome.ok else element)
        elif isinstance(element, Point):
            if element.is_finite():
                out.append(_adapt_contour((element,), from_size, to_size, scale)[0])
            else:
                logger.warning("element %d not adapted: non-finite point", i)
                out.append(element)
        else:
            raise TypeError(f"Cannot adapt {type(element).__name__}")
    return out


def fit_shape_to_canvas(
    shape: Sequence[Point],
    canvas: CanvasSize,
    logical: CanvasSize = LOGICAL_CANVAS,
) -> List[Point]:
    """Map a logical-canvas contour onto a real canvas."""
    return adapt_points(shape, logical, canvas)


class AdaptationEngine:
    """Stateless adapter bound to a logger."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.log = logger or log

    def adapt(
        self,
        elements: Sequence[Positioned],
        from_size: CanvasSize,
        to_size: CanvasSize,
    ) -> List[Positioned]:
        return adapt(elements, from_size, to_size, logger=self.log)

    def adapt_points(
        self, points: Sequence[Point], from_size: CanvasSize, to_size: CanvasSize,
    ) -> List[Point]:
        return adapt_points(points, from_size, to_size, logger=self.log)

    def adapt_pieces(
        self, pieces: Sequence[PuzzlePiece], from_size: CanvasSize, to_size: CanvasSize,
    ) -> List[PuzzlePiece]:
        result = adapt_pieces(pieces, from_size, to_size, logger=self.log)
        if from_size != to_size:
            self.log.debug(
                "adapted %d pieces %gx%g -> %gx%g",
                len(result), from_size.width, from_size.height,
                to_size.width, to_size.height,
            )
        return result

    def try_adapt_piece(
        self, piece: PuzzlePiece, from_size: CanvasSize, to_size: CanvasSize,
    ) -> AdaptOutcome:
        return try_adapt_piece(piece, from_size, to_size)

    def fit_shape(
        self,
        shape: Sequence[Point],
        canvas: CanvasSize,
        logical: CanvasSize = LOGICAL_CANVAS,
    ) -> List[Point]:
        return self.adapt_points(shape, logical, canvas)
