from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Point:
    x: float
    y: float
    is_original: bool = False

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def translated(self, dx: float, dy: float) -> "Point":
        return Point(self.x + dx, self.y + dy, self.is_original)

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y, "isOriginal": self.is_original}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Point":
        return cls(float(data["x"]), float(data["y"]), bool(data.get("isOriginal", False)))


Shape = Tuple[Point, ...]


@dataclass(frozen=True)
class CanvasSize:
    width: float
    height: float

    @property
    def center_x(self) -> float:
        return self.width / 2

    @property
    def center_y(self) -> float:
        return self.height / 2

    @property
    def min_edge(self) -> float:
        return min(self.width, self.height)

    def is_valid(self) -> bool:
        """True when both edges are finite and strictly positive."""
        return (
            math.isfinite(self.width)
            and math.isfinite(self.height)
            and self.width > 0
            and self.height > 0
        )

    def to_dict(self) -> Dict[str, float]:
        return {"width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CanvasSize":
        return cls(float(data["width"]), float(data["height"]))


LOGICAL_CANVAS = CanvasSize(1000.0, 1000.0)


@dataclass(frozen=True)
class Cut:
    x1: float
    y1: float
    x2: float
    y2: float
    type: str = "straight"

    def endpoints(self) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        return (self.x1, self.y1), (self.x2, self.y2)

    def to_dict(self) -> Dict[str, Any]:
        return {"x1": self.x1, "y1": self.y1, "x2": self.x2, "y2": self.y2, "type": self.type}


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned bounds of a shape plus its centre and diagonal."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float
    center_x: float
    center_y: float
    diagonal: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


@dataclass(frozen=True)
class PuzzlePiece:
    """One fragment of the cut shape.

    *x*, *y* is the piece centroid and *points* its contour, both in the
    current canvas frame.  *rotation* is in degrees about (*x*, *y*);
    *original_rotation* is the rotation of the solved placement.
    """

    points: Tuple[Point, ...]
    x: float
    y: float
    rotation: float = 0.0
    original_rotation: float = 0.0
    is_completed: bool = False

    def with_changes(self, **changes: Any) -> "PuzzlePiece":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "points": [p.to_dict() for p in self.points],
            "x": self.x,
            "y": self.y,
            "rotation": self.rotation,
            "originalRotation": self.original_rotation,
            "isCompleted": self.is_completed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PuzzlePiece":
        return cls(
            points=tuple(Point.from_dict(p) for p in data["points"]),
            x=float(data["x"]),
            y=float(data["y"]),
            rotation=float(data.get("rotation", 0.0)),
            original_rotation=float(data.get("originalRotation", 0.0)),
            is_completed=bool(data.get("isCompleted", False)),
        )


@dataclass(frozen=True)
class AbsoluteState:
    """Snapshot of one piece in the frame of the canvas it was scattered on."""

    index: int
    absolute_x: float
    absolute_y: float
    absolute_rotation: float
    is_completed: bool
    scatter_canvas_size: CanvasSize
    timestamp: float
    points: Tuple[Point, ...] = field(default_factory=tuple)
