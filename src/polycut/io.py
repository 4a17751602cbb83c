from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from .models import CanvasSize, Point, PuzzlePiece, Shape

PathLike = Union[str, Path]


@dataclass(frozen=True)
class PuzzleDocument:
    """A generated puzzle: the target shape, its pieces and their canvas."""

    canvas: CanvasSize
    shape: Shape
    pieces: List[PuzzlePiece]


def puzzle_to_dict(
    shape: Sequence[Point], pieces: Sequence[PuzzlePiece], canvas: CanvasSize,
) -> Dict[str, Any]:
    return {
        "canvas": canvas.to_dict(),
        "shape": [p.to_dict() for p in shape],
        "pieces": [p.to_dict() for p in pieces],
    }


def puzzle_from_dict(data: Dict[str, Any]) -> PuzzleDocument:
    return PuzzleDocument(
        canvas=CanvasSize.from_dict(data["canvas"]),
        shape=tuple(Point.from_dict(p) for p in data["shape"]),
        pieces=[PuzzlePiece.from_dict(p) for p in data["pieces"]],
    )


def load_json(path: PathLike) -> PuzzleDocument:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return puzzle_from_dict(data)


def save_json(
    shape: Sequence[Point],
    pieces: Sequence[PuzzlePiece],
    canvas: CanvasSize,
    path: PathLike,
) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(puzzle_to_dict(shape, pieces, canvas), indent=2), encoding="utf-8")
