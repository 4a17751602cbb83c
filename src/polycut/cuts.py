"""Cut-line generation and the difficulty table."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .geometry import segment_intersection
from .models import Bounds, Cut, Point


class CutType(str, Enum):
    STRAIGHT = "straight"
    DIAGONAL = "diagonal"
    CURVE = "curve"

    @classmethod
    def parse(cls, value: Union[str, "CutType", None]) -> "CutType":
        if isinstance(value, CutType):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.STRAIGHT

    @property
    def line_type(self) -> str:
        """Type tag carried by generated :class:`Cut` lines.

        Curve cuts are rendered as diagonal line cuts.
        """
        return "straight" if self is CutType.STRAIGHT else "diagonal"


# ═══════════════════════════════════════════════════════════════════
# Difficulty table
# ═══════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class DifficultySetting:
    level: int
    target_cuts: int
    piece_range: Tuple[int, int]
    label: str


DIFFICULTY_SETTINGS: Dict[int, DifficultySetting] = {
    1: DifficultySetting(1, 2, (3, 4), "beginner"),
    2: DifficultySetting(2, 3, (4, 6), "simple"),
    3: DifficultySetting(3, 4, (5, 8), "elementary"),
    4: DifficultySetting(4, 6, (7, 12), "intermediate"),
    5: DifficultySetting(5, 8, (9, 16), "upper intermediate"),
    6: DifficultySetting(6, 10, (11, 20), "advanced"),
    7: DifficultySetting(7, 12, (13, 24), "expert"),
    8: DifficultySetting(8, 15, (16, 30), "master"),
}

HIGH_DIFFICULTY_CUTS = 7


def difficulty_level(cut_count: int) -> str:
    """Coarse difficulty label for a cut count."""
    if cut_count <= 3:
        return "easy"
    if cut_count <= 6:
        return "medium"
    if cut_count <= 7:
        return "hard"
    return "extreme"


def is_high_difficulty(cut_count: int) -> bool:
    return cut_count >= HIGH_DIFFICULTY_CUTS


def expected_piece_range(cut_count: int) -> Tuple[int, int]:
    """Piece count a cut count is expected to produce.

    Uses the difficulty table when a level targets exactly *cut_count*,
    otherwise the same ``(n + 1, 2n)`` rule the table follows.
    """
    for setting in DIFFICULTY_SETTINGS.values():
        if setting.target_cuts == cut_count:
            return setting.piece_range
    if cut_count <= 0:
        return (1, 1)
    return (cut_count + 1, 2 * cut_count)


# ═══════════════════════════════════════════════════════════════════
# Cut lines
# ═══════════════════════════════════════════════════════════════════


def _straight_cut(
    bounds: Bounds, ordinal: int, jitter: float, rng: random.Random,
) -> Cut:
    ext = bounds.diagonal * 0.1
    if ordinal % 2 == 0:
        x = bounds.center_x + (rng.random() - 0.5) * bounds.width * jitter
        return Cut(x, bounds.min_y - ext, x, bounds.max_y + ext, "straight")
    y = bounds.center_y + (rng.random() - 0.5) * bounds.height * jitter
    return Cut(bounds.min_x - ext, y, bounds.max_x + ext, y, "straight")


def _angled_cut(
    bounds: Bounds, high_difficulty: bool, rng: random.Random, line_type: str,
) -> Cut:
    cx = bounds.center_x + (rng.random() - 0.5) * bounds.width * 0.3
    cy = bounds.center_y + (rng.random() - 0.5) * bounds.height * 0.3
    angle = rng.random() * math.pi
    half = bounds.diagonal * (0.8 if high_difficulty else 1.0)
    dx = math.cos(angle) * half
    dy = math.sin(angle) * half
    return Cut(cx - dx, cy - dy, cx + dx, cy + dy, line_type)


def build_cuts(
    bounds: Bounds,
    cut_type: Union[str, CutType],
    count: int,
    *,
    start: int = 0,
    high_difficulty: bool = False,
    straight_jitter: float = 0.8,
    rng: Optional[random.Random] = None,
) -> List[Cut]:
    """Generate *count* cut lines spanning *bounds*.

    Straight cuts alternate vertical and horizontal, starting from the
    orientation of ordinal *start*; each is jittered around the centre
    and overshoots the bounds by 10% of the diagonal.  Diagonal and
    curve cuts pass near the centre at a random angle.
    """
    if rng is None:
        rng = random.Random(42)
    kind = CutType.parse(cut_type)
    cuts: List[Cut] = []
    for i in range(count):
        if kind is CutType.STRAIGHT:
            cuts.append(_straight_cut(bounds, start + i, straight_jitter, rng))
        else:
            cuts.append(_angled_cut(bounds, high_difficulty, rng, kind.line_type))
    return cuts


def cut_crossings(cut: Cut, shape: Sequence[Point]) -> int:
    """Number of shape edges the cut segment crosses."""
    a1, a2 = cut.endpoints()
    n = len(shape)
    count = 0
    for i in range(n):
        p = shape[i]
        q = shape[(i + 1) % n]
        if segment_intersection(a1, a2, (p.x, p.y), (q.x, q.y)) is not None:
            count += 1
    return count
