"""Cutting engine — split a shape into puzzle pieces.

The engine generates ``cut_count`` cut lines over the shape bounds,
splits the shape along them and then runs a bounded compensation loop:
while the piece count is below ``cut_count + 1`` a fresh batch of up
to three extra cuts is tried, and kept only if it increases the piece
count.  The loop never raises for under-fragmentation; it returns the
best piece set found together with a :class:`CompensationResult`.

Usage
-----
>>> from polycut.cutting import CuttingEngine
>>> pieces = CuttingEngine(rng=random.Random(1)).cut(shape, "straight", 4)
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from .cuts import (
    CutType,
    build_cuts,
    cut_crossings,
    expected_piece_range,
    is_high_difficulty,
)
from .geometry import all_finite, compute_bounds, polygon_centroid
from .models import Cut, Point, PuzzlePiece
from .splitting import split_polygon

log = logging.getLogger(__name__)

Contour = Tuple[Point, ...]


# ═══════════════════════════════════════════════════════════════════
# Configuration
# ═══════════════════════════════════════════════════════════════════


@dataclass
class CuttingConfig:
    """Tuneable parameters for cutting and compensation.

    Attributes
    ----------
    max_retries : int
        Upper bound on compensation attempts.
    max_extra_cuts : int
        Upper bound on cuts added per compensation attempt.
    min_piece_area_ratio : float
        Smallest fragment, as a fraction of the shape area.
    high_difficulty_area_ratio : float
        Same, used when the cut count is high difficulty.
    straight_jitter : float
        Offset range of straight cuts, as a fraction of the bounds span.
    cut_attempts : int
        Tries to regenerate a cut that misses the shape.
    """

    max_retries: int = 5
    max_extra_cuts: int = 3
    min_piece_area_ratio: float = 0.05
    high_difficulty_area_ratio: float = 0.02
    straight_jitter: float = 0.8
    cut_attempts: int = 10

    def area_ratio(self, cut_count: int) -> float:
        if is_high_difficulty(cut_count):
            return self.high_difficulty_area_ratio
        return self.min_piece_area_ratio


EASY_CUTTING = CuttingConfig(max_retries=3, straight_jitter=0.5)
HARD_CUTTING = CuttingConfig(max_retries=5, min_piece_area_ratio=0.02)


@dataclass(frozen=True)
class CompensationResult:
    """Outcome of the compensation loop."""

    pieces: Tuple[Contour, ...]
    cuts: Tuple[Cut, ...]
    attempts: int
    initial_count: int
    target: int

    @property
    def converged(self) -> bool:
        return len(self.pieces) >= self.target


@dataclass(frozen=True)
class CuttingResult:
    pieces: List[PuzzlePiece]
    compensation: CompensationResult
    cut_type: CutType
    cut_count: int


# ═══════════════════════════════════════════════════════════════════
# Compensation
# ═══════════════════════════════════════════════════════════════════


def compensate(
    shape: Sequence[Point],
    cuts: Sequence[Cut],
    cut_count: int,
    *,
    cut_type: Union[str, CutType] = CutType.STRAIGHT,
    config: Optional[CuttingConfig] = None,
    rng: Optional[random.Random] = None,
    logger: Optional[logging.Logger] = None,
) -> CompensationResult:
    """Split *shape* along *cuts*, adding extra cuts until the piece
    count reaches ``cut_count + 1`` or the retry budget runs out.

    A batch of extra cuts is accepted only when it increases the piece
    count, so the result never has fewer pieces than the first split.
    """
    config = config or CuttingConfig()
    if rng is None:
        rng = random.Random(42)
    logger = logger or log

    bounds = compute_bounds(shape)
    ratio = config.area_ratio(cut_count)
    high = is_high_difficulty(cut_count)
    target = cut_count + 1

    accepted = list(cuts)
    best = split_polygon(shape, accepted, min_piece_area_ratio=ratio)
    initial_count = len(best)
    attempts = 0

    for attempt in range(1, config.max_retries + 1):
        if len(best) >= target:
            break
        attempts = attempt
        needed = max(1, min(config.max_extra_cuts, target - len(best)))
        extra = build_cuts(
            bounds, cut_type, needed,
            start=len(accepted),
            high_difficulty=high,
            straight_jitter=config.straight_jitter,
            rng=rng,
        )
        candidate = split_polygon(shape, accepted + extra, min_piece_area_ratio=ratio)
        if len(candidate) > len(best):
            logger.debug(
                "compensation attempt %d: %d -> %d pieces (+%d cuts)",
                attempt, len(best), len(candidate), needed,
            )
            accepted.extend(extra)
            best = candidate
        else:
            logger.debug("compensation attempt %d: no improvement", attempt)

    if len(best) < target:
        logger.warning(
            "compensation exhausted after %d attempts: %d pieces, wanted %d",
            attempts, len(best), target,
        )
    return CompensationResult(
        pieces=tuple(best),
        cuts=tuple(accepted),
        attempts=attempts,
        initial_count=initial_count,
        target=target,
    )


def contour_to_piece(contour: Contour) -> PuzzlePiece:
    """Wrap a contour as a piece in its solved placement."""
    cx, cy = polygon_centroid(contour)
    return PuzzlePiece(points=tuple(contour), x=cx, y=cy)


# ═══════════════════════════════════════════════════════════════════
# Engine
# ═══════════════════════════════════════════════════════════════════


class CuttingEngine:
    """Cut a shape into pieces with an owned RNG, config and logger."""

    def __init__(
        self,
        config: Optional[CuttingConfig] = None,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.config = config or CuttingConfig()
        self.rng = rng if rng is not None else random.Random()
        self.log = logger or log

    def _initial_cuts(
        self, shape: Sequence[Point], cut_type: CutType, cut_count: int,
    ) -> List[Cut]:
        bounds = compute_bounds(shape)
        high = is_high_difficulty(cut_count)
        cuts: List[Cut] = []
        for i in range(cut_count):
            for _ in range(max(1, self.config.cut_attempts)):
                (cut,) = build_cuts(
                    bounds, cut_type, 1,
                    start=i,
                    high_difficulty=high,
                    straight_jitter=self.config.straight_jitter,
                    rng=self.rng,
                )
                if cut_crossings(cut, shape) >= 2:
                    break
            cuts.append(cut)
        return cuts

    def run(
        self,
        shape: Sequence[Point],
        cut_type: Union[str, CutType],
        cut_count: int,
    ) -> CuttingResult:
        if cut_count < 0:
            raise ValueError(f"cut_count must be non-negative, got {cut_count}")
        if len(shape) < 3:
            raise ValueError(f"Shape needs at least 3 points, got {len(shape)}")
        if not all_finite(shape):
            raise ValueError("Shape contains non-finite coordinates")

        kind = CutType.parse(cut_type)
        cuts = self._initial_cuts(shape, kind, cut_count)
        comp = compensate(
            shape, cuts, cut_count,
            cut_type=kind,
            config=self.config,
            rng=self.rng,
            logger=self.log,
        )
        pieces = [contour_to_piece(c) for c in comp.pieces]

        lo, hi = expected_piece_range(cut_count)
        if not lo <= len(pieces) <= hi:
            self.log.info(
                "%d %s cuts produced %d pieces (expected %d-%d)",
                cut_count, kind.value, len(pieces), lo, hi,
            )
        self.log.info(
            "cut shape into %d pieces (%d cuts, %d compensation attempts)",
            len(pieces), len(comp.cuts), comp.attempts,
        )
        return CuttingResult(pieces=pieces, compensation=comp, cut_type=kind, cut_count=cut_count)

    def cut(
        self,
        shape: Sequence[Point],
        cut_type: Union[str, CutType],
        cut_count: int,
    ) -> List[PuzzlePiece]:
        return self.run(shape, cut_type, cut_count).pieces
