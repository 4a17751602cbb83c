"""Puzzle session — one game's engines and piece state.

A :class:`PuzzleSession` owns its engines (passed in or built from a
:class:`SessionConfig`) and the piece list of a single round::

    session = PuzzleSession(CanvasSize(800, 600))
    session.new_puzzle("cloud", "diagonal", 5)
    session.scatter()
    session.resize(CanvasSize(1024, 768))
    session.move_piece(0, 400, 300)
    session.complete_piece(0)

Before the pieces are scattered a resize is a single hop from the
logical canvas; afterwards it goes through the
:class:`~polycut.preservation.StatePreservationEngine` snapshot.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from .adaptation import AdaptationEngine, validate_canvas
from .cuts import CutType
from .cutting import CuttingConfig, CuttingEngine
from .models import LOGICAL_CANVAS, CanvasSize, Point, PuzzlePiece, Shape
from .preservation import StatePreservationEngine
from .scatter import ScatterConfig, move_piece_to, scatter_pieces
from .shapes import ShapeConfig, ShapeGenerator, ShapeType

log = logging.getLogger(__name__)


class SessionStateError(RuntimeError):
    """Raised when an operation needs a puzzle (or a scatter) first."""


@dataclass
class SessionConfig:
    shape: ShapeConfig = field(default_factory=ShapeConfig)
    cutting: CuttingConfig = field(default_factory=CuttingConfig)
    scatter: ScatterConfig = field(default_factory=ScatterConfig)
    seed: Optional[int] = None
    snap_distance: float = 20.0
    rotation_step: float = 15.0


class PuzzleSession:
    def __init__(
        self,
        canvas_size: CanvasSize,
        *,
        config: Optional[SessionConfig] = None,
        shapes: Optional[ShapeGenerator] = None,
        cutter: Optional[CuttingEngine] = None,
        adaptation: Optional[AdaptationEngine] = None,
        preservation: Optional[StatePreservationEngine] = None,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        validate_canvas(canvas_size)
        self.config = config or SessionConfig()
        self.log = logger or log
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.shapes = shapes or ShapeGenerator(self.config.shape, self.rng, self.log)
        self.cutter = cutter or CuttingEngine(self.config.cutting, self.rng, self.log)
        self.adaptation = adaptation or AdaptationEngine(self.log)
        self.preservation = preservation or StatePreservationEngine(
            self.adaptation, logger=self.log,
        )

        self.canvas_size = canvas_size
        self.pieces: List[PuzzlePiece] = []
        self.scattered = False
        self._logical_shape: Shape = ()
        self._logical_pieces: List[PuzzlePiece] = []

    # ── queries ─────────────────────────────────────────────────────

    @property
    def has_puzzle(self) -> bool:
        return bool(self._logical_pieces)

    @property
    def logical_shape(self) -> Shape:
        return self._logical_shape

    def shape(self) -> List[Point]:
        """The target contour on the current canvas."""
        return self.adaptation.fit_shape(self._logical_shape, self.canvas_size)

    def solved_pieces(self) -> List[PuzzlePiece]:
        """Every piece at its solved placement on the current canvas."""
        return self.adaptation.adapt_pieces(
            self._logical_pieces, LOGICAL_CANVAS, self.canvas_size,
        )

    def target_positions(self) -> List[Tuple[float, float]]:
        return [(p.x, p.y) for p in self.solved_pieces()]

    def is_selectable(self, index: int) -> bool:
        self._check_index(index)
        return self.scattered and not self.pieces[index].is_completed

    def progress(self) -> Tuple[int, int]:
        done = sum(1 for p in self.pieces if p.is_completed)
        return done, len(self.pieces)

    def is_finished(self) -> bool:
        done, total = self.progress()
        return total > 0 and done == total

    # ── lifecycle ───────────────────────────────────────────────────

    def new_puzzle(
        self,
        shape_type: Union[str, ShapeType] = ShapeType.POLYGON,
        cut_type: Union[str, CutType] = CutType.STRAIGHT,
        cut_count: int = 3,
    ) -> List[PuzzlePiece]:
        """Generate and cut a new shape; pieces start in solved placement."""
        shape = self.shapes.generate(shape_type)
        self._logical_shape = shape
        self._logical_pieces = self.cutter.cut(shape, cut_type, cut_count)
        self.preservation.clear_states()
        self.scattered = False
        self.pieces = self.solved_pieces()
        self.log.info("new puzzle: %d pieces", len(self.pieces))
        return list(self.pieces)

    def scatter(self) -> List[PuzzlePiece]:
        self._require_puzzle()
        self.pieces = scatter_pieces(
            self.pieces, self.canvas_size, config=self.config.scatter, rng=self.rng,
        )
        completed = [i for i, p in enumerate(self.pieces) if p.is_completed]
        self.preservation.save_absolute_states(self.pieces, self.canvas_size, completed)
        self.scattered = True
        return list(self.pieces)

    def resize(self, canvas_size: CanvasSize) -> List[PuzzlePiece]:
        validate_canvas(canvas_size)
        if canvas_size == self.canvas_size:
            return list(self.pieces)
        self.log.debug(
            "resize %gx%g -> %gx%g",
            self.canvas_size.width, self.canvas_size.height,
            canvas_size.width, canvas_size.height,
        )
        self.canvas_size = canvas_size
        if not self.has_puzzle:
            return []
        if self.scattered:
            self.pieces = self.preservation.adapt_to_new_canvas_size(self.pieces, canvas_size)
        else:
            self.pieces = self.solved_pieces()
        return list(self.pieces)

    def reset(self) -> List[PuzzlePiece]:
        """Put every piece back in solved placement and drop snapshots."""
        self.preservation.clear_states()
        self.scattered = False
        self.pieces = self.solved_pieces()
        return list(self.pieces)

    # ── interaction ─────────────────────────────────────────────────

    def move_piece(self, index: int, x: float, y: float) -> bool:
        """Move a piece centre to (x, y); completed pieces are locked."""
        self._require_scattered()
        self._check_index(index)
        piece = self.pieces[index]
        if piece.is_completed:
            return False
        self.pieces[index] = move_piece_to(piece, x, y)
        self.preservation.update_absolute_state(index, x=x, y=y)
        return True

    def rotate_piece(self, index: int, delta: Optional[float] = None) -> bool:
        self._require_scattered()
        self._check_index(index)
        piece = self.pieces[index]
        if piece.is_completed:
            return False
        step = self.config.rotation_step if delta is None else delta
        rotation = (piece.rotation + step) % 360
        self.pieces[index] = piece.with_changes(rotation=rotation)
        self.preservation.update_absolute_state(index, rotation=rotation)
        return True

    def is_in_place(self, index: int) -> bool:
        """True when a piece is near its target with the solved rotation."""
        self._check_index(index)
        piece = self.pieces[index]
        target = self.solved_pieces()[index]
        scale = self.canvas_size.min_edge / LOGICAL_CANVAS.min_edge
        near = math.hypot(piece.x - target.x, piece.y - target.y) <= self.config.snap_distance * scale
        diff = (piece.rotation - target.original_rotation) % 360
        return near and min(diff, 360 - diff) < 1e-6

    def complete_piece(self, index: int) -> PuzzlePiece:
        """Snap a piece onto its target and lock it."""
        self._require_scattered()
        self._check_index(index)
        target = self.solved_pieces()[index]
        piece = target.with_changes(rotation=target.original_rotation, is_completed=True)
        self.pieces[index] = piece
        self.preservation.update_absolute_state(
            index, x=piece.x, y=piece.y, rotation=piece.rotation, is_completed=True,
        )
        done, total = self.progress()
        self.log.info("piece %d completed (%d/%d)", index, done, total)
        return piece

    def try_snap(self, index: int) -> bool:
        if self.pieces[index].is_completed or not self.is_in_place(index):
            return False
        self.complete_piece(index)
        return True

    # ── helpers ─────────────────────────────────────────────────────

    def _require_puzzle(self) -> None:
        if not self.has_puzzle:
            raise SessionStateError("No puzzle generated yet")

    def _require_scattered(self) -> None:
        self._require_puzzle()
        if not self.scattered:
            raise SessionStateError("Pieces have not been scattered")

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.pieces):
            raise IndexError(f"No piece {index} (have {len(self.pieces)})")
