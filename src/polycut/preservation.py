"""Drift-free piece adaptation across repeated canvas resizes.

Chaining :func:`~polycut.adaptation.adapt` calls, each fed the output of
the previous one, accumulates rounding error.  The
:class:`StatePreservationEngine` instead captures one
:class:`~polycut.models.AbsoluteState` per piece when the pieces are
scattered and recomputes every resize as a single hop from that
snapshot.  Player moves, rotations and completions are written back
into the snapshot so it always reflects the latest intentional state,
still anchored to the scatter canvas.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from .adaptation import AdaptationEngine, adapt_xy, validate_canvas
from .models import AbsoluteState, CanvasSize, PuzzlePiece

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreservationStats:
    total_states: int
    completed_pieces: int
    oldest_timestamp: Optional[float]
    newest_timestamp: Optional[float]


class StatePreservationEngine:
    """Owns the index → :class:`AbsoluteState` map of one session."""

    def __init__(
        self,
        adaptation: Optional[AdaptationEngine] = None,
        *,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.log = logger or log
        self.adaptation = adaptation or AdaptationEngine(self.log)
        self._clock = clock
        self._states: Dict[int, AbsoluteState] = {}
        self._current_size: Optional[CanvasSize] = None

    def __len__(self) -> int:
        return len(self._states)

    @property
    def current_canvas_size(self) -> Optional[CanvasSize]:
        """Canvas size of the most recent save or adaptation."""
        return self._current_size

    # ── snapshot ────────────────────────────────────────────────────

    def save_absolute_states(
        self,
        pieces: Sequence[PuzzlePiece],
        scatter_canvas_size: CanvasSize,
        completed_indices: Iterable[int] = (),
    ) -> None:
        """Replace all snapshots with the current state of *pieces*."""
        validate_canvas(scatter_canvas_size, "scatter canvas")
        now = self._clock()
        completed = set(completed_indices)
        self._states = {
            i: AbsoluteState(
                index=i,
                absolute_x=piece.x,
                absolute_y=piece.y,
                absolute_rotation=piece.rotation,
                is_completed=piece.is_completed or i in completed,
                scatter_canvas_size=scatter_canvas_size,
                timestamp=now,
                points=tuple(piece.points),
            )
            for i, piece in enumerate(pieces)
        }
        self._current_size = scatter_canvas_size
        self.log.info(
            "saved %d absolute states on %gx%g canvas",
            len(self._states), scatter_canvas_size.width, scatter_canvas_size.height,
        )

    def get_absolute_state(self, index: int) -> Optional[AbsoluteState]:
        return self._states.get(index)

    def clear_states(self) -> None:
        self._states.clear()
        self._current_size = None
        self.log.debug("cleared absolute states")

    # ── adaptation ──────────────────────────────────────────────────

    def adapt_to_new_canvas_size(
        self,
        current_pieces: Sequence[PuzzlePiece],
        new_canvas_size: CanvasSize,
    ) -> List[PuzzlePiece]:
        """Recompute every piece from its snapshot for *new_canvas_size*.

        Pieces without a snapshot are returned unmodified.  Raises
        :class:`~polycut.adaptation.CanvasSizeError` for a zero-area or
        otherwise invalid size.
        """
        validate_canvas(new_canvas_size, "new canvas")
        out: List[PuzzlePiece] = []
        for i, piece in enumerate(current_pieces):
            state = self._states.get(i)
            if state is None:
                self.log.warning("no absolute state for piece %d; left unadapted", i)
                out.append(piece)
                continue
            snapshot = piece.with_changes(
                points=state.points,
                x=state.absolute_x,
                y=state.absolute_y,
                rotation=state.absolute_rotation,
                is_completed=state.is_completed,
            )
            outcome = self.adaptation.try_adapt_piece(
                snapshot, state.scatter_canvas_size, new_canvas_size,
            )
            if outcome.ok:
                out.append(outcome.value)
            else:
                self.log.warning("piece %d not adapted: %s", i, outcome.error)
                out.append(piece)
        self._current_size = new_canvas_size
        self.log.debug(
            "adapted %d pieces to %gx%g",
            len(out), new_canvas_size.width, new_canvas_size.height,
        )
        return out

    # ── interaction write-back ──────────────────────────────────────

    def update_absolute_state(
        self,
        index: int,
        x: Optional[float] = None,
        y: Optional[float] = None,
        rotation: Optional[float] = None,
        is_completed: Optional[bool] = None,
    ) -> bool:
        """Write an intentional change back into the snapshot.

        *x* and *y* are in the current canvas frame and are stored in
        the scatter frame.  Returns ``False`` when *index* has no
        snapshot.
        """
        state = self._states.get(index)
        if state is None:
            self.log.warning("cannot update missing absolute state %d", index)
            return False

        changes = {"timestamp": self._clock()}
        if x is not None or y is not None:
            scatter = state.scatter_canvas_size
            current = self._current_size or scatter
            cur_x, cur_y = adapt_xy(state.absolute_x, state.absolute_y, scatter, current)
            abs_x, abs_y = adapt_xy(
                cur_x if x is None else x,
                cur_y if y is None else y,
                current,
                scatter,
            )
            dx = abs_x - state.absolute_x
            dy = abs_y - state.absolute_y
            changes.update(
                absolute_x=abs_x,
                absolute_y=abs_y,
                points=tuple(p.translated(dx, dy) for p in state.points),
            )
        if rotation is not None:
            changes["absolute_rotation"] = rotation
        if is_completed is not None:
            changes["is_completed"] = is_completed

        self._states[index] = replace(state, **changes)
        return True

    def stats(self) -> PreservationStats:
        stamps = [s.timestamp for s in self._states.values()]
        return PreservationStats(
            total_states=len(self._states),
            completed_pieces=sum(1 for s in self._states.values() if s.is_completed),
            oldest_timestamp=min(stamps) if stamps else None,
            newest_timestamp=max(stamps) if stamps else None,
        )
