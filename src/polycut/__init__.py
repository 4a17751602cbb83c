"""polycut — procedural puzzle shapes with resize-stable pieces.

Public API is organised into layers:

- **Core** — models, geometry helpers, I/O
- **Generation** — contour families and cut lines
- **Cutting** — polygon splitting and the compensation loop
- **Adaptation** — centre-relative scaling and drift-free snapshots
- **Session** — scatter, interaction and resize for one round
- **Rendering** — PNG preview (requires matplotlib)
"""

import logging

# ── Core ────────────────────────────────────────────────────────────
from .models import (
    AbsoluteState,
    Bounds,
    CanvasSize,
    Cut,
    LOGICAL_CANVAS,
    Point,
    PuzzlePiece,
    Shape,
)
from .geometry import (
    compute_bounds,
    point_in_polygon,
    polygon_area,
    polygon_centroid,
    rotate_point,
    rotate_points,
)
from .io import PuzzleDocument, load_json, save_json, puzzle_to_dict, puzzle_from_dict

# ── Generation ──────────────────────────────────────────────────────
from .shapes import ShapeConfig, ShapeGenerator, ShapeType, generate_shape
from .cuts import (
    CutType,
    DIFFICULTY_SETTINGS,
    build_cuts,
    cut_crossings,
    difficulty_level,
    expected_piece_range,
)

# ── Cutting ─────────────────────────────────────────────────────────
from .splitting import split_polygon
from .cutting import (
    CompensationResult,
    CuttingConfig,
    CuttingEngine,
    CuttingResult,
    EASY_CUTTING,
    HARD_CUTTING,
    compensate,
)

# ── Adaptation ──────────────────────────────────────────────────────
from .adaptation import (
    AdaptOutcome,
    AdaptationEngine,
    CanvasSizeError,
    adapt,
    adapt_pieces,
    adapt_points,
    fit_shape_to_canvas,
    scale_factor,
    try_adapt_piece,
)
from .preservation import PreservationStats, StatePreservationEngine

# ── Session ─────────────────────────────────────────────────────────
from .scatter import ScatterConfig, scatter_pieces
from .integrity import CoverageReport, check_coverage, displayed_outline
from .session import PuzzleSession, SessionConfig, SessionStateError

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core
    "AbsoluteState", "Bounds", "CanvasSize", "Cut", "LOGICAL_CANVAS",
    "Point", "PuzzlePiece", "Shape",
    "compute_bounds", "point_in_polygon", "polygon_area", "polygon_centroid",
    "rotate_point", "rotate_points",
    "PuzzleDocument", "load_json", "save_json", "puzzle_to_dict", "puzzle_from_dict",
    # Generation
    "ShapeConfig", "ShapeGenerator", "ShapeType", "generate_shape",
    "CutType", "DIFFICULTY_SETTINGS", "build_cuts", "cut_crossings",
    "difficulty_level", "expected_piece_range",
    # Cutting
    "split_polygon",
    "CompensationResult", "CuttingConfig", "CuttingEngine", "CuttingResult",
    "EASY_CUTTING", "HARD_CUTTING", "compensate",
    # Adaptation
    "AdaptOutcome", "AdaptationEngine", "CanvasSizeError",
    "adapt", "adapt_pieces", "adapt_points", "fit_shape_to_canvas",
    "scale_factor", "try_adapt_piece",
    "PreservationStats", "StatePreservationEngine",
    # Session
    "ScatterConfig", "scatter_pieces",
    "CoverageReport", "check_coverage", "displayed_outline",
    "PuzzleSession", "SessionConfig", "SessionStateError",
]
