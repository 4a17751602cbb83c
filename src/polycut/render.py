from __future__ import annotations

from pathlib import Path
from typing import Sequence

from .integrity import displayed_outline
from .models import CanvasSize, Point, PuzzlePiece

_PALETTE = (
    "#5aa9e6", "#7fc8f8", "#f9c80e", "#f86624", "#ea3546",
    "#43bccd", "#662e9b", "#8ac926", "#ff924c", "#c5ca30",
)


def render_png(
    shape: Sequence[Point],
    pieces: Sequence[PuzzlePiece],
    canvas: CanvasSize,
    output_path: str | Path,
    shape_color: str = "#2b2b2b",
    piece_alpha: float = 0.6,
    show_shape: bool = True,
    dpi: int = 150,
) -> None:
    """Render the target outline and the pieces to PNG.

    Requires matplotlib; imported lazily to keep core package lightweight.
    """
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        from matplotlib.patches import Polygon
    except ImportError as exc:  # pragma: no cover - requires optional dep
        raise RuntimeError(
            "matplotlib is required for rendering. Install with `pip install matplotlib`."
        ) from exc

    fig, ax = plt.subplots(figsize=(canvas.width / dpi * 2, canvas.height / dpi * 2))

    if show_shape and len(shape) >= 3:
        xs, ys = zip(*[(p.x, p.y) for p in list(shape) + [shape[0]]])
        ax.plot(xs, ys, color=shape_color, linewidth=1.0, linestyle=(0, (3, 3)))

    for i, piece in enumerate(pieces):
        outline = displayed_outline(piece)
        if len(outline) < 3:
            continue
        color = _PALETTE[i % len(_PALETTE)]
        ax.add_patch(Polygon(
            [(p.x, p.y) for p in outline],
            closed=True,
            facecolor=color,
            edgecolor="#2b2b2b" if not piece.is_completed else "#1b998b",
            alpha=piece_alpha,
            linewidth=1.0,
        ))

    ax.set_aspect("equal", "box")
    ax.set_xlim(0, canvas.width)
    # canvas y grows downward
    ax.set_ylim(canvas.height, 0)
    ax.axis("off")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=dpi, bbox_inches="tight", pad_inches=0)
    plt.close(fig)
