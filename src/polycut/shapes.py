"""Procedural contour generation on the logical canvas.

Three contour families are supported, all star-shaped around the
logical canvas centre so they are simple by construction:

- **polygon** — 5–12 vertices at evenly spaced angles, random radius.
- **cloud** — smooth radial wave with a random frequency.
- **jagged** — independently randomised radius per angle step.

Usage
-----
>>> from polycut.shapes import generate_shape, ShapeType
>>> shape = generate_shape(ShapeType.CLOUD, rng=random.Random(7))
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Union

from .models import LOGICAL_CANVAS, CanvasSize, Point, Shape

log = logging.getLogger(__name__)


class ShapeType(str, Enum):
    POLYGON = "polygon"
    CLOUD = "cloud"
    JAGGED = "jagged"

    @classmethod
    def parse(cls, value: Union[str, "ShapeType", None]) -> "ShapeType":
        """Resolve *value* to a shape type; unknown input means polygon."""
        if isinstance(value, ShapeType):
            return value
        key = str(value or "").strip().lower()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            return cls.POLYGON


# Names used by older front ends.
_ALIASES = {
    "curve": "jagged",
    "irregular": "cloud",
}


# ═══════════════════════════════════════════════════════════════════
# Configuration
# ═══════════════════════════════════════════════════════════════════


@dataclass
class ShapeConfig:
    """Tuneable parameters for contour generation.

    Attributes
    ----------
    canvas : CanvasSize
        Logical canvas the contour is centred on.
    diameter_ratio : float
        Bounding diameter as a fraction of the canvas min edge.
    polygon_min_vertices, polygon_max_vertices : int
        Polygon vertex count is drawn from ``[min, max)``.
    min_radius_ratio : float
        Polygon vertex radius is uniform in ``[ratio·r, r]``.
    curve_points : int
        Vertex count of cloud and jagged contours.
    cloud_amplitude : float
        Amplitude *A* of the cloud wave.
    cloud_min_frequency, cloud_max_frequency : float
        Cloud wave frequency *k* is uniform in ``[min, max)``.
    jagged_min_ratio : float
        Jagged vertex radius is uniform in ``[ratio·r, r]``.
    """

    canvas: CanvasSize = LOGICAL_CANVAS
    diameter_ratio: float = 0.3
    polygon_min_vertices: int = 5
    polygon_max_vertices: int = 13
    min_radius_ratio: float = 0.8
    curve_points: int = 200
    cloud_amplitude: float = 0.15
    cloud_min_frequency: float = 2.0
    cloud_max_frequency: float = 6.0
    jagged_min_ratio: float = 0.75

    @property
    def base_radius(self) -> float:
        return self.canvas.min_edge * self.diameter_ratio / 2


DEFAULT_SHAPE_CONFIG = ShapeConfig()


# ═══════════════════════════════════════════════════════════════════
# Contour families
# ═══════════════════════════════════════════════════════════════════


def _polygon(config: ShapeConfig, rng: random.Random) -> Shape:
    r = config.base_radius
    cx, cy = config.canvas.center_x, config.canvas.center_y
    n = rng.randrange(config.polygon_min_vertices, config.polygon_max_vertices)
    points = []
    for i in range(n):
        angle = 2 * math.pi * i / n
        radius = rng.uniform(config.min_radius_ratio * r, r)
        points.append(Point(cx + radius * math.cos(angle), cy + radius * math.sin(angle), True))
    return tuple(points)


def _cloud(config: ShapeConfig, rng: random.Random) -> Shape:
    r = config.base_radius
    cx, cy = config.canvas.center_x, config.canvas.center_y
    amp = config.cloud_amplitude
    k = rng.uniform(config.cloud_min_frequency, config.cloud_max_frequency)
    n = config.curve_points
    points = []
    for i in range(n):
        theta = 2 * math.pi * i / n
        radius = r * (1 + amp * math.sin(k * theta) + 0.5 * amp * math.cos(1.5 * k * theta))
        points.append(Point(cx + radius * math.cos(theta), cy + radius * math.sin(theta), True))
    return tuple(points)


def _jagged(config: ShapeConfig, rng: random.Random) -> Shape:
    r = config.base_radius
    cx, cy = config.canvas.center_x, config.canvas.center_y
    n = config.curve_points
    points = []
    for i in range(n):
        theta = 2 * math.pi * i / n
        radius = rng.uniform(config.jagged_min_ratio * r, r)
        points.append(Point(cx + radius * math.cos(theta), cy + radius * math.sin(theta), True))
    return tuple(points)


_GENERATORS: Dict[ShapeType, Callable[[ShapeConfig, random.Random], Shape]] = {
    ShapeType.POLYGON: _polygon,
    ShapeType.CLOUD: _cloud,
    ShapeType.JAGGED: _jagged,
}


def generate_shape(
    shape_type: Union[str, ShapeType] = ShapeType.POLYGON,
    *,
    config: Optional[ShapeConfig] = None,
    rng: Optional[random.Random] = None,
) -> Shape:
    """Generate a closed contour centred on the logical canvas.

    Every returned vertex is flagged ``is_original``.  Never raises;
    unrecognised *shape_type* values produce a polygon.
    """
    if config is None:
        config = DEFAULT_SHAPE_CONFIG
    if rng is None:
        rng = random.Random(42)
    kind = ShapeType.parse(shape_type)
    shape = _GENERATORS[kind](config, rng)
    log.debug("generated %s shape with %d points", kind.value, len(shape))
    return shape


class ShapeGenerator:
    """Contour generator with an owned RNG and config."""

    def __init__(
        self,
        config: Optional[ShapeConfig] = None,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.config = config or ShapeConfig()
        self.rng = rng if rng is not None else random.Random()
        self.log = logger or log

    def generate(self, shape_type: Union[str, ShapeType] = ShapeType.POLYGON) -> Shape:
        kind = ShapeType.parse(shape_type)
        if kind.value != shape_type:
            self.log.debug("shape type %r resolved to %s", shape_type, kind.value)
        shape = generate_shape(kind, config=self.config, rng=self.rng)
        self.log.info("generated %s shape (%d points)", kind.value, len(shape))
        return shape
