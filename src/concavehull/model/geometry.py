"""
Plane geometry helpers and the data-space to display-space mapping.

Arrays of points are (N, 2) float64 numpy arrays. A boundary ring is such an
array whose first row equals its last row.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple, TYPE_CHECKING

import numpy as np

from concavehull import config

if TYPE_CHECKING:
    import numpy.typing as npt

Coordinate = Tuple[float, float]


def as_points(a) -> npt.NDArray[np.float64]:
    """
    Convert a sequence of (x, y) pairs into a read-only (N, 2) float64 array.

    Raises:
        ValueError: If the input is not of shape (N, 2).
    """
    arr = np.array(a, dtype=np.float64)
    if arr.size == 0:
        arr = arr.reshape(0, 2)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"Expected shape (N, 2), got {arr.shape}.")
    arr.flags.writeable = False
    return arr


def is_closed(ring: npt.NDArray[np.float64]) -> bool:
    """True if the first and last vertex of `ring` coincide."""
    return len(ring) > 0 and bool(np.array_equal(ring[0], ring[-1]))


def count_unique_vertices(ring: npt.NDArray[np.float64]) -> int:
    """Number of distinct vertices of a closed ring (the closing duplicate is not counted twice)."""
    if len(ring) == 0:
        return 0
    return len(np.unique(np.asarray(ring), axis=0))


def point_distance(p: Coordinate, q: Coordinate) -> float:
    return math.hypot(p[0] - q[0], p[1] - q[1])


def point_segment_distance(p: Coordinate, a: Coordinate, b: Coordinate) -> float:
    """
    Distance from point `p` to the segment `a`-`b`.

    The projection parameter is clamped to [0, 1]; a zero-length segment
    degenerates to the distance to `a`.
    """
    abx, aby = b[0] - a[0], b[1] - a[1]
    apx, apy = p[0] - a[0], p[1] - a[1]
    ab_len_sq = abx * abx + aby * aby
    if ab_len_sq == 0.0:
        return math.hypot(apx, apy)

    t = (apx * abx + apy * aby) / ab_len_sq
    t = min(1.0, max(0.0, t))
    cx, cy = a[0] + t * abx, a[1] + t * aby
    return math.hypot(p[0] - cx, p[1] - cy)


# -------------------------------------------------------------------------------
# Display mapping
# -------------------------------------------------------------------------------

@dataclass(frozen=True)
class DisplayBounds:
    """
    Axis-aligned rectangle in data space shown on the canvas.

    `top` is the smallest Y value; the mapper flips the Y axis.
    """
    left: float
    top: float
    width: float
    height: float

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 0.0 or self.height <= 0.0


def compute_display_bounds(
    points: Optional[npt.NDArray[np.float64]],
    ring: Optional[npt.NDArray[np.float64]] = None,
    margin: float = config.DISPLAY_MARGIN,
) -> Optional[DisplayBounds]:
    """
    Bounds covering all points and ring vertices, widened by `margin` on each side.

    A zero extent on an axis is widened to 1.0 before the margin is applied.
    Returns None when there is nothing to show.
    """
    chunks = [np.asarray(a).reshape(-1, 2) for a in (points, ring) if a is not None and len(a) > 0]
    if not chunks:
        return None

    allpts = np.vstack(chunks)
    x_min, y_min = allpts.min(axis=0)
    x_max, y_max = allpts.max(axis=0)

    if x_min == x_max:
        x_max = x_min + 1.0
    if y_min == y_max:
        y_max = y_min + 1.0

    margin_x = (x_max - x_min) * margin
    margin_y = (y_max - y_min) * margin

    return DisplayBounds(
        left=float(x_min - margin_x),
        top=float(y_min - margin_y),
        width=float((x_max - x_min) + 2 * margin_x),
        height=float((y_max - y_min) + 2 * margin_y),
    )


class CoordinateMapper:
    """
    Affine map between data space and a display area of `width` x `height` px.

    Data Y grows upward, display Y grows downward. Degenerate bounds map
    every point to the centre of the display area.
    """

    def __init__(self, bounds: DisplayBounds, display_width: float, display_height: float) -> None:
        self.bounds = bounds
        self.display_width = float(display_width)
        self.display_height = float(display_height)

    def to_display(self, x: float, y: float) -> Coordinate:
        b = self.bounds
        if b.is_degenerate:
            return self.display_width / 2, self.display_height / 2

        x_ratio = (x - b.left) / b.width
        y_ratio = (y - b.top) / b.height
        return x_ratio * self.display_width, self.display_height - y_ratio * self.display_height

    def to_data(self, px: float, py: float) -> Coordinate:
        b = self.bounds
        if b.is_degenerate or self.display_width <= 0 or self.display_height <= 0:
            return b.left + b.width / 2, b.top + b.height / 2

        x_ratio = px / self.display_width
        y_ratio = (self.display_height - py) / self.display_height
        return b.left + x_ratio * b.width, b.top + y_ratio * b.height

    def map_array(self, pts: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        """Vectorized `to_display` for an (N, 2) array."""
        pts = np.asarray(pts, dtype=np.float64).reshape(-1, 2)
        b = self.bounds
        if b.is_degenerate:
            out = np.empty_like(pts)
            out[:, 0] = self.display_width / 2
            out[:, 1] = self.display_height / 2
            return out

        x = (pts[:, 0] - b.left) / b.width * self.display_width
        y = self.display_height - (pts[:, 1] - b.top) / b.height * self.display_height
        return np.column_stack([x, y])


@dataclass(frozen=True)
class SceneProjection:
    """Everything the canvas needs for one paint, derived from (points, ring, size)."""
    bounds: Optional[DisplayBounds]
    mapper: Optional[CoordinateMapper]
    points: npt.NDArray[np.float64]
    ring: Optional[npt.NDArray[np.float64]]


def project_scene(
    points: Optional[npt.NDArray[np.float64]],
    ring: Optional[npt.NDArray[np.float64]],
    display_width: float,
    display_height: float,
) -> SceneProjection:
    """Recompute bounds and display coordinates from scratch."""
    empty = np.empty((0, 2), dtype=np.float64)
    bounds = compute_display_bounds(points, ring)
    if bounds is None:
        return SceneProjection(bounds=None, mapper=None, points=empty, ring=None)

    mapper = CoordinateMapper(bounds, display_width, display_height)
    mapped_points = mapper.map_array(points) if points is not None and len(points) else empty
    mapped_ring = mapper.map_array(ring) if ring is not None else None
    return SceneProjection(bounds=bounds, mapper=mapper, points=mapped_points, ring=mapped_ring)
