"""
Concave hull computation.

The hull itself is computed by GEOS through shapely (`shapely.concave_hull`).
GEOS only takes a length *ratio*; the absolute maximum-edge-length mode is
translated into that ratio from the Delaunay edge lengths of the input,
using the same target-length formula GEOS applies internally:

    target = min_edge + ratio * (max_edge - min_edge)
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, TYPE_CHECKING

import numpy as np
import shapely
from scipy.spatial import Delaunay, QhullError
from shapely.geometry import MultiPoint, Polygon

from concavehull import config
from concavehull.model.errors import HullComputationError, HullParameterError
from concavehull.model.geometry import as_points

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

# Smallest ratio GEOS still turns into a positive target edge length
_SMALLEST_RATIO = float(np.nextafter(0.0, 1.0))


class HullMode(str, Enum):
    """How the sizing parameter of the hull is interpreted."""
    MAX_EDGE_LENGTH = "max_edge_length"
    LENGTH_RATIO = "length_ratio"


@dataclass(frozen=True)
class HullParams:
    mode: HullMode = HullMode.LENGTH_RATIO
    value: float = config.DEFAULT_LENGTH_RATIO
    allow_holes: bool = False

    def validate(self) -> None:
        """
        Raises:
            HullParameterError: If `value` is missing or outside the range of `mode`.
        """
        if self.value is None or math.isnan(self.value):
            raise HullParameterError("A value for the hull parameter is required.")
        if self.mode == HullMode.LENGTH_RATIO:
            if not 0.0 <= self.value <= 1.0:
                raise HullParameterError(
                    f"The length ratio must be between 0 and 1, got {self.value}."
                )
        else:
            if not math.isfinite(self.value) or self.value < 0.0:
                raise HullParameterError(
                    f"The maximum edge length must be a non-negative number, got {self.value}."
                )


@dataclass(frozen=True)
class HullResult:
    """
    Outcome of a hull computation.

    `ring` is the polygon's exterior ring, or None when GEOS returned
    something other than a polygon (collinear input gives a LineString).
    """
    geometry_type: str
    ring: Optional[npt.NDArray[np.float64]]

    @property
    def is_polygon(self) -> bool:
        return self.ring is not None

    @property
    def vertex_count(self) -> int:
        return 0 if self.ring is None else len(self.ring) - 1


def delaunay_edge_lengths(points: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """
    Lengths of the unique edges of the Delaunay triangulation of `points`.

    Returns an empty array for input that cannot be triangulated (fewer than
    three distinct points, or all points collinear).
    """
    unique = np.unique(np.asarray(points, dtype=np.float64).reshape(-1, 2), axis=0)
    if len(unique) < 3:
        return np.empty(0, dtype=np.float64)

    try:
        tri = Delaunay(unique)
    except QhullError:
        return np.empty(0, dtype=np.float64)

    simplices = tri.simplices
    edges = np.vstack([simplices[:, [0, 1]], simplices[:, [1, 2]], simplices[:, [2, 0]]])
    edges = np.unique(np.sort(edges, axis=1), axis=0)
    return np.linalg.norm(unique[edges[:, 0]] - unique[edges[:, 1]], axis=1)


def length_to_ratio(points: npt.NDArray[np.float64], max_edge_length: float) -> float:
    """Translate an absolute maximum edge length into a GEOS length ratio in [0, 1]."""
    lengths = delaunay_edge_lengths(points)
    if lengths.size == 0:
        return 1.0

    min_len = float(lengths.min())
    max_len = float(lengths.max())
    if max_edge_length >= max_len:
        return 1.0
    if max_edge_length < min_len:
        return 0.0
    if max_edge_length == min_len:
        # GEOS reads a ratio of exactly 0 as a target length of 0, which drops
        # the shortest edges too. The smallest positive ratio keeps them.
        return _SMALLEST_RATIO
    return (max_edge_length - min_len) / (max_len - min_len)


def _exterior_ring(geometry) -> Optional[npt.NDArray[np.float64]]:
    if not isinstance(geometry, Polygon) or geometry.is_empty:
        return None
    coords = np.asarray(geometry.exterior.coords, dtype=np.float64)[:, :2]
    if len(coords) < 4:
        return None
    return as_points(coords)


def compute_concave_hull(points, params: HullParams) -> HullResult:
    """
    Compute the concave hull of `points`.

    Args:
        points: (N, 2) array-like of coordinates.
        params: Sizing parameter; validated here as well.

    Raises:
        HullParameterError: If the parameters are invalid or there are no points.
        HullComputationError: If the geometry library fails.
    """
    params.validate()
    pts = as_points(points)
    if len(pts) == 0:
        raise HullParameterError("No points loaded.")

    if params.mode == HullMode.LENGTH_RATIO:
        ratio = params.value
    else:
        ratio = length_to_ratio(pts, params.value)
        logger.debug(f"Max edge length {params.value} -> length ratio {ratio:.6f}")

    logger.info(f"Computing concave hull of {len(pts)} points (ratio={ratio:.4f}).")
    try:
        geometry = shapely.concave_hull(MultiPoint(pts), ratio=ratio, allow_holes=params.allow_holes)
    except Exception as e:
        logger.exception("Concave hull computation failed")
        raise HullComputationError(f"Concave hull computation failed: {e}") from e

    result = HullResult(geometry_type=geometry.geom_type, ring=_exterior_ring(geometry))
    if result.is_polygon:
        logger.info(f"Hull computed: {result.vertex_count} unique vertices.")
    else:
        logger.warning(f"Hull result is a {result.geometry_type}, not a polygon.")
    return result
