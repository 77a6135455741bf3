"""
Hull Editor
===========
Holds the boundary ring currently shown on the canvas and implements the
interactive edit operations: hit-testing, highlighting and vertex removal.

The editor never mutates a ring array in place. Every successful edit builds
a new read-only array and swaps it in, so a failed edit leaves the previous
ring untouched.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, TYPE_CHECKING

import numpy as np

from concavehull import config
from concavehull.model.errors import RingEditError
from concavehull.model.geometry import (
    Coordinate, CoordinateMapper, as_points, count_unique_vertices, is_closed,
    point_distance, point_segment_distance,
)

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

MIN_RING_POINTS = 4  # three distinct vertices plus the closing duplicate
MIN_UNIQUE_VERTICES = 3

RingListener = Callable[[Optional["npt.NDArray[np.float64]"]], None]
HighlightListener = Callable[[Optional[int]], None]


def hit_test_ring(ring: npt.NDArray[np.float64], point: Coordinate, radius: float) -> Optional[int]:
    """
    Find the ring vertex addressed by `point`.

    Vertices win over edges: the edge pass only runs when no vertex lies
    within `radius`. An edge hit returns the index of the edge's start vertex.

    Returns:
        Vertex index, or None when nothing is within `radius`.
    """
    n = len(ring)
    if n < 3:
        return None

    best_index: Optional[int] = None
    best_distance = float("inf")

    for i in range(n):
        d = point_distance(point, ring[i])
        if d <= radius and d < best_distance:
            best_distance = d
            best_index = i

    if best_index is not None:
        return best_index

    for i in range(n):
        d = point_segment_distance(point, ring[i], ring[(i + 1) % n])
        if d <= radius and d < best_distance:
            best_distance = d
            best_index = i

    return best_index


def remove_ring_vertex(ring: npt.NDArray[np.float64], index: int) -> npt.NDArray[np.float64]:
    """
    Return a copy of the closed `ring` without vertex `index`.

    Removing the start vertex (index 0, or its closing duplicate at n-1)
    re-closes the ring on the former second vertex. Any other vertex is
    simply cut out.

    Raises:
        RingEditError: If the ring is too small, the index is out of range or
            the result would have fewer than three distinct vertices.
    """
    n = len(ring)
    if n <= MIN_RING_POINTS:
        raise RingEditError(
            f"Cannot remove a vertex: the hull has only {max(n - 1, 0)} vertices."
        )
    if index < 0 or index >= n:
        raise RingEditError(f"Vertex index {index} is out of range [0, {n}).")

    if index == 0 or index == n - 1:
        new_ring = np.vstack([ring[1:n - 1], ring[1:2]])
    else:
        new_ring = np.delete(ring, index, axis=0)

    if len(new_ring) < MIN_RING_POINTS or count_unique_vertices(new_ring) < MIN_UNIQUE_VERTICES:
        raise RingEditError("Fewer than 3 vertices would remain after the removal. Operation cancelled.")

    return as_points(new_ring)


class HullEditor:
    """Current boundary ring plus the transient highlight state."""

    def __init__(self) -> None:
        self._ring: Optional[npt.NDArray[np.float64]] = None
        self._highlighted: Optional[int] = None
        self._ring_listeners: list[RingListener] = []
        self._highlight_listeners: list[HighlightListener] = []

    # ---- observers ----

    def add_ring_listener(self, callback: RingListener) -> None:
        self._ring_listeners.append(callback)

    def add_highlight_listener(self, callback: HighlightListener) -> None:
        self._highlight_listeners.append(callback)

    def _notify_ring(self) -> None:
        for cb in self._ring_listeners:
            cb(self._ring)

    def _notify_highlight(self) -> None:
        for cb in self._highlight_listeners:
            cb(self._highlighted)

    # ---- state ----

    @property
    def ring(self) -> Optional[npt.NDArray[np.float64]]:
        return self._ring

    @property
    def highlighted_index(self) -> Optional[int]:
        return self._highlighted

    @property
    def vertex_count(self) -> int:
        """Distinct vertices of the ring (closing duplicate excluded)."""
        return 0 if self._ring is None else len(self._ring) - 1

    def set_ring(self, ring) -> None:
        """
        Replace the ring (or clear it with None). Resets the highlight.

        Raises:
            RingEditError: If `ring` is not a closed ring of at least 4 points.
        """
        if ring is None:
            new_ring = None
        else:
            new_ring = as_points(ring)
            if len(new_ring) < MIN_RING_POINTS or not is_closed(new_ring):
                raise RingEditError("A boundary ring needs at least 4 points and must be closed.")

        self._ring = new_ring
        self._highlighted = None
        self._notify_ring()

    # ---- interaction ----

    def hit_test(
        self,
        point: Coordinate,
        radius: float = config.HIT_TEST_RADIUS,
        mapper: Optional[CoordinateMapper] = None,
    ) -> Optional[int]:
        """
        Hit-test `point` against the ring.

        With a `mapper` the ring is mapped to display space first, so `point`
        and `radius` are in pixels. Without one they are in ring units.
        """
        if self._ring is None:
            return None
        ring = mapper.map_array(self._ring) if mapper is not None else self._ring
        return hit_test_ring(ring, point, radius)

    def highlight(self, index: int) -> None:
        if self._ring is None or not 0 <= index < len(self._ring):
            raise IndexError(f"Vertex index {index} is out of range.")
        if index != self._highlighted:
            self._highlighted = index
            self._notify_highlight()

    def clear_highlight(self) -> None:
        if self._highlighted is not None:
            self._highlighted = None
            self._notify_highlight()

    def highlighted_edges(self) -> set[int]:
        """Indices of the edges (i -> i+1) touching the highlighted vertex."""
        if self._ring is None or self._highlighted is None:
            return set()
        n = len(self._ring)
        real = n - 1
        h = self._highlighted
        return {i for i in range(n) if i == h or (i + 1) % real == h}

    def remove_vertex(self, index: int) -> npt.NDArray[np.float64]:
        """
        Remove vertex `index` and swap in the resulting ring.

        Raises:
            RingEditError: If there is no ring or the edit would break it.
                The current ring is kept in that case.
        """
        if self._ring is None:
            raise RingEditError("There is no hull to edit.")

        new_ring = remove_ring_vertex(self._ring, index)
        logger.info(f"Removed vertex {index}; hull now has {len(new_ring) - 1} vertices.")
        self.set_ring(new_ring)
        return self._ring
