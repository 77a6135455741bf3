"""
Project State (Data Model)
==========================
This module defines the central data structure for the running application.

Why is this file needed?
------------------------
1. State Management: It holds the loaded points, the header labels of the
   source file and the hull editor in one place.
2. Ownership: It is the only owner of the point sequence and the boundary
   ring. Updates replace whole objects; nothing is shared and mutated.
3. Decoupling: Views read from this object; Controllers write to this object.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Optional, TYPE_CHECKING

import numpy as np

from concavehull.model.editor import HullEditor
from concavehull.model.hull import HullParams, HullResult
from concavehull.model.errors import NoPointsError
from concavehull.model.io import FileFormat, IOManager, LoadResult

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


def _no_points() -> npt.NDArray[np.float64]:
    arr = np.empty((0, 2), dtype=np.float64)
    arr.flags.writeable = False
    return arr


@dataclass
class ProjectState:
    """
    Singleton-like class that holds the entire state of the open session.
    Pass this instance to your Controllers and Views.
    """
    source_path: Optional[str] = None
    file_format: FileFormat = field(default_factory=FileFormat)
    hull_params: HullParams = field(default_factory=HullParams)

    points: npt.NDArray[np.float64] = field(default_factory=_no_points)
    header_x: str = ""
    header_y: str = ""

    hull_geometry_type: Optional[str] = None
    editor: HullEditor = field(default_factory=HullEditor)

    # True while a hull computation is running on the worker thread
    computing: bool = False

    @property
    def has_points(self) -> bool:
        return len(self.points) > 0

    @property
    def ring(self) -> Optional[npt.NDArray[np.float64]]:
        return self.editor.ring

    @property
    def can_compute(self) -> bool:
        return self.has_points and not self.computing

    @property
    def can_export(self) -> bool:
        return self.editor.ring is not None and not self.computing

    @property
    def can_edit(self) -> bool:
        return self.editor.ring is not None and not self.computing

    def load(self, source_path: str, file_format: FileFormat) -> LoadResult:
        """
        Read `source_path` and install its points.

        Nothing changes when the read fails or yields no points.

        Raises:
            FormatConfigError: If the format is inconsistent.
            OSError: If the file cannot be read.
            NoPointsError: If no line of the file parsed.
        """
        result = IOManager.load_points(source_path, file_format)
        self.apply_load(result, source_path, file_format)
        return result

    def apply_load(self, result: LoadResult, source_path: str, file_format: FileFormat) -> None:
        """
        Swap in a freshly loaded point set; any previous hull is dropped.

        Raises:
            NoPointsError: If `result` holds no points. The current points
                and hull are kept in that case.
        """
        if result.count == 0:
            raise NoPointsError(
                f"No coordinates could be read from '{source_path}'.", result.skipped
            )
        self.points = result.points
        self.header_x = result.header_x
        self.header_y = result.header_y
        self.source_path = source_path
        self.file_format = file_format
        self.hull_geometry_type = None
        self.editor.set_ring(None)
        logger.info(f"Project now holds {len(self.points)} points from '{source_path}'.")

    def apply_hull(self, result: HullResult, params: HullParams) -> None:
        """Store a computed hull. Non-polygon results clear the editable ring."""
        self.hull_params = params
        self.hull_geometry_type = result.geometry_type
        self.editor.set_ring(result.ring)

    def clear_points(self) -> None:
        self.points = _no_points()
        self.header_x = ""
        self.header_y = ""
        self.hull_geometry_type = None
        self.editor.set_ring(None)

    def reset(self) -> None:
        """Clear all data for a new session"""
        self.source_path = None
        self.computing = False
        self.file_format = FileFormat()
        self.hull_params = HullParams()
        self.clear_points()
        logger.info("Project state has been reset.")
