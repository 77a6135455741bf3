"""
2D canvas for the point cloud and the hull outline.

Painting is stateless: every paintEvent recomputes the display projection
from (points, ring, widget size) with `project_scene` and draws it with the
immutable style constants below. Mouse handling hit-tests the ring in the
same display space.
"""
from __future__ import annotations

from typing import Optional, TYPE_CHECKING

import numpy as np
from PySide6.QtCore import QPointF, QRectF, Qt, Signal
from PySide6.QtGui import QColor, QMouseEvent, QPainter, QPaintEvent, QPen
from PySide6.QtWidgets import QSizePolicy, QWidget

from concavehull import config
from concavehull.model.editor import HullEditor
from concavehull.model.geometry import CoordinateMapper, SceneProjection, project_scene

if TYPE_CHECKING:
    import numpy.typing as npt

# -------------------------------------------------------------------------------
# Style
# -------------------------------------------------------------------------------

BACKGROUND_COLOR = QColor("white")
POINT_COLOR = QColor("blue")
POINT_HALF_SIZE = 1.0  # px
EDGE_COLOR = QColor("red")
EDGE_WIDTH = 2.0
HIGHLIGHT_COLOR = QColor("crimson")
HIGHLIGHT_WIDTH = 4.0


class HullCanvas(QWidget):
    """
    Draws the loaded points and the editable hull ring.

    Signals:
        vertex_context_requested(QPoint, int): right click on a ring vertex/edge,
            with the global cursor position and the addressed vertex index.
    """
    vertex_context_requested = Signal(object, int)

    def __init__(self, editor: HullEditor, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.editor = editor
        self._points: npt.NDArray[np.float64] = np.empty((0, 2), dtype=np.float64)
        self._editable = True

        self.setMouseTracking(True)
        self.setMinimumSize(200, 200)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

        self.editor.add_ring_listener(lambda *_: self.update())
        self.editor.add_highlight_listener(lambda *_: self.update())

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def set_points(self, points: Optional[npt.NDArray[np.float64]]) -> None:
        self._points = np.empty((0, 2), dtype=np.float64) if points is None else points
        self.update()

    def set_editable(self, editable: bool) -> None:
        """Hover highlight and the vertex context menu are off while not editable."""
        self._editable = editable
        if not editable:
            self.editor.clear_highlight()

    def projection(self) -> SceneProjection:
        return project_scene(self._points, self.editor.ring, self.width(), self.height())

    def mapper(self) -> Optional[CoordinateMapper]:
        return self.projection().mapper

    # ------------------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------------------

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        try:
            painter.fillRect(self.rect(), BACKGROUND_COLOR)
            if self.width() <= 1 or self.height() <= 1:
                return

            scene = self.projection()
            painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
            self._draw_points(painter, scene.points)
            if scene.ring is not None:
                self._draw_ring(painter, scene.ring, self.editor.highlighted_edges())
        finally:
            painter.end()

    @staticmethod
    def _draw_points(painter: QPainter, pts: npt.NDArray[np.float64]) -> None:
        size = 2 * POINT_HALF_SIZE
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(POINT_COLOR)
        for x, y in pts:
            painter.drawRect(QRectF(x - POINT_HALF_SIZE, y - POINT_HALF_SIZE, size, size))

    @staticmethod
    def _draw_ring(painter: QPainter, ring: npt.NDArray[np.float64], highlighted: set[int]) -> None:
        normal_pen = QPen(EDGE_COLOR, EDGE_WIDTH)
        highlight_pen = QPen(HIGHLIGHT_COLOR, HIGHLIGHT_WIDTH)
        n = len(ring)
        for i in range(n):
            start = ring[i]
            end = ring[(i + 1) % n]
            painter.setPen(highlight_pen if i in highlighted else normal_pen)
            painter.drawLine(QPointF(start[0], start[1]), QPointF(end[0], end[1]))

    # ------------------------------------------------------------------------------
    # Mouse
    # ------------------------------------------------------------------------------

    def _hit(self, event: QMouseEvent) -> Optional[int]:
        mapper = self.mapper()
        if mapper is None:
            return None
        pos = event.position()
        return self.editor.hit_test((pos.x(), pos.y()), config.HIT_TEST_RADIUS, mapper)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        hit = self._hit(event) if self._editable else None
        if hit is not None:
            self.editor.highlight(hit)
        else:
            self.editor.clear_highlight()
        super().mouseMoveEvent(event)

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if self._editable and event.button() == Qt.MouseButton.RightButton:
            hit = self._hit(event)
            if hit is not None:
                self.editor.highlight(hit)
                self.vertex_context_requested.emit(event.globalPosition().toPoint(), hit)
                event.accept()
                return
        super().mousePressEvent(event)

    def leaveEvent(self, event) -> None:
        self.editor.clear_highlight()
        super().leaveEvent(event)
