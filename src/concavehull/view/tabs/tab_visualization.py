"""
Visualization Panel
"""
import logging

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QLabel, QMenu, QMessageBox

from concavehull.model.errors import RingEditError
from concavehull.model.state import ProjectState
from concavehull.view.widgets.canvas import HullCanvas

logger = logging.getLogger(__name__)


class VisualizationPanel(QWidget):
    # Emitted when the user asks to export; wired to the input panel's save routine
    save_requested = Signal()
    ring_edited = Signal()

    def __init__(self, project_state: ProjectState, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.project = project_state

        layout = QVBoxLayout(self)

        self.canvas = HullCanvas(self.project.editor)
        layout.addWidget(self.canvas, 1)

        bottom = QHBoxLayout()
        self.lbl_info = QLabel("")
        self.lbl_info.setStyleSheet("color: gray;")
        bottom.addWidget(self.lbl_info, 1)

        self.btn_save = QPushButton("Save hull...")
        self.btn_save.clicked.connect(self.save_requested)
        bottom.addWidget(self.btn_save)
        layout.addLayout(bottom)

        self.canvas.vertex_context_requested.connect(self.on_vertex_context_requested)
        self.project.editor.add_ring_listener(lambda *_: self.update_info())

        self.update_info()

    def refresh(self) -> None:
        """Pull the current points from the project and redraw."""
        self.canvas.set_points(self.project.points)
        self.update_info()

    def set_busy(self, busy: bool) -> None:
        """Freeze editing and export while a hull is being computed."""
        self.canvas.set_editable(not busy)
        self.update_info()

    def update_info(self) -> None:
        n_points = len(self.project.points)
        ring = self.project.ring
        if ring is not None:
            text = f"{n_points} points, hull with {len(ring) - 1} vertices. Right-click a vertex to remove it."
        elif self.project.hull_geometry_type:
            text = f"{n_points} points, hull is a {self.project.hull_geometry_type}."
        else:
            text = f"{n_points} points."
        self.lbl_info.setText(text)
        self.btn_save.setEnabled(self.project.can_export)

    def on_vertex_context_requested(self, global_pos, index: int) -> None:
        menu = QMenu(self)
        act_remove = menu.addAction("Remove vertex")
        chosen = menu.exec(global_pos)
        if chosen is act_remove:
            self.remove_vertex(index)
        else:
            self.project.editor.clear_highlight()

    def remove_vertex(self, index: int) -> None:
        if not self.project.can_edit:
            return
        try:
            self.project.editor.remove_vertex(index)
        except RingEditError as e:
            logger.warning(f"Vertex {index} not removed: {e}")
            QMessageBox.warning(self, "Cannot remove vertex", str(e))
            return
        self.ring_edited.emit()
