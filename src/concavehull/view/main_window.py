"""
Main Application Window
=======================
The primary GUI container that holds the tabs, the console and the status bar.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects the signals of the panels (points loaded, hull
   computed, vertex removed, save requested) so every view stays in sync
   with the ProjectState.
"""
import logging
import os
from datetime import datetime

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QSplitter, QTabWidget, QPlainTextEdit

from concavehull.app.application import VISIBLE_APP_NAME
from concavehull.logging_config import ConsoleLogHandler
from concavehull.model.state import ProjectState
from concavehull.view.tabs.tab_about import AboutPanel
from concavehull.view.tabs.tab_input import InputSettingsPanel
from concavehull.view.tabs.tab_visualization import VisualizationPanel


class Console(QPlainTextEdit):
    # Log records may come from the worker thread; queued into the GUI thread
    record_received = Signal(str, str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setReadOnly(True)
        self.setMaximumBlockCount(1000)
        self.record_received.connect(self._on_record)

    def _log(self, level: str, msg: str) -> None:
        self.appendPlainText(f"{datetime.now().strftime('%d.%m.%Y %H:%M:%S')} [{level}] {msg}")

    def info(self, msg: str) -> None:
        self._log("info", msg)

    def warn(self, msg: str) -> None:
        self._log("warn", msg)

    def error(self, msg: str) -> None:
        self._log("error", msg)

    def write(self, level: str, msg: str) -> None:
        """Sink for ConsoleLogHandler, safe to call from any thread."""
        self.record_received.emit(level, msg)

    def _on_record(self, level: str, msg: str) -> None:
        if level in ("error", "critical"):
            self.error(msg)
        elif level == "warning":
            self.warn(msg)
        else:
            self.info(msg)


class MainWindow(QMainWindow):
    TAB_INPUT = 0
    TAB_VISUALIZATION = 1

    def __init__(self, project_state: ProjectState) -> None:
        super().__init__()
        self.project: ProjectState = project_state

        self.update_window_title()
        self.resize(1100, 800)

        # --- MAIN CONTAINER ---
        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        main_layout = QVBoxLayout(main_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)

        # Tabs on top, console below
        splitter = QSplitter(Qt.Vertical)
        main_layout.addWidget(splitter)

        self.tabs = QTabWidget()
        self.input_panel = InputSettingsPanel(self.project)
        self.vis_panel = VisualizationPanel(self.project)
        self.about_panel = AboutPanel()
        self.tabs.addTab(self.input_panel, "Input settings")  # Index 0
        self.tabs.addTab(self.vis_panel, "Visualization")  # Index 1
        self.tabs.addTab(self.about_panel, "About")  # Index 2
        splitter.addWidget(self.tabs)

        self.console = Console()
        splitter.addWidget(self.console)
        splitter.setSizes([650, 150])

        self.statusBar().showMessage("Ready")

        # Warnings from the model (skipped rows, failed saves) end up in the console
        self._log_handler = ConsoleLogHandler(self.console.write)
        logging.getLogger("concavehull").addHandler(self._log_handler)

        # --- SIGNAL CONNECTIONS ---
        self.input_panel.status_updated.connect(self.on_status_updated)
        self.input_panel.points_loaded.connect(self.on_points_loaded)
        self.input_panel.hull_calculated.connect(self.on_hull_calculated)
        self.input_panel.busy_changed.connect(self.vis_panel.set_busy)
        self.vis_panel.save_requested.connect(self.input_panel.save_hull)
        self.vis_panel.ring_edited.connect(self.on_ring_edited)

    # --- HELPER METHODS ---
    def update_window_title(self) -> None:
        if self.project.source_path:
            self.setWindowTitle(f"{VISIBLE_APP_NAME} - [{os.path.basename(self.project.source_path)}]")
        else:
            self.setWindowTitle(VISIBLE_APP_NAME)

    # --- SLOTS ---
    def on_status_updated(self, text: str) -> None:
        self.statusBar().showMessage(text)
        self.console.info(text)

    def on_points_loaded(self) -> None:
        self.update_window_title()
        self.vis_panel.refresh()
        self.input_panel.refresh()

    def on_hull_calculated(self) -> None:
        self.vis_panel.refresh()
        self.input_panel.refresh()
        if self.project.ring is not None:
            self.tabs.setCurrentIndex(self.TAB_VISUALIZATION)

    def on_ring_edited(self) -> None:
        ring = self.project.ring
        if ring is not None:
            self.on_status_updated(f"Vertex removed, hull has {len(ring) - 1} vertices.")
        self.input_panel.refresh()

    def closeEvent(self, event, /) -> None:
        logging.getLogger("concavehull").removeHandler(self._log_handler)
        worker = self.input_panel.hull_worker
        if worker is not None and worker.isRunning():
            # No cancellation; let the computation finish before tearing down
            worker.wait()
        event.accept()
