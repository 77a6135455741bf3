"""
Input Settings Panel
====================
File selection, file format, hull parameters and the Load / Compute / Save
actions.
"""
import logging
import os

from PySide6.QtCore import QSettings, Signal, Qt
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGroupBox, QFormLayout, QLineEdit,
    QPushButton, QComboBox, QCheckBox, QLabel, QFileDialog, QMessageBox
)

from concavehull import config
from concavehull.app import application
from concavehull.controller.workers import HullWorker
from concavehull.model.errors import FormatConfigError, HullParameterError, NoPointsError
from concavehull.model.hull import HullMode, HullParams, HullResult
from concavehull.model.io import IOManager, FileFormat, default_export_name, ensure_export_suffix
from concavehull.model.state import ProjectState
from concavehull.view.widgets.numeric_input import NumericLineEdit

logger = logging.getLogger(__name__)

HULL_MODE_LABELS = {
    HullMode.LENGTH_RATIO: "Length ratio (0 - 1)",
    HullMode.MAX_EDGE_LENGTH: "Max edge length",
}


class InputSettingsPanel(QWidget):
    # Short human readable messages for the status bar / console
    status_updated = Signal(str)
    points_loaded = Signal()
    hull_calculated = Signal()
    # True while the hull worker runs
    busy_changed = Signal(bool)

    def __init__(self, project_state: ProjectState, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.project = project_state
        self.settings = QSettings()
        self.hull_worker = None
        self._busy = False

        layout = QVBoxLayout(self)

        # --- File Group ---
        grp_file = QGroupBox("Input file")
        file_row = QHBoxLayout(grp_file)
        self.path_edit = QLineEdit()
        self.path_edit.setPlaceholderText("Path to a .csv or .txt file")
        self.path_edit.textChanged.connect(self._update_gating)
        file_row.addWidget(self.path_edit, 1)

        self.btn_browse = QPushButton("Browse...")
        self.btn_browse.clicked.connect(self.on_browse_clicked)
        file_row.addWidget(self.btn_browse)
        layout.addWidget(grp_file)

        # --- Format Group ---
        grp_format = QGroupBox("File format")
        form_format = QFormLayout(grp_format)

        self.delimiter_combo = QComboBox()
        for label, char in config.DELIMITERS.items():
            self.delimiter_combo.addItem(label, char)
        form_format.addRow("Delimiter:", self.delimiter_combo)

        self.decimal_combo = QComboBox()
        for label, char in config.DECIMAL_SEPARATORS.items():
            self.decimal_combo.addItem(label, char)
        form_format.addRow("Decimal separator:", self.decimal_combo)

        self.chk_header = QCheckBox("First line holds column names")
        form_format.addRow("Header:", self.chk_header)
        layout.addWidget(grp_format)

        # --- Hull Group ---
        grp_hull = QGroupBox("Concave hull")
        form_hull = QFormLayout(grp_hull)

        self.mode_combo = QComboBox()
        for mode, label in HULL_MODE_LABELS.items():
            self.mode_combo.addItem(label, mode.value)
        form_hull.addRow("Parameter:", self.mode_combo)

        self.value_edit = NumericLineEdit(allow_negative=False)
        self.value_edit.textChanged.connect(self._update_gating)
        form_hull.addRow("Value:", self.value_edit)
        layout.addWidget(grp_hull)

        # --- Actions ---
        self.btn_load = QPushButton("Load points")
        self.btn_load.clicked.connect(self.on_load_clicked)
        layout.addWidget(self.btn_load)

        self.btn_compute = QPushButton("Compute hull")
        self.btn_compute.setMinimumHeight(40)
        self.btn_compute.clicked.connect(self.on_compute_clicked)
        layout.addWidget(self.btn_compute)

        self.btn_save = QPushButton("Save hull...")
        self.btn_save.clicked.connect(self.save_hull)
        layout.addWidget(self.btn_save)

        # --- Status Info ---
        self.lbl_status = QLabel("No points loaded.")
        self.lbl_status.setAlignment(Qt.AlignCenter)
        self.lbl_status.setStyleSheet("color: gray;")
        layout.addWidget(self.lbl_status)

        layout.addStretch()

        self._restore_settings()

        # Connected after restoring so the restore does not write back
        self.delimiter_combo.currentIndexChanged.connect(self._store_format_settings)
        self.decimal_combo.currentIndexChanged.connect(self.on_decimal_changed)
        self.chk_header.toggled.connect(self._store_format_settings)
        self.mode_combo.currentIndexChanged.connect(self.on_mode_changed)

        self._update_gating()

    # --- STATE HELPERS ---

    def current_format(self) -> FileFormat:
        return FileFormat(
            delimiter=self.delimiter_combo.currentData(),
            decimal_separator=self.decimal_combo.currentData(),
            has_header=self.chk_header.isChecked(),
        )

    def current_mode(self) -> HullMode:
        return HullMode(self.mode_combo.currentData())

    def current_params(self) -> HullParams:
        return HullParams(mode=self.current_mode(), value=self.value_edit.value())

    def _set_status(self, text: str, color: str = "gray") -> None:
        self.lbl_status.setText(text)
        self.lbl_status.setStyleSheet(f"color: {color};")
        self.status_updated.emit(text)

    def _set_busy(self, busy: bool) -> None:
        self._busy = busy
        self.project.computing = busy
        for w in (
            self.path_edit, self.btn_browse, self.delimiter_combo, self.decimal_combo,
            self.chk_header, self.mode_combo, self.value_edit,
        ):
            w.setEnabled(not busy)
        self._update_gating()
        self.busy_changed.emit(busy)

    def _update_gating(self) -> None:
        """Enable actions according to what the project currently holds."""
        if self._busy:
            self.btn_load.setEnabled(False)
            self.btn_compute.setEnabled(False)
            self.btn_save.setEnabled(False)
            return
        self.btn_load.setEnabled(os.path.isfile(self.path_edit.text().strip()))
        self.btn_compute.setEnabled(self.project.can_compute and self.value_edit.hasAcceptableInput())
        self.btn_save.setEnabled(self.project.can_export)

    def refresh(self) -> None:
        """Re-read gating after the ring was edited elsewhere."""
        self._update_gating()

    # --- SETTINGS ---

    def _restore_settings(self) -> None:
        delimiter = self.settings.value(application.KEY_DELIMITER, config.DEFAULT_DELIMITER)
        idx = self.delimiter_combo.findData(delimiter)
        self.delimiter_combo.setCurrentIndex(idx if idx >= 0 else self.delimiter_combo.findData(config.DEFAULT_DELIMITER))

        separator = self.settings.value(application.KEY_DECIMAL_SEPARATOR, config.DEFAULT_DECIMAL_SEPARATOR)
        idx = self.decimal_combo.findData(separator)
        self.decimal_combo.setCurrentIndex(
            idx if idx >= 0 else self.decimal_combo.findData(config.DEFAULT_DECIMAL_SEPARATOR)
        )
        self.value_edit.set_decimal_separator(self.decimal_combo.currentData())

        self.chk_header.setChecked(self.settings.value(application.KEY_HAS_HEADER, False, type=bool))

        try:
            mode = HullMode(self.settings.value(application.KEY_HULL_MODE, HullMode.LENGTH_RATIO.value))
        except ValueError:
            mode = HullMode.LENGTH_RATIO
        self.mode_combo.setCurrentIndex(self.mode_combo.findData(mode.value))

        value = self.settings.value(application.KEY_HULL_VALUE, config.DEFAULT_LENGTH_RATIO, type=float)
        self.value_edit.set_value(value)

    def _store_format_settings(self) -> None:
        self.settings.setValue(application.KEY_DELIMITER, self.delimiter_combo.currentData())
        self.settings.setValue(application.KEY_DECIMAL_SEPARATOR, self.decimal_combo.currentData())
        self.settings.setValue(application.KEY_HAS_HEADER, self.chk_header.isChecked())

    def _store_hull_settings(self, params: HullParams) -> None:
        self.settings.setValue(application.KEY_HULL_MODE, params.mode.value)
        self.settings.setValue(application.KEY_HULL_VALUE, params.value)

    def _last_dir(self) -> str:
        return self.settings.value(application.KEY_LAST_DIR, "")

    def _remember_dir(self, path: str) -> None:
        self.settings.setValue(application.KEY_LAST_DIR, os.path.dirname(path))

    # --- SLOTS ---

    def on_decimal_changed(self) -> None:
        self.value_edit.set_decimal_separator(self.decimal_combo.currentData())
        self._store_format_settings()

    def on_mode_changed(self) -> None:
        if self.current_mode() is HullMode.MAX_EDGE_LENGTH:
            # Lengths are in data units; a ratio is meaningless there
            self.value_edit.clear()
        else:
            self.value_edit.set_value(config.DEFAULT_LENGTH_RATIO)
        self._update_gating()

    def on_browse_clicked(self) -> None:
        fname, _ = QFileDialog.getOpenFileName(
            self, "Open points file", self._last_dir(), config.INPUT_FILE_FILTER
        )
        if fname:
            self.path_edit.setText(fname)
            self._remember_dir(fname)

    def on_load_clicked(self) -> None:
        path = self.path_edit.text().strip()
        file_format = self.current_format()

        try:
            result = self.project.load(path, file_format)
        except FormatConfigError as e:
            QMessageBox.warning(self, "Invalid file format", str(e))
            return
        except NoPointsError as e:
            self._set_status(f"No points loaded from {os.path.basename(path)}.", "red")
            rows = ", ".join(str(s.row) for s in e.skipped[:20])
            if len(e.skipped) > 20:
                rows += ", ..."
            detail = f"\n\nUnreadable rows: {rows}" if rows else ""
            QMessageBox.warning(self, "Load failed", f"{e}{detail}")
            return
        except OSError as e:
            logger.error(f"Could not read '{path}': {e}")
            QMessageBox.critical(self, "Load failed", f"Could not read the file:\n{e}")
            return

        self._remember_dir(path)

        msg = f"Loaded {result.count} points from {os.path.basename(path)}."
        if result.skipped:
            msg += f" {len(result.skipped)} rows skipped."
        self._set_status(msg, "green")

        self._update_gating()
        self.points_loaded.emit()

    def on_compute_clicked(self) -> None:
        params = self.current_params()
        try:
            params.validate()
        except HullParameterError as e:
            QMessageBox.warning(self, "Invalid parameter", str(e))
            return

        self._store_hull_settings(params)
        self._set_status("Computing concave hull...")
        self._set_busy(True)

        self.hull_worker = HullWorker(self.project.points, params)
        self.hull_worker.result_ready.connect(self.on_hull_ready)
        self.hull_worker.error_occurred.connect(self.on_hull_error)
        self.hull_worker.finished.connect(self.on_worker_finished)
        self.hull_worker.start()

    def on_hull_ready(self, result: HullResult) -> None:
        # Runs in the GUI thread (queued from the worker)
        self.project.apply_hull(result, self.hull_worker.params)
        if result.is_polygon:
            self._set_status(f"Hull computed: {result.vertex_count} vertices.", "green")
        else:
            self._set_status(f"Hull is a {result.geometry_type}, not a polygon. Nothing to edit.", "orange")
        self.hull_calculated.emit()

    def on_hull_error(self, msg: str) -> None:
        self._set_status("Hull computation failed.", "red")
        QMessageBox.critical(self, "Hull computation failed", msg)

    def on_worker_finished(self) -> None:
        self._set_busy(False)

    def save_hull(self) -> None:
        """Export the current ring. Shared by the Visualization tab."""
        ring = self.project.ring
        if ring is None:
            return

        source = self.project.source_path or ""
        start_dir = self._last_dir() or os.path.dirname(source)
        suggested = os.path.join(start_dir, default_export_name(source) + config.EXPORT_SUFFIXES[0])

        fname, _ = QFileDialog.getSaveFileName(self, "Save hull", suggested, config.EXPORT_FILE_FILTER)
        if not fname:
            return
        fname = ensure_export_suffix(fname)

        try:
            IOManager.save_ring(ring, fname, self.current_format(), self.project.header_x, self.project.header_y)
        except FormatConfigError as e:
            QMessageBox.warning(self, "Invalid file format", str(e))
            return
        except OSError as e:
            QMessageBox.critical(self, "Save failed", f"Could not write the file:\n{e}")
            return

        self._remember_dir(fname)
        self._set_status(f"Hull saved to {os.path.basename(fname)}.", "green")
