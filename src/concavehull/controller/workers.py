"""
Background Workers (Threading)
==============================
This module contains QThread subclasses for handling long-running tasks.

Why is this file needed?
------------------------
1. Responsiveness: A concave hull of a large point cloud can take a while.
   Running it on the main thread would freeze the GUI.
2. Signals: They provide a safe way to hand the result (or the error) back
   to the GUI thread using Qt Signals.

The worker only reads the points it was given. The GUI disables the
controls that could change the project while the worker runs, so no lock
is needed. There is no cancellation; a started computation runs to the end.

Classes:
    HullWorker: Runs the concave hull computation.
"""
import logging

from PySide6.QtCore import QThread, Signal

from concavehull.model.hull import HullParams, compute_concave_hull

logger = logging.getLogger(__name__)


class HullWorker(QThread):
    # Signals to update the UI from the background
    result_ready = Signal(object)  # HullResult
    error_occurred = Signal(str)

    def __init__(self, points, params: HullParams):
        super().__init__()
        self.points = points
        self.params = params

    def run(self):
        try:
            logger.info("Starting hull computation in background thread...")
            result = compute_concave_hull(self.points, self.params)
            self.result_ready.emit(result)

        except Exception as e:
            logger.error(f"Error in HullWorker: {e}")
            self.error_occurred.emit(str(e))
