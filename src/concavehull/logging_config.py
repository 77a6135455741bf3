"""
Logging for the hull editor.

Everything logs below the 'concavehull' logger. `setup_logging` gives it a
stdout handler and, on request, a UTF-8 log file. The main window adds a
`ConsoleLogHandler` afterwards so skipped rows and failures also reach the
console pane under the tabs.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Route 'concavehull' records to stdout and optionally to `log_file`.

    Calling it again replaces the handlers of the previous call. The log file
    is truncated on every start.
    """
    logger = logging.getLogger("concavehull")
    logger.setLevel(level)

    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(level)
    stdout_handler.setFormatter(formatter)
    logger.addHandler(stdout_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    target = f"stdout and {log_file}" if log_file else "stdout"
    logger.info(f"Logging to {target} at level {logging.getLevelName(level)}.")


class ConsoleLogHandler(logging.Handler):
    """
    Forwards records of the 'concavehull' logger to a GUI console.

    The sink is any callable taking (level_name, message); the main window
    passes its console so warnings (e.g. skipped rows) show up in the app.
    """

    def __init__(self, sink, level: int = logging.WARNING) -> None:
        super().__init__(level)
        self._sink = sink

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._sink(record.levelname.lower(), self.format(record))
        except Exception:
            self.handleError(record)
