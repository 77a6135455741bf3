"""
Configuration & Constants
=========================
This module serves as the central registry for global constants and paths.

Why is this file needed?
------------------------
1. Abstraction: Magic numbers (hit radius, margins, probe sizes) and the
   file-format choices offered in the GUI live in one place.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find bundled resources when the app is frozen into an .exe.

User choices that should survive a restart (delimiter, last directory, ...)
are not stored here but in QSettings, see `concavehull.app.application`.
"""
import sys
import os
from pathlib import Path


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/concavehull/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


ASSETS_PATH: str = get_resource_path("assets")
SAMPLE_POINTS_PATH: str = os.path.join(ASSETS_PATH, "sample_points.csv")

# --- Text encodings ---
# Legacy 8-bit code page used when a file has no BOM and is not valid UTF-8.
FALLBACK_ENCODING: str = "cp1251"
# Encoding used for files without a header (no detection happens there).
DEFAULT_INPUT_ENCODING: str = "utf-8"
# Exported files are always written as UTF-8 with a byte-order mark.
OUTPUT_ENCODING: str = "utf-8-sig"
# Number of leading bytes inspected by the UTF-8 heuristic.
UTF8_PROBE_SIZE: int = 4096

# --- File format choices (label -> character) ---
DELIMITERS: dict[str, str] = {
    "Comma (,)": ",",
    "Semicolon (;)": ";",
    "Space": " ",
    "Tab": "\t",
}
DEFAULT_DELIMITER: str = ";"

DECIMAL_SEPARATORS: dict[str, str] = {
    "Comma (,)": ",",
    "Period (.)": ".",
}
DEFAULT_DECIMAL_SEPARATOR: str = "."

INPUT_FILE_FILTER: str = "CSV or Text files (*.csv *.txt);;All files (*.*)"
EXPORT_FILE_FILTER: str = "CSV files (*.csv);;Text files (*.txt)"
EXPORT_SUFFIXES: tuple[str, ...] = (".csv", ".txt")
EXPORT_NAME_SUFFIX: str = "_hull"

# --- Hull parameters ---
DEFAULT_LENGTH_RATIO: float = 0.3

# --- Visualization ---
DISPLAY_MARGIN: float = 0.1  # fraction of the data extent added on each side
HIT_TEST_RADIUS: float = 5.0  # px
