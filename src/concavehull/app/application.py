from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QCoreApplication, QSettings

import sys
import os

from concavehull.version import APP_VERSION

ORG_ID = "concavehull"
APP_ID = "concavehull-editor"

VISIBLE_APP_NAME = "Concave Hull Editor"

# QSettings keys for the persisted input options
KEY_DELIMITER = "input/delimiter"
KEY_DECIMAL_SEPARATOR = "input/decimal_separator"
KEY_HAS_HEADER = "input/has_header"
KEY_HULL_MODE = "hull/mode"
KEY_HULL_VALUE = "hull/value"
KEY_LAST_DIR = "files/last_dir"


def create_app() -> QApplication:
    """Create and configure the QApplication instance."""
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setApplicationName(APP_ID)
    QCoreApplication.setApplicationVersion(APP_VERSION)
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationDisplayName(VISIBLE_APP_NAME)

    return app
