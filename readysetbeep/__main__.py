"""Allow running ReadySetBeep as a module: python -m readysetbeep."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .database.db import init_db
from .app import ReadySetBeepApp


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    init_db()
    logging.getLogger("readysetbeep").info("ReadySetBeep ready!")

    app = QApplication(sys.argv)
    app.setApplicationName("ReadySetBeep")
    app.setOrganizationName("ReadySetBeep")

    window = ReadySetBeepApp()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
