# main.py
from __future__ import annotations
import sys
import logging

from PySide6.QtWidgets import QApplication, QMessageBox

from app.config import Settings, load_settings
from app.errors import DatabaseError
from ui.main_window import MainWindow
from utils.file_handler import open_store


def setup_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.log_file, encoding="utf-8"),
        ],
    )

    # Log any uncaught exceptions rather than silently dying
    def excepthook(exctype, value, tb):
        logging.critical("Unhandled exception", exc_info=(exctype, value, tb))
        if QApplication.instance() is not None:
            QMessageBox.critical(None, "Application Error", f"{exctype.__name__}: {value}")
        sys.exit(1)

    sys.excepthook = excepthook


def main() -> int:
    settings = load_settings()
    setup_logging(settings)

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("Typeforge")
    app.setOrganizationName("Typeforge")

    try:
        store = open_store(settings)
    except DatabaseError as e:
        logging.error("Cannot open text store %s: %s", settings.db_path, e)
        QMessageBox.critical(None, "Typeforge", f"Cannot open {settings.db_path}:\n{e}")
        return 1

    win = MainWindow(store, settings)
    win.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
