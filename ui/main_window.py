# ui/main_window.py
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QFileDialog, QMessageBox, QPushButton, QStackedWidget
)
from PySide6.QtCore import Qt, QTimer
import logging
import pathlib

from app.config import Settings
from services.catalog import PracticeText, TextCatalog
from services.text_admin import TextAdmin
from services.typing_engine import StatsSnapshot
from ui.admin_dialog import AdminDialog
from ui.session_summary import SessionSummary
from ui.text_selector import TextSelector
from ui.typing_area import TypingArea
from utils.db_helper import TextStore
from utils.file_handler import read_text_file
from core.threads import CatalogLoadWorker, Workers

log = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, store: TextStore, settings: Settings):
        super().__init__()
        self.setWindowTitle("Typeforge")
        self.resize(1100, 720)
        self.settings = settings
        self.store = store
        self.admin = TextAdmin(store)
        self.catalog = TextCatalog(())

        root = QWidget(self)
        root_v = QVBoxLayout(root)
        root_v.setContentsMargins(16, 16, 16, 16)
        root_v.setSpacing(16)
        self._build_top_bar(root_v)

        self.pages = QStackedWidget(self)
        self.selector = TextSelector(self.catalog, self)
        self.selector.textSelected.connect(self.open_text)
        self.typing = TypingArea(settings, self)
        self.typing.completed.connect(self._on_completed)
        self.pages.addWidget(self.selector)
        self.pages.addWidget(self.typing)
        root_v.addWidget(self.pages, 1)
        self.setCentralWidget(root)

        self.reload_catalog()

    # ---------------- Top Bar ----------------
    def _build_top_bar(self, parent_layout):
        bar = QWidget(self)
        bar.setObjectName("TopBar")
        h = QHBoxLayout(bar)
        h.setContentsMargins(14, 10, 14, 10)
        h.setSpacing(10)

        self.btnTexts = QPushButton("Texts", bar)
        self.btnTexts.clicked.connect(self.show_selector)
        self.btnPractice = QPushButton("Practice", bar)
        self.btnPractice.clicked.connect(lambda: self.pages.setCurrentWidget(self.typing))
        self.btnPractice.setEnabled(False)
        btn_random = QPushButton("Random text", bar)
        btn_random.clicked.connect(self.open_random)
        btn_load = QPushButton("Load text…", bar)
        btn_load.clicked.connect(self._on_load)
        btn_admin = QPushButton("Manage texts…", bar)
        btn_admin.clicked.connect(self._open_admin)

        for b in (self.btnTexts, self.btnPractice, btn_random, btn_load):
            b.setObjectName("TopBtn")
            b.setFocusPolicy(Qt.NoFocus)
            h.addWidget(b)
        h.addStretch(1)
        btn_admin.setObjectName("TopBtn")
        btn_admin.setFocusPolicy(Qt.NoFocus)
        h.addWidget(btn_admin)
        parent_layout.addWidget(bar)

    # ---------------- Catalog ----------------
    def reload_catalog(self):
        worker = CatalogLoadWorker(self.store)
        worker.signals.loaded.connect(self._on_catalog_loaded)
        worker.signals.failed.connect(self._on_catalog_failed)
        Workers.pool.start(worker)

    def _on_catalog_loaded(self, catalog: TextCatalog):
        self.catalog = catalog
        self.selector.set_catalog(catalog)
        log.info("Loaded %d practice texts", len(catalog))

    def _on_catalog_failed(self, msg: str):
        log.error("Catalog load failed: %s", msg)
        QMessageBox.warning(self, "Texts", f"Could not load texts:\n{msg}")

    # ---------------- Navigation ----------------
    def show_selector(self):
        self.pages.setCurrentWidget(self.selector)

    def open_text(self, text: PracticeText):
        self.typing.set_text(text)
        self.btnPractice.setEnabled(True)
        self.pages.setCurrentWidget(self.typing)
        self.typing.input.setFocus()

    def open_random(self):
        text = self.catalog.random()
        if text is not None:
            self.open_text(text)

    def _on_load(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open text", "", "Text (*.txt)")
        if not path:
            return
        try:
            data = read_text_file(path)
        except (OSError, UnicodeDecodeError) as e:
            QMessageBox.warning(self, "Load Text", str(e))
            return
        if not data:
            QMessageBox.warning(self, "Load Text", "The file is empty.")
            return
        name = pathlib.Path(path).stem
        self.open_text(PracticeText(id=f"file:{name}", title=name, text=data, category="File"))

    def _open_admin(self):
        dlg = AdminDialog(self.admin, self)
        dlg.exec()
        if dlg.changed:
            self.reload_catalog()

    # ---------------- Results ----------------
    def _on_completed(self, result: StatsSnapshot):
        self.setWindowTitle(f"Typeforge | {result.wpm} WPM, {result.accuracy}%")
        history = self.typing.session.history if self.typing.session else []
        # let the final keystroke finish repainting before the modal opens
        QTimer.singleShot(0, lambda: SessionSummary(result, history, self).exec())
