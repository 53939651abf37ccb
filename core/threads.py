# core/threads.py
from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal

from app.errors import DatabaseError
from utils.file_handler import load_catalog


class CatalogLoadWorkerSignals(QObject):
    loaded = Signal(object)   # TextCatalog
    failed = Signal(str)


class CatalogLoadWorker(QRunnable):
    def __init__(self, store):
        super().__init__()
        self.store = store
        self.signals = CatalogLoadWorkerSignals()

    def run(self):
        try:
            catalog = load_catalog(self.store)
        except DatabaseError as e:
            self.signals.failed.emit(str(e))
            return
        self.signals.loaded.emit(catalog)


class Workers:
    pool = QThreadPool.globalInstance()
