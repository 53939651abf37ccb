# ui/text_selector.py
from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLineEdit, QComboBox,
    QListWidget, QListWidgetItem, QPushButton, QLabel
)

from app.validation import DIFFICULTIES
from services.catalog import ALL, PracticeText, TextCatalog


class TextSelector(QWidget):
    textSelected = Signal(object)   # PracticeText

    def __init__(self, catalog: TextCatalog | None = None, parent=None):
        super().__init__(parent)
        self.catalog = catalog or TextCatalog()

        root = QVBoxLayout(self)
        root.setSpacing(12)
        title = QLabel("Pick a text to practice", self)
        title.setStyleSheet("font-size: 24px; font-weight: 600;")
        root.addWidget(title)

        filters = QHBoxLayout()
        self.txtSearch = QLineEdit(self)
        self.txtSearch.setPlaceholderText("Search title or content…")
        self.txtSearch.textChanged.connect(self.apply_filters)
        filters.addWidget(self.txtSearch, 1)

        self.cmbCategory = QComboBox(self)
        self.cmbDifficulty = QComboBox(self)
        self.cmbLanguage = QComboBox(self)
        for cmb in (self.cmbCategory, self.cmbDifficulty, self.cmbLanguage):
            cmb.currentIndexChanged.connect(self.apply_filters)
            filters.addWidget(cmb)

        btn_clear = QPushButton("Clear", self)
        btn_clear.clicked.connect(self.clear_filters)
        filters.addWidget(btn_clear)
        root.addLayout(filters)

        self.lstTexts = QListWidget(self)
        self.lstTexts.itemActivated.connect(self._on_activated)
        root.addWidget(self.lstTexts, 1)

        self.lblCount = QLabel("", self)
        root.addWidget(self.lblCount)

        self.set_catalog(self.catalog)

    def set_catalog(self, catalog: TextCatalog):
        self.catalog = catalog
        self._fill_combo(self.cmbCategory, "All categories", catalog.categories())
        self._fill_combo(self.cmbDifficulty, "All levels", list(DIFFICULTIES))
        self._fill_combo(self.cmbLanguage, "All languages", catalog.languages())
        self.apply_filters()

    @staticmethod
    def _fill_combo(cmb: QComboBox, label: str, values):
        current = cmb.currentData()
        cmb.blockSignals(True)
        cmb.clear()
        cmb.addItem(label, ALL)
        for v in values:
            cmb.addItem(v, v)
        idx = cmb.findData(current)
        cmb.setCurrentIndex(idx if idx >= 0 else 0)
        cmb.blockSignals(False)

    def apply_filters(self, *_):
        texts = self.catalog.filter(
            search=self.txtSearch.text(),
            category=self.cmbCategory.currentData() or ALL,
            difficulty=self.cmbDifficulty.currentData() or ALL,
            language=self.cmbLanguage.currentData() or ALL,
        )
        self.lstTexts.clear()
        for t in texts:
            item = QListWidgetItem(
                f"{t.title}  ·  {t.difficulty} · {t.category} · {t.language} · {t.word_count} words"
            )
            item.setData(Qt.UserRole, t)
            self.lstTexts.addItem(item)
        self.lblCount.setText(f"{len(texts)} of {len(self.catalog)} texts")

    def clear_filters(self):
        for w in (self.txtSearch, self.cmbCategory, self.cmbDifficulty, self.cmbLanguage):
            w.blockSignals(True)
        self.txtSearch.clear()
        for cmb in (self.cmbCategory, self.cmbDifficulty, self.cmbLanguage):
            cmb.setCurrentIndex(0)
        for w in (self.txtSearch, self.cmbCategory, self.cmbDifficulty, self.cmbLanguage):
            w.blockSignals(False)
        self.apply_filters()

    def _on_activated(self, item: QListWidgetItem):
        text: PracticeText = item.data(Qt.UserRole)
        if text is not None:
            self.textSelected.emit(text)
