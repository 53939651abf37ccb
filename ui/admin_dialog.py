# ui/admin_dialog.py
from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout, QLineEdit, QPlainTextEdit,
    QComboBox, QPushButton, QTableWidget, QTableWidgetItem, QLabel, QMessageBox,
    QAbstractItemView
)

from app.validation import DIFFICULTIES
from services.text_admin import TextAdmin

LANGUAGES = ["en", "vi", "fr", "de", "es", "it", "ru", "ja", "ko", "zh"]
_COLUMNS = ["id", "title", "category", "difficulty", "language"]


class AdminDialog(QDialog):
    """Add / edit / delete practice texts."""

    def __init__(self, admin: TextAdmin, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Manage texts")
        self.resize(860, 560)
        self.admin = admin
        self.editing_id = None
        self.changed = False

        root = QVBoxLayout(self)
        self.lblMode = QLabel("Add a new text", self)
        self.lblMode.setStyleSheet("font-size: 18px; font-weight: 600;")
        root.addWidget(self.lblMode)

        form = QFormLayout()
        self.edTitle = QLineEdit(self)
        self.edText = QPlainTextEdit(self)
        self.edText.setFixedHeight(110)
        self.cmbCategory = QComboBox(self)
        self.cmbCategory.setEditable(True)
        self.cmbLanguage = QComboBox(self)
        self.cmbLanguage.addItems(LANGUAGES)
        self.cmbDifficulty = QComboBox(self)
        self.cmbDifficulty.addItems(list(DIFFICULTIES))
        form.addRow("Title", self.edTitle)
        form.addRow("Text", self.edText)
        form.addRow("Category", self.cmbCategory)
        form.addRow("Language", self.cmbLanguage)
        form.addRow("Difficulty", self.cmbDifficulty)
        root.addLayout(form)

        row = QHBoxLayout()
        self.btnSave = QPushButton("Add", self)
        self.btnSave.clicked.connect(self._on_save)
        self.btnCancelEdit = QPushButton("Cancel edit", self)
        self.btnCancelEdit.clicked.connect(self._clear_form)
        self.btnCancelEdit.setVisible(False)
        row.addWidget(self.btnSave)
        row.addWidget(self.btnCancelEdit)
        row.addStretch(1)
        self.lblMessage = QLabel("", self)
        row.addWidget(self.lblMessage)
        root.addLayout(row)

        self.table = QTableWidget(0, len(_COLUMNS), self)
        self.table.setHorizontalHeaderLabels(_COLUMNS)
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.horizontalHeader().setStretchLastSection(True)
        root.addWidget(self.table, 1)

        actions = QHBoxLayout()
        btn_edit = QPushButton("Edit selected", self)
        btn_edit.clicked.connect(self._on_edit)
        btn_delete = QPushButton("Delete selected", self)
        btn_delete.clicked.connect(self._on_delete)
        btn_close = QPushButton("Close", self)
        btn_close.clicked.connect(self.accept)
        actions.addWidget(btn_edit)
        actions.addWidget(btn_delete)
        actions.addStretch(1)
        actions.addWidget(btn_close)
        root.addLayout(actions)

        self._records = []
        self.reload()

    def reload(self):
        res = self.admin.list()
        if not res.ok:
            self.lblMessage.setText("Could not load texts")
            return
        self._records = res.body
        self.table.setRowCount(len(self._records))
        for r, rec in enumerate(self._records):
            for c, key in enumerate(_COLUMNS):
                item = QTableWidgetItem(str(rec.get(key, "")))
                item.setData(Qt.UserRole, rec["id"])
                self.table.setItem(r, c, item)
        current = self.cmbCategory.currentText()
        self.cmbCategory.clear()
        self.cmbCategory.addItems(list(dict.fromkeys(rec["category"] for rec in self._records)))
        self.cmbCategory.setEditText(current)

    def _form(self) -> dict:
        return {
            "title": self.edTitle.text(),
            "text": self.edText.toPlainText(),
            "category": self.cmbCategory.currentText(),
            "language": self.cmbLanguage.currentText(),
            "difficulty": self.cmbDifficulty.currentText(),
        }

    def _selected_record(self):
        row = self.table.currentRow()
        if row < 0 or row >= len(self._records):
            return None
        return self._records[row]

    def _on_save(self):
        if self.editing_id is not None:
            res = self.admin.update(self.editing_id, self._form())
            ok_msg = "Saved."
        else:
            res = self.admin.create(self._form())
            ok_msg = "Added."
        if res.ok:
            self.changed = True
            self._clear_form()
            self.lblMessage.setText(ok_msg)
            self.reload()
        else:
            self.lblMessage.setText(f"Error: {res.body.get('error', res.status)}")

    def _on_edit(self):
        rec = self._selected_record()
        if rec is None:
            return
        self.editing_id = rec["id"]
        self.edTitle.setText(rec["title"])
        self.edText.setPlainText(rec["text"])
        self.cmbCategory.setEditText(rec["category"])
        self.cmbLanguage.setCurrentText(rec["language"])
        self.cmbDifficulty.setCurrentText(rec["difficulty"])
        self.lblMode.setText(f"Edit “{rec['title']}”")
        self.btnSave.setText("Save")
        self.btnCancelEdit.setVisible(True)
        self.lblMessage.setText("")

    def _on_delete(self):
        rec = self._selected_record()
        if rec is None:
            return
        answer = QMessageBox.question(self, "Delete text", f"Delete “{rec['title']}”?")
        if answer != QMessageBox.Yes:
            return
        res = self.admin.delete(rec["id"])
        if res.ok:
            self.changed = True
            self.lblMessage.setText("Deleted.")
            self.reload()
        elif res.status == 404:
            self.lblMessage.setText("Already gone.")
            self.reload()
        else:
            self.lblMessage.setText("Delete failed.")

    def _clear_form(self):
        self.editing_id = None
        self.edTitle.clear()
        self.edText.clear()
        self.cmbCategory.setEditText("")
        self.cmbDifficulty.setCurrentIndex(0)
        self.lblMode.setText("Add a new text")
        self.btnSave.setText("Add")
        self.btnCancelEdit.setVisible(False)
