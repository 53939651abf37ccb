# ui/typing_area.py
from __future__ import annotations
from html import escape
import logging

from PySide6.QtCore import Qt, Signal, Slot
from PySide6.QtGui import QTextCursor
from PySide6.QtWidgets import (
    QWidget, QLabel, QVBoxLayout, QHBoxLayout, QPlainTextEdit, QPushButton, QSizePolicy
)

from app.calculation import accuracy_band, display_wpm, format_time, wpm_band
from app.config import Settings
from app.state import SessionState, TypingSession
from core.chrono import ActiveClock, IntervalTicker
from services.catalog import PracticeText
from services.typing_engine import CORRECT, CURRENT, INCORRECT, StatsSnapshot, char_states
from ui.widgets import StatCard

log = logging.getLogger(__name__)

_STATE_STYLE = {
    CORRECT: "background:#16a34a; color:white; border-radius:3px;",
    INCORRECT: "background:#dc2626; color:white; border-radius:3px;",
    CURRENT: "border-bottom:2px solid #1e40af; color:#1e40af; font-weight:bold;",
}


class PracticeInput(QPlainTextEdit):
    """Input box that refuses pastes and never grows past the reference."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.max_length = 0

    def insertFromMimeData(self, source):
        return

    def canInsertFromMimeData(self, source) -> bool:
        return False

    def enforce_max_length(self):
        text = self.toPlainText()
        if self.max_length and len(text) > self.max_length:
            self.blockSignals(True)
            self.setPlainText(text[: self.max_length])
            self.moveCursor(QTextCursor.End)
            self.blockSignals(False)


class TypingArea(QWidget):
    completed = Signal(object)   # StatsSnapshot

    def __init__(self, settings: Settings | None = None, parent=None):
        super().__init__(parent)
        self.settings = settings or Settings()
        self.text: PracticeText | None = None
        self.session: TypingSession | None = None
        self._ticker: IntervalTicker | None = None

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 20, 0, 20)
        root.setSpacing(18)

        self.lblTitle = QLabel("", self)
        self.lblTitle.setObjectName("lblTitle")
        self.lblTitle.setStyleSheet("font-size: 22px; font-weight: 600;")
        self.lblMeta = QLabel("", self)
        root.addWidget(self.lblTitle)
        root.addWidget(self.lblMeta)

        stats = QHBoxLayout()
        stats.setSpacing(20)
        self.cardWPM = StatCard("WPM", "0", self)
        self.cardAcc = StatCard("Accuracy", "100%", self)
        self.cardTime = StatCard("Time", "0:00", self)
        self.cardProgress = StatCard("Progress", "0%", self)
        for card in (self.cardWPM, self.cardAcc, self.cardTime, self.cardProgress):
            stats.addWidget(card)
        root.addLayout(stats)

        controls = QHBoxLayout()
        self.btnStart = QPushButton("Start", self)
        self.btnPause = QPushButton("Pause", self)
        self.btnReset = QPushButton("Reset", self)
        self.btnStart.clicked.connect(self.start_session)
        self.btnPause.clicked.connect(self.toggle_pause)
        self.btnReset.clicked.connect(self.reset_session)
        for b in (self.btnStart, self.btnPause, self.btnReset):
            b.setFocusPolicy(Qt.NoFocus)
            controls.addWidget(b)
        controls.addStretch(1)
        root.addLayout(controls)

        self.lblLine = QLabel("", self)
        self.lblLine.setObjectName("lblLine")
        self.lblLine.setTextFormat(Qt.RichText)
        self.lblLine.setWordWrap(True)
        self.lblLine.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.lblLine.setStyleSheet("font-family: monospace; font-size: 20px; line-height: 1.5;")
        root.addWidget(self.lblLine, stretch=1)

        self.input = PracticeInput(self)
        self.input.setPlaceholderText("Start typing to practice...")
        self.input.setStyleSheet("font-family: monospace; font-size: 18px;")
        self.input.textChanged.connect(self._on_text_changed)
        root.addWidget(self.input)

        self._update_controls()

    # ---------------- session wiring ----------------
    def set_text(self, text: PracticeText):
        self._drop_session()
        self.text = text
        log.debug("Loading practice text %s", text.id)
        self.lblTitle.setText(text.title)
        self.lblMeta.setText(
            f"{text.difficulty} · {text.category} · {text.language} · {text.word_count} words"
        )
        self.input.max_length = len(text.text)
        self._ticker = IntervalTicker(self.settings.tick_ms, parent=self)
        self.session = TypingSession(
            text.text,
            on_complete=self._on_complete,
            on_tick=self._on_tick,
            clock=ActiveClock(),
            ticker=self._ticker,
            history_limit=self.settings.history_limit,
        )
        self._clear_input()
        self._refresh()

    def _drop_session(self):
        if self.session is not None:
            self.session.close()
            self.session = None
        if self._ticker is not None:
            self._ticker.deleteLater()
            self._ticker = None

    @Slot()
    def start_session(self):
        if self.session and self.session.start():
            self.input.setFocus()
        self._update_controls()

    @Slot()
    def toggle_pause(self):
        if self.session:
            self.session.toggle_pause()
        self._update_controls()
        self.input.setFocus()

    @Slot()
    def reset_session(self):
        if self.session:
            self.session.reset()
        self._clear_input()
        self._refresh()
        self.input.setFocus()

    def _clear_input(self):
        self.input.blockSignals(True)
        self.input.clear()
        self.input.blockSignals(False)
        self.input.setReadOnly(False)

    @Slot()
    def _on_text_changed(self):
        if self.session is None:
            return
        self.input.enforce_max_length()
        self.session.update_typed(self.input.toPlainText())
        self._refresh()

    def _on_tick(self, snap: StatsSnapshot):
        self._show_stats(snap)

    def _on_complete(self, snap: StatsSnapshot):
        self.input.setReadOnly(True)
        self.completed.emit(snap)

    # ---------------- rendering ----------------
    def _refresh(self):
        self._render_line()
        snap = self.session.live_snapshot() if self.session else None
        self._show_stats(snap or StatsSnapshot())
        self._update_controls()

    def _show_stats(self, snap: StatsSnapshot):
        self.cardWPM.set_value(
            display_wpm(snap.wpm, self.settings.wpm_display_cap), wpm_band(snap.wpm)
        )
        self.cardAcc.set_value(f"{snap.accuracy}%", accuracy_band(snap.accuracy))
        self.cardTime.set_value(format_time(snap.time_elapsed))
        self.cardProgress.set_value(f"{self.session.progress if self.session else 0}%")

    def _render_line(self):
        if self.session is None:
            self.lblLine.setText("")
            return
        ref = self.session.reference
        parts = []
        for ch, state in zip(ref, char_states(ref, self.session.typed)):
            style = _STATE_STYLE.get(state)
            txt = escape(ch).replace("\n", "<br>")
            if ch == " " and style:
                txt = "&nbsp;"
            parts.append(f'<span style="{style}">{txt}</span>' if style else txt)
        self.lblLine.setText("".join(parts))

    def _update_controls(self):
        state = self.session.state if self.session else None
        self.btnStart.setEnabled(state is SessionState.IDLE)
        self.btnPause.setEnabled(state in (SessionState.RUNNING, SessionState.PAUSED))
        self.btnPause.setText("Resume" if state is SessionState.PAUSED else "Pause")
        self.btnReset.setEnabled(state is not None)

    # ---------------- teardown ----------------
    def hideEvent(self, ev):
        if self.session is not None:
            self.session.close()
            self._update_controls()
        super().hideEvent(ev)

    def closeEvent(self, ev):
        self._drop_session()
        super().closeEvent(ev)
