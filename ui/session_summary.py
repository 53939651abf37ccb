# ui/session_summary.py
from __future__ import annotations
from typing import Sequence, Tuple

from PySide6.QtWidgets import QDialog, QVBoxLayout, QHBoxLayout, QPushButton
import pyqtgraph as pg

from app.calculation import format_time, smooth
from services.typing_engine import StatsSnapshot
from ui.widgets import StatCard
from utils.graph_helper import setup_wpm_plot, split_history, update_curve


class SessionSummary(QDialog):
    """Final result of a session plus the WPM curve sampled while typing."""

    def __init__(
        self,
        result: StatsSnapshot,
        history: Sequence[Tuple[float, int]] = (),
        parent=None,
    ):
        super().__init__(parent)
        self.setWindowTitle("Session Summary")
        self.resize(720, 420)

        root = QVBoxLayout(self)
        row = QHBoxLayout()
        for caption, value in (
            ("WPM", str(result.wpm)),
            ("Accuracy", f"{result.accuracy}%"),
            ("Time", format_time(result.time_elapsed)),
            ("Errors", str(result.errors)),
        ):
            row.addWidget(StatCard(caption, value, self))
        root.addLayout(row)

        # the first samples are noisy (few chars over a tiny interval)
        xs, ys = split_history(history)
        plot = pg.PlotWidget()
        curve = setup_wpm_plot(plot, "#c8c8ff")
        update_curve(curve, xs, smooth(ys))
        root.addWidget(plot, stretch=1)

        btn = QPushButton("OK", self)
        btn.clicked.connect(self.accept)
        root.addWidget(btn)
