# ui/widgets/stat_card.py
from PySide6.QtCore import Qt
from PySide6.QtWidgets import QFrame, QLabel, QVBoxLayout

BAND_COLORS = {
    "high": "#22c55e",
    "medium": "#eab308",
    "low": "#ef4444",
    None: "#e5e7eb",
}


class StatCard(QFrame):
    def __init__(self, caption: str, value: str = "0", parent=None):
        super().__init__(parent)
        self.setObjectName("StatCard")
        v = QVBoxLayout(self)
        v.setContentsMargins(12, 8, 12, 8)
        self.lblCaption = QLabel(caption, self)
        self.lblCaption.setStyleSheet("font-size: 12px; color: #9aa1a9;")
        self.lblValue = QLabel(value, self)
        self.lblValue.setAlignment(Qt.AlignLeft | Qt.AlignVCenter)
        v.addWidget(self.lblCaption)
        v.addWidget(self.lblValue)
        self.set_value(value)

    def set_value(self, value: str, band: str | None = None):
        self.lblValue.setText(value)
        color = BAND_COLORS.get(band, BAND_COLORS[None])
        self.lblValue.setStyleSheet(f"font-size: 26px; font-weight: 600; color: {color};")
