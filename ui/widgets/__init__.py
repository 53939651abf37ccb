from ui.widgets.stat_card import StatCard

__all__ = ["StatCard"]
