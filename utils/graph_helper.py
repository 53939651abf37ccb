from typing import List, Sequence, Tuple
import pyqtgraph as pg


def setup_wpm_plot(plot_widget: pg.PlotWidget, line_color: str):
    plot_widget.setBackground(None)
    plot_widget.showGrid(x=False, y=True, alpha=0.15)
    plot_widget.setMenuEnabled(False)
    plot_widget.setMouseEnabled(x=False, y=False)
    plot_widget.hideButtons()
    plot_widget.setLabel('left', 'WPM')
    plot_widget.setLabel('bottom', 'Time (s)')
    curve = plot_widget.plot([], [], pen=pg.mkPen(line_color, width=2.5), antialias=True)
    return curve


def split_history(history: Sequence[Tuple[float, int]]) -> Tuple[List[float], List[float]]:
    xs = [float(t) for t, _ in history]
    ys = [float(w) for _, w in history]
    return xs, ys


def update_curve(curve, xs: List[float], ys: List[float]):
    curve.setData(xs, ys)
