# core/chrono.py
from __future__ import annotations
from typing import Callable, Optional
import time

from PySide6.QtCore import QObject, QTimer, Signal


def monotonic_ms() -> int:
    return time.monotonic_ns() // 1_000_000


class ActiveClock:
    """
    Accumulates active time (ms) across pause/resume cycles.
    elapsed_ms() never goes backwards, even if now() does.
    """

    def __init__(self, now: Optional[Callable[[], int]] = None):
        self._now = now or monotonic_ms
        self._accum = 0          # closed intervals
        self._seg_start = None   # open interval start, None when not running
        self._last = 0           # highest value ever reported

    @property
    def running(self) -> bool:
        return self._seg_start is not None

    def start(self):
        self.reset()
        self._seg_start = self._now()

    def pause(self):
        if self._seg_start is not None:
            self._accum += self._segment()
            self._seg_start = None

    def resume(self):
        if self._seg_start is None:
            self._seg_start = self._now()

    def stop(self) -> int:
        self.pause()
        return self.elapsed_ms()

    def reset(self):
        self._accum = 0
        self._seg_start = None
        self._last = 0

    def elapsed_ms(self) -> int:
        total = self._accum
        if self._seg_start is not None:
            total += self._segment()
        self._last = max(self._last, total)
        return self._last

    def _segment(self) -> int:
        # a wall clock stepping backwards must not eat banked time
        return max(0, int(self._now()) - int(self._seg_start))


class IntervalTicker(QObject):
    """
    Repeating QTimer owned by a running session. stop() also invalidates any
    timeout already queued, so a late tick can never reach the callback.
    """

    ticked = Signal()

    def __init__(self, interval_ms: int = 100, parent=None):
        super().__init__(parent)
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_timeout)
        self._callback: Optional[Callable[[], None]] = None
        self._generation = 0

    @property
    def active(self) -> bool:
        return self._timer.isActive()

    def start(self, callback: Callable[[], None]):
        self._generation += 1
        self._callback = callback
        self._timer.start()

    def stop(self):
        self._generation += 1
        self._callback = None
        self._timer.stop()

    def _on_timeout(self):
        gen = self._generation
        cb = self._callback
        if cb is None or not self._timer.isActive():
            return
        cb()
        if gen == self._generation:
            self.ticked.emit()
