# app/state.py
from __future__ import annotations
from collections import deque
from enum import Enum
from typing import Callable, Deque, List, Optional, Tuple
import logging

from services.typing_engine import StatsSnapshot, compute_stats, progress_percent

log = logging.getLogger(__name__)

SnapshotCallback = Callable[[StatsSnapshot], None]


class SessionState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


class TypingSession:
    """
    One attempt at one reference text.

    IDLE -> RUNNING on the first non-empty input, RUNNING <-> PAUSED on
    request, RUNNING -> COMPLETED once the typed buffer is as long as the
    reference. reset() goes back to IDLE from anywhere.

    The ticker only exists while RUNNING; it refreshes the live snapshot and
    never touches the buffer or the state. Inputs that don't apply to the
    current state are ignored rather than raised.

    `clock` needs start/pause/resume/stop/reset/elapsed_ms (see
    core.chrono.ActiveClock); `ticker` needs start(callback)/stop()/active
    (see core.chrono.IntervalTicker). Without an explicit ticker an unparented
    IntervalTicker is created, so a QApplication (or QCoreApplication) must
    already exist; pass a ticker to drive the session without Qt.
    """

    def __init__(
        self,
        reference: str,
        on_complete: Optional[SnapshotCallback] = None,
        on_tick: Optional[SnapshotCallback] = None,
        clock=None,
        ticker=None,
        history_limit: int = 3600,
    ):
        if clock is None:
            from core.chrono import ActiveClock
            clock = ActiveClock()
        if ticker is None:
            from core.chrono import IntervalTicker
            ticker = IntervalTicker()
        self.reference = reference or ""
        self.on_complete = on_complete
        self.on_tick = on_tick
        self._clock = clock
        self._ticker = ticker
        self._state = SessionState.IDLE
        self._typed = ""
        self._result: Optional[StatsSnapshot] = None
        self._snapshot: Optional[StatsSnapshot] = None
        self._history: Deque[Tuple[float, int]] = deque(maxlen=history_limit)

    # ---------------- read-only views ----------------
    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def typed(self) -> str:
        return self._typed

    @property
    def result(self) -> Optional[StatsSnapshot]:
        return self._result

    @property
    def snapshot(self) -> Optional[StatsSnapshot]:
        """Last snapshot produced by a tick, an edit or completion."""
        return self._snapshot

    @property
    def elapsed_ms(self) -> int:
        if self._state is SessionState.IDLE:
            return 0
        return self._clock.elapsed_ms()

    @property
    def progress(self) -> int:
        return progress_percent(self.reference, self._typed)

    @property
    def history(self) -> List[Tuple[float, int]]:
        return list(self._history)

    def live_snapshot(self) -> Optional[StatsSnapshot]:
        if self._state is SessionState.IDLE:
            return None
        if self._state is SessionState.COMPLETED:
            return self._result
        return compute_stats(self.reference, self._typed, self.elapsed_ms)

    # ---------------- transitions ----------------
    def start(self) -> bool:
        """Explicit start (Start button): enter RUNNING with an empty buffer."""
        if self._state is not SessionState.IDLE:
            return False
        self._enter_running()
        return True

    def update_typed(self, text: str) -> bool:
        """Replace the typed buffer. Returns False when the edit was ignored."""
        text = text or ""
        if self._state is SessionState.COMPLETED:
            log.debug("Ignoring edit on a completed session")
            return False
        if self._state is SessionState.IDLE:
            if not text:
                return False
            self._enter_running()
        elif self._state is SessionState.PAUSED:
            self.resume()

        self._typed = text
        self._snapshot = compute_stats(self.reference, self._typed, self._clock.elapsed_ms())
        if len(self._typed) == len(self.reference):
            self._complete()
        return True

    def type_char(self, ch: str) -> bool:
        if not ch:
            return False
        return self.update_typed(self._typed + ch)

    def backspace(self) -> bool:
        if not self._typed or self._state is SessionState.COMPLETED:
            return False
        return self.update_typed(self._typed[:-1])

    def pause(self) -> bool:
        if self._state is not SessionState.RUNNING:
            return False
        self._ticker.stop()
        self._clock.pause()
        self._state = SessionState.PAUSED
        log.debug("Session paused at %d ms", self._clock.elapsed_ms())
        return True

    def resume(self) -> bool:
        if self._state is not SessionState.PAUSED:
            return False
        self._clock.resume()
        self._state = SessionState.RUNNING
        self._ticker.start(self._on_tick)
        return True

    def toggle_pause(self) -> bool:
        if self._state is SessionState.RUNNING:
            return self.pause()
        return self.resume()

    def reset(self):
        self._ticker.stop()
        self._clock.reset()
        self._state = SessionState.IDLE
        self._typed = ""
        self._result = None
        self._snapshot = None
        self._history.clear()

    def close(self):
        """Teardown of the owning view: release the ticker, keep everything else."""
        self._ticker.stop()
        if self._state is SessionState.RUNNING:
            self._clock.pause()
            self._state = SessionState.PAUSED

    # ---------------- internals ----------------
    def _enter_running(self):
        self._clock.start()
        self._state = SessionState.RUNNING
        self._ticker.start(self._on_tick)
        log.debug("Session started (%d chars)", len(self.reference))

    def _on_tick(self):
        if self._state is not SessionState.RUNNING:
            return
        snap = compute_stats(self.reference, self._typed, self._clock.elapsed_ms())
        self._snapshot = snap
        self._history.append((snap.time_elapsed / 1000.0, snap.wpm))
        self._emit(self.on_tick, snap)

    def _complete(self):
        self._ticker.stop()
        elapsed = self._clock.stop()
        self._state = SessionState.COMPLETED
        self._result = compute_stats(self.reference, self._typed, elapsed)
        self._snapshot = self._result
        self._history.append((elapsed / 1000.0, self._result.wpm))
        log.info(
            "Session completed: %d WPM, %d%% accuracy, %d errors, %d ms",
            self._result.wpm, self._result.accuracy, self._result.errors, elapsed,
        )
        self._emit(self.on_complete, self._result)

    def _emit(self, callback: Optional[SnapshotCallback], snap: StatsSnapshot):
        if callback is None:
            return
        try:
            callback(snap)
        except Exception:
            log.exception("Snapshot callback failed")
