# services/typing_engine.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import List

from app.calculation import accuracy_percent, clamp, ratio_half_up, wpm_from_chars

CORRECT = "correct"
INCORRECT = "incorrect"
CURRENT = "current"
PENDING = "pending"


@dataclass(frozen=True)
class StatsSnapshot:
    wpm: int = 0
    accuracy: int = 100
    errors: int = 0
    time_elapsed: int = 0  # ms

    def as_dict(self) -> dict:
        d = asdict(self)
        d["timeElapsed"] = d.pop("time_elapsed")
        return d


def count_errors(reference: str, typed: str) -> int:
    # positional, not edit distance: one early slip shifts everything after it
    n = min(len(reference), len(typed))
    return sum(1 for i in range(n) if typed[i] != reference[i])


def compute_stats(reference: str, typed: str, elapsed_ms: int) -> StatsSnapshot:
    """
    Stats for a (reference, typed-so-far, elapsed) triple.

    Only the overlapping prefix is compared; characters typed past the end of
    the reference are neither right nor wrong, but they still count towards
    WPM. Pure function, safe to call on every keystroke or timer tick.
    """
    elapsed_ms = max(0, int(elapsed_ms))
    typed = typed or ""
    if not typed:
        return StatsSnapshot(wpm=0, accuracy=100, errors=0, time_elapsed=elapsed_ms)

    overlap = min(len(reference), len(typed))
    errors = count_errors(reference, typed)
    return StatsSnapshot(
        wpm=wpm_from_chars(len(typed), elapsed_ms),
        accuracy=accuracy_percent(overlap - errors, overlap),
        errors=errors,
        time_elapsed=elapsed_ms,
    )


def char_states(reference: str, typed: str) -> List[str]:
    """One render state per reference character."""
    out: List[str] = []
    for i, ch in enumerate(reference):
        if i < len(typed):
            out.append(CORRECT if typed[i] == ch else INCORRECT)
        elif i == len(typed):
            out.append(CURRENT)
        else:
            out.append(PENDING)
    return out


def progress_percent(reference: str, typed: str) -> int:
    if not reference:
        return 0
    return clamp(ratio_half_up(100 * len(typed), len(reference)), 0, 100)


def word_count(text: str) -> int:
    """Whitespace-delimited tokens; not the 5-char words used for WPM."""
    return len(text.split())
