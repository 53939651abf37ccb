# app/calculation.py
from __future__ import annotations

CHARS_PER_WORD = 5


def clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def ratio_half_up(num: int, den: int) -> int:
    """num / den rounded half up, in integers so exact halves stay exact."""
    return (2 * num + den) // (2 * den)


def wpm_from_chars(chars: int, elapsed_ms: int) -> int:
    """
    WPM = (chars / 5) / minutes. One "word" is five typed characters,
    regardless of where the spaces fall.
    """
    elapsed_ms = int(elapsed_ms)
    if elapsed_ms <= 0 or chars <= 0:
        return 0
    # (chars / 5) / (ms / 60000) == chars * 12000 / ms
    return ratio_half_up(chars * (60000 // CHARS_PER_WORD), elapsed_ms)


def accuracy_percent(correct: int, typed: int) -> int:
    if typed <= 0:
        return 100
    return clamp(ratio_half_up(100 * max(0, correct), typed), 0, 100)


def format_time(ms: int) -> str:
    secs = max(0, int(ms)) // 1000
    return f"{secs // 60}:{secs % 60:02d}"


def wpm_band(wpm: int) -> str:
    if wpm >= 60:
        return "high"
    if wpm >= 30:
        return "medium"
    return "low"


def accuracy_band(acc: int) -> str:
    if acc >= 95:
        return "high"
    if acc >= 80:
        return "medium"
    return "low"


def display_wpm(wpm: int, cap: int) -> str:
    # only the label is capped; snapshots keep the real figure
    return f"{cap}+" if cap and wpm > cap else str(wpm)


def smooth(values: list[float], factor: float = 0.25) -> list[float]:
    out, last = [], None
    for v in values:
        last = v if last is None else last + factor * (v - last)
        out.append(last)
    return out
