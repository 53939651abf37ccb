import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start: int = 1_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int):
        self.now += ms


class FakeTicker:
    def __init__(self):
        self.callback = None
        self.starts = 0
        self.stops = 0

    @property
    def active(self) -> bool:
        return self.callback is not None

    def start(self, callback):
        self.callback = callback
        self.starts += 1

    def stop(self):
        self.callback = None
        self.stops += 1

    def fire(self):
        if self.callback is not None:
            self.callback()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def fake_ticker():
    return FakeTicker()
