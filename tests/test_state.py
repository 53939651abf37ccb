"""Tests for app.state.TypingSession."""

import pytest

from app.state import SessionState, TypingSession
from core.chrono import ActiveClock
from services.typing_engine import StatsSnapshot


@pytest.fixture
def results():
    return []


@pytest.fixture
def make_session(fake_clock, fake_ticker, results):
    def _make(reference="hello world", **kw):
        return TypingSession(
            reference,
            on_complete=results.append,
            clock=ActiveClock(fake_clock),
            ticker=fake_ticker,
            **kw,
        )
    return _make


class TestIdle:
    def test_initial_state(self, make_session):
        s = make_session()
        assert s.state is SessionState.IDLE
        assert s.typed == ""
        assert s.elapsed_ms == 0
        assert s.result is None
        assert s.live_snapshot() is None

    def test_empty_edit_does_not_start(self, make_session, fake_ticker):
        s = make_session()
        assert s.update_typed("") is False
        assert s.state is SessionState.IDLE
        assert not fake_ticker.active

    def test_first_keystroke_starts(self, make_session, fake_ticker):
        s = make_session()
        assert s.type_char("h") is True
        assert s.state is SessionState.RUNNING
        assert fake_ticker.active

    def test_explicit_start(self, make_session, fake_ticker, fake_clock):
        s = make_session()
        assert s.start() is True
        assert s.state is SessionState.RUNNING
        assert fake_ticker.active
        fake_clock.advance(1000)
        assert s.elapsed_ms == 1000
        assert s.start() is False


class TestRunning:
    def test_clock_runs(self, make_session, fake_clock):
        s = make_session()
        s.type_char("h")
        fake_clock.advance(2500)
        assert s.elapsed_ms == 2500
        assert s.live_snapshot().time_elapsed == 2500

    def test_tick_refreshes_snapshot_without_touching_buffer(self, fake_clock, fake_ticker):
        ticks = []
        s = TypingSession(
            "hello world", on_tick=ticks.append,
            clock=ActiveClock(fake_clock), ticker=fake_ticker,
        )
        s.update_typed("hello")
        fake_clock.advance(60000)
        fake_ticker.fire()
        assert s.typed == "hello"
        assert s.state is SessionState.RUNNING
        assert ticks == [StatsSnapshot(wpm=1, accuracy=100, errors=0, time_elapsed=60000)]
        assert s.snapshot == ticks[0]
        assert s.history == [(60.0, 1)]

    def test_backspace(self, make_session):
        s = make_session("abc")
        s.update_typed("aX")
        assert s.backspace() is True
        assert s.typed == "a"
        assert s.live_snapshot().errors == 0

    def test_backspace_on_empty(self, make_session):
        s = make_session()
        assert s.backspace() is False

    def test_progress(self, make_session):
        s = make_session("abcd")
        s.update_typed("ab")
        assert s.progress == 50

    def test_history_is_bounded(self, fake_clock, fake_ticker):
        s = TypingSession("abc", clock=ActiveClock(fake_clock), ticker=fake_ticker, history_limit=3)
        s.type_char("a")
        for _ in range(10):
            fake_clock.advance(100)
            fake_ticker.fire()
        assert len(s.history) == 3


class TestCompletion:
    def test_completes_on_full_length(self, make_session, fake_clock, fake_ticker, results):
        s = make_session("hello world")
        s.update_typed("h")
        fake_clock.advance(60000)
        s.update_typed("hello world")
        assert s.state is SessionState.COMPLETED
        assert not fake_ticker.active
        assert results == [StatsSnapshot(wpm=2, accuracy=100, errors=0, time_elapsed=60000)]
        assert s.result == results[0]

    def test_completes_with_errors(self, make_session, fake_clock, results):
        s = make_session("abcde")
        s.update_typed("a")
        fake_clock.advance(1000)
        s.update_typed("abXde")
        assert results[0].errors == 1
        assert results[0].accuracy == 80

    def test_final_time_is_measured_not_last_tick(self, make_session, fake_clock, fake_ticker, results):
        s = make_session("abc")
        s.type_char("a")
        fake_clock.advance(100)
        fake_ticker.fire()
        fake_clock.advance(1234)
        s.update_typed("abc")
        assert results[0].time_elapsed == 1334

    def test_single_char_reference(self, make_session, results):
        s = make_session("a")
        s.type_char("a")
        assert s.state is SessionState.COMPLETED
        assert results[0].wpm == 0
        assert results[0].time_elapsed == 0

    def test_emits_once(self, make_session, results):
        s = make_session("ab")
        s.update_typed("ab")
        s.update_typed("ab")
        s.type_char("c")
        assert len(results) == 1

    def test_mutation_after_completion_is_noop(self, make_session, fake_clock, results):
        s = make_session("ab")
        s.update_typed("a")
        fake_clock.advance(3000)
        s.update_typed("ab")
        before = (s.state, s.typed, s.result, s.snapshot)
        fake_clock.advance(5000)
        assert s.update_typed("zz") is False
        assert s.type_char("x") is False
        assert s.backspace() is False
        assert s.pause() is False
        assert s.resume() is False
        assert (s.state, s.typed, s.result, s.snapshot) == before
        assert s.elapsed_ms == 3000

    def test_shorter_edit_does_not_complete(self, make_session):
        s = make_session("abc")
        s.update_typed("ab")
        assert s.state is SessionState.RUNNING

    def test_callback_error_is_contained(self, fake_clock, fake_ticker):
        def boom(_):
            raise RuntimeError("display went away")

        s = TypingSession("ab", on_complete=boom, clock=ActiveClock(fake_clock), ticker=fake_ticker)
        s.update_typed("ab")
        assert s.state is SessionState.COMPLETED
        assert s.result is not None


class TestPause:
    def test_pause_resume_accumulates(self, make_session, fake_clock, fake_ticker, results):
        s = make_session("abcdefghij")
        s.type_char("a")
        fake_clock.advance(3000)
        assert s.pause() is True
        assert s.state is SessionState.PAUSED
        assert not fake_ticker.active
        fake_clock.advance(10000)
        assert s.elapsed_ms == 3000
        assert s.resume() is True
        assert fake_ticker.active
        fake_clock.advance(2000)
        s.update_typed("abcdefghij")
        assert results[0].time_elapsed == 5000

    def test_resume_does_not_jump(self, make_session, fake_clock):
        s = make_session()
        s.type_char("h")
        fake_clock.advance(1000)
        s.pause()
        fake_clock.advance(50000)
        s.resume()
        assert s.elapsed_ms == 1000

    def test_tick_while_paused_is_ignored(self, make_session, fake_clock, fake_ticker):
        s = make_session()
        s.type_char("h")
        callback = fake_ticker.callback
        s.pause()
        snap = s.snapshot
        fake_clock.advance(1000)
        callback()
        assert s.snapshot == snap
        assert s.history == []

    def test_typing_while_paused_resumes(self, make_session, fake_clock, fake_ticker):
        s = make_session()
        s.type_char("h")
        s.pause()
        fake_clock.advance(9999)
        assert s.type_char("e") is True
        assert s.state is SessionState.RUNNING
        assert fake_ticker.active
        assert s.elapsed_ms == 0

    def test_toggle_pause(self, make_session):
        s = make_session()
        s.type_char("h")
        s.toggle_pause()
        assert s.state is SessionState.PAUSED
        s.toggle_pause()
        assert s.state is SessionState.RUNNING

    def test_pause_from_idle_is_noop(self, make_session):
        s = make_session()
        assert s.pause() is False
        assert s.resume() is False
        assert s.state is SessionState.IDLE


class TestReset:
    @pytest.mark.parametrize("final_text", ["hel", "hello world"])
    def test_reset_from_any_state(self, make_session, fake_clock, fake_ticker, final_text):
        s = make_session("hello world")
        s.update_typed(final_text)
        fake_clock.advance(1000)
        s.reset()
        assert s.state is SessionState.IDLE
        assert s.typed == ""
        assert s.elapsed_ms == 0
        assert s.result is None
        assert s.snapshot is None
        assert s.history == []
        assert not fake_ticker.active

    def test_reset_from_paused(self, make_session, fake_ticker):
        s = make_session()
        s.type_char("h")
        s.pause()
        s.reset()
        assert s.state is SessionState.IDLE
        assert not fake_ticker.active

    def test_stale_tick_after_reset(self, make_session, fake_clock, fake_ticker):
        s = make_session()
        s.type_char("h")
        callback = fake_ticker.callback
        s.reset()
        callback()
        assert s.snapshot is None
        assert s.history == []

    def test_can_type_again_after_reset(self, make_session, fake_clock, results):
        s = make_session("ab")
        s.update_typed("ab")
        s.reset()
        s.type_char("a")
        fake_clock.advance(500)
        s.type_char("b")
        assert len(results) == 2
        assert results[1].time_elapsed == 500


class TestClose:
    def test_close_releases_ticker(self, make_session, fake_clock, fake_ticker):
        s = make_session()
        s.type_char("h")
        fake_clock.advance(700)
        s.close()
        assert not fake_ticker.active
        assert s.state is SessionState.PAUSED
        fake_clock.advance(5000)
        assert s.elapsed_ms == 700

    def test_close_when_idle(self, make_session, fake_ticker):
        s = make_session()
        s.close()
        assert s.state is SessionState.IDLE
        assert not fake_ticker.active


class TestDefaultCollaborators:
    def test_default_ticker_with_qt_app(self, qtbot):
        from core.chrono import IntervalTicker

        s = TypingSession("ab")
        assert isinstance(s._ticker, IntervalTicker)
        s.type_char("a")
        assert s._ticker.active
        s.reset()
        assert not s._ticker.active
