"""Widget-level checks for ui.typing_area, run with pytest-qt."""

import pytest

from app.config import Settings
from app.state import SessionState
from services.catalog import PracticeText
from ui.typing_area import TypingArea

TEXT = PracticeText("t", "Tiny", "abc", "Tests")


@pytest.fixture
def area(qtbot):
    w = TypingArea(Settings(tick_ms=10))
    qtbot.addWidget(w)
    w.set_text(TEXT)
    return w


def test_starts_idle(area):
    assert area.session.state is SessionState.IDLE
    assert area.btnStart.isEnabled()
    assert not area.btnPause.isEnabled()


def test_typing_starts_session(area):
    area.input.setPlainText("a")
    assert area.session.state is SessionState.RUNNING
    assert area.btnPause.isEnabled()
    assert area.cardProgress.lblValue.text() == "33%"


def test_completion_emits_result(area, qtbot):
    area.input.setPlainText("a")
    with qtbot.waitSignal(area.completed, timeout=1000) as blocker:
        area.input.setPlainText("aXc")
    result = blocker.args[0]
    assert result.errors == 1
    assert result.accuracy == 67
    assert area.input.isReadOnly()


def test_input_capped_at_reference_length(area):
    area.input.setPlainText("abcdef")
    assert area.input.toPlainText() == "abc"
    assert area.session.state is SessionState.COMPLETED


def test_pause_button(area):
    area.input.setPlainText("a")
    area.toggle_pause()
    assert area.session.state is SessionState.PAUSED
    assert area.btnPause.text() == "Resume"
    area.toggle_pause()
    assert area.session.state is SessionState.RUNNING


def test_reset(area):
    area.input.setPlainText("abc")
    area.reset_session()
    assert area.session.state is SessionState.IDLE
    assert area.input.toPlainText() == ""
    assert not area.input.isReadOnly()


def test_switching_text_stops_old_ticker(area):
    area.input.setPlainText("a")
    old = area.session
    area.set_text(PracticeText("u", "Other", "hello", "Tests"))
    assert old.state is SessionState.PAUSED
    assert area.session is not old
    assert area.session.state is SessionState.IDLE


def test_hide_pauses_running_session(area):
    area.show()
    area.input.setPlainText("a")
    area.hide()
    assert area.session.state is SessionState.PAUSED


def test_render_marks_errors(area):
    area.input.setPlainText("aX")
    html = area.lblLine.text()
    assert "#16a34a" in html   # correct
    assert "#dc2626" in html   # incorrect
