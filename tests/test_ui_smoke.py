from services.catalog import PracticeText, TextCatalog
from services.text_admin import TextAdmin
from services.typing_engine import StatsSnapshot
from ui.admin_dialog import AdminDialog
from ui.session_summary import SessionSummary
from ui.text_selector import TextSelector
from utils.db_helper import TextStore


def test_text_selector_filters(qtbot):
    catalog = TextCatalog([
        PracticeText("a", "Alpha", "one", "Stories", "easy", "en"),
        PracticeText("b", "Beta", "two", "Quotes", "hard", "vi"),
    ])
    w = TextSelector(catalog)
    qtbot.addWidget(w)
    assert w.lstTexts.count() == 2
    w.txtSearch.setText("beta")
    assert w.lstTexts.count() == 1
    w.clear_filters()
    assert w.lstTexts.count() == 2
    w.cmbLanguage.setCurrentIndex(w.cmbLanguage.findData("vi"))
    assert w.lstTexts.count() == 1


def test_text_selector_emits_selection(qtbot):
    text = PracticeText("a", "Alpha", "one", "Stories")
    w = TextSelector(TextCatalog([text]))
    qtbot.addWidget(w)
    with qtbot.waitSignal(w.textSelected, timeout=1000) as blocker:
        w.lstTexts.itemActivated.emit(w.lstTexts.item(0))
    assert blocker.args[0] == text


def test_session_summary_builds(qtbot):
    dlg = SessionSummary(StatsSnapshot(42, 97, 1, 65000), [(0.1, 0), (1.0, 30), (2.0, 40)])
    qtbot.addWidget(dlg)
    assert dlg.windowTitle() == "Session Summary"


def test_admin_dialog_add(qtbot, tmp_path):
    admin = TextAdmin(TextStore(tmp_path / "t.db"))
    dlg = AdminDialog(admin)
    qtbot.addWidget(dlg)
    dlg.edTitle.setText("New one")
    dlg.edText.setPlainText("some practice text")
    dlg.cmbCategory.setEditText("Misc")
    dlg._on_save()
    assert dlg.changed
    assert dlg.table.rowCount() == 1
    assert admin.store.get_text("new-one")["category"] == "Misc"
