import asyncio
import os

from qtpy import QtCore, QtGui, QtWidgets

from pagewise.core.reading.document import DocumentSession
from pagewise.core.reading.location_index import LocationIndex
from pagewise.core.reading.store import InMemoryKeyValueStore
from pagewise.core.reading.top_bar import TopBarViewModel
from pagewise.gui.widgets import PageTopBarWidget

os.environ.setdefault("QT_QPA_PLATFORM", "minimal")


_QAPP = None


def _ensure_qapp():
    global _QAPP
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    _QAPP = app
    return _QAPP


class _DummyDocument:
    async def generate_locations(self, per_page_budget):
        return [f"loc-{i}" for i in range(12)]

    def load_locations(self, locators):
        pass

    def page_of_location(self, locator):
        return None


def _ready_view_model():
    index = LocationIndex(InMemoryKeyValueStore())
    asyncio.run(index.ensure(DocumentSession("abc123", _DummyDocument())))
    view_model = TopBarViewModel(index)
    view_model.set_total(index.total_pages)
    return view_model


def test_top_bar_shows_unknown_total_and_disables_input():
    _ensure_qapp()
    widget = PageTopBarWidget()
    try:
        widget.set_page_state(1, 0)
        assert widget.total_label.text() == "…"
        assert not widget.page_input.isEnabled()

        widget.set_page_state(3, 12)
        assert widget.total_label.text() == "12"
        assert widget.page_input.text() == "3"
        assert widget.page_input.isEnabled()
    finally:
        widget.close()


def test_top_bar_follows_bound_view_model():
    _ensure_qapp()
    widget = PageTopBarWidget()
    view_model = _ready_view_model()
    try:
        widget.bind(view_model)
        assert widget.total_label.text() == "12"

        view_model.set_current(7)
        assert widget.page_input.text() == "7"

        other = _ready_view_model()
        widget.bind(other)
        view_model.set_current(9)
        assert widget.page_input.text() == "1"
    finally:
        widget.close()


def test_return_press_emits_clamped_goto():
    _ensure_qapp()
    widget = PageTopBarWidget()
    requested = []
    widget.goto_requested.connect(requested.append)
    try:
        widget.page_input.setText("42")
        widget.page_input.returnPressed.emit()
        widget.page_input.setText("0")
        widget.page_input.returnPressed.emit()
        widget.page_input.setText("")
        widget.page_input.returnPressed.emit()
        assert requested == [42, 1, 1]
    finally:
        widget.close()


def test_focus_changes_are_reported():
    _ensure_qapp()
    widget = PageTopBarWidget()
    focus = []
    widget.page_input_focus_changed.connect(focus.append)
    try:
        widget.eventFilter(widget.page_input, QtGui.QFocusEvent(QtCore.QEvent.FocusIn))
        widget.eventFilter(widget.page_input, QtGui.QFocusEvent(QtCore.QEvent.FocusOut))
        assert focus == [True, False]
    finally:
        widget.close()


def test_toc_and_settings_buttons_emit():
    _ensure_qapp()
    widget = PageTopBarWidget()
    seen = []
    widget.toc_requested.connect(lambda: seen.append("toc"))
    widget.settings_requested.connect(lambda: seen.append("settings"))
    try:
        widget.toc_button.click()
        widget.settings_button.click()
        assert seen == ["toc", "settings"]
    finally:
        widget.close()
