import os

from qtpy import QtCore, QtGui, QtWidgets

from pagewise.core.reading.bus import EventBus, InputIntent, IntentKind
from pagewise.core.reading.navigation import NavigationController
from pagewise.gui.widgets import ReaderInputFilter

os.environ.setdefault("QT_QPA_PLATFORM", "minimal")


_QAPP = None


def _ensure_qapp():
    global _QAPP
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    _QAPP = app
    return _QAPP


def _filter(width=1000, height=800, **kwargs):
    bus = EventBus()
    navigation = NavigationController(bus)
    navigation.set_surface_size(width, height)
    navigation.enable()
    return ReaderInputFilter(navigation, **kwargs), bus


def _kinds(bus):
    kinds = []
    while not bus.events.empty():
        event = bus.events.get_nowait()
        assert isinstance(event, InputIntent)
        kinds.append(event.intent.kind)
    return kinds


def _release(x, y, button=QtCore.Qt.LeftButton):
    return QtGui.QMouseEvent(
        QtCore.QEvent.MouseButtonRelease,
        QtCore.QPointF(x, y),
        button,
        button,
        QtCore.Qt.NoModifier,
    )


def test_arrow_keys_are_consumed_as_navigation():
    _ensure_qapp()
    input_filter, bus = _filter()
    target = QtWidgets.QWidget()
    try:
        right = QtGui.QKeyEvent(QtCore.QEvent.KeyPress, QtCore.Qt.Key_Right, QtCore.Qt.NoModifier)
        left = QtGui.QKeyEvent(QtCore.QEvent.KeyPress, QtCore.Qt.Key_Left, QtCore.Qt.NoModifier)
        other = QtGui.QKeyEvent(QtCore.QEvent.KeyPress, QtCore.Qt.Key_A, QtCore.Qt.NoModifier)

        assert input_filter.eventFilter(target, right) is True
        assert input_filter.eventFilter(target, left) is True
        assert input_filter.eventFilter(target, other) is False
        assert _kinds(bus) == [IntentKind.NEXT, IntentKind.PREV]
    finally:
        target.close()


def test_focused_page_input_lets_arrow_keys_through():
    _ensure_qapp()
    input_filter, bus = _filter()
    input_filter.navigation.set_page_input_focused(True)
    target = QtWidgets.QWidget()
    try:
        right = QtGui.QKeyEvent(QtCore.QEvent.KeyPress, QtCore.Qt.Key_Right, QtCore.Qt.NoModifier)
        assert input_filter.eventFilter(target, right) is False
        assert bus.pending_events == 0
    finally:
        target.close()


def test_left_click_in_edge_zones_navigates():
    _ensure_qapp()
    input_filter, bus = _filter(width=1000)
    target = QtWidgets.QWidget()
    try:
        assert input_filter.eventFilter(target, _release(990, 300)) is True
        assert input_filter.eventFilter(target, _release(20, 300)) is True
        assert input_filter.eventFilter(target, _release(500, 300)) is False
        assert input_filter.eventFilter(target, _release(990, 300, QtCore.Qt.RightButton)) is False
        assert _kinds(bus) == [IntentKind.NEXT, IntentKind.PREV]
    finally:
        target.close()


def test_resize_events_reach_callback():
    _ensure_qapp()
    sizes = []
    input_filter, _bus = _filter(on_resize=lambda w, h: sizes.append((w, h)))
    target = QtWidgets.QWidget()
    try:
        event = QtGui.QResizeEvent(QtCore.QSize(640, 480), QtCore.QSize(800, 600))
        assert input_filter.eventFilter(target, event) is False
        assert sizes == [(640, 480)]
    finally:
        target.close()
