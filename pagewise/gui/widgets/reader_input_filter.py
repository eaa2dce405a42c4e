from __future__ import annotations

from typing import Callable, Optional, Tuple

from qtpy import QtCore

from pagewise.core.reading.navigation import KEY_NEXT, KEY_PREV, NavigationController

_KEY_NAMES = {
    QtCore.Qt.Key_Left: KEY_PREV,
    QtCore.Qt.Key_Right: KEY_NEXT,
}


def _event_xy(event) -> Tuple[float, float]:
    if hasattr(event, "position"):
        pos = event.position()
    else:
        pos = event.localPos()
    return float(pos.x()), float(pos.y())


def _first_touch_xy(event) -> Optional[Tuple[float, float]]:
    points = event.points() if hasattr(event, "points") else event.touchPoints()
    if not points:
        return None
    point = points[0]
    pos = point.position() if hasattr(point, "position") else point.pos()
    return float(pos.x()), float(pos.y())


class ReaderInputFilter(QtCore.QObject):
    """
    Event filter for the rendering surface: forwards key, click, touch and
    resize events to the navigation controller and resize callback.

    Events are consumed only when they produced a navigation intent.
    """

    def __init__(
        self,
        navigation: NavigationController,
        on_resize: Optional[Callable[[int, int], None]] = None,
        selection_active: Optional[Callable[[], bool]] = None,
        parent: Optional[QtCore.QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.navigation = navigation
        self._on_resize = on_resize
        self._selection_active = selection_active or (lambda: False)

    def eventFilter(self, obj, event):  # noqa: N802 - Qt override
        etype = event.type()
        if etype == QtCore.QEvent.KeyPress:
            key = _KEY_NAMES.get(event.key())
            if key is not None and self.navigation.on_key(key) is not None:
                return True
        elif etype == QtCore.QEvent.MouseButtonRelease:
            if event.button() == QtCore.Qt.LeftButton:
                x, y = _event_xy(event)
                if self.navigation.on_click(x, y) is not None:
                    return True
        elif etype == QtCore.QEvent.TouchBegin:
            xy = _first_touch_xy(event)
            if xy is not None:
                self.navigation.on_touch_start(xy[0], xy[1], event.timestamp())
        elif etype == QtCore.QEvent.TouchEnd:
            xy = _first_touch_xy(event)
            if xy is not None:
                intent = self.navigation.on_touch_end(
                    xy[0],
                    xy[1],
                    event.timestamp(),
                    selection_active=bool(self._selection_active()),
                )
                if intent is not None:
                    return True
        elif etype == QtCore.QEvent.Resize:
            size = event.size()
            if self._on_resize is not None:
                self._on_resize(int(size.width()), int(size.height()))
        return super().eventFilter(obj, event)
