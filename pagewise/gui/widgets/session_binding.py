from __future__ import annotations

from typing import Callable, Optional

from qtpy import QtWidgets

from pagewise.core.reading.session import ReadingSession
from pagewise.gui.widgets.page_top_bar import PageTopBarWidget
from pagewise.gui.widgets.reader_input_filter import ReaderInputFilter


def bind_session(
    session: ReadingSession,
    top_bar: PageTopBarWidget,
    surface: Optional[QtWidgets.QWidget] = None,
    selection_active: Optional[Callable[[], bool]] = None,
) -> ReaderInputFilter:
    """
    Connect the top bar and the rendering surface to a reading session.

    The page field drives `request_page` and suppresses arrow-key navigation
    while it has focus; surface input and resizes go through the returned
    event filter, which is installed on `surface` when one is given.
    """
    top_bar.bind(session.top_bar)
    top_bar.page_input_focus_changed.connect(session.navigation.set_page_input_focused)
    top_bar.goto_requested.connect(session.request_page)

    input_filter = ReaderInputFilter(
        session.navigation,
        on_resize=session.notify_resize,
        selection_active=selection_active,
        parent=surface,
    )
    if surface is not None:
        surface.installEventFilter(input_filter)
        session.notify_resize(surface.width(), surface.height())
    return input_filter
