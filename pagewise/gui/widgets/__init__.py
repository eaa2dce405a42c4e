from pagewise.gui.widgets.page_top_bar import PageTopBarWidget
from pagewise.gui.widgets.reader_input_filter import ReaderInputFilter
from pagewise.gui.widgets.session_binding import bind_session

__all__ = [
    "PageTopBarWidget",
    "ReaderInputFilter",
    "bind_session",
]
