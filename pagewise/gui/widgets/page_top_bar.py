from __future__ import annotations

from typing import Optional

from qtpy import QtCore, QtGui, QtWidgets

from pagewise.core.reading.top_bar import TopBarViewModel


class PageTopBarWidget(QtWidgets.QWidget):
    """Page-number field, total label and TOC/settings buttons above the reader."""

    goto_requested = QtCore.Signal(int)
    toc_requested = QtCore.Signal()
    settings_requested = QtCore.Signal()
    page_input_focus_changed = QtCore.Signal(bool)

    def __init__(self, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        self._view_model: Optional[TopBarViewModel] = None
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(8, 4, 8, 4)
        layout.setSpacing(6)

        layout.addStretch(1)

        self.page_input = QtWidgets.QLineEdit(self)
        self.page_input.setValidator(QtGui.QIntValidator(1, 999999, self))
        self.page_input.setText("1")
        self.page_input.setFixedWidth(64)
        self.page_input.setAlignment(QtCore.Qt.AlignRight)
        self.page_input.returnPressed.connect(self._commit_goto)
        self.page_input.installEventFilter(self)
        layout.addWidget(self.page_input)

        separator = QtWidgets.QLabel(" / ", self)
        separator.setStyleSheet("color: #5f6368;")
        layout.addWidget(separator)

        self.total_label = QtWidgets.QLabel("…", self)
        self.total_label.setMinimumWidth(40)
        self.total_label.setStyleSheet("color: #5f6368; font-size: 14px;")
        layout.addWidget(self.total_label)

        layout.addStretch(1)

        self.toc_button = QtWidgets.QToolButton(self)
        self.toc_button.setText("TOC")
        self.toc_button.clicked.connect(self.toc_requested.emit)
        layout.addWidget(self.toc_button)

        self.settings_button = QtWidgets.QToolButton(self)
        self.settings_button.setText("Settings")
        self.settings_button.clicked.connect(self.settings_requested.emit)
        layout.addWidget(self.settings_button)

    def bind(self, view_model: TopBarViewModel) -> None:
        if self._view_model is not None:
            self._view_model.unsubscribe(self.set_page_state)
        self._view_model = view_model
        view_model.subscribe(self.set_page_state)
        self.set_page_state(view_model.current_page, view_model.total_pages)

    def set_page_state(self, current: int, total: int) -> None:
        # Typing in progress must not be overwritten by relocations.
        if not self.page_input.hasFocus():
            self.page_input.setText(str(current))
        self.total_label.setText(str(total) if total > 0 else "…")
        self.page_input.setEnabled(total > 0)
        self.page_input.setToolTip("" if total > 0 else "Page count is not available yet")

    def _commit_goto(self) -> None:
        text = self.page_input.text().strip() or "1"
        try:
            page = int(text)
        except ValueError:
            return
        self.goto_requested.emit(max(1, page))
        self.page_input.clearFocus()

    def eventFilter(self, obj, event):  # noqa: N802 - Qt override
        if obj is self.page_input:
            if event.type() == QtCore.QEvent.FocusIn:
                self.page_input_focus_changed.emit(True)
            elif event.type() == QtCore.QEvent.FocusOut:
                self.page_input_focus_changed.emit(False)
        return super().eventFilter(obj, event)
