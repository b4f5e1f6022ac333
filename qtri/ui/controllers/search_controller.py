"""Incremental search box shown at the bottom of the browser window."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtCore import QEvent, QObject, Qt
from PySide6.QtWidgets import QLineEdit

if TYPE_CHECKING:
    from qtri.ui.browser_window import BrowserWindow

SEARCH_PROMPT = "Type the string to search"


class SearchController(QObject):
    def __init__(self, window: "BrowserWindow", parent=None):
        super().__init__(parent or window)
        self.win = window
        self.word = ""

        self.entry = QLineEdit(window)
        self.entry.setObjectName("QtriSearchBox")
        self.entry.setPlaceholderText("Search")
        self.entry.setClearButtonEnabled(True)
        self.entry.hide()
        window.formats.apply_base_style(self.entry)
        self.entry.installEventFilter(self)
        self.entry.textEdited.connect(self._on_text_edited)
        self.entry.returnPressed.connect(self._on_return_pressed)

    def start(self) -> None:
        """Show the search box and give it the keyboard."""
        tab = self.win.current_tab()
        selected = tab.view.selected_text().strip() if tab is not None else ""
        if selected and "\n" not in selected:
            self.entry.setText(selected)
            tab.highlight(selected)
        else:
            self.entry.setText(self.word)
        self.entry.selectAll()
        self.entry.show()
        self.entry.setFocus()
        self.win.set_status(SEARCH_PROMPT)

    def finish(self) -> None:
        if not self.entry.isVisible():
            return
        self.entry.hide()
        tab = self.win.current_tab()
        if tab is not None:
            tab.view.setFocus()

    def search_next(self) -> None:
        tab = self.win.current_tab()
        if not self.word:
            self.start()
            return
        if tab is not None:
            tab.search_next(self.word)

    def search_previous(self) -> None:
        tab = self.win.current_tab()
        if not self.word:
            self.start()
            return
        if tab is not None:
            tab.search_previous(self.word)

    def _on_text_edited(self, text: str) -> None:
        tab = self.win.current_tab()
        if tab is not None:
            tab.highlight(text)

    def _on_return_pressed(self) -> None:
        self.word = self.entry.text()
        self.finish()
        if self.word:
            self.search_next()
        else:
            tab = self.win.current_tab()
            if tab is not None:
                tab.highlight("")
            self.win.set_status("")

    def eventFilter(self, obj, event):
        if obj is self.entry:
            if event.type() == QEvent.Type.KeyPress and event.key() == Qt.Key.Key_Escape:
                self.finish()
                return True
            if event.type() == QEvent.Type.FocusOut:
                self.entry.hide()
        return super().eventFilter(obj, event)
