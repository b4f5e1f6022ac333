from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtCore import QPoint, Qt
from PySide6.QtWidgets import QTabWidget, QToolButton

from qtri.ui.browser_tab import BrowserTab

if TYPE_CHECKING:
    from qtri.ui.browser_window import BrowserWindow


class TabsController:
    """Owns the tab widget of the browser window."""

    def __init__(self, window: "BrowserWindow"):
        self.win = window
        self.widget = QTabWidget(window)
        self.widget.setObjectName("QtriTabs")
        self.widget.setDocumentMode(True)
        self.widget.setMovable(True)

        self.new_tab_button = QToolButton(self.widget)
        self.new_tab_button.setText("+")
        self.new_tab_button.setToolTip("Open a new tab")
        self.new_tab_button.setAutoRaise(True)
        self.new_tab_button.clicked.connect(lambda _checked=False: self.new_tab())
        self.widget.setCornerWidget(self.new_tab_button, Qt.Corner.TopRightCorner)

        bar = self.widget.tabBar()
        bar.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        bar.customContextMenuRequested.connect(self._on_tab_bar_context)
        self.widget.currentChanged.connect(self._on_current_changed)

    def new_tab(self) -> BrowserTab:
        tab = BrowserTab(self.win, self.win.cache, self.win.formats, self.widget)
        index = self.widget.addTab(tab, tab.title())
        self.widget.setCurrentIndex(index)
        tab.focus_address()
        return tab

    def current(self) -> BrowserTab | None:
        widget = self.widget.currentWidget()
        return widget if isinstance(widget, BrowserTab) else None

    def close_tab(self, tab: BrowserTab | None) -> bool:
        if tab is None or self.widget.count() <= 1:
            return False
        index = self.widget.indexOf(tab)
        if index < 0:
            return False
        self.widget.removeTab(index)
        tab.deleteLater()
        return True

    def close_current(self) -> bool:
        return self.close_tab(self.current())

    def refresh_title(self, tab: BrowserTab) -> None:
        index = self.widget.indexOf(tab)
        if index < 0:
            return
        title = tab.title()
        self.widget.setTabText(index, title)
        self.widget.setTabToolTip(index, title)
        if tab is self.current():
            self.win.update_title()

    def _on_tab_bar_context(self, pos: QPoint) -> None:
        index = self.widget.tabBar().tabAt(pos)
        if index < 0:
            return
        widget = self.widget.widget(index)
        if isinstance(widget, BrowserTab):
            self.close_tab(widget)

    def _on_current_changed(self, _index: int) -> None:
        tab = self.current()
        if tab is None:
            return
        self.win.show_tab_status(tab, tab.session.status)
        self.win.update_title()
