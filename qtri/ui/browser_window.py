"""Top-level window: menus, tab widget, search box and status bar."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtWidgets import QMainWindow, QVBoxLayout, QWidget

from qtri.services.documentation_cache import DocumentationCache
from qtri.settings_models import ResolvedSettings
from qtri.ui.browser_tab import BrowserTab
from qtri.ui.controllers import ActionRegistry, HelpController, SearchController, TabsController
from qtri.ui.text_formats import TextFormats

log = logging.getLogger(__name__)

APP_TITLE = "qtri"


class BrowserWindow(QMainWindow):
    def __init__(
        self,
        settings: ResolvedSettings,
        cache: DocumentationCache,
        *,
        settings_path: Path | str,
        settings_error: str | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("QtriBrowserWindow")
        self.settings = settings
        self.settings_path = Path(settings_path)
        self.cache = cache
        self.formats = TextFormats(settings)
        self.resize(820, 640)

        self.tabs = TabsController(self)
        self.search = SearchController(self)
        self.help = HelpController(self)

        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        layout.addWidget(self.tabs.widget, 1)
        layout.addWidget(self.search.entry)
        self.setCentralWidget(central)

        self.menu_actions = ActionRegistry.create_actions(self)
        self.tabs.new_tab()
        self.update_title()

        if settings_error:
            self.set_status(settings_error)

    # ------------------------------------------------------------------
    # Tabs
    # ------------------------------------------------------------------

    def current_tab(self) -> BrowserTab | None:
        return self.tabs.current()

    def go(self, topic: str | None = None, *, new_tab: bool = False) -> bool:
        """
        Show ``topic`` in the current tab, or in a new one.

        A fresh tab is reused even when ``new_tab`` is requested.
        """
        tab = self.current_tab()
        if tab is None or (new_tab and not tab.is_new):
            tab = self.tabs.new_tab()
        return tab.go(topic)

    def back(self) -> None:
        tab = self.current_tab()
        if tab is not None:
            tab.back()

    def forward(self) -> None:
        tab = self.current_tab()
        if tab is not None:
            tab.forward()

    def focus_address(self) -> None:
        tab = self.current_tab()
        if tab is not None:
            tab.focus_address()

    # ------------------------------------------------------------------
    # Status and title
    # ------------------------------------------------------------------

    def show_tab_status(self, tab: BrowserTab, status: str) -> None:
        if tab is self.current_tab():
            self.set_status(status)

    def set_status(self, text: str) -> None:
        message = str(text or "")
        if message:
            self.statusBar().showMessage(message)
        else:
            self.statusBar().clearMessage()

    def update_title(self) -> None:
        tab = self.current_tab()
        if tab is None or tab.is_new:
            self.setWindowTitle(APP_TITLE)
        else:
            self.setWindowTitle(f"{tab.title()} - {APP_TITLE}")
