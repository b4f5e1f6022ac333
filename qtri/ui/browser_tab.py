"""One browsing context: an address box, a Go button and the documentation page."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QHBoxLayout, QLineEdit, QPushButton, QVBoxLayout, QWidget

from qtri.core.keybindings import SCOPE_DOCUMENT, BrowserCommand, build_key_table
from qtri.services.documentation_cache import DocumentationCache
from qtri.services.tab_session import TabSession
from qtri.ui.text_formats import TextFormats
from qtri.ui.widgets.doc_text_view import DocTextView

if TYPE_CHECKING:
    from qtri.ui.browser_window import BrowserWindow

NEW_TAB_TITLE = "<new>"


class BrowserTab(QWidget):
    def __init__(
        self,
        browser: "BrowserWindow",
        cache: DocumentationCache,
        formats: TextFormats,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("QtriBrowserTab")
        self.browser = browser

        self.address = QLineEdit(self)
        self.address.setObjectName("QtriAddressBox")
        self.address.setPlaceholderText("Topic, e.g. Array#flatten")
        formats.apply_base_style(self.address)
        self.go_button = QPushButton("Go", self)

        self.view = DocTextView(formats, self)

        address_row = QHBoxLayout()
        address_row.setContentsMargins(0, 0, 0, 0)
        address_row.setSpacing(4)
        address_row.addWidget(self.address, 1)
        address_row.addWidget(self.go_button)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(4)
        layout.addLayout(address_row)
        layout.addWidget(self.view, 1)

        self.session = TabSession(
            cache,
            self.view,
            schedule=self._schedule,
            on_topic=self._on_topic,
            on_status=self._on_status,
            on_loaded=self._on_loaded,
        )

        self.address.returnPressed.connect(self.go)
        self.go_button.clicked.connect(lambda _checked=False: self.go())
        self.view.wordClicked.connect(self._on_word_clicked)
        self.view.backRequested.connect(self.back)
        self.view.set_key_handlers(
            build_key_table(
                browser.settings.keybindings,
                scope=SCOPE_DOCUMENT,
                handlers={
                    BrowserCommand.FOLLOW_LINK: lambda: self.follow_caret_word(new_tab=False),
                    BrowserCommand.FOLLOW_LINK_NEW_TAB: lambda: self.follow_caret_word(new_tab=True),
                    BrowserCommand.BACK: self.back,
                },
            )
        )

    @property
    def topic(self) -> str | None:
        return self.session.topic

    @property
    def is_new(self) -> bool:
        return self.session.is_new

    def title(self) -> str:
        return self.session.topic or NEW_TAB_TITLE

    def _schedule(self, callback: Callable[[], None]) -> None:
        # Runs from the event loop once the loading status has been painted.
        QTimer.singleShot(0, self, callback)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def go(self, topic: str | None = None) -> bool:
        if topic is None:
            topic = self.address.text()
        return self.session.go(topic)

    def back(self) -> bool:
        return self.session.back()

    def forward(self) -> bool:
        return self.session.forward()

    def follow_offset(self, offset: int, *, new_tab: bool = False) -> bool:
        topic = self.session.topic_at(offset)
        if not topic:
            return False
        self.browser.go(topic, new_tab=new_tab)
        return True

    def follow_caret_word(self, *, new_tab: bool = False) -> bool:
        return self.follow_offset(self.view.cursor_offset(), new_tab=new_tab)

    def _on_word_clicked(self, offset: int, new_tab: bool) -> None:
        self.follow_offset(offset, new_tab=new_tab)

    def focus_address(self) -> None:
        self.address.selectAll()
        self.address.setFocus()

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def highlight(self, word: str) -> None:
        self.session.highlight(word)

    def search_next(self, word: str) -> bool:
        self.view.setFocus()
        return self.session.search_next(word)

    def search_previous(self, word: str) -> bool:
        self.view.setFocus()
        return self.session.search_previous(word)

    # ------------------------------------------------------------------
    # Session callbacks
    # ------------------------------------------------------------------

    def _on_topic(self, topic: str) -> None:
        self.address.setText(topic)
        self.focus_address()
        self.browser.tabs.refresh_title(self)

    def _on_status(self, status: str) -> None:
        self.browser.show_tab_status(self, status)

    def _on_loaded(self) -> None:
        self.view.setFocus()
        self.browser.tabs.refresh_title(self)
