from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtCore import QObject

from qtri.ui.dialogs.help_dialog import HelpDialog
from qtri.ui.help_texts import OVERVIEW, TIPS, key_bindings_markdown, rc_file_markdown

if TYPE_CHECKING:
    from qtri.ui.browser_window import BrowserWindow


class HelpController(QObject):
    def __init__(self, window: "BrowserWindow", parent=None):
        super().__init__(parent or window)
        self.win = window
        self._dialogs: list[HelpDialog] = []

    def show_overview(self) -> None:
        self._show("Help: Overview", OVERVIEW)

    def show_key_bindings(self) -> None:
        self._show("Help: Key Bindings", key_bindings_markdown(self.win.settings.keybindings))

    def show_tips(self) -> None:
        self._show("Help: Tips and Tricks", TIPS)

    def show_rc_file(self) -> None:
        self._show("Help: Settings File", rc_file_markdown(self.win.settings_path))

    def _show(self, title: str, text: str) -> None:
        # Modeless; several pages may stay open.
        dialog = HelpDialog(title=title, markdown_text=text, parent=self.win)
        dialog.finished.connect(lambda _result, dlg=dialog: self._forget(dlg))
        self._dialogs.append(dialog)
        dialog.show()
        dialog.raise_()
        dialog.activateWindow()

    def _forget(self, dialog: HelpDialog) -> None:
        if dialog in self._dialogs:
            self._dialogs.remove(dialog)
        dialog.deleteLater()
