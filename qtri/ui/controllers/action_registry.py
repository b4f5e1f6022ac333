"""Central QAction/QMenu construction for the browser window."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from PySide6.QtGui import QAction

from qtri.core.keybindings import (
    SCOPE_GENERAL,
    BrowserCommand,
    action_definition,
    get_action_sequence,
    qkeysequences_from_sequence,
)

if TYPE_CHECKING:
    from qtri.ui.browser_window import BrowserWindow

# Menu title -> commands in display order; None is a separator.
MENU_LAYOUT: tuple[tuple[str, tuple[BrowserCommand | None, ...]], ...] = (
    ("&File", (BrowserCommand.NEW_TAB, BrowserCommand.CLOSE_TAB, None, BrowserCommand.QUIT)),
    ("&Go", (BrowserCommand.BACK, BrowserCommand.FORWARD, None, BrowserCommand.FOCUS_ADDRESS)),
    ("&Search", (BrowserCommand.SEARCH, BrowserCommand.SEARCH_NEXT, BrowserCommand.SEARCH_PREVIOUS)),
)


class ActionRegistry:
    @staticmethod
    def window_handlers(window: "BrowserWindow") -> dict[BrowserCommand, Callable[[], Any]]:
        return {
            BrowserCommand.NEW_TAB: window.tabs.new_tab,
            BrowserCommand.CLOSE_TAB: window.tabs.close_current,
            BrowserCommand.QUIT: window.close,
            BrowserCommand.FOCUS_ADDRESS: window.focus_address,
            BrowserCommand.BACK: window.back,
            BrowserCommand.FORWARD: window.forward,
            BrowserCommand.SEARCH: window.search.start,
            BrowserCommand.SEARCH_NEXT: window.search.search_next,
            BrowserCommand.SEARCH_PREVIOUS: window.search.search_previous,
        }

    @staticmethod
    def _make_action(
        window: "BrowserWindow",
        command: BrowserCommand,
        handler: Callable[[], Any],
    ) -> QAction:
        spec = action_definition(SCOPE_GENERAL, command.value)
        action = QAction(spec.action_name if spec is not None else command.name.title(), window)
        action.triggered.connect(lambda _checked=False, run=handler: run())
        sequences = qkeysequences_from_sequence(
            get_action_sequence(window.settings.keybindings, scope=SCOPE_GENERAL, action_id=command.value)
        )
        if sequences:
            action.setShortcuts(sequences)
        return action

    @staticmethod
    def create_actions(window: "BrowserWindow") -> dict[BrowserCommand, QAction]:
        handlers = ActionRegistry.window_handlers(window)
        actions: dict[BrowserCommand, QAction] = {}
        menubar = window.menuBar()

        for title, commands in MENU_LAYOUT:
            menu = menubar.addMenu(title)
            for command in commands:
                if command is None:
                    menu.addSeparator()
                    continue
                action = ActionRegistry._make_action(window, command, handlers[command])
                menu.addAction(action)
                actions[command] = action

        help_menu = menubar.addMenu("&Help")
        for label, callback in (
            ("Overview", window.help.show_overview),
            ("Key Bindings", window.help.show_key_bindings),
            ("Tips and Tricks", window.help.show_tips),
            ("About the Settings File", window.help.show_rc_file),
        ):
            act = QAction(label, window)
            act.triggered.connect(lambda _checked=False, run=callback: run())
            help_menu.addAction(act)

        return actions
