from __future__ import annotations

import pytest

from qtri.core.keybindings import (
    KEYBINDING_ACTIONS,
    SCOPE_DOCUMENT,
    SCOPE_GENERAL,
    BrowserCommand,
    build_key_table,
    canonicalize_chord_text,
    default_keybindings,
    find_conflicts,
    get_action_sequence,
    normalize_keybindings,
    normalize_sequence,
)
from qtri.ui.help_texts import key_binding_rows, key_bindings_markdown


class TestCanonicalize:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("ctrl+t", "Ctrl+T"),
            ("ctrl+shift+n", "Ctrl+Shift+N"),
            ("alt+Left", "Alt+Left"),
            ("/", "/"),
            ("Return", "Return"),
            ("Backspace", "Backspace"),
        ],
    )
    def test_chords(self, text: str, expected: str) -> None:
        assert canonicalize_chord_text(text) == expected

    def test_sequence_text_is_split_and_deduplicated(self) -> None:
        assert normalize_sequence("Ctrl+T, ctrl+t, Ctrl+N") == ["Ctrl+T", "Ctrl+N"]
        assert normalize_sequence(["Return", "Enter", 42]) == ["Return", "Enter"]
        assert normalize_sequence(None) == []


class TestNormalizeKeybindings:
    def test_defaults_cover_every_action(self) -> None:
        defaults = default_keybindings()
        for action in KEYBINDING_ACTIONS:
            assert defaults[action.scope][action.action_id] == list(action.default_sequence)

    def test_override_one_action(self) -> None:
        merged = normalize_keybindings({"general": {"action.new_tab": "ctrl+n"}})
        assert merged[SCOPE_GENERAL]["action.new_tab"] == ["Ctrl+N"]
        assert merged[SCOPE_GENERAL]["action.close_tab"] == ["Ctrl+W"]

    def test_empty_list_unbinds(self) -> None:
        merged = normalize_keybindings({"document": {"action.back": []}})
        assert merged[SCOPE_DOCUMENT]["action.back"] == []

    def test_unknown_scopes_and_actions_are_ignored(self) -> None:
        merged = normalize_keybindings({"editor": {"action.quit": "F1"}, "general": {"action.fly": "F2"}})
        assert merged == default_keybindings()

    def test_non_mapping_gives_defaults(self) -> None:
        assert normalize_keybindings(["Ctrl+T"]) == default_keybindings()


class TestLookups:
    def test_get_action_sequence_falls_back_to_default(self) -> None:
        assert get_action_sequence({}, scope=SCOPE_GENERAL, action_id="action.quit") == ["Ctrl+Q"]
        assert get_action_sequence(None, scope=SCOPE_DOCUMENT, action_id="action.nothing") == []

    def test_conflicts(self) -> None:
        merged = normalize_keybindings({"general": {"action.search": "Ctrl+T"}})
        conflicts = find_conflicts(merged)
        assert len(conflicts) == 1
        assert conflicts[0].scope == SCOPE_GENERAL
        assert conflicts[0].sequence_text == "Ctrl+T"
        assert set(conflicts[0].action_ids) == {"action.new_tab", "action.search"}

    def test_default_table_has_no_conflicts(self) -> None:
        assert find_conflicts(default_keybindings()) == []


class TestBuildKeyTable:
    def test_document_table(self) -> None:
        calls: list[str] = []
        table = build_key_table(
            default_keybindings(),
            scope=SCOPE_DOCUMENT,
            handlers={
                BrowserCommand.FOLLOW_LINK: lambda: calls.append("follow"),
                BrowserCommand.FOLLOW_LINK_NEW_TAB: lambda: calls.append("new-tab"),
                BrowserCommand.BACK: lambda: calls.append("back"),
            },
        )
        assert set(table) == {"Return", "Enter", "Ctrl+Return", "Ctrl+Enter", "Backspace"}
        table["Enter"]()
        table["Ctrl+Return"]()
        table["Backspace"]()
        assert calls == ["follow", "new-tab", "back"]

    def test_actions_without_handler_are_skipped(self) -> None:
        table = build_key_table(
            default_keybindings(),
            scope=SCOPE_DOCUMENT,
            handlers={BrowserCommand.BACK: lambda: None},
        )
        assert list(table) == ["Backspace"]

    def test_first_action_wins_shared_chord(self) -> None:
        keybindings = normalize_keybindings({"document": {"action.back": "Return"}})
        table = build_key_table(
            keybindings,
            scope=SCOPE_DOCUMENT,
            handlers={
                BrowserCommand.FOLLOW_LINK: lambda: "follow",
                BrowserCommand.BACK: lambda: "back",
            },
        )
        assert table["Return"]() == "follow"


class TestKeyBindingHelp:
    def test_rows_follow_the_resolved_table(self) -> None:
        keybindings = normalize_keybindings({"general": {"action.new_tab": "Ctrl+N"}})
        rows = key_binding_rows(keybindings)
        assert ("Ctrl+N", "New Tab") in rows
        assert ("Backspace", "Back (in the page)") in rows

    def test_unbound_actions_are_left_out(self) -> None:
        keybindings = normalize_keybindings({"general": {"action.quit": []}})
        assert all(name != "Quit" for _keys, name in key_binding_rows(keybindings))

    def test_markdown_table(self) -> None:
        text = key_bindings_markdown(default_keybindings())
        assert text.startswith("# Key bindings\n")
        assert "| Ctrl+T | New Tab |" in text
        assert "| Left mouse button |" in text
