"""Browser commands, their default key sequences, and normalization helpers."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from PySide6.QtCore import QKeyCombination, Qt
from PySide6.QtGui import QKeyEvent, QKeySequence

KeybindingScope = str

SCOPE_GENERAL: KeybindingScope = "general"
SCOPE_DOCUMENT: KeybindingScope = "document"


class BrowserCommand(str, enum.Enum):
    NEW_TAB = "action.new_tab"
    CLOSE_TAB = "action.close_tab"
    QUIT = "action.quit"
    FOCUS_ADDRESS = "action.focus_address"
    BACK = "action.back"
    FORWARD = "action.forward"
    SEARCH = "action.search"
    SEARCH_NEXT = "action.search_next"
    SEARCH_PREVIOUS = "action.search_previous"
    FOLLOW_LINK = "action.follow_link"
    FOLLOW_LINK_NEW_TAB = "action.follow_link_new_tab"


@dataclass(frozen=True, slots=True)
class KeybindingAction:
    scope: KeybindingScope
    command: BrowserCommand
    action_name: str
    default_sequence: tuple[str, ...]

    @property
    def action_id(self) -> str:
        return self.command.value


@dataclass(frozen=True, slots=True)
class KeybindingConflict:
    scope: KeybindingScope
    sequence_text: str
    action_ids: tuple[str, ...]


KEYBINDING_ACTIONS: tuple[KeybindingAction, ...] = (
    KeybindingAction(SCOPE_GENERAL, BrowserCommand.NEW_TAB, "New Tab", ("Ctrl+T",)),
    KeybindingAction(SCOPE_GENERAL, BrowserCommand.CLOSE_TAB, "Close Tab", ("Ctrl+W",)),
    KeybindingAction(SCOPE_GENERAL, BrowserCommand.QUIT, "Quit", ("Ctrl+Q",)),
    KeybindingAction(SCOPE_GENERAL, BrowserCommand.FOCUS_ADDRESS, "Go to Address Box", ("Ctrl+L",)),
    KeybindingAction(SCOPE_GENERAL, BrowserCommand.BACK, "Back", ("Alt+Left",)),
    KeybindingAction(SCOPE_GENERAL, BrowserCommand.FORWARD, "Forward", ("Alt+Right",)),
    KeybindingAction(SCOPE_GENERAL, BrowserCommand.SEARCH, "Search", ("/",)),
    KeybindingAction(SCOPE_GENERAL, BrowserCommand.SEARCH_NEXT, "Repeat Search", ("N",)),
    KeybindingAction(SCOPE_GENERAL, BrowserCommand.SEARCH_PREVIOUS, "Repeat Backwards", ("Shift+N",)),
    KeybindingAction(
        SCOPE_DOCUMENT,
        BrowserCommand.FOLLOW_LINK,
        "Go to Topic Under Caret",
        ("Return", "Enter"),
    ),
    KeybindingAction(
        SCOPE_DOCUMENT,
        BrowserCommand.FOLLOW_LINK_NEW_TAB,
        "Open Topic Under Caret in New Tab",
        ("Ctrl+Return", "Ctrl+Enter"),
    ),
    KeybindingAction(SCOPE_DOCUMENT, BrowserCommand.BACK, "Back", ("Backspace",)),
)

SCOPES: tuple[KeybindingScope, ...] = (SCOPE_GENERAL, SCOPE_DOCUMENT)

_ACTIONS: dict[tuple[KeybindingScope, str], KeybindingAction] = {
    (action.scope, action.action_id): action for action in KEYBINDING_ACTIONS
}

# Canonical modifier names in output order, with the spellings accepted for each.
_MODIFIER_SPELLINGS: tuple[tuple[str, frozenset[str]], ...] = (
    ("Ctrl", frozenset({"ctrl", "control"})),
    ("Alt", frozenset({"alt", "option"})),
    ("Shift", frozenset({"shift"})),
    ("Meta", frozenset({"meta", "cmd", "command", "super", "win"})),
)

_KEY_SPELLINGS: dict[str, str] = {
    "slash": "/",
    "return": "Return",
    "ret": "Return",
    "enter": "Enter",
    "kp_enter": "Enter",
    "backspace": "Backspace",
    "left": "Left",
    "right": "Right",
}

_MODIFIER_KEYS = frozenset(
    {
        Qt.Key.Key_Control,
        Qt.Key.Key_Shift,
        Qt.Key.Key_Alt,
        Qt.Key.Key_Meta,
        Qt.Key.Key_AltGr,
    }
)


def _scope_key(scope: KeybindingScope) -> str:
    return str(scope or "").strip().lower()


def default_keybindings() -> dict[str, dict[str, list[str]]]:
    return {
        scope: {
            action.action_id: list(action.default_sequence)
            for action in KEYBINDING_ACTIONS
            if action.scope == scope
        }
        for scope in SCOPES
    }


def keybinding_actions_for_scope(scope: KeybindingScope) -> list[KeybindingAction]:
    wanted = _scope_key(scope)
    return [action for action in KEYBINDING_ACTIONS if action.scope == wanted]


def action_definition(scope: KeybindingScope, action_id: str) -> KeybindingAction | None:
    return _ACTIONS.get((_scope_key(scope), str(action_id or "").strip()))


def _chord_items(value: Any) -> list[str]:
    """Flatten a sequence value (text or list of texts) into single chord texts."""
    entries = [value] if isinstance(value, str) else value
    if not isinstance(entries, (list, tuple)):
        return []
    items: list[str] = []
    for entry in entries:
        if not isinstance(entry, str):
            continue
        text = entry.strip()
        if text == ",":
            items.append(text)
            continue
        items.extend(piece.strip() for piece in text.split(",") if piece.strip())
    return items


def _split_chord(text: str) -> tuple[frozenset[str], str]:
    """Canonical modifier names and the key name of one chord."""
    modifiers: set[str] = set()
    key = ""
    for part in str(text or "").split("+"):
        token = part.strip()
        if not token:
            continue
        lowered = token.lower()
        for name, spellings in _MODIFIER_SPELLINGS:
            if lowered in spellings:
                modifiers.add(name)
                break
        else:
            key = token
    if len(key) == 1 and key.isalpha():
        key = key.upper()
    else:
        key = _KEY_SPELLINGS.get(key.lower(), key)
    return frozenset(modifiers), key


def _join_chord(modifiers: frozenset[str], key: str) -> str:
    names = [name for name, _spellings in _MODIFIER_SPELLINGS if name in modifiers]
    return "+".join([*names, key])


def canonicalize_chord_text(text: str) -> str:
    """Spell one chord the way ``chord_text_from_key_event`` reports it, e.g. ``ctrl+t`` -> ``Ctrl+T``."""
    modifiers, key = _split_chord(text)
    if not key:
        return ""
    requested = _join_chord(modifiers, key)
    portable = QKeySequence(requested).toString(QKeySequence.SequenceFormat.PortableText).strip()
    qt_modifiers, qt_key = _split_chord(portable)
    # Qt renames keys ("esc" -> "Esc") but may drop modifiers on punctuation.
    if qt_key and qt_modifiers == modifiers:
        return _join_chord(qt_modifiers, qt_key)
    return requested


def normalize_sequence(value: Any) -> list[str]:
    chords: list[str] = []
    for item in _chord_items(value):
        chord = canonicalize_chord_text(item)
        if chord and chord not in chords:
            chords.append(chord)
    return chords


def sequence_to_text(sequence: list[str] | tuple[str, ...]) -> str:
    return ", ".join(normalize_sequence(list(sequence)))


def normalize_keybindings(raw: Any, base: Any = None) -> dict[str, dict[str, list[str]]]:
    """
    Overlay user sequences from ``raw`` onto the defaults, action by action.

    ``base``, when given, is laid over the built-in table before ``raw``.
    """
    merged = default_keybindings()
    if base is not None:
        _overlay_keybindings(merged, base)
    _overlay_keybindings(merged, raw)
    return merged


def _overlay_keybindings(merged: dict[str, dict[str, list[str]]], raw: Any) -> None:
    if not isinstance(raw, Mapping):
        return
    for scope_name, overrides in raw.items():
        scope = _scope_key(scope_name)
        if scope not in merged or not isinstance(overrides, Mapping):
            continue
        for action_name, value in overrides.items():
            action = action_definition(scope, action_name)
            if action is None:
                continue
            chords = normalize_sequence(value)
            # An explicit empty value unbinds; unreadable ones keep the default.
            if chords or value in ([], ""):
                merged[scope][action.action_id] = chords


def get_action_sequence(
    keybindings: Mapping[str, Mapping[str, list[str]]] | None,
    *,
    scope: KeybindingScope,
    action_id: str,
) -> list[str]:
    bound = (keybindings or {}).get(_scope_key(scope), {})
    action_key = str(action_id or "").strip()
    if action_key in bound:
        return normalize_sequence(list(bound[action_key] or []))
    action = action_definition(scope, action_key)
    return list(action.default_sequence) if action is not None else []


def build_key_table(
    keybindings: Mapping[str, Mapping[str, list[str]]] | None,
    *,
    scope: KeybindingScope,
    handlers: Mapping[BrowserCommand, Callable[[], Any]],
) -> dict[str, Callable[[], Any]]:
    """Chord text -> handler; the first action listed wins a shared chord."""
    table: dict[str, Callable[[], Any]] = {}
    for action in keybinding_actions_for_scope(scope):
        handler = handlers.get(action.command)
        if handler is None:
            continue
        for chord in get_action_sequence(keybindings, scope=scope, action_id=action.action_id):
            table.setdefault(chord, handler)
    return table


def qkeysequences_from_sequence(sequence: list[str] | tuple[str, ...]) -> list[QKeySequence]:
    return [QKeySequence(chord) for chord in normalize_sequence(list(sequence))]


def chord_text_from_key_event(event: QKeyEvent) -> str:
    """Canonical chord text for a key press, ignoring the keypad flag."""
    combination = event.keyCombination()
    if combination.key() in _MODIFIER_KEYS:
        return ""
    modifiers = combination.keyboardModifiers() & ~Qt.KeyboardModifier.KeypadModifier
    sequence = QKeySequence(QKeyCombination(modifiers, combination.key()))
    return canonicalize_chord_text(sequence.toString(QKeySequence.SequenceFormat.PortableText))


def find_conflicts(
    keybindings: Mapping[str, Mapping[str, list[str]]] | None,
) -> list[KeybindingConflict]:
    """Chords bound to more than one action within the same scope."""
    conflicts: list[KeybindingConflict] = []
    for scope, scope_map in (keybindings or {}).items():
        owners: dict[str, list[str]] = {}
        for action_id, sequence in scope_map.items():
            for chord in normalize_sequence(list(sequence or [])):
                owners.setdefault(chord, []).append(action_id)
        for chord, action_ids in owners.items():
            if len(action_ids) > 1:
                conflicts.append(KeybindingConflict(scope, chord, tuple(action_ids)))
    return conflicts


__all__ = [
    "KeybindingScope",
    "SCOPES",
    "SCOPE_GENERAL",
    "SCOPE_DOCUMENT",
    "BrowserCommand",
    "KeybindingAction",
    "KeybindingConflict",
    "KEYBINDING_ACTIONS",
    "default_keybindings",
    "keybinding_actions_for_scope",
    "action_definition",
    "canonicalize_chord_text",
    "normalize_sequence",
    "sequence_to_text",
    "normalize_keybindings",
    "get_action_sequence",
    "build_key_table",
    "qkeysequences_from_sequence",
    "chord_text_from_key_event",
    "find_conflicts",
]
