"""Markdown sources of the Help menu pages."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

from qtri.core.keybindings import (
    SCOPE_DOCUMENT,
    SCOPE_GENERAL,
    get_action_sequence,
    keybinding_actions_for_scope,
    sequence_to_text,
)

OVERVIEW = """\
# qtri

qtri is a graphical front-end to the `ri` and `qri` documentation
browsers of Ruby. By default it runs `qri`, which is part of the
Fast-RI package.

The output of that program is shown in a page where every word is a
link.

## Usage

Start it by typing `qtri` at the shell prompt, optionally followed by
one or more topics. Inside the window, type a topic in the address box
or click a word in the page.
"""

TIPS = """\
# Tips and tricks

* Type `/` to highlight a string in the page. If it is off-screen,
  press Enter to jump to it; `n` and `Shift+N` repeat the search.
* `Ctrl+L` is the fastest way to reach the address box.
* Instead of typing `Hash`, `Array` or `String` you can type the
  letters `h`, `a` or `s`.
* Topics can be given on the command line, e.g. `qtri Array#flatten sort_by`.
* Pressing the left button does not navigate; *releasing* it does. Drag
  to select a piece of code and the release keeps the selection.
* The right button moves back in history and restores the caret
  position, so pressing Enter afterwards returns you to where you were.
"""

MOUSE_BINDINGS: tuple[tuple[str, str], ...] = (
    ("Left mouse button", "Go to the topic under the pointer."),
    ("Middle mouse button", "Go to the topic under the pointer in a new tab."),
    ("Right mouse button", "Move back in the history."),
    ("Right mouse button on a tab", "Close the tab, unless it is the only one."),
)


def key_binding_rows(keybindings: Mapping[str, Mapping[str, list[str]]] | None) -> list[tuple[str, str]]:
    rows: list[tuple[str, str]] = list(MOUSE_BINDINGS)
    for scope, suffix in ((SCOPE_GENERAL, ""), (SCOPE_DOCUMENT, " (in the page)")):
        for action in keybinding_actions_for_scope(scope):
            sequence = get_action_sequence(keybindings, scope=scope, action_id=action.action_id)
            if sequence:
                rows.append((sequence_to_text(sequence), action.action_name + suffix))
    return rows


def key_bindings_markdown(keybindings: Mapping[str, Mapping[str, list[str]]] | None) -> str:
    lines = ["# Key bindings", "", "| Key | Action |", "| --- | --- |"]
    for keys, description in key_binding_rows(keybindings):
        lines.append(f"| {keys.replace('|', '&#124;')} | {description} |")
    return "\n".join(lines) + "\n"


def rc_file_markdown(path: Path | str) -> str:
    return f"""\
# The settings file

Colors, fonts, key bindings and the documentation command can be
changed in a YAML file in your home folder. On this system it is:

    {path}

If that is an odd place, set the `HOME` environment variable.

To get started, let qtri write its current settings there:

    qtri --dump-rc

Edit the file to your liking; entries you keep are merged onto the
built-in defaults each time qtri starts.
"""


__all__ = [
    "OVERVIEW",
    "TIPS",
    "MOUSE_BINDINGS",
    "key_binding_rows",
    "key_bindings_markdown",
    "rc_file_markdown",
]
