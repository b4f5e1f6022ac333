from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, TypedDict

from qtri.core.keybindings import default_keybindings

DEFAULT_COMMAND_KEY = "__default__"
BASE_TAG_KEY = "__base__"

# Keys other than "__default__" are matched as substrings of sys.platform.
# "2>&1" folds the tool's error messages into the page.
DEFAULT_COMMANDS: dict[str, str] = {
    DEFAULT_COMMAND_KEY: 'qri -f ansi "%s"',
    "linux": 'qri -f ansi "%s" 2>&1',
    "darwin": 'qri -f ansi "%s" 2>&1',
    "win32": 'qri.bat -f ansi "%s" 2>&1',
}


class FontSpec(TypedDict, total=False):
    family: str | list[str]
    size: int


class TagStyle(TypedDict, total=False):
    foreground: str
    background: str
    font: FontSpec
    underline: bool
    elide: bool


# Font families are tried in order; end the list with a generic family.
DEFAULT_TAGS: dict[str, TagStyle] = {
    BASE_TAG_KEY: {
        "background": "#ffeeff",
        "font": {"family": ["Bitstream Vera Sans Mono", "DejaVu Sans Mono", "Courier"], "size": 10},
    },
    "bold": {"foreground": "blue"},
    "italic": {"foreground": "#6b8e23"},
    "code": {"foreground": "#1874cd"},
    "header2": {"background": "#ffe4b5", "font": {"family": ["Helvetica", "Arial", "Sans Serif"], "size": 16}},
    "header3": {"background": "#ffe4b5", "font": {"family": ["Helvetica", "Arial", "Sans Serif"], "size": 16}},
    "keyword": {"foreground": "red"},
    "search": {"background": "yellow"},
    "hidden": {"elide": True},
}


def default_settings() -> dict[str, Any]:
    return {
        "command": deepcopy(DEFAULT_COMMANDS),
        "tags": deepcopy(DEFAULT_TAGS),
        "keybindings": default_keybindings(),
    }


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({str(key): _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


@dataclass(frozen=True, slots=True)
class ResolvedSettings:
    """Effective settings: defaults with the rc file laid over them. Read-only."""

    commands: Mapping[str, str]
    tags: Mapping[str, Mapping[str, Any]]
    keybindings: Mapping[str, Mapping[str, tuple[str, ...]]]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ResolvedSettings":
        return cls(
            commands=_freeze(data.get("command") or {}),
            tags=_freeze(data.get("tags") or {}),
            keybindings=_freeze(data.get("keybindings") or {}),
        )

    @classmethod
    def defaults(cls) -> "ResolvedSettings":
        return cls.from_mapping(default_settings())

    def tag_style(self, name: str) -> Mapping[str, Any]:
        return self.tags.get(name) or MappingProxyType({})

    def to_dict(self) -> dict[str, Any]:
        return {
            "command": _thaw(self.commands),
            "tags": _thaw(self.tags),
            "keybindings": _thaw(self.keybindings),
        }
