from __future__ import annotations

import logging
import os
import sys
from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

import yaml

from qtri.core.keybindings import find_conflicts, normalize_keybindings
from qtri.settings_models import ResolvedSettings, default_settings

log = logging.getLogger(__name__)

RC_FILE_HEADER = """\
#
# qtri settings.
#
# Erase any entry you want to keep at its default value; the remaining
# entries are merged onto the built-in defaults at startup.
#
#   command      shell command per platform; "%s" is replaced by the topic.
#                Keys are matched against Python's sys.platform; the
#                "__default__" entry is used when none matches.
#   tags         text styles: foreground, background, underline, elide,
#                font: {family: [...], size: N}. "__base__" styles the
#                address box and the page.
#   keybindings  key sequences per scope ("general", "document") and action.
#
"""


class SettingsStoreError(RuntimeError):
    """Raised when the settings file cannot be written."""


def rc_file_path() -> Path:
    basename = "_qtrirc" if sys.platform.startswith("win") else ".qtrirc"
    home = os.environ.get("HOME")
    if home:
        return Path(home) / basename
    # No $HOME (usually Windows); the Help menu shows where this ends up.
    return Path.cwd() / basename


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into a copy of ``base``. Override wins on conflicts."""
    merged = deepcopy(dict(base))
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = deepcopy(value)
    return merged


def merge_settings(defaults: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    merged = deepcopy(dict(defaults))

    commands = overrides.get("command")
    if isinstance(commands, Mapping):
        for key, template in commands.items():
            if isinstance(template, str) and template.strip():
                merged["command"][str(key)] = template

    tags = overrides.get("tags")
    if isinstance(tags, Mapping):
        for name, style in tags.items():
            if not isinstance(style, Mapping):
                continue
            base = merged["tags"].get(str(name), {})
            merged["tags"][str(name)] = deep_merge(base, style)

    merged["keybindings"] = normalize_keybindings(overrides.get("keybindings"), base=defaults.get("keybindings"))
    return merged


class YamlSettingsStore:
    """YAML rc file laid over the hard-coded defaults."""

    def __init__(self, path: Path | None = None, defaults: Mapping[str, Any] | None = None) -> None:
        self.path = Path(path) if path is not None else rc_file_path()
        self.defaults: dict[str, Any] = deepcopy(dict(defaults)) if defaults is not None else default_settings()
        self.overrides: dict[str, Any] = {}
        self.data: dict[str, Any] = deepcopy(self.defaults)
        self.last_error: str | None = None

    def load(self) -> dict[str, Any]:
        self.last_error = None
        self.overrides = {}
        if self.path.exists():
            try:
                with open(self.path, encoding="utf-8") as handle:
                    raw = yaml.safe_load(handle)
            except (OSError, yaml.YAMLError) as exc:
                raw = None
                self.last_error = f"Could not read settings file '{self.path}': {exc}"
            else:
                if raw is None:
                    raw = {}
                if isinstance(raw, dict):
                    self.overrides = raw
                else:
                    self.last_error = (
                        f"Settings root in '{self.path}' must be a YAML mapping, "
                        f"found {type(raw).__name__}."
                    )
        if self.last_error:
            log.warning("%s Using the default settings.", self.last_error)

        self.data = merge_settings(self.defaults, self.overrides)
        for conflict in find_conflicts(self.data["keybindings"]):
            log.warning(
                "Key '%s' is bound to several %s actions: %s",
                conflict.sequence_text,
                conflict.scope,
                ", ".join(conflict.action_ids),
            )
        return self.data

    def resolve(self) -> ResolvedSettings:
        return ResolvedSettings.from_mapping(self.data)

    def dump(self, settings: ResolvedSettings | None = None) -> Path:
        payload = (settings or self.resolve()).to_dict()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as handle:
                handle.write(RC_FILE_HEADER)
                yaml.safe_dump(payload, handle, default_flow_style=False, sort_keys=True, allow_unicode=True)
        except OSError as exc:
            raise SettingsStoreError(f"Could not write settings file '{self.path}': {exc}") from exc
        log.info("Settings written to %s", self.path)
        return self.path


def load_settings(path: Path | None = None) -> tuple[ResolvedSettings, str | None]:
    store = YamlSettingsStore(path)
    store.load()
    return store.resolve(), store.last_error
