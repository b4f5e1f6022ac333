"""Bounded memo of the documentation command's output, keyed by topic."""

from __future__ import annotations

import logging
import re
from typing import Callable

from qtri.services.command_runner import CommandResult

log = logging.getLogger(__name__)

DEFAULT_CAPACITY = 20
NOT_FOUND_OUTPUT = "nil\n"
MULTIPLE_CHOICES_MARKER = "Multiple choices"
CHOICE_INDENT = "     "

_LEADING_SPACES_RE = re.compile(r"^ +", re.MULTILINE)


def not_found_message(topic: str) -> str:
    return f'Topic "{topic}" not found.'


def failure_message(result: CommandResult, settings_path: str | None = None) -> str:
    message = (
        f"ERROR: Failed to run the command '{result.command_line}' "
        f"(exit code: {result.exit_code}). Please make sure you have this command in your PATH."
    )
    location = f" ({settings_path})" if settings_path else ""
    message += (
        f"\n\nYou may wish to edit the 'command' entry of your settings file{location} "
        "to something that works on your system. Run 'qtri --dump-rc' to create that file."
    )
    return message


def reflow_multiple_choices(text: str) -> str:
    """Put each candidate of an ambiguous-topic answer on its own indented line."""
    reflowed = text.replace(", ", "\n")
    reflowed = _LEADING_SPACES_RE.sub("", reflowed)
    return reflowed.replace("\n", "\n" + CHOICE_INDENT)


class DocumentationCache:
    """
    FIFO cache in front of the documentation command.

    Only successful runs are stored; failures are re-run on every fetch so a
    fixed configuration takes effect immediately. Eviction follows insertion
    order; hits do not refresh an entry.
    """

    def __init__(
        self,
        runner: Callable[[str], CommandResult],
        *,
        capacity: int = DEFAULT_CAPACITY,
        settings_path: str | None = None,
    ) -> None:
        self._runner = runner
        self._capacity = max(1, int(capacity))
        self._settings_path = settings_path
        self._entries: dict[str, str] = {}

    def __contains__(self, topic: object) -> bool:
        return topic in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def topics(self) -> list[str]:
        return list(self._entries)

    def fetch(self, topic: str) -> str:
        cached = self._entries.get(topic)
        if cached is not None:
            return self._present(cached)

        result = self._runner(topic)
        if not result.ok:
            log.warning("Command failed with exit code %d: %s", result.exit_code, result.command_line)
            return self._present(result.output + "\n" + failure_message(result, self._settings_path))

        text = result.output
        if text == NOT_FOUND_OUTPUT:
            text = not_found_message(topic)
        self._store(topic, text)
        return self._present(text)

    def _store(self, topic: str, text: str) -> None:
        self._entries[topic] = text
        while len(self._entries) > self._capacity:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            log.debug("Evicted '%s' from the documentation cache", oldest)

    @staticmethod
    def _present(text: str) -> str:
        if MULTIPLE_CHOICES_MARKER in text:
            return reflow_multiple_choices(text)
        return text


__all__ = [
    "DEFAULT_CAPACITY",
    "DocumentationCache",
    "failure_message",
    "not_found_message",
    "reflow_multiple_choices",
]
