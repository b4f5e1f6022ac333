"""Shared fixtures: an in-memory document view and scripted documentation runs."""

from __future__ import annotations

from typing import Callable, Sequence

import pytest

from qtri.core.ansi import StyleRange
from qtri.services.command_runner import CommandResult


class FakeView:
    """Stands in for the text widget; keeps text, caret, scroll and painted ranges."""

    def __init__(self) -> None:
        self.plain = ""
        self.ranges: list[StyleRange] = []
        self.cursor = 0
        self.scroll = 0.0
        self.selection = False

    def set_document(self, text: str, ranges: Sequence[StyleRange]) -> None:
        self.plain = text
        self.ranges = list(ranges)
        self.cursor = 0
        self.scroll = 0.0

    def apply_ranges(self, ranges: Sequence[StyleRange]) -> None:
        self.ranges.extend(ranges)

    def clear_tag(self, tag: str) -> None:
        self.ranges = [item for item in self.ranges if item.tag != tag]

    def text(self) -> str:
        return self.plain

    def cursor_offset(self) -> int:
        return self.cursor

    def set_cursor_offset(self, offset: int) -> None:
        self.cursor = max(0, min(int(offset), len(self.plain)))

    def scroll_fraction(self) -> float:
        return self.scroll

    def set_scroll_fraction(self, fraction: float) -> None:
        self.scroll = float(fraction)

    def has_selection(self) -> bool:
        return self.selection

    def tags(self, tag: str) -> list[StyleRange]:
        return [item for item in self.ranges if item.tag == tag]


class ScriptedRunner:
    """Callable runner answering from a topic -> output table, recording every call."""

    def __init__(self, pages: dict[str, str] | None = None, *, exit_code: int = 0) -> None:
        self.pages = dict(pages or {})
        self.exit_code = exit_code
        self.calls: list[str] = []

    def __call__(self, topic: str) -> CommandResult:
        self.calls.append(topic)
        output = self.pages.get(topic, f"Documentation for {topic}\n")
        return CommandResult(f'qri -f ansi "{topic}"', output, self.exit_code)


class DeferredScheduler:
    """Collects scheduled callbacks until ``run_all`` is called."""

    def __init__(self) -> None:
        self.pending: list[Callable[[], None]] = []

    def __call__(self, callback: Callable[[], None]) -> None:
        self.pending.append(callback)

    def run_all(self) -> None:
        pending, self.pending = self.pending, []
        for callback in pending:
            callback()


def run_now(callback: Callable[[], None]) -> None:
    callback()


@pytest.fixture
def view() -> FakeView:
    return FakeView()


@pytest.fixture
def scheduler() -> DeferredScheduler:
    return DeferredScheduler()
