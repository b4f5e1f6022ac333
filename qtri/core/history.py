"""Per-tab navigation history with browser-style back/forward."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class HistoryEntry:
    topic: str
    cursor: int = 0
    scroll: float = 0.0


class HistoryStack:
    """
    Visited topics plus the index of the one on screen.

    ``add`` drops every entry after the current one before appending, so
    navigating somewhere new from the middle of the history discards the
    forward part.
    """

    def __init__(self) -> None:
        self._entries: list[HistoryEntry] = []
        self._index = -1

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def add(self, entry: HistoryEntry) -> None:
        self._index += 1
        del self._entries[self._index:]
        self._entries.append(entry)

    def current(self) -> HistoryEntry | None:
        if self._index < 0:
            return None
        return self._entries[self._index]

    def back(self) -> HistoryEntry | None:
        if self.at_beginning():
            return None
        self._index -= 1
        return self._entries[self._index]

    def forward(self) -> HistoryEntry | None:
        if self.at_end():
            return None
        self._index += 1
        return self._entries[self._index]

    def at_beginning(self) -> bool:
        return self._index <= 0

    def at_end(self) -> bool:
        return self._index >= len(self._entries) - 1


__all__ = ["HistoryEntry", "HistoryStack"]
