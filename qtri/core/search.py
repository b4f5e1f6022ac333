"""Case-insensitive in-page search over the displayed documentation text."""

from __future__ import annotations

from dataclasses import dataclass

from qtri.core.ansi import TAG_SEARCH, StyleRange


@dataclass(frozen=True, slots=True)
class SearchHit:
    position: int
    wrapped: bool


def find_all(text: str, word: str) -> list[StyleRange]:
    needle = str(word or "").lower()
    if not needle:
        return []
    haystack = str(text or "").lower()
    ranges: list[StyleRange] = []
    pos = haystack.find(needle)
    while pos >= 0:
        ranges.append(StyleRange(pos, len(needle), TAG_SEARCH))
        pos = haystack.find(needle, pos + 1)
    return ranges


def find_next(text: str, word: str, cursor: int) -> SearchHit | None:
    """Find the first occurrence after ``cursor``, wrapping to the top."""
    needle = str(word or "").lower()
    if not needle:
        return None
    haystack = str(text or "").lower()
    pos = haystack.find(needle, cursor + 1)
    if pos >= 0:
        return SearchHit(pos, False)
    pos = haystack.find(needle)
    if pos < 0:
        return None
    return SearchHit(pos, True)


def find_previous(text: str, word: str, cursor: int) -> SearchHit | None:
    """Find the last occurrence starting before ``cursor``, wrapping to the bottom."""
    needle = str(word or "").lower()
    if not needle:
        return None
    haystack = str(text or "").lower()
    pos = haystack.rfind(needle, 0, max(0, cursor) + len(needle) - 1) if cursor > 0 else -1
    if pos >= 0:
        return SearchHit(pos, False)
    pos = haystack.rfind(needle)
    if pos < 0:
        return None
    return SearchHit(pos, True)


__all__ = ["SearchHit", "find_all", "find_next", "find_previous"]
