"""Locate the clickable word around a column of a documentation line."""

from __future__ import annotations

import re
from dataclasses import dataclass

_LEFT_STOPS = frozenset(" (")
_RIGHT_STOPS = frozenset(" ()")
_TRAILING_PUNCTUATION = frozenset(",.:;")
_MARKUP_RE = re.compile(r"^([_*+]).*\1$", re.DOTALL)
_RULE_RE = re.compile(r"^-+$")


@dataclass(frozen=True, slots=True)
class Token:
    text: str
    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length


def word_span(line: str, column: int) -> Token | None:
    """
    Return the text under ``column`` in ``line`` cut at the word stops, or None.

    ``start``/``length`` describe the span in ``line`` the word was cut
    from (after punctuation and markup removal), which is the span
    callers highlight. Dash rules are returned too.
    """
    text = str(line or "")
    if column < 0 or column > len(text):
        return None

    # One sentinel space on the left, two on the right.
    padded = " " + text + "  "
    pos = column + 1
    if padded[pos] == " ":
        return None

    first = pos
    while padded[first - 1] not in _LEFT_STOPS:
        first -= 1
    last = pos
    while padded[last + 1] not in _RIGHT_STOPS:
        last += 1
    word = padded[first:last + 1]

    if word and word[-1] in _TRAILING_PUNCTUATION:
        word = word[:-1]

    if _MARKUP_RE.match(word):
        word = word[1:-1]
        first += 1

    start = first - 1
    length = len(word)
    word = word.strip()

    if not word:
        return None
    return Token(word, start, length)


def is_rule(word: str) -> bool:
    return bool(_RULE_RE.match(str(word or "")))


def extract_word(line: str, column: int) -> Token | None:
    """Return the word under ``column`` in ``line``, or None for blanks and dash rules."""
    token = word_span(line, column)
    if token is None or is_rule(token.text):
        return None
    return token


def line_bounds(text: str, offset: int) -> tuple[int, int]:
    """Return ``(line_start, line_end)`` of the line holding ``offset``."""
    source = str(text or "")
    offset = max(0, min(int(offset), len(source)))
    line_start = source.rfind("\n", 0, offset) + 1
    line_end = source.find("\n", offset)
    if line_end < 0:
        line_end = len(source)
    return line_start, line_end


__all__ = ["Token", "extract_word", "is_rule", "line_bounds", "word_span"]
