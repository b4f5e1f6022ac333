"""Conversion of ANSI-colored ``ri`` output into plain text plus style ranges."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

TAG_BOLD = "bold"
TAG_ITALIC = "italic"
TAG_CODE = "code"
TAG_HEADER2 = "header2"
TAG_HEADER3 = "header3"
TAG_KEYWORD = "keyword"
TAG_SEARCH = "search"
TAG_HIDDEN = "hidden"

STYLE_TAGS: tuple[str, ...] = (
    TAG_BOLD,
    TAG_ITALIC,
    TAG_CODE,
    TAG_HEADER2,
    TAG_HEADER3,
    TAG_KEYWORD,
    TAG_SEARCH,
    TAG_HIDDEN,
)

# SGR parameters emitted by rdoc's ANSI formatter.
ANSI_TAGS: dict[str, str] = {
    "1": TAG_BOLD,
    "33": TAG_ITALIC,
    "36": TAG_CODE,
    "4;32": TAG_HEADER2,
    "32": TAG_HEADER3,
}

_STYLED_RUN_RE = re.compile(r"\x1b\[([\d;]+)m([^\x1b]*)\x1b\[0?m")
_BARE_SEQUENCE_RE = re.compile(r"\x1b\[[\d;]*m")


@dataclass(frozen=True, slots=True)
class StyleRange:
    start: int
    length: int
    tag: str

    @property
    def end(self) -> int:
        return self.start + self.length


@dataclass(frozen=True, slots=True)
class DecodedText:
    plain: str
    ranges: tuple[StyleRange, ...] = field(default_factory=tuple)


def decode_ansi(raw: str) -> DecodedText:
    """
    Strip paired SGR sequences from ``raw`` and describe them as ranges.

    Runs are replaced one at a time, always the leftmost remaining one, so
    offsets are measured in the already-shrunk text. Sequences that cannot
    be paired (nesting) stay in the text and are covered by ``hidden``
    ranges.
    """
    text = str(raw or "")
    ranges: list[StyleRange] = []

    while True:
        match = _STYLED_RUN_RE.search(text)
        if match is None:
            break
        start = match.start()
        content = match.group(2)
        text = text[:start] + content + text[match.end():]
        tag = ANSI_TAGS.get(match.group(1))
        if tag and content:
            ranges.append(StyleRange(start, len(content), tag))

    for match in _BARE_SEQUENCE_RE.finditer(text):
        ranges.append(StyleRange(match.start(), match.end() - match.start(), TAG_HIDDEN))

    return DecodedText(text, tuple(ranges))


__all__ = [
    "ANSI_TAGS",
    "STYLE_TAGS",
    "TAG_BOLD",
    "TAG_ITALIC",
    "TAG_CODE",
    "TAG_HEADER2",
    "TAG_HEADER3",
    "TAG_KEYWORD",
    "TAG_SEARCH",
    "TAG_HIDDEN",
    "StyleRange",
    "DecodedText",
    "decode_ansi",
]
