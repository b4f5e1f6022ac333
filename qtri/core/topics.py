"""Topic name normalization and qualification of clicked words."""

from __future__ import annotations

import re

HEADER_INSTANCE_METHODS = "Instance methods:"
HEADER_CLASS_METHODS = "Class methods:"
HEADER_INCLUDES = "Includes:"

TOPIC_ALIASES: dict[str, str] = {
    "S": "String",
    "s": "String",
    "string": "String",
    "A": "Array",
    "a": "Array",
    "array": "Array",
    "H": "Hash",
    "h": "Hash",
    "hash": "Hash",
    # qri resolves "File::new" to the wrong page.
    "File::new": "File#new",
}

_HEADER_RE = re.compile(r"[\r\n]\w[^\r\n]*")
_CLASS_NAME_RE = re.compile(r"[A-Z]\w*")


def fixup_topic(topic: str) -> str:
    return TOPIC_ALIASES.get(topic, topic)


def _last_match_before(pattern: re.Pattern[str], text: str, cursor: int) -> re.Match[str] | None:
    found = None
    for match in pattern.finditer(text):
        if match.start() >= cursor:
            break
        found = match
    return found


def previous_header(text: str, cursor: int) -> str | None:
    """Return the section header line the cursor is in, stripped."""
    match = _last_match_before(_HEADER_RE, str(text or ""), cursor)
    if match is None:
        return None
    return match.group(0).strip()


def previous_class(text: str, cursor: int) -> str | None:
    """Return the last capitalized name that starts before the cursor."""
    match = _last_match_before(_CLASS_NAME_RE, str(text or ""), cursor)
    return match.group(0) if match is not None else None


def resolve_topic(word: str, text: str, cursor: int, current_topic: str | None) -> str:
    """
    Qualify ``word`` using the section of ``text`` the cursor is in.

    Method names listed under "Instance methods:" / "Class methods:" belong
    to ``current_topic``; lowercase names under "Includes:" belong to the
    module named before them.
    """
    header = previous_header(text, cursor)
    if header == HEADER_INSTANCE_METHODS and current_topic:
        return f"{current_topic}#{word}"
    if header == HEADER_CLASS_METHODS and current_topic:
        return f"{current_topic}::{word}"
    if header == HEADER_INCLUDES and not _CLASS_NAME_RE.match(word):
        owner = previous_class(text, cursor)
        if owner:
            return f"{owner}#{word}"
    return word


__all__ = [
    "HEADER_INSTANCE_METHODS",
    "HEADER_CLASS_METHODS",
    "HEADER_INCLUDES",
    "TOPIC_ALIASES",
    "fixup_topic",
    "previous_header",
    "previous_class",
    "resolve_topic",
]
