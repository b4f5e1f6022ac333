from .ansi import DecodedText, StyleRange, decode_ansi
from .history import HistoryEntry, HistoryStack
from .search import SearchHit, find_all, find_next, find_previous
from .topics import fixup_topic, resolve_topic
from .words import Token, extract_word, is_rule, line_bounds, word_span

__all__ = [
    "DecodedText",
    "HistoryEntry",
    "HistoryStack",
    "SearchHit",
    "StyleRange",
    "Token",
    "decode_ansi",
    "extract_word",
    "is_rule",
    "find_all",
    "find_next",
    "find_previous",
    "fixup_topic",
    "line_bounds",
    "resolve_topic",
    "word_span",
]
