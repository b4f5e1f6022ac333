"""Navigation state of one browser tab, independent of the widget toolkit."""

from __future__ import annotations

import logging
from typing import Callable, Protocol, Sequence

from qtri.core.ansi import TAG_KEYWORD, TAG_SEARCH, StyleRange, decode_ansi
from qtri.core.history import HistoryEntry, HistoryStack
from qtri.core.search import find_all, find_next, find_previous
from qtri.core.topics import fixup_topic, resolve_topic
from qtri.core.words import is_rule, line_bounds, word_span
from qtri.services.documentation_cache import DocumentationCache

log = logging.getLogger(__name__)

Scheduler = Callable[[Callable[[], None]], None]


class DocumentView(Protocol):
    def set_document(self, text: str, ranges: Sequence[StyleRange]) -> None: ...

    def apply_ranges(self, ranges: Sequence[StyleRange]) -> None: ...

    def clear_tag(self, tag: str) -> None: ...

    def text(self) -> str: ...

    def cursor_offset(self) -> int: ...

    def set_cursor_offset(self, offset: int) -> None: ...

    def scroll_fraction(self) -> float: ...

    def set_scroll_fraction(self, fraction: float) -> None: ...

    def has_selection(self) -> bool: ...


def _ignore(*_args) -> None:
    return None


class TabSession:
    """
    Topic, history and pending fetch of a tab.

    Fetching is handed to ``schedule`` so the caller's event loop can paint
    the loading status first. A scheduled fetch that a newer navigation of
    the same tab has superseded is dropped before the command runs.
    """

    def __init__(
        self,
        cache: DocumentationCache,
        view: DocumentView,
        *,
        schedule: Scheduler,
        on_topic: Callable[[str], None] | None = None,
        on_status: Callable[[str], None] | None = None,
        on_loaded: Callable[[], None] | None = None,
    ) -> None:
        self._cache = cache
        self._view = view
        self._schedule = schedule
        self._on_topic = on_topic or _ignore
        self._on_status = on_status or _ignore
        self._on_loaded = on_loaded or _ignore

        self._history = HistoryStack()
        self._topic: str | None = None
        self._status = ""
        self._request_id = 0
        self._pending = False

    @property
    def topic(self) -> str | None:
        return self._topic

    @property
    def is_new(self) -> bool:
        return self._topic is None

    @property
    def status(self) -> str:
        return self._status

    @property
    def history(self) -> HistoryStack:
        return self._history

    @property
    def is_loading(self) -> bool:
        return self._pending

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def go(self, topic: str | None) -> bool:
        raw = str(topic or "").strip()
        if not raw:
            return False
        target = fixup_topic(raw)
        self._remember_position()
        self._history.add(HistoryEntry(target))
        self._load(target, 0, 0.0)
        return True

    def back(self) -> bool:
        if self._history.at_beginning():
            return False
        self._remember_position()
        entry = self._history.back()
        self._load(entry.topic, entry.cursor, entry.scroll)
        return True

    def forward(self) -> bool:
        if self._history.at_end():
            return False
        self._remember_position()
        entry = self._history.forward()
        self._load(entry.topic, entry.cursor, entry.scroll)
        return True

    def can_go_back(self) -> bool:
        return not self._history.at_beginning()

    def can_go_forward(self) -> bool:
        return not self._history.at_end()

    def _remember_position(self) -> None:
        entry = self._history.current()
        if entry is None or self._pending:
            return
        entry.cursor = self._view.cursor_offset()
        entry.scroll = self._view.scroll_fraction()

    def _load(self, topic: str, cursor: int, scroll: float) -> None:
        self._topic = topic
        self._request_id += 1
        request_id = self._request_id
        self._pending = True
        self._set_status(f'Loading "{topic}"...')
        self._on_topic(topic)
        self._schedule(lambda: self._complete(request_id, topic, cursor, scroll))

    def _complete(self, request_id: int, topic: str, cursor: int, scroll: float) -> None:
        if request_id != self._request_id:
            log.debug("Dropped superseded fetch of '%s'", topic)
            return
        raw = self._cache.fetch(topic).replace("\r\n", "\n")
        decoded = decode_ansi(raw)
        self._view.set_document(decoded.plain, decoded.ranges)
        self._view.set_cursor_offset(cursor)
        self._view.set_scroll_fraction(scroll)
        self._pending = False
        self._set_status("")
        self._on_loaded()

    def _set_status(self, status: str) -> None:
        self._status = status
        self._on_status(status)

    # ------------------------------------------------------------------
    # Links
    # ------------------------------------------------------------------

    def topic_at(self, offset: int) -> str | None:
        """Resolve the word at ``offset`` of the page and mark it as a keyword."""
        text = self._view.text()
        line_start, line_end = line_bounds(text, offset)
        token = word_span(text[line_start:line_end], offset - line_start)
        if token is None:
            return None
        if token.length > 0:
            self._view.apply_ranges([StyleRange(line_start + token.start, token.length, TAG_KEYWORD)])
        if is_rule(token.text):
            return None
        return resolve_topic(token.text, text, offset, self._topic)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def highlight(self, word: str) -> None:
        self._view.clear_tag(TAG_SEARCH)
        if word:
            self._view.apply_ranges(find_all(self._view.text(), word))

    def search_next(self, word: str) -> bool:
        self.highlight(word)
        hit = find_next(self._view.text(), word, self._view.cursor_offset())
        if hit is None:
            self._set_status(f'Cannot find "{word}"')
            return False
        self._view.set_cursor_offset(hit.position)
        self._set_status("Continuing search at top" if hit.wrapped else "")
        return True

    def search_previous(self, word: str) -> bool:
        self.highlight(word)
        hit = find_previous(self._view.text(), word, self._view.cursor_offset())
        if hit is None:
            self._set_status(f'Cannot find "{word}"')
            return False
        self._view.set_cursor_offset(hit.position)
        self._set_status("Continuing search at bottom" if hit.wrapped else "")
        return True


__all__ = ["DocumentView", "Scheduler", "TabSession"]
