from __future__ import annotations

from qtri.core.ansi import TAG_SEARCH, StyleRange
from qtri.core.search import SearchHit, find_all, find_next, find_previous

TEXT = "Map the array; map! maps in place. MAP"


class TestFindAll:
    def test_case_insensitive_ranges(self) -> None:
        assert find_all(TEXT, "map") == [
            StyleRange(0, 3, TAG_SEARCH),
            StyleRange(15, 3, TAG_SEARCH),
            StyleRange(20, 3, TAG_SEARCH),
            StyleRange(35, 3, TAG_SEARCH),
        ]

    def test_empty_word_finds_nothing(self) -> None:
        assert find_all(TEXT, "") == []

    def test_overlapping_occurrences(self) -> None:
        assert [item.start for item in find_all("aaaa", "aa")] == [0, 1, 2]


class TestFindNext:
    def test_next_after_cursor(self) -> None:
        assert find_next(TEXT, "map", 0) == SearchHit(15, False)
        assert find_next(TEXT, "map", 15) == SearchHit(20, False)

    def test_wraps_to_top(self) -> None:
        assert find_next(TEXT, "map", 35) == SearchHit(0, True)

    def test_missing_word(self) -> None:
        assert find_next(TEXT, "zip", 0) is None


class TestFindPrevious:
    def test_previous_before_cursor(self) -> None:
        assert find_previous(TEXT, "map", 20) == SearchHit(15, False)
        assert find_previous(TEXT, "map", 16) == SearchHit(15, False)

    def test_wraps_to_bottom(self) -> None:
        assert find_previous(TEXT, "map", 0) == SearchHit(35, True)

    def test_missing_word(self) -> None:
        assert find_previous(TEXT, "zip", 10) is None
