from __future__ import annotations

from qtri.core.history import HistoryEntry, HistoryStack


def topics(stack: HistoryStack) -> list[str]:
    return [entry.topic for entry in stack.entries()]


class TestHistoryStack:
    def test_empty(self) -> None:
        stack = HistoryStack()
        assert stack.current() is None
        assert stack.at_beginning()
        assert stack.at_end()
        assert stack.back() is None
        assert stack.forward() is None
        assert len(stack) == 0

    def test_back_returns_previous_entry(self) -> None:
        stack = HistoryStack()
        stack.add(HistoryEntry("A"))
        stack.add(HistoryEntry("B"))
        assert stack.back().topic == "A"
        assert stack.current().topic == "A"

    def test_add_after_back_discards_forward_entries(self) -> None:
        stack = HistoryStack()
        stack.add(HistoryEntry("A"))
        stack.add(HistoryEntry("B"))
        stack.back()
        stack.add(HistoryEntry("C"))
        assert topics(stack) == ["A", "C"]
        assert stack.current().topic == "C"
        assert stack.at_end()
        assert stack.forward() is None

    def test_forward_after_back(self) -> None:
        stack = HistoryStack()
        for topic in ("A", "B", "C"):
            stack.add(HistoryEntry(topic))
        stack.back()
        stack.back()
        assert stack.at_beginning()
        assert stack.back() is None
        assert stack.forward().topic == "B"
        assert stack.forward().topic == "C"
        assert stack.forward() is None
        assert stack.current().topic == "C"

    def test_entries_keep_position_updates(self) -> None:
        stack = HistoryStack()
        stack.add(HistoryEntry("A"))
        stack.current().cursor = 42
        stack.current().scroll = 0.5
        stack.add(HistoryEntry("B"))
        entry = stack.back()
        assert (entry.cursor, entry.scroll) == (42, 0.5)
