"""Read-only text view that renders style ranges and reports word clicks."""

from __future__ import annotations

from typing import Callable, Sequence

from PySide6.QtCore import QPoint, Qt, Signal
from PySide6.QtGui import QKeyEvent, QMouseEvent, QTextCharFormat, QTextCursor
from PySide6.QtWidgets import QPlainTextEdit, QWidget

from qtri.core.ansi import StyleRange
from qtri.core.keybindings import chord_text_from_key_event
from qtri.ui.text_formats import TextFormats


class DocTextView(QPlainTextEdit):
    wordClicked = Signal(int, bool)  # document offset, open in new tab
    backRequested = Signal()

    def __init__(self, formats: TextFormats, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("QtriDocTextView")
        self._formats = formats
        self._ranges: list[StyleRange] = []
        self._key_handlers: dict[str, Callable[[], None]] = {}

        self.setReadOnly(True)
        self.setUndoRedoEnabled(False)
        self.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)
        self.setTextInteractionFlags(
            Qt.TextInteractionFlag.TextSelectableByMouse | Qt.TextInteractionFlag.TextSelectableByKeyboard
        )
        # The right button goes back in history.
        self.setContextMenuPolicy(Qt.ContextMenuPolicy.NoContextMenu)
        formats.apply_base_style(self)

    def set_key_handlers(self, handlers: dict[str, Callable[[], None]]) -> None:
        self._key_handlers = dict(handlers)

    # ------------------------------------------------------------------
    # Document
    # ------------------------------------------------------------------

    def set_document(self, text: str, ranges: Sequence[StyleRange]) -> None:
        self._ranges = []
        self.setPlainText(text)
        self.apply_ranges(ranges)

    def apply_ranges(self, ranges: Sequence[StyleRange]) -> None:
        for style_range in ranges:
            if self._paint(style_range):
                self._ranges.append(style_range)

    def clear_tag(self, tag: str) -> None:
        kept = [item for item in self._ranges if item.tag != tag]
        if len(kept) == len(self._ranges):
            return
        cursor = QTextCursor(self.document())
        cursor.select(QTextCursor.SelectionType.Document)
        cursor.setCharFormat(QTextCharFormat())
        self._ranges = []
        self.apply_ranges(kept)

    def _paint(self, style_range: StyleRange) -> bool:
        fmt = self._formats.format_for(style_range.tag)
        if fmt is None or style_range.length <= 0:
            return False
        last = max(0, self.document().characterCount() - 1)
        start = max(0, min(style_range.start, last))
        end = max(start, min(style_range.end, last))
        if end == start:
            return False
        cursor = QTextCursor(self.document())
        cursor.setPosition(start)
        cursor.setPosition(end, QTextCursor.MoveMode.KeepAnchor)
        cursor.mergeCharFormat(fmt)
        return True

    def text(self) -> str:
        return self.toPlainText()

    # ------------------------------------------------------------------
    # Cursor and scrolling
    # ------------------------------------------------------------------

    def cursor_offset(self) -> int:
        return self.textCursor().position()

    def set_cursor_offset(self, offset: int) -> None:
        last = max(0, self.document().characterCount() - 1)
        cursor = self.textCursor()
        cursor.setPosition(max(0, min(int(offset), last)))
        self.setTextCursor(cursor)

    def scroll_fraction(self) -> float:
        bar = self.verticalScrollBar()
        total = bar.maximum() - bar.minimum() + bar.pageStep()
        if total <= 0:
            return 0.0
        return (bar.value() - bar.minimum()) / total

    def set_scroll_fraction(self, fraction: float) -> None:
        bar = self.verticalScrollBar()
        total = bar.maximum() - bar.minimum() + bar.pageStep()
        clamped = max(0.0, min(1.0, float(fraction)))
        bar.setValue(bar.minimum() + int(round(clamped * total)))

    def has_selection(self) -> bool:
        return self.textCursor().hasSelection()

    def selected_text(self) -> str:
        return self.textCursor().selectedText().replace("\u2029", "\n")

    def offset_at(self, point: QPoint) -> int:
        """Offset of the character under ``point`` (not the nearest boundary)."""
        cursor = self.cursorForPosition(point)
        if cursor.positionInBlock() > 0 and self.cursorRect(cursor).left() > point.x():
            cursor.movePosition(QTextCursor.MoveOperation.Left)
        return cursor.position()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.MiddleButton:
            self.wordClicked.emit(self.offset_at(event.position().toPoint()), True)
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        button = event.button()
        super().mouseReleaseEvent(event)
        if button == Qt.MouseButton.LeftButton:
            # Releasing after a drag keeps the selection instead of navigating.
            if not self.has_selection():
                self.wordClicked.emit(self.offset_at(event.position().toPoint()), False)
        elif button == Qt.MouseButton.RightButton:
            self.backRequested.emit()

    def keyPressEvent(self, event: QKeyEvent) -> None:
        handler = self._key_handlers.get(chord_text_from_key_event(event))
        if handler is not None:
            handler()
            event.accept()
            return
        super().keyPressEvent(event)
