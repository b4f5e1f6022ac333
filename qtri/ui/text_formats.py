"""Qt text formats built from the tag style table."""

from __future__ import annotations

from typing import Any, Mapping

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QFont, QFontDatabase, QPalette, QTextCharFormat
from PySide6.QtWidgets import QWidget

from qtri.core.ansi import STYLE_TAGS
from qtri.settings_models import BASE_TAG_KEY, ResolvedSettings


def resolve_font_family(family: Any) -> str | None:
    """First installed family of ``family`` (a name or a list of names)."""
    if isinstance(family, str):
        candidates = [family]
    elif isinstance(family, (list, tuple)):
        candidates = [str(item) for item in family if str(item or "").strip()]
    else:
        candidates = []
    if not candidates:
        return None
    available = {name.lower(): name for name in QFontDatabase.families()}
    for candidate in candidates:
        match = available.get(candidate.strip().lower())
        if match:
            return match
    return candidates[-1]


def _color(value: Any) -> QColor | None:
    text = str(value or "").strip()
    if not text:
        return None
    color = QColor(text)
    return color if color.isValid() else None


def char_format_for_style(style: Mapping[str, Any]) -> QTextCharFormat:
    fmt = QTextCharFormat()
    foreground = _color(style.get("foreground"))
    if foreground is not None:
        fmt.setForeground(foreground)
    background = _color(style.get("background"))
    if background is not None:
        fmt.setBackground(background)

    font = style.get("font")
    if isinstance(font, Mapping):
        family = resolve_font_family(font.get("family"))
        if family:
            fmt.setFontFamilies([family])
        size = font.get("size")
        if isinstance(size, (int, float)) and size > 0:
            fmt.setFontPointSize(float(size))

    if "underline" in style:
        fmt.setFontUnderline(bool(style.get("underline")))
    if style.get("elide"):
        # QTextDocument cannot elide text; shrink it and make it invisible.
        fmt.setForeground(QColor(Qt.GlobalColor.transparent))
        fmt.setBackground(QColor(Qt.GlobalColor.transparent))
        fmt.setFontPointSize(1.0)
    return fmt


def font_for_style(style: Mapping[str, Any], fallback: QFont) -> QFont:
    font = QFont(fallback)
    spec = style.get("font")
    if isinstance(spec, Mapping):
        family = resolve_font_family(spec.get("family"))
        if family:
            font.setFamily(family)
        size = spec.get("size")
        if isinstance(size, (int, float)) and size > 0:
            font.setPointSizeF(float(size))
    return font


class TextFormats:
    """Per-tag ``QTextCharFormat`` objects plus the base widget look."""

    def __init__(self, settings: ResolvedSettings) -> None:
        self._base_style = settings.tag_style(BASE_TAG_KEY)
        self._formats: dict[str, QTextCharFormat] = {}
        for tag in STYLE_TAGS:
            self._formats[tag] = char_format_for_style(settings.tag_style(tag))

    def format_for(self, tag: str) -> QTextCharFormat | None:
        return self._formats.get(tag)

    def apply_base_style(self, widget: QWidget) -> None:
        widget.setFont(font_for_style(self._base_style, widget.font()))
        background = _color(self._base_style.get("background"))
        foreground = _color(self._base_style.get("foreground"))
        if background is None and foreground is None:
            return
        palette = widget.palette()
        if background is not None:
            palette.setColor(QPalette.ColorRole.Base, background)
        if foreground is not None:
            palette.setColor(QPalette.ColorRole.Text, foreground)
        widget.setPalette(palette)
