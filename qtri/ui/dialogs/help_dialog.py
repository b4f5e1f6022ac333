from __future__ import annotations

import markdown
from PySide6.QtWidgets import QDialog, QHBoxLayout, QPushButton, QTextBrowser, QVBoxLayout, QWidget


def render_markdown(text: str) -> str:
    return markdown.markdown(str(text or "").strip(), extensions=["tables"])


class HelpDialog(QDialog):
    def __init__(self, *, title: str, markdown_text: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle(str(title or "").strip() or "Help")
        self.resize(640, 520)

        root = QVBoxLayout(self)
        root.setContentsMargins(14, 14, 14, 14)
        root.setSpacing(10)

        self.viewer = QTextBrowser(self)
        self.viewer.setObjectName("QtriHelpViewer")
        self.viewer.setOpenExternalLinks(True)
        self.viewer.setHtml(render_markdown(markdown_text))
        root.addWidget(self.viewer, 1)

        actions = QHBoxLayout()
        actions.addStretch(1)
        self.close_btn = QPushButton("Close")
        self.close_btn.setDefault(True)
        actions.addWidget(self.close_btn)
        root.addLayout(actions)

        self.close_btn.clicked.connect(self.accept)
