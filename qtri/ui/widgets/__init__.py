from .doc_text_view import DocTextView

__all__ = [
    "DocTextView",
]
