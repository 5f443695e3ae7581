"""Utilities for rendering classified documents into annotated HTML pages."""

from .document import DocumentRenderer, render_markdown
from .markup import HtmlContentRenderer
from .models import AnnotatedHtml
from .page import PageBuilder
from .safety import SafeMarkupExtension

__all__ = [
    "AnnotatedHtml",
    "DocumentRenderer",
    "HtmlContentRenderer",
    "PageBuilder",
    "SafeMarkupExtension",
    "render_markdown",
]
