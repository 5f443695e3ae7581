"""Utilities for rendering markdown, highlighted code, and diagram targets."""

from __future__ import annotations

import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from docnav._constants import (
    CODE_CSS_CLASS,
    DEFAULT_DIAGRAM_CLASS,
    DEFAULT_DIAGRAM_KEYWORD,
    PERMALINK_CSS_CLASS,
    UNPARSED_CSS_CLASS,
)

from .safety import SafeMarkupExtension

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

CODE_BLOCK_PATTERN = re.compile(r"```([A-Za-z0-9_+#.-]+)?[^\n]*\n(.*?)```", re.DOTALL)
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
CODEHILITE_OPEN_TAG = re.compile(rf'<div class="{CODE_CSS_CLASS}">')
PARAGRAPH_WRAPPER = re.compile(r"^<p>(.*)</p>$", re.DOTALL)
BLOCK_MARKER_PATTERN = re.compile(r"^(?:(\d+)([.)])|([-+*>#])|(\[)(?=[^\]]*\]:))")


class HtmlContentRenderer:
    """Render markdown, code, and diagram blocks with consistent styling."""

    def __init__(
        self,
        pygments_style: str = "monokai",
        *,
        diagram_class: str = DEFAULT_DIAGRAM_CLASS,
        diagram_keyword: str = DEFAULT_DIAGRAM_KEYWORD,
        permalink_symbol: str | None = "#",
    ) -> None:
        """Initialize a renderer.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults
            to ``"monokai"``.
        diagram_class : str, optional
            CSS class the client diagram library scans for.
        diagram_keyword : str, optional
            Value written to the ``data-diagram`` attribute of diagram targets.
        permalink_symbol : str, optional
            Text of the permalink anchor placed in each heading; ``None``
            disables permalinks.
        """
        self.pygments_style = pygments_style
        self.diagram_class = diagram_class
        self.diagram_keyword = diagram_keyword
        self.permalink_symbol = permalink_symbol
        self._formatter = HtmlFormatter(
            style=pygments_style, cssclass=CODE_CSS_CLASS, wrapcode=True
        )

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(f".{CODE_CSS_CLASS}")

    def _converter(self) -> Markdown:
        extensions: list[Extension | str] = [
            "fenced_code",
            "codehilite",
            "tables",
            "sane_lists",
            "pymdownx.tasklist",
            "pymdownx.magiclink",
            SafeMarkupExtension(),
        ]
        return Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": CODE_CSS_CLASS,
                    "pygments_style": self.pygments_style,
                }
            },
        )

    def markdown(self, text: str, references: str = "") -> str:
        """Render markdown into HTML using the configured extensions.

        ``references`` holds link definition lines appended to the source so
        reference-style links resolve across blocks.
        """
        normalized = self._normalize_fenced_blocks(text)
        if not normalized.strip():
            return ""
        html = self._converter().convert(_with_references(normalized, references))
        return self._annotate_codehilite(html, normalized)

    def inline(self, text: str, references: str = "") -> str:
        """Render a single line of markdown without the paragraph wrapper."""
        if not text.strip():
            return ""
        source = self._escape_block_markers(text.strip())
        html = self._converter().convert(_with_references(source, references))
        match = PARAGRAPH_WRAPPER.match(html)
        return match.group(1) if match else html

    def heading(self, level: int, slug: str, text: str, references: str = "") -> str:
        """Render a heading element whose ``id`` is ``slug``.

        A permalink anchor pointing at ``#slug`` is inserted before the heading
        text unless permalinks are disabled.
        """
        safe_slug = escape(slug, quote=True)
        permalink = ""
        if self.permalink_symbol is not None:
            permalink = (
                f'<a class="{PERMALINK_CSS_CLASS}" href="#{safe_slug}" '
                f'aria-hidden="true" title="Permalink">'
                f"{escape(self.permalink_symbol)}</a>"
            )
        body = self.inline(text, references)
        return f'<h{level} id="{safe_slug}">{permalink}{body}</h{level}>'

    def code_block(self, code: str, language: str | None = None) -> str:
        """Render ``code`` into highlighted HTML with a language tag.

        Parameters
        ----------
        code : str
            Source snippet to highlight.
        language : str, optional
            Pygments lexer name. Empty, missing, and unknown names fall back to
            the plain text lexer; the tag keeps the name as given.

        Returns
        -------
        str
            HTML containing the highlighted block with ``data-language``
            metadata applied.
        """
        lang = language or ""
        try:
            lexer = get_lexer_by_name(lang)
        except ClassNotFound:
            lexer = get_lexer_by_name("text")
        html = highlight(code, lexer, self._formatter)
        return self._attach_language_attribute(html, lang)

    def diagram_block(self, source: str) -> str:
        """Wrap raw diagram ``source`` in a client render target.

        The source is escaped but otherwise untouched, so the element's text
        content equals the original fence body.
        """
        return (
            f'<div class="{escape(self.diagram_class, quote=True)}" '
            f'data-diagram="{escape(self.diagram_keyword, quote=True)}">'
            f"{escape(source, quote=False)}</div>"
        )

    @staticmethod
    def unparsed_block(text: str) -> str:
        """Show ``text`` verbatim for blocks that could not be classified."""
        return f'<pre class="{UNPARSED_CSS_CLASS}">{escape(text, quote=False)}</pre>'

    def _annotate_codehilite(self, html: str, source_markdown: str) -> str:
        """Attach language metadata to each highlighted block in converted markdown."""
        languages = [
            match.group(1) or "" for match in CODE_BLOCK_PATTERN.finditer(source_markdown)
        ]
        if not languages:
            return html
        lang_iter = iter(languages)

        def _repl(match: re.Match[str]) -> str:
            lang = next(lang_iter, "")
            return (
                f'<div class="{CODE_CSS_CLASS}" '
                f'data-language="{escape(lang, quote=True)}">'
            )

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))

    @staticmethod
    def _attach_language_attribute(html: str, language: str) -> str:
        """Add a single language attribute to an already highlighted block."""
        safe_lang = escape(language, quote=True)

        def _repl(match: re.Match[str]) -> str:
            return f'<div class="{CODE_CSS_CLASS}" data-language="{safe_lang}">'

        return CODEHILITE_OPEN_TAG.sub(_repl, html, 1)

    @staticmethod
    def _escape_block_markers(text: str) -> str:
        """Keep heading text such as ``1. Intro`` or ``[a]: b`` plain text."""

        def _repl(match: re.Match[str]) -> str:
            number, delimiter, marker, bracket = match.groups()
            if number is not None:
                return f"{number}\\{delimiter}"
            return f"\\{marker or bracket}"

        return BLOCK_MARKER_PATTERN.sub(_repl, text, count=1)

    @staticmethod
    def _normalize_fenced_blocks(text: str) -> str:
        without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

        def _strip_labels(match: re.Match[str]) -> str:
            fence, language, _extras = match.groups()
            label = language or ""
            return f"{fence}{label}"

        return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


def _with_references(source: str, references: str) -> str:
    """Append link definition lines as a separate trailing block."""
    if not references:
        return source
    return f"{source.rstrip()}\n\n{references}\n"


__all__ = ["CODE_BLOCK_PATTERN", "HtmlContentRenderer"]
