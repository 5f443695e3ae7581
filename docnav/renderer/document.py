r"""Turn a classified :class:`~docnav.blocks.Document` into annotated HTML.

Headings become elements whose ``id`` is their slug so ``#slug`` fragments
resolve natively, code fences go through Pygments with a ``data-language``
tag, and diagram fences become render targets for the client diagram
library. The renderer only reads the document; it never mutates it.

Example
-------
>>> from docnav.renderer import render_markdown
>>> result = render_markdown("# Intro\n\nText\n")
>>> result.slugs
['intro']
>>> 'id="intro"' in result.html
True
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from docnav.blocks import Block, CodeFence, DiagramFence, Document, Heading, Prose
from docnav.classifier import parse_document
from docnav.config import RenderSettings
from docnav.slugs import SlugRegistry
from docnav.toc import build_toc

from .markup import HtmlContentRenderer
from .models import AnnotatedHtml

if typ.TYPE_CHECKING:
    from docnav.config import NavigationSettings


class DocumentRenderer:
    """Render documents block by block with shared settings."""

    def __init__(
        self,
        settings: RenderSettings | None = None,
        *,
        toc_max_level: int | None = None,
    ) -> None:
        """Initialize the renderer.

        Parameters
        ----------
        settings : RenderSettings, optional
            Diagram keyword, Pygments style, and permalink options. Defaults
            to :class:`RenderSettings` defaults.
        toc_max_level : int, optional
            Deepest heading level listed in the TOC; ``None`` lists all.
        """
        self.settings = settings or RenderSettings()
        self.toc_max_level = toc_max_level
        self.markup = HtmlContentRenderer(
            self.settings.pygments_style,
            diagram_class=self.settings.diagram_class,
            diagram_keyword=self.settings.diagram_keyword,
            permalink_symbol=(
                self.settings.permalink_symbol if self.settings.permalinks else None
            ),
        )

    @classmethod
    def from_settings(
        cls, render: RenderSettings, navigation: NavigationSettings
    ) -> DocumentRenderer:
        """Build a renderer whose TOC depth follows the navigation settings."""
        return cls(render, toc_max_level=navigation.toc_max_level)

    @property
    def stylesheet(self) -> str:
        """Return the Pygments CSS for highlighted code."""
        return self.markup.stylesheet

    def parse(
        self, text: str, *, reserved_ids: cabc.Iterable[str] = ()
    ) -> Document:
        """Classify ``text`` and assign slugs, avoiding ``reserved_ids``."""
        return parse_document(
            text,
            self.settings.diagram_keyword,
            registry=SlugRegistry(reserved=reserved_ids),
        )

    def render(self, document: Document) -> AnnotatedHtml:
        """Render every block of ``document`` and build its TOC.

        Parameters
        ----------
        document : Document
            Classified document with slugs assigned.

        Returns
        -------
        AnnotatedHtml
            The HTML fragment, the TOC forest, and the source document.
        """
        references = "\n".join(ref.as_markdown() for ref in document.references)
        parts = [self._render_block(block, references) for block in document]
        html = "\n".join(part for part in parts if part)
        toc = build_toc(document.headings, max_level=self.toc_max_level)
        return AnnotatedHtml(html=html, toc=toc, document=document)

    def render_text(
        self, text: str, *, reserved_ids: cabc.Iterable[str] = ()
    ) -> AnnotatedHtml:
        """Parse and render ``text`` in one call."""
        return self.render(self.parse(text, reserved_ids=reserved_ids))

    def _render_block(self, block: Block, references: str = "") -> str:
        match block:
            case Heading(level=level, text=text, slug=slug):
                return self.markup.heading(level, slug, text, references)
            case CodeFence() as fence:
                return self.markup.code_block(fence.content, fence.lexer_name)
            case DiagramFence(content=content):
                return self.markup.diagram_block(content)
            case Prose(text=text, raw=True):
                return self.markup.unparsed_block(text)
            case Prose(text=text):
                return self.markup.markdown(text, references)
            case _:
                msg = f"Unsupported block type: {type(block).__name__}"
                raise TypeError(msg)


def render_markdown(
    text: str, settings: RenderSettings | None = None
) -> AnnotatedHtml:
    """Render markdown ``text`` into annotated HTML and a TOC."""
    return DocumentRenderer(settings).render_text(text)


__all__ = ["DocumentRenderer", "render_markdown"]
