"""Shared dataclasses used by the render pipeline."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from docnav.blocks import Document, Heading
    from docnav.toc import Toc


@dc.dataclass(frozen=True, slots=True)
class AnnotatedHtml:
    """Result of rendering one document version.

    Attributes
    ----------
    html : str
        HTML fragment; headings carry ``id`` attributes equal to their slugs.
    toc : Toc
        Table-of-contents forest for the sidebar.
    document : Document
        The classified document the HTML was rendered from.
    """

    html: str
    toc: Toc
    document: Document

    @property
    def headings(self) -> list[Heading]:
        """Return the rendered headings in document order."""
        return self.document.headings

    @property
    def slugs(self) -> list[str]:
        """Return every heading slug present in the HTML."""
        return self.document.slugs


__all__ = ["AnnotatedHtml"]
