r"""Block-level document model shared by the render pipeline.

A :class:`Document` is an ordered, immutable tuple of blocks produced by the
classifier. Each block is a frozen dataclass so that a render pass can never
mutate the document it was given; slug assignment returns a new document.

Example
-------
>>> from docnav.blocks import Document, Heading, Prose
>>> doc = Document((Heading(level=1, text="Intro", slug="intro"), Prose("Hi")))
>>> [h.slug for h in doc.headings]
['intro']
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

LEXER_NAME_SPLIT = re.compile(r"[\s,{]")


@dc.dataclass(frozen=True, slots=True)
class Prose:
    """Paragraphs, lists, tables, and anything else rendered as markdown.

    Attributes
    ----------
    text : str
        Markdown source of the block.
    raw : bool
        ``True`` when the block could not be classified (for example an
        unterminated fence); the renderer then shows ``text`` verbatim.
    """

    text: str
    raw: bool = False


@dc.dataclass(frozen=True, slots=True)
class Heading:
    """Section heading carrying its document-unique slug.

    Attributes
    ----------
    level : int
        Heading depth between 1 and 6.
    text : str
        Inline markdown source of the heading.
    slug : str
        Identifier assigned by :class:`~docnav.slugs.SlugRegistry`; empty
        until slugs are assigned.
    title : str
        Plain-text rendition of ``text`` used for slugs and the TOC.
    """

    level: int
    text: str
    slug: str = ""
    title: str = ""

    def __post_init__(self) -> None:
        if not self.title:
            object.__setattr__(self, "title", self.text.strip())


@dc.dataclass(frozen=True, slots=True)
class CodeFence:
    """Fenced block destined for syntax highlighting."""

    language: str
    content: str

    @property
    def lexer_name(self) -> str:
        """Return the first word of the info-string, used for lexer lookup."""
        return LEXER_NAME_SPLIT.split(self.language.strip(), maxsplit=1)[0]


@dc.dataclass(frozen=True, slots=True)
class DiagramFence:
    """Fenced block handed to the client diagram library untouched."""

    content: str


Block = Prose | Heading | CodeFence | DiagramFence


@dc.dataclass(frozen=True, slots=True)
class LinkDefinition:
    """Reference-style link target declared anywhere in the document.

    Attributes
    ----------
    label : str
        Normalized reference label (``[label]: href``).
    href : str
        Link destination.
    title : str
        Optional link title; empty when absent.
    """

    label: str
    href: str
    title: str = ""

    def as_markdown(self) -> str:
        """Return the definition as a markdown line prose renderers understand."""
        line = f"[{self.label}]: {self.href}"
        if not self.title:
            return line
        for opening, closing in ('""', "''", "()"):
            if closing not in self.title:
                return f"{line} {opening}{self.title}{closing}"
        return line


@dc.dataclass(frozen=True, slots=True)
class Document:
    """Ordered, immutable sequence of blocks for one version of a source text.

    ``references`` holds the reference-style link definitions of the whole
    source; prose and headings in any block may use them.
    """

    blocks: tuple[Block, ...] = ()
    references: tuple[LinkDefinition, ...] = ()

    def __iter__(self) -> typ.Iterator[Block]:
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    @property
    def headings(self) -> list[Heading]:
        """Return the heading blocks in document order."""
        return [block for block in self.blocks if isinstance(block, Heading)]

    @property
    def slugs(self) -> list[str]:
        """Return the assigned heading slugs in document order."""
        return [heading.slug for heading in self.headings]


__all__ = [
    "Block",
    "CodeFence",
    "DiagramFence",
    "Document",
    "Heading",
    "LinkDefinition",
    "Prose",
]
