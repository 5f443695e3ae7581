"""Fold a flat heading list into a table-of-contents forest.

Each heading becomes a child of the most recent preceding heading with a
strictly smaller level, or a new root when there is none. Levels that a
document skips are not invented: an ``h3`` right after an ``h1`` nests
directly under it.

Example
-------
>>> from docnav.blocks import Heading
>>> from docnav.toc import build_toc
>>> toc = build_toc([Heading(1, "A", "a"), Heading(3, "B", "b"), Heading(2, "C", "c")])
>>> [child.slug for child in toc[0].children]
['b', 'c']
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ


class HeadingLike(typ.Protocol):
    """Anything exposing a heading's plain title, slug, and level."""

    @property
    def title(self) -> str: ...

    @property
    def slug(self) -> str: ...

    @property
    def level(self) -> int: ...


@dc.dataclass(slots=True)
class TocEntry:
    """A node in the table of contents.

    Attributes
    ----------
    title : str
        Heading text shown in the sidebar.
    slug : str
        Anchor of the heading element, carried as data so the sidebar never
        re-derives it from text.
    level : int
        Original heading level.
    children : list[TocEntry]
        Nested entries in document order.
    """

    title: str
    slug: str
    level: int
    children: list[TocEntry] = dc.field(default_factory=list)

    def as_dict(self) -> dict[str, typ.Any]:
        """Return the entry and its descendants as plain nested dictionaries."""
        return {
            "title": self.title,
            "slug": self.slug,
            "level": self.level,
            "children": [child.as_dict() for child in self.children],
        }


Toc = list[TocEntry]


def build_toc(
    headings: cabc.Iterable[HeadingLike], *, max_level: int | None = None
) -> Toc:
    """Build the TOC forest for ``headings``.

    Parameters
    ----------
    headings : Iterable[HeadingLike]
        Headings in document order.
    max_level : int, optional
        Omit headings deeper than this level. Their elements keep their ids;
        they are only left out of the sidebar.

    Returns
    -------
    Toc
        Top-level entries; empty when there are no headings.
    """
    roots: Toc = []
    stack: list[TocEntry] = []
    for heading in headings:
        if max_level is not None and heading.level > max_level:
            continue
        entry = TocEntry(title=heading.title, slug=heading.slug, level=heading.level)
        while stack and stack[-1].level >= entry.level:
            stack.pop()
        if stack:
            stack[-1].children.append(entry)
        else:
            roots.append(entry)
        stack.append(entry)
    return roots


def flatten_toc(toc: Toc) -> cabc.Iterator[tuple[TocEntry, int]]:
    """Yield ``(entry, depth)`` pairs in pre-order; roots have depth 0."""
    pending: list[tuple[TocEntry, int]] = [(entry, 0) for entry in reversed(toc)]
    while pending:
        entry, depth = pending.pop()
        yield entry, depth
        pending.extend((child, depth + 1) for child in reversed(entry.children))


def toc_slugs(toc: Toc) -> list[str]:
    """Return every slug in the TOC in document order."""
    return [entry.slug for entry, _depth in flatten_toc(toc)]


def toc_to_list(toc: Toc) -> list[dict[str, typ.Any]]:
    """Return the TOC as a nested list of dictionaries for templates and JSON."""
    return [entry.as_dict() for entry in toc]


__all__ = [
    "HeadingLike",
    "Toc",
    "TocEntry",
    "build_toc",
    "flatten_toc",
    "toc_slugs",
    "toc_to_list",
]
