"""Assign stable, URL-safe, collision-free identifiers to headings.

Slugs show up in shareable URLs as hash fragments, so assignment must be a
pure function of the ordered heading texts: rendering the same document twice
yields the same slugs. Normalization keeps letters from every script (CJK
headings keep their characters) and lowercases only where case exists.

Example
-------
>>> from docnav.slugs import SlugRegistry
>>> registry = SlugRegistry()
>>> [registry.assign(t) for t in ["Intro", "Details", "Details", "!!!"]]
['intro', 'details', 'details-2', 'heading-3']
>>> SlugRegistry().assign("设计模式 概述")
'设计模式-概述'
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import unicodedata

from ._constants import FALLBACK_SLUG_TEMPLATE

logger = logging.getLogger(__name__)

SLUG_HYPHEN = "-"
_LETTER_CATEGORIES = frozenset({"L", "M"})
_DIGIT_CATEGORY = "Nd"


def _is_slug_char(char: str) -> bool:
    if char == SLUG_HYPHEN:
        return True
    category = unicodedata.category(char)
    return category[0] in _LETTER_CATEGORIES or category == _DIGIT_CATEGORY


def slugify(text: str) -> str:
    """Convert ``text`` into a lowercase hyphen-separated slug.

    Letters (with their combining marks), decimal digits, and hyphens are
    kept. Every run of any other characters becomes a single hyphen, and
    leading/trailing hyphens are dropped, so ``"a - b"`` becomes ``"a---b"``.
    Returns an empty string when nothing survives.

    Examples
    --------
    >>> slugify("Getting Started!")
    'getting-started'
    >>> slugify("x² and ½")
    'x-and'
    """
    normalized = unicodedata.normalize("NFC", text).strip().lower()
    pieces: list[str] = []
    separator_pending = False
    for char in normalized:
        if not _is_slug_char(char):
            separator_pending = True
            continue
        if separator_pending:
            pieces.append(SLUG_HYPHEN)
        separator_pending = False
        pieces.append(char)
    return "".join(pieces).strip(SLUG_HYPHEN)


class SlugRegistry:
    """Per-render bookkeeping of issued slugs.

    One registry lives for exactly one document render and is discarded
    afterwards. Ids claimed elsewhere on the page (manual anchors, template
    elements) can be reserved up front so headings never reuse them.
    """

    def __init__(self, reserved: cabc.Iterable[str] = ()) -> None:
        self._seen: dict[str, int] = {}
        self._issued: set[str] = set()
        self._ordinal = 0
        for slug in reserved:
            self.reserve(slug)

    @property
    def counts(self) -> dict[str, int]:
        """Return how many times each normalized heading text was seen."""
        return dict(self._seen)

    def reserve(self, slug: str) -> None:
        """Mark ``slug`` as taken without consuming a heading ordinal."""
        self._issued.add(slug)

    def assign(self, heading_text: str) -> str:
        """Return the slug for the next heading in document order.

        Parameters
        ----------
        heading_text : str
            Plain heading text.

        Returns
        -------
        str
            The normalized text, the positional fallback ``heading-<n>`` when
            normalization leaves nothing, or either of those with the
            smallest ``-2``, ``-3``, ... suffix that avoids a collision.
        """
        ordinal = self._ordinal
        self._ordinal += 1
        base = slugify(heading_text) or FALLBACK_SLUG_TEMPLATE.format(ordinal=ordinal)
        self._seen[base] = self._seen.get(base, 0) + 1
        candidate = base
        suffix = 2
        while candidate in self._issued:
            candidate = f"{base}-{suffix}"
            suffix += 1
        if candidate != base:
            logger.debug("Slug %r already issued; using %r", base, candidate)
        self._issued.add(candidate)
        return candidate


__all__ = ["SlugRegistry", "slugify"]
