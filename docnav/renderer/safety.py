"""Markdown extension that keeps author-supplied markup inert.

Prose is rendered with Python-Markdown, which passes raw HTML through by
default. :class:`SafeMarkupExtension` turns raw HTML blocks and inline tags
into escaped text and strips link targets with script-capable schemes, so a
document can never inject markup or element ids into the rendered page.
"""

from __future__ import annotations

import typing as typ
from urllib.parse import urlsplit

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any

UNSAFE_SCHEMES = frozenset({"javascript", "vbscript", "file", "data"})
SAFE_DATA_IMAGES = (
    "data:image/png",
    "data:image/gif",
    "data:image/jpeg",
    "data:image/webp",
)
LINK_ATTRIBUTES = {"a": "href", "img": "src"}


class SafeMarkupExtension(Extension):
    """Escape raw HTML and drop unsafe link targets.

    Add this extension to a ``markdown.Markdown`` instance to mirror a
    ``html_input: escape`` / ``allow_unsafe_links: false`` policy: raw HTML
    shows up as literal text and ``javascript:`` style targets are removed.
    """

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Disable raw HTML handling and register the link sanitizer."""
        md.preprocessors.deregister("html_block")
        md.inlinePatterns.deregister("html")
        md.treeprocessors.register(
            UnsafeLinkTreeprocessor(md), "docnav_unsafe_links", 15
        )


class UnsafeLinkTreeprocessor(Treeprocessor):
    """Remove ``href``/``src`` attributes that use script-capable schemes."""

    def run(self, root: Element) -> Element:
        """Strip unsafe targets from anchors and images in the parsed tree."""
        for element in root.iter():
            attribute = LINK_ATTRIBUTES.get(element.tag)
            if attribute is None:
                continue
            if is_unsafe_target(element.get(attribute)):
                del element.attrib[attribute]
        return root


def is_unsafe_target(target: str | None) -> bool:
    """Return whether ``target`` uses a scheme that can run script."""
    if not target:
        return False
    compact = "".join(target.split()).lower()
    if compact.startswith(SAFE_DATA_IMAGES):
        return False
    scheme = urlsplit(compact).scheme
    return scheme in UNSAFE_SCHEMES


__all__ = ["SafeMarkupExtension", "UnsafeLinkTreeprocessor", "is_unsafe_target"]
