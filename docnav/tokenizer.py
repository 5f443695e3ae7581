r"""Split markdown into top-level block tokens using markdown-it-py.

The classifier only needs a coarse view of the source: headings with their
level, fenced blocks with their info-string, and everything else as verbatim
markdown. This module adapts markdown-it-py's token stream to that contract
(:class:`BlockToken`) and flags fences that never see a closing delimiter so
they can degrade to prose.

Example
-------
>>> from docnav.tokenizer import tokenize
>>> [t.kind for t in tokenize("# Title\n\nBody\n\n```js\nx\n```\n")]
['heading', 'paragraph', 'fence']
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from markdown_it import MarkdownIt

from .blocks import LinkDefinition

if typ.TYPE_CHECKING:
    from markdown_it.token import Token

TokenKind = typ.Literal["paragraph", "heading", "fence", "other"]
TOKEN_KINDS: frozenset[str] = frozenset({"paragraph", "heading", "fence", "other"})


@dc.dataclass(frozen=True, slots=True)
class BlockToken:
    """Block-level token handed to :func:`docnav.classifier.classify`.

    Attributes
    ----------
    kind : str
        One of ``"paragraph"``, ``"heading"``, ``"fence"``, or ``"other"``.
    text : str
        Markdown source of the block. For headings this is the inline text
        without the ``#`` markers; for fences it is the body between the
        delimiters, or the whole raw block when ``closed`` is ``False``.
    level : int, optional
        Heading level as written in the source.
    info : str, optional
        Fence info-string.
    title : str
        Plain-text heading content with inline markup removed.
    closed : bool
        ``False`` when a fence reaches the end of its container unterminated.
    """

    kind: str
    text: str
    level: int | None = None
    info: str | None = None
    title: str = ""
    closed: bool = True


def _build_parser() -> MarkdownIt:
    return MarkdownIt("commonmark").enable("table")


def _source_lines(text: str) -> list[str]:
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def _slice_source(lines: list[str], token: Token) -> str:
    if token.map is None:
        return token.content
    start, end = token.map
    return "\n".join(lines[start:end])


def _plain_text(inline: Token) -> str:
    """Flatten an inline token into the text a reader would see."""
    parts: list[str] = []
    for child in inline.children or []:
        match child.type:
            case "text" | "code_inline":
                parts.append(child.content)
            case "softbreak" | "hardbreak":
                parts.append(" ")
            case "image":
                parts.append(_plain_text(child))
            case _:
                continue
    return "".join(parts).strip()


def _fence_is_closed(lines: list[str], token: Token) -> bool:
    """Return whether the fence's last source line is a closing delimiter."""
    if token.map is None:
        return True
    start, end = token.map
    if end - start < 2 or end > len(lines):
        return False
    closing = lines[end - 1].strip()
    marker = token.markup[:1]
    return (
        bool(marker)
        and len(closing) >= len(token.markup)
        and set(closing) == {marker}
    )


def tokenize(
    text: str, env: dict[str, typ.Any] | None = None
) -> list[BlockToken]:
    """Return the top-level block tokens of ``text`` in document order.

    Parameters
    ----------
    text : str
        Raw markdown source.
    env : dict, optional
        Parser environment filled by markdown-it; reference-style link
        definitions, which produce no token, end up under ``"references"``.
        Pass it to :func:`link_definitions`.

    Returns
    -------
    list[BlockToken]
        One token per top-level block. Container blocks (lists, quotes,
        tables, raw HTML, indented code, rules) are reported as ``"other"``
        with their source lines kept verbatim.
    """
    lines = _source_lines(text)
    tokens = _build_parser().parse(text, env if env is not None else {})
    result: list[BlockToken] = []
    for idx, token in enumerate(tokens):
        if token.level != 0 or token.nesting == -1:
            continue
        match token.type:
            case "heading_open":
                inline = tokens[idx + 1]
                result.append(
                    BlockToken(
                        kind="heading",
                        text=inline.content,
                        level=int(token.tag[1:]),
                        title=_plain_text(inline),
                    )
                )
            case "paragraph_open":
                result.append(
                    BlockToken(kind="paragraph", text=_slice_source(lines, token))
                )
            case "fence":
                closed = _fence_is_closed(lines, token)
                body = token.content if closed else _slice_source(lines, token)
                result.append(
                    BlockToken(
                        kind="fence",
                        text=body,
                        info=token.info.strip(),
                        closed=closed,
                    )
                )
            case _:
                result.append(BlockToken(kind="other", text=_slice_source(lines, token)))
    return result


def link_definitions(env: typ.Mapping[str, typ.Any]) -> tuple[LinkDefinition, ...]:
    r"""Return the link definitions markdown-it collected while tokenizing.

    Definitions without a destination are skipped.

    Example
    -------
    >>> env = {}
    >>> _ = tokenize("See [docs][d].\n\n[d]: https://example.com\n", env)
    >>> link_definitions(env)
    (LinkDefinition(label='D', href='https://example.com', title=''),)
    """
    references = env.get("references") or {}
    return tuple(
        LinkDefinition(
            label=label,
            href=entry.get("href") or "",
            title=entry.get("title") or "",
        )
        for label, entry in references.items()
        if entry.get("href")
    )


__all__ = ["TOKEN_KINDS", "BlockToken", "TokenKind", "link_definitions", "tokenize"]
