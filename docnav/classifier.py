r"""Classify block tokens into prose, headings, code fences, and diagrams.

The classifier is the first stage of the render pipeline. It never drops a
block and never fails on malformed content: an unterminated fence becomes a
:class:`~docnav.blocks.Prose` block carrying the raw text verbatim. Tokens
that break the tokenizer contract itself raise :class:`TokenContractError`.

Example
-------
>>> from docnav.classifier import parse_document
>>> doc = parse_document("# Intro\n\n```mermaid\ngraph TD\n```\n")
>>> [type(block).__name__ for block in doc]
['Heading', 'DiagramFence']
>>> doc.slugs
['intro']
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import typing as typ

from ._constants import DEFAULT_DIAGRAM_KEYWORD, MAX_HEADING_LEVEL, MIN_HEADING_LEVEL
from .blocks import Block, CodeFence, DiagramFence, Document, Heading, Prose
from .slugs import SlugRegistry
from .tokenizer import TOKEN_KINDS, BlockToken, link_definitions, tokenize

logger = logging.getLogger(__name__)


class TokenContractError(TypeError):
    """Raised when the tokenizer hands over something that is not a block token."""


def _clamp_level(level: int | None) -> int:
    if level is None or not MIN_HEADING_LEVEL <= level <= MAX_HEADING_LEVEL:
        return MAX_HEADING_LEVEL
    return level


def _is_diagram(info: str | None, keyword: str) -> bool:
    return bool(keyword) and (info or "").strip().casefold() == keyword.casefold()


def _classify_token(token: BlockToken, diagram_keyword: str) -> Block:
    match token.kind:
        case "heading":
            return Heading(
                level=_clamp_level(token.level),
                text=token.text,
                title=token.title or token.text.strip(),
            )
        case "fence" if not token.closed:
            logger.debug("Unterminated fence kept as raw prose")
            return Prose(text=token.text, raw=True)
        case "fence" if _is_diagram(token.info, diagram_keyword):
            return DiagramFence(content=token.text)
        case "fence":
            return CodeFence(language=(token.info or "").strip(), content=token.text)
        case _:
            return Prose(text=token.text)


def classify(
    tokens: cabc.Iterable[BlockToken],
    diagram_keyword: str = DEFAULT_DIAGRAM_KEYWORD,
) -> Document:
    """Tag every token as prose, heading, code fence, or diagram fence.

    Parameters
    ----------
    tokens : Iterable[BlockToken]
        Block tokens in document order, as produced by
        :func:`docnav.tokenizer.tokenize`.
    diagram_keyword : str, optional
        Fence info-string (compared case-insensitively) that marks a block
        for client-side diagram rendering. Defaults to ``"mermaid"``.

    Returns
    -------
    Document
        One block per token. Heading slugs are left empty; see
        :func:`assign_slugs`.

    Raises
    ------
    TokenContractError
        If an item is not a :class:`BlockToken` or has an unknown ``kind``.
    """
    blocks: list[Block] = []
    for position, token in enumerate(tokens):
        if not isinstance(token, BlockToken) or token.kind not in TOKEN_KINDS:
            msg = f"Token #{position} does not satisfy the block token contract: {token!r}"
            raise TokenContractError(msg)
        blocks.append(_classify_token(token, diagram_keyword))
    return Document(tuple(blocks))


def assign_slugs(document: Document, registry: SlugRegistry | None = None) -> Document:
    """Return a copy of ``document`` whose headings carry unique slugs.

    Slugs are assigned in document order by a fresh :class:`SlugRegistry`
    unless one is supplied (for example with reserved ids).
    """
    registry = registry or SlugRegistry()
    blocks: list[Block] = []
    for block in document:
        if isinstance(block, Heading):
            block = dc.replace(block, slug=registry.assign(block.title))
        blocks.append(block)
    return dc.replace(document, blocks=tuple(blocks))


def parse_document(
    text: str,
    diagram_keyword: str = DEFAULT_DIAGRAM_KEYWORD,
    *,
    registry: SlugRegistry | None = None,
) -> Document:
    """Tokenize, classify, and slug ``text`` in a single pass.

    Reference-style link definitions found anywhere in ``text`` are attached
    to the returned document.
    """
    env: dict[str, typ.Any] = {}
    document = classify(tokenize(text, env), diagram_keyword)
    document = dc.replace(document, references=link_definitions(env))
    return assign_slugs(document, registry)


__all__ = ["TokenContractError", "assign_slugs", "classify", "parse_document"]
