"""Unit tests for heading slug normalization and collision handling.

These tests cover :func:`docnav.slugs.slugify` and
:class:`docnav.slugs.SlugRegistry`: deterministic assignment across renders,
uniqueness within a render, the positional fallback for headings with no
sluggable characters, and scripts without letter case.

Usage
-----
Run ``pytest tests/test_slugs.py`` after installing the test extra
(``pip install -e .[test]``).
"""

from __future__ import annotations

import pytest

from docnav.slugs import SlugRegistry, slugify


def _assign_all(texts: list[str], registry: SlugRegistry | None = None) -> list[str]:
    registry = registry or SlugRegistry()
    return [registry.assign(text) for text in texts]


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Intro", "intro"),
        ("Getting Started!", "getting-started"),
        ("  -- Foo -- Bar --  ", "foo----bar"),
        ("a - b", "a---b"),
        ("pre-built tools", "pre-built-tools"),
        ("snake_case name", "snake-case-name"),
        ("Café Déjà Vu", "café-déjà-vu"),
        ("设计模式：概述", "设计模式-概述"),
        ("Hello 世界 World", "hello-世界-world"),
        ("हिन्दी", "हिन्दी"),
        ("Version 2.0", "version-2-0"),
        ("x²", "x"),
        ("½ cup", "cup"),
        ("!!!", ""),
        ("🎉", ""),
    ],
)
def test_slugify_normalizes_text(text: str, expected: str) -> None:
    assert slugify(text) == expected, f"unexpected slug for {text!r}"


def test_assignment_is_deterministic() -> None:
    texts = ["Intro", "Details", "Details", "", "Intro"]
    first = _assign_all(texts)
    second = _assign_all(texts)
    assert first == second, "the same headings must always yield the same slugs"


def test_duplicates_receive_numeric_suffixes() -> None:
    assert _assign_all(["Intro", "Details", "Details"]) == [
        "intro",
        "details",
        "details-2",
    ]


def test_slugs_are_unique_even_when_suffixes_collide() -> None:
    slugs = _assign_all(["A", "a", "A!", "a-2", "a"])
    assert len(set(slugs)) == len(slugs), f"duplicate slug issued: {slugs}"
    assert slugs[:3] == ["a", "a-2", "a-3"]


def test_empty_normalization_uses_heading_ordinal() -> None:
    assert _assign_all(["Intro", "!!!", "🎉"]) == ["intro", "heading-1", "heading-2"]


def test_fallback_slug_avoids_existing_text_slug() -> None:
    slugs = _assign_all(["Heading 1", "???"])
    assert slugs == ["heading-1", "heading-1-2"]


def test_reserved_ids_are_never_issued() -> None:
    registry = SlugRegistry(reserved=["docnav-toc"])
    assert registry.assign("Docnav TOC") == "docnav-toc-2"


def test_reserving_does_not_consume_ordinals() -> None:
    registry = SlugRegistry(reserved=["intro"])
    assert registry.assign("") == "heading-0"


def test_counts_track_normalized_text() -> None:
    registry = SlugRegistry()
    _assign_all(["A", "a", "B"], registry)
    assert registry.counts == {"a": 2, "b": 1}


def test_hyphens_in_heading_text_are_kept() -> None:
    assert _assign_all(["a - b", "A - B", "pre-built"]) == [
        "a---b",
        "a---b-2",
        "pre-built",
    ]
