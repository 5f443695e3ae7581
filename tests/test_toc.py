"""Unit tests for folding headings into the table-of-contents forest.

Usage
-----
Run ``pytest tests/test_toc.py`` after installing the test extra.
"""

from __future__ import annotations

from docnav.blocks import Heading
from docnav.toc import TocEntry, build_toc, flatten_toc, toc_slugs, toc_to_list


def _headings(*levels: int) -> list[Heading]:
    return [
        Heading(level=level, text=f"H{idx}", slug=f"h{idx}")
        for idx, level in enumerate(levels)
    ]


def test_skipped_levels_nest_under_nearest_shallower_heading() -> None:
    toc = build_toc(_headings(1, 3, 2, 1))
    assert [entry.slug for entry in toc] == ["h0", "h3"]
    assert [child.slug for child in toc[0].children] == ["h1", "h2"], (
        "both the h3 and the following h2 belong directly to the first h1"
    )
    assert toc[1].children == []


def test_pre_order_walk_preserves_document_order() -> None:
    headings = _headings(2, 3, 3, 1, 4, 2, 6, 1)
    toc = build_toc(headings)
    assert toc_slugs(toc) == [h.slug for h in headings]


def test_flatten_reports_depth() -> None:
    toc = build_toc(_headings(1, 2, 3, 2))
    depths = [(entry.slug, depth) for entry, depth in flatten_toc(toc)]
    assert depths == [("h0", 0), ("h1", 1), ("h2", 2), ("h3", 1)]


def test_empty_input_yields_empty_forest() -> None:
    assert build_toc([]) == []


def test_first_heading_need_not_be_level_one() -> None:
    toc = build_toc(_headings(3, 2, 3))
    assert [entry.slug for entry in toc] == ["h0", "h1"]
    assert toc[1].children[0].slug == "h2"


def test_equal_levels_are_siblings() -> None:
    toc = build_toc(_headings(2, 2, 2))
    assert [entry.slug for entry in toc] == ["h0", "h1", "h2"]


def test_max_level_omits_deeper_headings() -> None:
    toc = build_toc(_headings(1, 2, 5, 2), max_level=2)
    assert toc_slugs(toc) == ["h0", "h1", "h3"]


def test_entries_carry_title_and_level() -> None:
    toc = build_toc([Heading(level=2, text="Use **it**", slug="use-it", title="Use it")])
    assert toc == [TocEntry(title="Use it", slug="use-it", level=2)]


def test_toc_to_list_nests_plain_dictionaries() -> None:
    toc = build_toc(_headings(1, 2))
    assert toc_to_list(toc) == [
        {
            "title": "H0",
            "slug": "h0",
            "level": 1,
            "children": [{"title": "H1", "slug": "h1", "level": 2, "children": []}],
        }
    ]
