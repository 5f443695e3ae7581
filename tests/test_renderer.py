"""Tests for rendering classified documents into annotated HTML.

The assertions parse the rendered fragment with BeautifulSoup and check the
contract the navigation layer depends on: every TOC slug resolves to exactly
one element id, code blocks carry their ``data-language`` tag, diagram
targets keep their source text, and author-supplied markup stays inert.

Usage
-----
Run ``pytest tests/test_renderer.py`` after installing the test extra.
"""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from docnav.blocks import CodeFence
from docnav.config import RenderSettings
from docnav.renderer import DocumentRenderer, render_markdown
from docnav.toc import toc_slugs

EXAMPLE = "# Intro\n\ntext\n\n## Details\n\n```js\nx\n```\n\n## Details\n"


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def test_end_to_end_example() -> None:
    result = render_markdown(EXAMPLE)
    assert [entry.slug for entry in result.toc] == ["intro"]
    assert toc_slugs(result.toc) == ["intro", "details", "details-2"]
    fences = [block for block in result.document if isinstance(block, CodeFence)]
    assert [fence.language for fence in fences] == ["js"]

    soup = _soup(result.html)
    assert [h.get("id") for h in soup.find_all(["h1", "h2"])] == [
        "intro",
        "details",
        "details-2",
    ]
    block = soup.select_one('div.codehilite[data-language="js"]')
    assert block is not None, "expected a highlighted block tagged as js"


def test_every_toc_slug_resolves_to_exactly_one_element() -> None:
    markdown = (
        "# Guide\n\n## Setup\n\n### Setup\n\n## 设计模式\n\n#### !!!\n\n"
        "## Setup\n\n[link](#setup)\n"
    )
    result = render_markdown(markdown)
    soup = _soup(result.html)
    for slug in toc_slugs(result.toc):
        assert len(soup.find_all(id=slug)) == 1, f"slug {slug!r} must match one element"


def test_heading_has_permalink_before_text() -> None:
    soup = _soup(render_markdown("## Getting Started\n").html)
    heading = soup.find("h2")
    anchor = heading.find("a", class_="heading-permalink")
    assert anchor is not None
    assert anchor.get("href") == "#getting-started"
    assert anchor.get("aria-hidden") == "true"
    assert heading.contents[0] is anchor, "permalink is inserted before the text"


def test_permalinks_can_be_disabled() -> None:
    settings = RenderSettings(permalinks=False)
    soup = _soup(render_markdown("## Setup\n", settings).html)
    assert soup.find("a", class_="heading-permalink") is None
    assert soup.find("h2").get_text() == "Setup"


def test_heading_inline_markup_is_rendered() -> None:
    soup = _soup(render_markdown("## Use `docnav` **now**\n").html)
    heading = soup.find("h2", id="use-docnav-now")
    assert heading.find("code").get_text() == "docnav"
    assert heading.find("strong").get_text() == "now"


def test_numbered_heading_text_is_not_a_list() -> None:
    soup = _soup(render_markdown("## 1. Intro\n").html)
    heading = soup.find("h2")
    assert heading.find("ol") is None
    assert "1. Intro" in heading.get_text()


def test_code_block_without_language_has_empty_tag() -> None:
    soup = _soup(render_markdown("```\nplain <b>\n```\n").html)
    block = soup.select_one('div.codehilite[data-language=""]')
    assert block is not None
    assert "plain <b>" in block.get_text()
    assert block.find("b") is None


def test_unknown_language_falls_back_to_plain_text() -> None:
    soup = _soup(render_markdown("```nosuchlang\nx = 1\n```\n").html)
    block = soup.select_one("div.codehilite")
    assert block.get("data-language") == "nosuchlang"
    assert "x = 1" in block.get_text()


def test_info_string_extras_are_ignored_for_highlighting() -> None:
    soup = _soup(render_markdown("```rust,no_run\nfn main() {}\n```\n").html)
    block = soup.select_one("div.codehilite")
    assert block.get("data-language") == "rust"


def test_diagram_target_keeps_source_text() -> None:
    source = "graph TD\n  A --> B\n"
    soup = _soup(render_markdown(f"```mermaid\n{source}```\n").html)
    target = soup.select_one("div.mermaid")
    assert target is not None, "diagram fences render as client targets"
    assert target.get("data-diagram") == "mermaid"
    assert target.get_text() == source
    assert soup.select_one("div.codehilite") is None


def test_unterminated_fence_is_shown_verbatim() -> None:
    markdown = "# Title\n\nBefore\n\n```js\nunterminated <x>\n"
    soup = _soup(render_markdown(markdown).html)
    assert soup.find("h1", id="title") is not None
    assert soup.find("p").get_text() == "Before"
    unparsed = soup.select_one("pre.md-unparsed")
    assert unparsed.get_text() == "```js\nunterminated <x>"


def test_raw_html_cannot_inject_ids() -> None:
    result = render_markdown('# Intro\n\n<div id="intro">fake</div>\n')
    soup = _soup(result.html)
    assert len(soup.find_all(id="intro")) == 1
    assert '<div id="intro">' in soup.get_text()


def test_inline_script_is_escaped() -> None:
    soup = _soup(render_markdown("Hello <script>alert(1)</script>\n").html)
    assert soup.find("script") is None
    assert "<script>alert(1)</script>" in soup.get_text()


@pytest.mark.parametrize(
    "target", ["javascript:alert(1)", "JavaScript:void(0)", "data:text/html,hi"]
)
def test_unsafe_link_targets_are_removed(target: str) -> None:
    soup = _soup(render_markdown(f"[x]({target})\n").html)
    link = soup.find("a")
    assert link is not None
    assert link.get("href") is None


def test_safe_link_targets_are_kept() -> None:
    soup = _soup(render_markdown("[x](https://example.com/a) [y](#intro)\n").html)
    assert [a.get("href") for a in soup.find_all("a")] == [
        "https://example.com/a",
        "#intro",
    ]


def test_tables_and_nested_fences_render_as_prose() -> None:
    markdown = (
        "| a | b |\n|---|---|\n| 1 | 2 |\n\n"
        "- item\n\n  ```rust\n  fn main() {}\n  ```\n"
    )
    soup = _soup(render_markdown(markdown).html)
    assert soup.find("table") is not None
    blocks = soup.select(".codehilite")
    assert any(block.get("data-language") == "rust" for block in blocks)
    assert any("fn main" in block.get_text() for block in blocks)


def test_render_does_not_mutate_document() -> None:
    renderer = DocumentRenderer()
    document = renderer.parse(EXAMPLE)
    first = renderer.render(document)
    second = renderer.render(document)
    assert first.html == second.html
    assert first.document is document
    assert document.slugs == ["intro", "details", "details-2"]


def test_reserved_ids_shift_heading_slugs() -> None:
    result = DocumentRenderer().render_text("# Intro\n", reserved_ids=["intro"])
    assert result.slugs == ["intro-2"]


def test_toc_max_level_limits_sidebar_only() -> None:
    result = DocumentRenderer(toc_max_level=2).render_text("# A\n\n## B\n\n### C\n")
    assert toc_slugs(result.toc) == ["a", "b"]
    assert _soup(result.html).find("h3", id="c") is not None


def test_stylesheet_targets_code_blocks() -> None:
    assert ".codehilite" in DocumentRenderer().stylesheet


def test_reference_links_resolve_across_blocks() -> None:
    markdown = (
        "# [Guide][home]\n\nSee [the docs][d].\n\n- also [here][D]\n\n"
        '[d]: https://example.com/docs "Docs"\n'
        "[home]: https://example.com/\n"
    )
    soup = _soup(render_markdown(markdown).html)
    links = {
        a.get_text(): a
        for a in soup.find_all("a")
        if a.get("href", "").startswith("http")
    }
    assert links["the docs"].get("href") == "https://example.com/docs"
    assert links["the docs"].get("title") == "Docs"
    assert links["here"].get("href") == "https://example.com/docs"
    assert links["Guide"].get("href") == "https://example.com/"
    assert "[d]:" not in soup.get_text(), "definitions are not shown as text"


def test_reference_definitions_are_kept_on_the_document() -> None:
    result = render_markdown("Text.\n\n[d]: https://example.com\n")
    assert [(ref.label.lower(), ref.href) for ref in result.document.references] == [
        ("d", "https://example.com")
    ]


def test_unsafe_reference_targets_never_become_links() -> None:
    soup = _soup(render_markdown("[x][bad]\n\n[bad]: javascript:alert(1)\n").html)
    hrefs = [a.get("href", "") for a in soup.find_all("a")]
    assert not any(href.lower().startswith("javascript") for href in hrefs)


def test_heading_shaped_like_link_definition_keeps_its_text() -> None:
    result = render_markdown("# [foo]: /url\n")
    heading = _soup(result.html).find("h1")
    assert result.slugs == ["foo-url"]
    assert heading.get_text().endswith("[foo]: /url")


def test_task_lists_render_checkboxes() -> None:
    soup = _soup(render_markdown("- [x] done\n- [ ] todo\n").html)
    boxes = soup.select("li input[type=checkbox]")
    assert len(boxes) == 2, "each task item gets a checkbox"
    assert boxes[0].has_attr("checked")
    assert not boxes[1].has_attr("checked")
    assert "[x]" not in soup.get_text()


def test_bare_urls_become_links() -> None:
    soup = _soup(render_markdown("Read https://example.com/guide today.\n").html)
    link = soup.find("a")
    assert link is not None, "bare URLs are linked"
    assert link.get("href") == "https://example.com/guide"
