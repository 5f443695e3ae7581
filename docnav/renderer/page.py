"""Wrap a rendered document in a navigable HTML page.

:class:`PageBuilder` renders the document body, builds the TOC sidebar, and
fills the ``doc_page.jinja`` template. The template carries a small script
that runs the same navigation protocol as
:class:`~docnav.navigation.NavigationSynchronizer` in the browser: debounced
scroll tracking, TOC clicks that write the hash and scroll smoothly, and a
bounded wait for the initial hash target. It also loads the diagram library
when the document contains diagram fences.

Example
-------
>>> from docnav.renderer import PageBuilder
>>> from docnav.source import SourceDocument
>>> html = PageBuilder().render(SourceDocument("# Intro\\n", "intro", "intro.md"))
>>> 'data-toc-slug="intro"' in html
True
"""

from __future__ import annotations

import datetime as dt
import logging
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from docnav._constants import PAGE_RESERVED_IDS
from docnav.blocks import DiagramFence
from docnav.config import DocnavConfig
from docnav.toc import flatten_toc

from .document import DocumentRenderer

if typ.TYPE_CHECKING:
    from docnav.source import SourceDocument

    from .models import AnnotatedHtml

logger = logging.getLogger(__name__)


class PageBuilder:
    """Render markdown sources into themed, navigable HTML pages."""

    def __init__(
        self, config: DocnavConfig | None = None, *, templates_dir: Path | None = None
    ) -> None:
        """Initialize the builder with configuration and template context.

        Parameters
        ----------
        config : DocnavConfig, optional
            Render, navigation, and page settings; defaults apply when omitted.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package
            templates.
        """
        self.config = config or DocnavConfig()
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.renderer = DocumentRenderer.from_settings(
            self.config.render, self.config.navigation
        )
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("doc_page.jinja")

    def render(self, source: SourceDocument, *, title: str | None = None) -> str:
        """Return the complete HTML page for ``source``."""
        rendered = self.renderer.render_text(source.text, reserved_ids=PAGE_RESERVED_IDS)
        page_title = title or self._resolve_title(rendered, source)
        context = {
            "body_html": rendered.html,
            "toc_rows": self._build_toc_rows(rendered),
            "navigation": self._navigation_payload(rendered),
            "has_diagrams": any(isinstance(b, DiagramFence) for b in rendered.document),
            "diagram_selector": f".{self.config.render.diagram_class}",
            "page": self.config.page,
            "page_title": page_title,
            "html_title": f"{page_title} | {self.config.page.title_suffix}",
            "pygments_css": self.renderer.stylesheet,
            "source_location": source.location,
            "updated_at": source.updated_at,
            "generated_at": dt.datetime.now(dt.UTC),
        }
        return self.template.render(**context)

    def write(
        self, source: SourceDocument, output_path: Path, *, title: str | None = None
    ) -> Path:
        """Render ``source`` and write the page to ``output_path``."""
        html = self.render(source, title=title)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")
        logger.info("Rendered %s to %s", source.location, output_path)
        return output_path

    @staticmethod
    def _resolve_title(rendered: AnnotatedHtml, source: SourceDocument) -> str:
        """Use the first level-one heading, falling back to the source name."""
        for heading in rendered.headings:
            if heading.level == 1 and heading.title:
                return heading.title
        return source.name

    @staticmethod
    def _build_toc_rows(rendered: AnnotatedHtml) -> list[dict[str, typ.Any]]:
        """Flatten the TOC into sidebar rows with an indent per depth."""
        return [
            {
                "title": entry.title,
                "slug": entry.slug,
                "level": entry.level,
                "indent": depth,
            }
            for entry, depth in flatten_toc(rendered.toc)
        ]

    def _navigation_payload(self, rendered: AnnotatedHtml) -> dict[str, typ.Any]:
        """Return the settings the client script needs, in milliseconds."""
        nav = self.config.navigation
        return {
            "slugs": rendered.slugs,
            "threshold": nav.offset_threshold,
            "debounceMs": round(nav.debounce * 1000),
            "maxAttempts": nav.max_attempts,
            "retryIntervalMs": round(nav.retry_interval * 1000),
        }


__all__ = ["PageBuilder"]
