"""Cyclopts CLI entrypoint for rendering navigable documentation pages.

The ``docnav`` console script renders a markdown file or URL into a
standalone HTML page with a synchronized TOC sidebar, or prints the document
outline as JSON. Typical usage is ``docnav render guide.md`` locally or in CI
and ``docnav toc guide.md`` to inspect the slugs a document will expose.

Examples
--------
Render a page next to its source:

>>> from docnav.cli import main
>>> main()  # doctest: +SKIP

Render into a custom file with a configuration:

>>> from docnav.cli import app
>>> app(
...     ["render", "docs/guide.md", "--output", "dist/guide.html", "--config", "docnav.yaml"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import json
import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import DocnavConfig, load_config
from .renderer import DocumentRenderer, PageBuilder
from .source import load_source
from .toc import build_toc, toc_to_list

app = App(name="docnav", config=cyclopts.config.Env("DOCNAV_", command=False))  # type: ignore[unknown-argument]


def _configure_logging(verbose: bool) -> None:
    """Send log records to stderr at INFO (or DEBUG when verbose)."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s:%(name)s:%(message)s")


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _resolve_config(config: Path | None, diagram_keyword: str | None) -> DocnavConfig:
    """Load the configuration and apply command-line overrides."""
    site_config = load_config(config)
    if diagram_keyword:
        render = dc.replace(site_config.render, diagram_keyword=diagram_keyword)
        site_config = dc.replace(site_config, render=render)
    return site_config


@app.command(help="Render a markdown document into a navigable HTML page.")
def render(
    source: typ.Annotated[str, Parameter(help="Markdown file path or http(s) URL")],
    *,
    output: typ.Annotated[
        Path | None,
        Parameter(help="Where to write the HTML (defaults to <name>.html)"),
    ] = None,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to docnav YAML config", env_var="DOCNAV_CONFIG")
    ] = None,
    diagram_keyword: typ.Annotated[
        str | None, Parameter(help="Fence info-string that marks diagram blocks")
    ] = None,
    title: typ.Annotated[str | None, Parameter(help="Override the page title")] = None,
    fragment: typ.Annotated[
        bool, Parameter(help="Write only the document HTML fragment")
    ] = False,
    verbose: typ.Annotated[bool, Parameter(help="Enable debug logging")] = False,
) -> None:
    """Render ``source`` and write the resulting HTML.

    Parameters
    ----------
    source : str
        Markdown file path or URL.
    output : Path or None, optional
        Output file; defaults to ``<source name>.html`` in the working
        directory.
    config : Path or None, optional
        Optional YAML configuration (overridable via ``DOCNAV_CONFIG``).
    diagram_keyword : str or None, optional
        Override for the configured diagram fence keyword.
    title : str or None, optional
        Page title; defaults to the first level-one heading.
    fragment : bool, optional
        Write only the rendered document HTML instead of a full page.
    verbose : bool, optional
        Emit debug logging.

    Returns
    -------
    None
        Writes the HTML file and prints its path.
    """
    _configure_logging(verbose)
    site_config = _resolve_config(config, diagram_keyword)
    document = load_source(source)
    output_path = output or Path(f"{document.name}.html")
    if fragment:
        renderer = DocumentRenderer.from_settings(
            site_config.render, site_config.navigation
        )
        rendered = renderer.render_text(document.text)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(rendered.html, encoding="utf-8")
    else:
        PageBuilder(site_config).write(document, output_path, title=title)
    print(f"wrote {_format_path(output_path)}")


@app.command(help="Print the table of contents of a markdown document as JSON.")
def toc(
    source: typ.Annotated[str, Parameter(help="Markdown file path or http(s) URL")],
    *,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to docnav YAML config", env_var="DOCNAV_CONFIG")
    ] = None,
    max_level: typ.Annotated[
        int | None, Parameter(help="Deepest heading level to include")
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Enable debug logging")] = False,
) -> None:
    """Print the nested TOC of ``source``.

    Parameters
    ----------
    source : str
        Markdown file path or URL.
    config : Path or None, optional
        Optional YAML configuration providing the diagram keyword.
    max_level : int or None, optional
        Deepest heading level to list; all levels when omitted.
    verbose : bool, optional
        Emit debug logging.
    """
    _configure_logging(verbose)
    site_config = load_config(config)
    document = load_source(source)
    parsed = DocumentRenderer(site_config.render).parse(document.text)
    outline = build_toc(parsed.headings, max_level=max_level)
    print(json.dumps(toc_to_list(outline), ensure_ascii=False, indent=2))


def main() -> None:
    """Invoke the Cyclopts application that powers the ``docnav`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
