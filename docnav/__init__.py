r"""Render long-form markdown into navigable HTML with a synchronized TOC.

The package classifies markdown blocks, assigns stable heading slugs, folds
headings into a table of contents, renders annotated HTML, and provides the
state machine that keeps scroll position, URL hash, and TOC highlight in
step.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``render_markdown``: One-call render of markdown text.

Examples
--------
>>> from docnav import render_markdown
>>> render_markdown("# Intro\n\n## Details\n").slugs
['intro', 'details']
>>> from docnav import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main
from .renderer import render_markdown

__all__ = ["app", "main", "render_markdown"]
