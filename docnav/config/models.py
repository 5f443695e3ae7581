"""Typed dataclasses describing docnav configuration structures."""

from __future__ import annotations

import dataclasses as dc

from docnav._constants import (
    DEFAULT_DEBOUNCE_SECONDS,
    DEFAULT_DIAGRAM_CLASS,
    DEFAULT_DIAGRAM_KEYWORD,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_OFFSET_THRESHOLD,
    DEFAULT_RETRY_INTERVAL_SECONDS,
    DEFAULT_TOC_MAX_LEVEL,
)

DEFAULT_MERMAID_SRC = "https://cdn.jsdelivr.net/npm/mermaid@10/dist/mermaid.min.js"


class ConfigError(ValueError):
    """Raised when the configuration file is invalid."""


@dc.dataclass(frozen=True, slots=True)
class RenderSettings:
    """Options for the block renderer."""

    diagram_keyword: str = DEFAULT_DIAGRAM_KEYWORD
    diagram_class: str = DEFAULT_DIAGRAM_CLASS
    pygments_style: str = "github-dark"
    permalinks: bool = True
    permalink_symbol: str = "#"


@dc.dataclass(frozen=True, slots=True)
class NavigationSettings:
    """Timing and geometry for the scroll/hash/TOC synchronizer.

    Attributes
    ----------
    offset_threshold : float
        Distance in pixels from the viewport top at or above which a heading
        counts as the active section.
    debounce : float
        Quiet period in seconds that collapses a burst of scroll events.
    max_attempts : int
        How many times a pending target is looked up before giving up.
    retry_interval : float
        Delay in seconds between lookups of a pending target.
    toc_max_level : int | None
        Deepest heading level shown in the sidebar.
    """

    offset_threshold: float = DEFAULT_OFFSET_THRESHOLD
    debounce: float = DEFAULT_DEBOUNCE_SECONDS
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    retry_interval: float = DEFAULT_RETRY_INTERVAL_SECONDS
    toc_max_level: int | None = DEFAULT_TOC_MAX_LEVEL


@dc.dataclass(frozen=True, slots=True)
class PageSettings:
    """Chrome around the rendered document."""

    title_suffix: str = "Docs"
    mermaid_src: str = DEFAULT_MERMAID_SRC
    language: str = "en"


@dc.dataclass(frozen=True, slots=True)
class DocnavConfig:
    """Complete configuration with defaults for every section."""

    render: RenderSettings = dc.field(default_factory=RenderSettings)
    navigation: NavigationSettings = dc.field(default_factory=NavigationSettings)
    page: PageSettings = dc.field(default_factory=PageSettings)


__all__ = [
    "DEFAULT_MERMAID_SRC",
    "ConfigError",
    "DocnavConfig",
    "NavigationSettings",
    "PageSettings",
    "RenderSettings",
]
