"""Load docnav configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _milliseconds,
    _optional_str,
    _require_bool,
    _require_int,
    _require_number,
    _require_str,
    _section,
)
from .models import (
    ConfigError,
    DocnavConfig,
    NavigationSettings,
    PageSettings,
    RenderSettings,
)


def load_config(path: Path | None) -> DocnavConfig:
    """Load the YAML configuration for rendering and navigation.

    Parameters
    ----------
    path : Path or None
        Filesystem path to the YAML file; ``None`` returns the defaults.

    Returns
    -------
    DocnavConfig
        Parsed configuration with defaults applied to every missing key.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    ConfigError
        If the top-level structure is not a mapping or a value has the
        wrong type.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from docnav.config import load_config
    >>> load_config(None).render.diagram_keyword
    'mermaid'
    """
    if path is None:
        return DocnavConfig()
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise ConfigError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    return DocnavConfig(
        render=_build_render_settings(_section(raw, "render")),
        navigation=_build_navigation_settings(_section(raw, "navigation")),
        page=_build_page_settings(_section(raw, "page")),
    )


def _build_render_settings(payload: typ.Mapping[str, typ.Any]) -> RenderSettings:
    """Build RenderSettings from the ``render`` section."""
    base = RenderSettings()
    keyword = _optional_str(payload.get("diagram_keyword", base.diagram_keyword))
    if keyword is None:
        msg = "'diagram_keyword' must not be empty."
        raise ConfigError(msg)
    return RenderSettings(
        diagram_keyword=keyword,
        diagram_class=_require_str(payload, "diagram_class", base.diagram_class),
        pygments_style=_require_str(payload, "pygments_style", base.pygments_style),
        permalinks=_require_bool(payload, "permalinks", base.permalinks),
        permalink_symbol=_require_str(
            payload, "permalink_symbol", base.permalink_symbol
        ),
    )


def _build_navigation_settings(
    payload: typ.Mapping[str, typ.Any],
) -> NavigationSettings:
    """Build NavigationSettings from the ``navigation`` section."""
    base = NavigationSettings()
    max_level = payload.get("toc_max_level", base.toc_max_level)
    if max_level is not None:
        max_level = _require_int(payload, "toc_max_level", max_level, minimum=1)
    return NavigationSettings(
        offset_threshold=_require_number(
            payload, "offset_threshold", base.offset_threshold
        ),
        debounce=_milliseconds(payload, "debounce_ms", base.debounce),
        max_attempts=_require_int(payload, "max_attempts", base.max_attempts, minimum=1),
        retry_interval=_milliseconds(payload, "retry_interval_ms", base.retry_interval),
        toc_max_level=max_level,
    )


def _build_page_settings(payload: typ.Mapping[str, typ.Any]) -> PageSettings:
    """Build PageSettings from the ``page`` section."""
    base = PageSettings()
    return PageSettings(
        title_suffix=_require_str(payload, "title_suffix", base.title_suffix),
        mermaid_src=_require_str(payload, "mermaid_src", base.mermaid_src),
        language=_require_str(payload, "language", base.language),
    )


__all__ = ["load_config"]
