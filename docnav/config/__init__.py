"""Load and validate docnav configuration YAML.

This subpackage parses an optional ``docnav.yaml`` file, applies defaults to
every missing key, and produces typed dataclasses (:class:`DocnavConfig`,
:class:`RenderSettings`, :class:`NavigationSettings`, :class:`PageSettings`)
that the renderer, the navigation synchronizer, and the page builder consume.
The primary entry point is :func:`load_config`.

Examples
--------
>>> from pathlib import Path
>>> from docnav.config import load_config
>>> config = load_config(Path("docnav.yaml"))  # doctest: +SKIP
>>> config.navigation.offset_threshold  # doctest: +SKIP
100.0
"""

from .loader import load_config
from .models import (
    ConfigError,
    DocnavConfig,
    NavigationSettings,
    PageSettings,
    RenderSettings,
)

__all__ = [
    "ConfigError",
    "DocnavConfig",
    "NavigationSettings",
    "PageSettings",
    "RenderSettings",
    "load_config",
]
