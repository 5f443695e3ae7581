"""Common literal values used across docnav.

These constants keep the diagram keyword, CSS hooks, and navigation defaults
centralized so the renderer, the page template, and tests import the same
values without drifting. Intended for internal use within the docnav package.

Examples
--------
>>> from docnav import _constants
>>> _constants.DEFAULT_DIAGRAM_KEYWORD
'mermaid'
>>> _constants.FALLBACK_SLUG_TEMPLATE.format(ordinal=3)
'heading-3'
"""

DEFAULT_DIAGRAM_KEYWORD = "mermaid"
DEFAULT_DIAGRAM_CLASS = "mermaid"
FALLBACK_SLUG_TEMPLATE = "heading-{ordinal}"
MAX_HEADING_LEVEL = 6
MIN_HEADING_LEVEL = 1

CODE_CSS_CLASS = "codehilite"
UNPARSED_CSS_CLASS = "md-unparsed"
PERMALINK_CSS_CLASS = "heading-permalink"

# Matches the fixed header height of the viewer layout.
DEFAULT_OFFSET_THRESHOLD = 100.0
DEFAULT_DEBOUNCE_SECONDS = 0.1
DEFAULT_MAX_ATTEMPTS = 10
DEFAULT_RETRY_INTERVAL_SECONDS = 0.05
DEFAULT_TOC_MAX_LEVEL = 4

# Element ids used by the page template; headings must never claim them.
PAGE_RESERVED_IDS = ("docnav-content", "docnav-toc", "docnav-progress", "docnav-top")
