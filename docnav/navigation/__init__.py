"""Scroll/hash/TOC synchronization for a mounted document view."""

from .state import (
    HashChangeEvent,
    HeadingPosition,
    NavigationEvent,
    NavigationState,
    ScrollEvent,
    TargetResolvedEvent,
    TocClickEvent,
    active_heading,
    reduce,
)
from .sync import (
    Effect,
    Highlight,
    NavigationSynchronizer,
    RetryAfter,
    ScrollTo,
    WriteHash,
)

__all__ = [
    "Effect",
    "HashChangeEvent",
    "HeadingPosition",
    "Highlight",
    "NavigationEvent",
    "NavigationState",
    "NavigationSynchronizer",
    "RetryAfter",
    "ScrollEvent",
    "ScrollTo",
    "TargetResolvedEvent",
    "TocClickEvent",
    "WriteHash",
    "active_heading",
    "reduce",
]
