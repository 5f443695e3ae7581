"""Navigation state and the pure reducer that drives it.

The reader's position is tracked as an explicit :class:`NavigationState`
value. Scroll, TOC-click, and hash-change events are folded into it by
:func:`reduce`, which has no side effects and never touches a DOM, so the
whole protocol can be exercised with plain values.

Every event that decides the active section writes ``active_slug``; the most
recent write wins.

Example
-------
>>> from docnav.navigation.state import (
...     HeadingPosition, NavigationState, ScrollEvent, TocClickEvent, reduce,
... )
>>> state = reduce(NavigationState(), ScrollEvent((HeadingPosition("a", 0.0),)))
>>> reduce(state, TocClickEvent("b")).active_slug
'b'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc

from docnav._constants import DEFAULT_OFFSET_THRESHOLD


@dc.dataclass(frozen=True, slots=True)
class NavigationState:
    """Navigation bookkeeping for one mounted document view.

    Attributes
    ----------
    active_slug : str | None
        Section highlighted in the TOC; ``None`` means no active section.
    pending_target : str | None
        Slug of a navigation (click or hash) whose scroll has not landed yet.
    last_hash_slug : str | None
        Slug most recently written to or read from the URL hash.
    """

    active_slug: str | None = None
    pending_target: str | None = None
    last_hash_slug: str | None = None


@dc.dataclass(frozen=True, slots=True)
class HeadingPosition:
    """Distance in pixels from the viewport top to a heading element."""

    slug: str
    top: float


@dc.dataclass(frozen=True, slots=True)
class ScrollEvent:
    """The viewport moved; ``positions`` lists headings in document order."""

    positions: tuple[HeadingPosition, ...]
    threshold: float = DEFAULT_OFFSET_THRESHOLD


@dc.dataclass(frozen=True, slots=True)
class TocClickEvent:
    """The reader picked ``slug`` in the sidebar."""

    slug: str


@dc.dataclass(frozen=True, slots=True)
class HashChangeEvent:
    """The URL hash changed; ``slug`` is ``None`` when it is empty or unknown."""

    slug: str | None


@dc.dataclass(frozen=True, slots=True)
class TargetResolvedEvent:
    """Outcome of waiting for the element of a pending target."""

    slug: str
    found: bool


NavigationEvent = ScrollEvent | TocClickEvent | HashChangeEvent | TargetResolvedEvent


def active_heading(
    positions: cabc.Iterable[HeadingPosition], threshold: float
) -> str | None:
    """Return the slug of the last heading at or above ``threshold``.

    Headings are expected in document order, so the last one that has
    scrolled past the threshold is the section being read. Returns ``None``
    when every heading is still below the threshold.
    """
    active: HeadingPosition | None = None
    for position in positions:
        if position.top <= threshold and (active is None or position.top >= active.top):
            active = position
    return active.slug if active else None


def reduce(state: NavigationState, event: NavigationEvent) -> NavigationState:
    """Return the state that follows ``state`` after ``event``.

    Parameters
    ----------
    state : NavigationState
        Current state.
    event : NavigationEvent
        Scroll, click, hash-change, or target-resolution event.

    Returns
    -------
    NavigationState
        The next state. The same object is returned when nothing changes.
    """
    match event:
        case ScrollEvent(positions=positions, threshold=threshold):
            slug = active_heading(positions, threshold)
            pending = state.pending_target
            if pending is not None and slug == pending:
                pending = None
            if slug == state.active_slug and pending == state.pending_target:
                return state
            return dc.replace(state, active_slug=slug, pending_target=pending)
        case TocClickEvent(slug=slug):
            return NavigationState(
                active_slug=slug, pending_target=slug, last_hash_slug=slug
            )
        case HashChangeEvent(slug=None):
            return NavigationState()
        case HashChangeEvent(slug=slug):
            return NavigationState(
                active_slug=slug, pending_target=slug, last_hash_slug=slug
            )
        case TargetResolvedEvent(slug=slug) if slug != state.pending_target:
            return state
        case TargetResolvedEvent(found=True):
            return dc.replace(state, pending_target=None)
        case TargetResolvedEvent():
            return dc.replace(state, active_slug=None, pending_target=None)
        case _:
            msg = f"Unsupported navigation event: {event!r}"
            raise TypeError(msg)


__all__ = [
    "HashChangeEvent",
    "HeadingPosition",
    "NavigationEvent",
    "NavigationState",
    "ScrollEvent",
    "TargetResolvedEvent",
    "TocClickEvent",
    "active_heading",
    "reduce",
]
