"""Drive :mod:`docnav.navigation.state` from host events and emit effects.

:class:`NavigationSynchronizer` owns the single :class:`NavigationState` of one
mounted document view. Hosts (the browser script, a test, a desktop viewer)
feed it scroll positions, TOC clicks, and hash changes; it returns
:class:`Effect` values describing what the host should do: move the TOC
highlight, write the URL hash, scroll to a heading, or retry a lookup later.

Scroll events are debounced so a burst collapses to its last reading. A
target whose heading element is not mounted yet is looked up again a bounded
number of times before the view falls back to "no active section".

Example
-------
>>> from docnav.navigation import NavigationSynchronizer
>>> sync = NavigationSynchronizer(["intro", "details"])
>>> sync.click("details")
[Highlight(slug='details'), WriteHash(slug='details'), ScrollTo(slug='details', smooth=True)]
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import time
import typing as typ

from docnav.config import NavigationSettings

from .state import (
    HashChangeEvent,
    HeadingPosition,
    NavigationEvent,
    NavigationState,
    ScrollEvent,
    TargetResolvedEvent,
    TocClickEvent,
    reduce,
)

if typ.TYPE_CHECKING:
    from docnav.renderer.models import AnnotatedHtml

logger = logging.getLogger(__name__)


@dc.dataclass(frozen=True, slots=True)
class Highlight:
    """Move the TOC highlight to ``slug``; ``None`` clears it."""

    slug: str | None


@dc.dataclass(frozen=True, slots=True)
class WriteHash:
    """Replace the URL hash with ``#slug``."""

    slug: str


@dc.dataclass(frozen=True, slots=True)
class ScrollTo:
    """Scroll the heading element ``slug`` into view."""

    slug: str
    smooth: bool = True


@dc.dataclass(frozen=True, slots=True)
class RetryAfter:
    """Call :meth:`NavigationSynchronizer.resolve_pending` again after ``delay``."""

    delay: float


Effect = Highlight | WriteHash | ScrollTo | RetryAfter


class NavigationSynchronizer:
    """Keep scroll position, URL hash, and TOC highlight consistent."""

    def __init__(
        self,
        slugs: cabc.Iterable[str],
        settings: NavigationSettings | None = None,
        *,
        clock: cabc.Callable[[], float] = time.monotonic,
    ) -> None:
        """Create the synchronizer for one document view.

        Parameters
        ----------
        slugs : Iterable[str]
            Every heading id present in the rendered document.
        settings : NavigationSettings, optional
            Threshold, debounce, and retry settings.
        clock : Callable[[], float], optional
            Monotonic time source in seconds, replaceable in tests.
        """
        self.settings = settings or NavigationSettings()
        self._known = frozenset(slugs)
        self._clock = clock
        self._state: NavigationState | None = NavigationState()
        self._scroll_buffer: tuple[HeadingPosition, ...] | None = None
        self._scroll_deadline = 0.0
        self._attempts = 0

    @classmethod
    def for_render(
        cls,
        rendered: AnnotatedHtml,
        settings: NavigationSettings | None = None,
        *,
        clock: cabc.Callable[[], float] = time.monotonic,
    ) -> NavigationSynchronizer:
        """Create a synchronizer for the headings of a render result."""
        return cls(rendered.slugs, settings, clock=clock)

    @property
    def state(self) -> NavigationState:
        """Return the current navigation state."""
        return self._require_state()

    @property
    def mounted(self) -> bool:
        """Return whether the view is still mounted."""
        return self._state is not None

    def mount(self, initial_hash: str | None = None) -> list[Effect]:
        """Handle the first paint, treating a hash in the URL like a click.

        The heading element may not be mounted yet, so the returned effects
        ask the host to call :meth:`resolve_pending` instead of scrolling
        immediately.
        """
        slug = _strip_hash(initial_hash)
        if slug is None:
            return []
        return self._navigate(
            HashChangeEvent(self._known_or_none(slug)), write=False, deferred=True
        )

    def scroll(self, positions: cabc.Iterable[HeadingPosition]) -> list[Effect]:
        """Record a scroll reading; it is applied once the burst settles."""
        self._require_state()
        self._scroll_buffer = tuple(positions)
        self._scroll_deadline = self._clock() + self.settings.debounce
        return []

    def tick(self) -> list[Effect]:
        """Apply the buffered scroll reading if the debounce window has passed."""
        if self._scroll_buffer is None or self._clock() < self._scroll_deadline:
            return []
        return self.flush()

    def flush(self) -> list[Effect]:
        """Apply the buffered scroll reading immediately."""
        positions = self._scroll_buffer
        self._scroll_buffer = None
        if positions is None:
            return []
        event = ScrollEvent(positions, threshold=self.settings.offset_threshold)
        return self._apply(event)

    def click(self, slug: str) -> list[Effect]:
        """Handle a TOC click: highlight, write the hash, then scroll."""
        return self._navigate(TocClickEvent(slug) if slug in self._known else None)

    def hash_changed(self, hash_value: str | None) -> list[Effect]:
        """Handle a hash change coming from the browser (back/forward, links)."""
        state = self._require_state()
        slug = _strip_hash(hash_value)
        if slug is not None and slug == state.last_hash_slug == state.active_slug:
            return []
        return self._navigate(HashChangeEvent(self._known_or_none(slug)), write=False)

    def resolve_pending(self, element_exists: cabc.Callable[[str], bool]) -> list[Effect]:
        """Check whether the pending target's element exists yet.

        Parameters
        ----------
        element_exists : Callable[[str], bool]
            Host lookup answering whether an element with the given id is
            mounted.

        Returns
        -------
        list[Effect]
            ``ScrollTo`` once the element exists, ``RetryAfter`` while
            attempts remain, or a cleared highlight once they are exhausted.
        """
        target = self._require_state().pending_target
        if target is None:
            return []
        if element_exists(target):
            self._attempts = 0
            self._apply(TargetResolvedEvent(target, found=True))
            return [ScrollTo(target)]
        self._attempts += 1
        if self._attempts < self.settings.max_attempts:
            return [RetryAfter(self.settings.retry_interval)]
        logger.info(
            "Heading %r not found after %d attempts; clearing active section",
            target,
            self._attempts,
        )
        self._attempts = 0
        return self._apply(TargetResolvedEvent(target, found=False))

    def unmount(self) -> None:
        """Discard the state; the synchronizer cannot be used afterwards."""
        self._state = None
        self._scroll_buffer = None

    def _navigate(
        self,
        event: TocClickEvent | HashChangeEvent | None,
        *,
        write: bool = True,
        deferred: bool = False,
    ) -> list[Effect]:
        """Apply a click or hash navigation, superseding any in-flight one."""
        self._scroll_buffer = None
        self._attempts = 0
        if event is None or (isinstance(event, HashChangeEvent) and event.slug is None):
            return self._apply(HashChangeEvent(None))
        effects = self._apply(event)
        slug = self.state.pending_target
        if slug is None:
            return effects
        if write:
            effects.append(WriteHash(slug))
        effects.append(RetryAfter(0.0) if deferred else ScrollTo(slug))
        return effects

    def _apply(self, event: NavigationEvent) -> list[Effect]:
        previous = self._require_state()
        current = reduce(previous, event)
        self._state = current
        if current.active_slug != previous.active_slug:
            return [Highlight(current.active_slug)]
        return []

    def _known_or_none(self, slug: str | None) -> str | None:
        if slug is None or slug in self._known:
            return slug
        logger.info("Hash target %r is not a heading in this document", slug)
        return None

    def _require_state(self) -> NavigationState:
        if self._state is None:
            msg = "Navigation view is unmounted."
            raise RuntimeError(msg)
        return self._state


def _strip_hash(value: str | None) -> str | None:
    if not value:
        return None
    slug = value[1:] if value.startswith("#") else value
    return slug or None


__all__ = [
    "Effect",
    "Highlight",
    "NavigationSynchronizer",
    "RetryAfter",
    "ScrollTo",
    "WriteHash",
]
