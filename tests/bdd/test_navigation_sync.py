"""Behaviour tests for the scroll, hash, and TOC navigation protocol.

The scenarios in ``navigation.feature`` drive
:class:`docnav.navigation.NavigationSynchronizer` with a controllable clock,
the way the page script drives it in a browser.

Usage
-----
Run ``pytest tests/bdd/test_navigation_sync.py -v`` after installing the test
extra. No browser is required.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from docnav.config import NavigationSettings
from docnav.navigation import (
    HeadingPosition,
    Highlight,
    NavigationSynchronizer,
    RetryAfter,
    ScrollTo,
    WriteHash,
)

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "navigation.feature"
scenarios(FEATURE_FILE)

SETTINGS = NavigationSettings(
    offset_threshold=100, debounce=0.1, max_attempts=4, retry_interval=0.05
)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {"now": 0.0}


def _sync(scenario_state: dict[str, object]) -> NavigationSynchronizer:
    return typ.cast("NavigationSynchronizer", scenario_state["sync"])


@given(parsers.parse('a synchronizer for the headings "{slugs}"'))
def given_synchronizer(scenario_state: dict[str, object], slugs: str) -> None:
    """Create a synchronizer whose clock reads from the scenario state."""
    headings = [slug.strip() for slug in slugs.split(",")]
    scenario_state["headings"] = headings
    scenario_state["sync"] = NavigationSynchronizer(
        headings, SETTINGS, clock=lambda: typ.cast("float", scenario_state["now"])
    )


@when(parsers.parse('the reader clicks "{slug}"'))
def when_click(scenario_state: dict[str, object], slug: str) -> None:
    """Click a TOC entry."""
    scenario_state["effects"] = _sync(scenario_state).click(slug)


@when(
    parsers.parse(
        'the reader scrolls past "{first}" then "{second}" within the debounce window'
    )
)
def when_scroll_burst(scenario_state: dict[str, object], first: str, second: str) -> None:
    """Feed two scroll readings closer together than the debounce window."""
    sync = _sync(scenario_state)
    headings = typ.cast("list[str]", scenario_state["headings"])
    for passed in (first, second):
        index = headings.index(passed)
        positions = [
            HeadingPosition(slug, -100.0 * (index - idx) if idx <= index else 400.0 * idx)
            for idx, slug in enumerate(headings)
        ]
        assert sync.scroll(positions) == []
        scenario_state["now"] = typ.cast("float", scenario_state["now"]) + 0.04
    assert sync.tick() == [], "no reading is applied inside the debounce window"


@when("the debounce window elapses")
def when_debounce_elapses(scenario_state: dict[str, object]) -> None:
    """Advance past the debounce window and let the synchronizer settle."""
    scenario_state["now"] = typ.cast("float", scenario_state["now"]) + SETTINGS.debounce
    scenario_state["effects"] = _sync(scenario_state).tick()


@when(parsers.parse('the page mounts with hash "{hash_value}"'))
def when_mount(scenario_state: dict[str, object], hash_value: str) -> None:
    """Mount the view with an initial URL hash."""
    scenario_state["effects"] = _sync(scenario_state).mount(hash_value)


@when("the heading element never appears")
def when_element_missing(scenario_state: dict[str, object]) -> None:
    """Answer every lookup with "missing" until the synchronizer gives up."""
    sync = _sync(scenario_state)
    effects = sync.resolve_pending(lambda slug: False)
    lookups = 1
    while effects == [RetryAfter(SETTINGS.retry_interval)]:
        effects = sync.resolve_pending(lambda slug: False)
        lookups += 1
    assert lookups == SETTINGS.max_attempts
    scenario_state["effects"] = effects


@then(parsers.parse('the effects are highlight, write hash, and scroll for "{slug}"'))
def then_click_effects(scenario_state: dict[str, object], slug: str) -> None:
    """Verify the click produced its three effects in order."""
    assert scenario_state["effects"] == [Highlight(slug), WriteHash(slug), ScrollTo(slug)]


@then(parsers.parse('the active section is "{slug}"'))
def then_active(scenario_state: dict[str, object], slug: str) -> None:
    """Verify which section the TOC highlights."""
    assert _sync(scenario_state).state.active_slug == slug


@then("the active section is cleared")
def then_cleared(scenario_state: dict[str, object]) -> None:
    """Verify no section is highlighted and nothing is pending."""
    state = _sync(scenario_state).state
    assert state.active_slug is None
    assert state.pending_target is None
