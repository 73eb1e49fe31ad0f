from __future__ import annotations

import pytest

from daleeli.recommendations.errors import ErrorKind, classify_search_error
from daleeli.recommendations.models import RecommendationResult
from daleeli.recommendations.search_state import (
    STATE_TTL_SECONDS,
    SearchState,
    clear_search_states,
    find_search_state,
    get_search_state,
)

FIRST = RecommendationResult(text="first")
SECOND = RecommendationResult(text="second")


# ── Error classification ─────────────────────────────────────────────────


@pytest.mark.parametrize(
    ("message", "kind"),
    [
        ("Requested entity was not found.", ErrorKind.key_not_found),
        ("404 NOT_FOUND", ErrorKind.key_not_found),
        ("HTTP 404", ErrorKind.key_not_found),
        ("429 RESOURCE_EXHAUSTED", ErrorKind.generic),
        ("timed out", ErrorKind.generic),
        ("", ErrorKind.generic),
    ],
)
def test_classify_search_error(message, kind):
    assert classify_search_error(RuntimeError(message)) == kind


# ── Generations ──────────────────────────────────────────────────────────


def test_complete_publishes_results():
    state = SearchState()
    token = state.begin()
    assert state.loading is True
    assert state.complete(token, FIRST) is True
    assert state.results == FIRST
    assert state.loading is False


def test_stale_results_are_discarded():
    state = SearchState()
    older = state.begin()
    newer = state.begin()

    assert state.complete(newer, SECOND) is True
    assert state.complete(older, FIRST) is False
    assert state.results == SECOND


def test_failure_keeps_previous_results():
    state = SearchState()
    state.complete(state.begin(), FIRST)

    token = state.begin()
    kind = state.fail(token, Exception("Requested entity was not found."))

    assert kind == ErrorKind.key_not_found
    assert state.results == FIRST
    assert state.last_error == ErrorKind.key_not_found
    assert state.loading is False


def test_new_search_clears_last_error():
    state = SearchState()
    state.fail(state.begin(), Exception("boom"))
    assert state.last_error == ErrorKind.generic

    state.begin()
    assert state.last_error is None


def test_stale_failure_is_not_recorded():
    state = SearchState()
    older = state.begin()
    newer = state.begin()

    assert state.fail(older, Exception("boom")) == ErrorKind.generic
    assert state.last_error is None
    assert state.loading is True
    assert state.is_current(newer)


def test_reset_invalidates_in_flight_search():
    state = SearchState()
    state.complete(state.begin(), FIRST)
    token = state.begin()
    state.reset()

    assert state.results is None
    assert state.complete(token, SECOND) is False


def test_snapshot():
    state = SearchState()
    state.complete(state.begin(), FIRST)
    state.fail(state.begin(), Exception("boom"))

    snap = state.snapshot()
    assert snap.results == FIRST
    assert snap.last_error == "generic"
    assert snap.generation == 2


def test_registry_per_session():
    clear_search_states()
    a = get_search_state("a")
    assert get_search_state("a") is a
    assert get_search_state("b") is not a


def test_find_does_not_create():
    clear_search_states()
    assert find_search_state("nobody") is None
    assert find_search_state("nobody") is None

    state = get_search_state("somebody")
    assert find_search_state("somebody") is state


def test_idle_states_expire():
    clear_search_states()
    idle = get_search_state("idle")
    idle.touched_at -= STATE_TTL_SECONDS + 1

    get_search_state("active")

    assert find_search_state("idle") is None
    assert find_search_state("active") is not None


def test_in_flight_state_is_not_expired():
    clear_search_states()
    busy = get_search_state("busy")
    busy.begin()
    busy.touched_at -= STATE_TTL_SECONDS + 1

    get_search_state("other")

    assert find_search_state("busy") is busy
