"""
Per-session search state.

Each search is tagged with a generation number from :meth:`SearchState.begin`.
Only the latest generation may publish results or record an error, so a slow
search that finishes after a newer one is discarded instead of overwriting it.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field

from .errors import ErrorKind, classify_search_error
from .models import RecommendationResult, SearchStateOut

logger = logging.getLogger(__name__)


@dataclass
class SearchState:
    results: RecommendationResult | None = None
    last_error: ErrorKind | None = None
    loading: bool = False
    generation: int = 0
    touched_at: float = field(default_factory=time.time, compare=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def begin(self) -> int:
        """Start a search and return its token."""
        with self._lock:
            self.generation += 1
            self.loading = True
            self.last_error = None
            return self.generation

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self.generation

    def complete(self, token: int, result: RecommendationResult) -> bool:
        """Publish *result* if *token* is still the latest search."""
        with self._lock:
            if token != self.generation:
                logger.info("Discarding stale search results (token=%d, current=%d)", token, self.generation)
                return False
            self.results = result
            self.loading = False
            return True

    def fail(self, token: int, exc: BaseException) -> ErrorKind:
        """Record a failed search; previous results are left in place."""
        kind = classify_search_error(exc)
        with self._lock:
            if token != self.generation:
                logger.info("Ignoring failure of stale search (token=%d, current=%d)", token, self.generation)
                return kind
            self.last_error = kind
            self.loading = False
        return kind

    def reset(self) -> None:
        """Drop results and errors, e.g. after a language switch."""
        with self._lock:
            self.generation += 1
            self.results = None
            self.last_error = None
            self.loading = False

    def snapshot(self) -> SearchStateOut:
        with self._lock:
            return SearchStateOut(
                results=self.results,
                last_error=self.last_error.value if self.last_error else None,
                loading=self.loading,
                generation=self.generation,
            )


_states: dict[str, SearchState] = {}
_states_lock = threading.Lock()
STATE_TTL_SECONDS = 1800  # 30 minutes of inactivity


def _sweep(now: float) -> None:
    expired = [
        sid for sid, state in _states.items()
        if not state.loading and now - state.touched_at >= STATE_TTL_SECONDS
    ]
    for sid in expired:
        del _states[sid]
    if expired:
        logger.debug("Expired %d idle search states", len(expired))


def get_search_state(session_id: str) -> SearchState:
    """Return the session's state, creating it on first search."""
    now = time.time()
    with _states_lock:
        _sweep(now)
        state = _states.get(session_id)
        if state is None:
            state = _states[session_id] = SearchState()
        state.touched_at = now
        return state


def find_search_state(session_id: str) -> SearchState | None:
    """Lookup that never creates a state."""
    now = time.time()
    with _states_lock:
        _sweep(now)
        state = _states.get(session_id)
        if state is not None:
            state.touched_at = now
        return state


def clear_search_states() -> None:
    with _states_lock:
        _states.clear()
