from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from pydantic import ValidationError

from ..llm.config import DEFAULT_GEMINI_CONFIG, GeminiConfig
from ..llm.gemini_client import generate_suggestions
from .enrichment import utf16_length
from .models import Language, Location, SearchSuggestion
from .query_builder import SUGGESTION_COUNT, build_suggestion_prompt

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
SETTLE_WINDOW_SECONDS = 0.35


def get_search_suggestions(
    query: str,
    location: Location | None,
    language: Language,
    country_code: str | None = None,
    config: GeminiConfig = DEFAULT_GEMINI_CONFIG,
) -> list[SearchSuggestion]:
    """
    Autocomplete entries for a partial query, typed as place or category.

    Never raises: any failure is logged and yields an empty list.
    *location* is accepted for parity with the recommendation call; the
    prompt is anchored on the country only.
    """
    if utf16_length(query) < MIN_QUERY_LENGTH:
        return []

    try:
        prompt = build_suggestion_prompt(query, language, country_code)
        raw_items = generate_suggestions(prompt, config=config)
    except Exception:
        logger.warning("Suggestion fetch failed, returning no suggestions", exc_info=True)
        return []

    suggestions: list[SearchSuggestion] = []
    for item in raw_items:
        try:
            suggestions.append(SearchSuggestion.model_validate(item))
        except ValidationError:
            logger.debug("Skipping malformed suggestion: %r", item)
        if len(suggestions) == SUGGESTION_COUNT:
            break

    return suggestions


class SuggestionDebouncer:
    """Coalesce keystrokes into at most one suggestion request per pause.

    Every call to :meth:`on_keystroke` cancels the pending request, if any,
    and schedules a new one after the settle window.  Must be used from a
    running event loop.
    """

    def __init__(
        self,
        fetch: Callable[[str], list[SearchSuggestion]],
        on_ready: Callable[[list[SearchSuggestion]], Awaitable[None] | None],
        delay: float = SETTLE_WINDOW_SECONDS,
        min_length: int = MIN_QUERY_LENGTH,
    ) -> None:
        self._fetch = fetch
        self._on_ready = on_ready
        self._delay = delay
        self._min_length = min_length
        self._pending: asyncio.Task | None = None

    @property
    def pending(self) -> asyncio.Task | None:
        return self._pending

    def on_keystroke(self, query: str) -> None:
        self.cancel()
        if utf16_length(query) < self._min_length:
            self._deliver([])
            return
        self._pending = asyncio.get_running_loop().create_task(self._run(query))

    def cancel(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    async def _run(self, query: str) -> None:
        await asyncio.sleep(self._delay)
        try:
            suggestions = await asyncio.to_thread(self._fetch, query)
            outcome = self._on_ready(suggestions)
            if asyncio.iscoroutine(outcome):
                await outcome
        except Exception:
            logger.exception("Suggestion callback failed for %r", query)

    def _deliver(self, suggestions: list[SearchSuggestion]) -> None:
        outcome = self._on_ready(suggestions)
        if asyncio.iscoroutine(outcome):
            asyncio.get_running_loop().create_task(outcome)
