from __future__ import annotations

import logging
import time

from ..llm.config import DEFAULT_GEMINI_CONFIG, GeminiConfig
from ..llm.gemini_client import fetch_grounded_answer
from .enrichment import DEFAULT_ENRICHER, ListingEnricher
from .models import Language, Location, RecommendationResult
from .normalizer import normalize_grounding
from .query_builder import build_recommendation_request

logger = logging.getLogger(__name__)


def get_local_recommendations(
    query: str,
    location: Location | None,
    language: Language,
    country_code: str | None = None,
    is_direct_match: bool = False,
    config: GeminiConfig = DEFAULT_GEMINI_CONFIG,
    enricher: ListingEnricher = DEFAULT_ENRICHER,
) -> RecommendationResult:
    """
    Run one grounded search and normalize its citations into listings.

    Errors from the Gemini call propagate unchanged; see
    ``errors.classify_search_error`` for how callers should report them.
    """
    start_time = time.time()

    prompt, request_config = build_recommendation_request(
        query, location, language, country_code, is_direct_match,
    )
    answer = fetch_grounded_answer(prompt, request_config, config=config)

    result = normalize_grounding(
        answer.chunks,
        query=query,
        language=language,
        country_code=country_code,
        is_direct_match=is_direct_match,
        enricher=enricher,
        text=answer.text,
    )

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    logger.info(
        "Search %r (%s, direct=%s) returned %d listings in %.1f ms",
        query, language.value, is_direct_match, len(result.businesses), elapsed_ms,
    )
    return result
