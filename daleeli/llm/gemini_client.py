from __future__ import annotations

import json
import logging
from typing import Any

from google import genai
from google.genai import types

from ..recommendations.errors import RecommendationError
from ..recommendations.models import (
    GroundedAnswer,
    GroundingChunk,
    GroundingRequestConfig,
    GroundingSource,
)
from .config import DEFAULT_GEMINI_CONFIG, GeminiConfig

logger = logging.getLogger(__name__)

SUGGESTION_SCHEMA = types.Schema(
    type=types.Type.ARRAY,
    items=types.Schema(
        type=types.Type.OBJECT,
        properties={
            "text": types.Schema(type=types.Type.STRING),
            "type": types.Schema(type=types.Type.STRING, enum=["place", "category"]),
        },
        required=["text", "type"],
    ),
)


def _client(config: GeminiConfig) -> genai.Client:
    return genai.Client(
        api_key=config.api_key,
        http_options=types.HttpOptions(timeout=int(config.timeout * 1000)),
    )


def _to_content_config(request_config: GroundingRequestConfig) -> types.GenerateContentConfig:
    tools: list[types.Tool] = []
    if "google_maps" in request_config.tools:
        tools.append(types.Tool(google_maps=types.GoogleMaps()))
    if "google_search" in request_config.tools:
        tools.append(types.Tool(google_search=types.GoogleSearch()))

    tool_config = None
    if request_config.lat_lng is not None:
        tool_config = types.ToolConfig(
            retrieval_config=types.RetrievalConfig(
                lat_lng=types.LatLng(
                    latitude=request_config.lat_lng.latitude,
                    longitude=request_config.lat_lng.longitude,
                ),
            ),
        )

    return types.GenerateContentConfig(tools=tools, tool_config=tool_config)


def _to_source(raw: Any) -> GroundingSource | None:
    if raw is None:
        return None
    return GroundingSource(uri=getattr(raw, "uri", None), title=getattr(raw, "title", None))


def _extract_chunks(response: Any) -> list[GroundingChunk]:
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    metadata = getattr(candidates[0], "grounding_metadata", None)
    raw_chunks = getattr(metadata, "grounding_chunks", None) or []

    return [
        GroundingChunk(
            maps=_to_source(getattr(raw, "maps", None)),
            web=_to_source(getattr(raw, "web", None)),
        )
        for raw in raw_chunks
    ]


def fetch_grounded_answer(
    prompt: str,
    request_config: GroundingRequestConfig,
    config: GeminiConfig = DEFAULT_GEMINI_CONFIG,
) -> GroundedAnswer:
    """
    Call Gemini with Maps/Search grounding and return the raw answer.

    Raises on any failure; callers classify the error.
    """
    if not config.enabled or not config.api_key:
        raise RecommendationError("Gemini is not configured (set GEMINI_API_KEY)")

    response = _client(config).models.generate_content(
        model=config.recommendation_model,
        contents=prompt,
        config=_to_content_config(request_config),
    )

    chunks = _extract_chunks(response)
    logger.debug("Grounded answer returned %d chunks", len(chunks))
    return GroundedAnswer(text=response.text or "", chunks=chunks)


def generate_suggestions(
    prompt: str,
    config: GeminiConfig = DEFAULT_GEMINI_CONFIG,
) -> list[dict[str, Any]]:
    """
    Call Gemini with a JSON response schema for autocomplete entries.

    Returns the parsed array (empty if the model returned something else).
    Raises on API or JSON errors.
    """
    if not config.enabled or not config.api_key:
        return []

    response = _client(config).models.generate_content(
        model=config.suggestion_model,
        contents=prompt,
        config=types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=SUGGESTION_SCHEMA,
        ),
    )

    parsed = json.loads(response.text or "[]")
    return parsed if isinstance(parsed, list) else []
