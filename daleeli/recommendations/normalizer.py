from __future__ import annotations

import logging
from urllib.parse import quote

from .enrichment import DEFAULT_ENRICHER, ListingEnricher, infer_tags
from .models import (
    BusinessListing,
    GroundingChunk,
    Language,
    RecommendationResult,
)
from .query_builder import resolve_country_name

logger = logging.getLogger(__name__)

FALLBACK_TITLE = "Place"
IMAGE_KEYWORD = "landmark"
_IMAGE_URL = "https://loremflickr.com/600/400/{title},{keyword}/all?lock={index}"
_SEARCH_URL = "https://www.google.com/search?q={title}"


def _encode_component(value: str) -> str:
    """Percent-encode like JavaScript's ``encodeURIComponent``."""
    return quote(value, safe="!~*'()", errors="surrogatepass")


def _title_and_uri(chunk: GroundingChunk) -> tuple[str, str | None]:
    maps, web = chunk.maps, chunk.web
    title = (maps.title if maps else None) or (web.title if web else None) or FALLBACK_TITLE
    uri = (maps.uri if maps else None) or (web.uri if web else None)
    return title, uri


def _build_listing(
    chunk: GroundingChunk,
    index: int,
    query: str,
    language: Language,
    country_code: str | None,
    country_name: str,
    enricher: ListingEnricher,
) -> BusinessListing:
    title, uri = _title_and_uri(chunk)
    details = enricher.details(title, language, country_code)
    encoded_title = _encode_component(title)

    return BusinessListing(
        id=f"biz-{index}",
        name=title,
        category=query,
        rating=details.rating,
        reviews_count=details.reviews_count,
        address=f"{title}, {country_name}",
        map_url=uri,
        image_url=_IMAGE_URL.format(title=encoded_title, keyword=IMAGE_KEYWORD, index=index),
        is_open=details.is_open,
        phone_number=details.phone_number,
        website=uri or _SEARCH_URL.format(title=encoded_title),
        opening_hours=details.opening_hours,
        review_snippet=details.review_snippet,
        distance=details.distance,
        distance_num=details.distance_num,
        tags=infer_tags(details.rating, details.reviews_count, index),
    )


def normalize_grounding(
    chunks: list[GroundingChunk],
    query: str,
    language: Language,
    country_code: str | None = None,
    is_direct_match: bool = False,
    enricher: ListingEnricher = DEFAULT_ENRICHER,
    text: str = "",
) -> RecommendationResult:
    """Turn grounding chunks into deduplicated, enriched business listings.

    Chunks without a maps or web reference are dropped before indexing, so
    ``biz-<n>`` ids and the ``personalized`` tag refer to positions in the
    filtered list.  When *is_direct_match* is set the result is narrowed to
    the first surviving listing.
    """
    country_name = resolve_country_name(country_code)
    usable = [c for c in chunks if c.maps or c.web]

    unique: dict[str, BusinessListing] = {}
    for index, chunk in enumerate(usable):
        listing = _build_listing(
            chunk, index, query, language, country_code, country_name, enricher,
        )
        if listing.name in unique:
            continue
        unique[listing.name] = listing

    businesses = list(unique.values())
    logger.debug(
        "Normalized %d grounding chunks into %d listings for %r",
        len(chunks), len(businesses), query,
    )

    if is_direct_match and businesses:
        direct = businesses[0]
        return RecommendationResult(text=text, businesses=[direct], direct_match=direct)

    return RecommendationResult(text=text, businesses=businesses)
