from __future__ import annotations

from .content import HIGHLIGHT_TEMPLATES
from .models import (
    BusinessListing,
    Highlight,
    Language,
    RecommendationResult,
    SortKey,
    Tag,
)

DISPLAY_LIMIT = 4


def present(
    businesses: list[BusinessListing],
    open_now: bool = False,
    sort_by: SortKey | None = None,
    limit: int = DISPLAY_LIMIT,
) -> list[BusinessListing]:
    """Order, filter and truncate listings for display.

    Always sorted by distance first; the optional rating/popularity sort is
    stable, so ties keep their distance order.
    """
    listings = sorted(businesses, key=lambda b: b.distance_num or 0.0)

    if open_now:
        listings = [b for b in listings if b.is_open]

    if sort_by == SortKey.rating:
        listings.sort(key=lambda b: b.rating or 0.0, reverse=True)
    elif sort_by == SortKey.popularity:
        listings.sort(key=lambda b: b.reviews_count or 0, reverse=True)

    return listings[:limit]


def build_highlight(result: RecommendationResult | None, language: Language) -> Highlight | None:
    """Banner for the first hidden gem, else the first trending place."""
    if result is None or not result.businesses:
        return None

    templates = HIGHLIGHT_TEMPLATES[language]
    for tag in (Tag.hidden_gem, Tag.trending):
        for business in result.businesses:
            if tag in business.tags:
                return Highlight(type=tag, text=templates[tag.value].format(name=business.name))
    return None
