"""
Listing enrichment.

The grounding metadata only carries a title and a source URI per place.  The
remaining card fields (rating, review count, opening state, distance, phone,
review snippet) are **mock data**: :class:`SyntheticListingEnricher` derives
them deterministically from the title so the same place always renders the
same way.  Swap in another :class:`ListingEnricher` once a real places backend
is available.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from .content import OPENING_HOURS, REVIEW_SNIPPETS
from .models import Language, Tag

# Dialling prefixes for the supported markets; anything else uses Kuwait's.
DIAL_CODES: dict[str, str] = {
    "SA": "966",
    "AE": "971",
}
DEFAULT_DIAL_CODE = "965"


@dataclass(frozen=True)
class ListingDetails:
    rating: float
    reviews_count: int
    is_open: bool
    distance_num: float
    phone_number: str
    review_snippet: str
    opening_hours: list[str]

    @property
    def distance(self) -> str:
        return f"{self.distance_num:.1f} km"


class ListingEnricher(ABC):
    """Contract for anything that fills in per-listing card details."""

    @abstractmethod
    def details(self, title: str, language: Language, country_code: str | None) -> ListingDetails:
        """Return the card details for the place called *title*."""


def title_seed(title: str) -> int:
    """Sum of the UTF-16 code units of *title*.

    Lone surrogates (from ``\\udXXX`` JSON escapes) count as their own unit.
    """
    encoded = title.encode("utf-16-le", "surrogatepass")
    return sum(
        int.from_bytes(encoded[i:i + 2], "little")
        for i in range(0, len(encoded), 2)
    )


def utf16_length(text: str) -> int:
    """Length in UTF-16 code units, so astral characters count as two."""
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def dial_code(country_code: str | None) -> str:
    return DIAL_CODES.get((country_code or "").upper(), DEFAULT_DIAL_CODE)


def infer_tags(rating: float, reviews_count: int, index: int) -> list[Tag]:
    """Classification tags; every matching rule contributes, in order."""
    tags: list[Tag] = []
    if rating > 4.5 and reviews_count < 300:
        tags.append(Tag.hidden_gem)
    if reviews_count > 3000:
        tags.append(Tag.trending)
    if rating > 4.8:
        tags.append(Tag.popular)
    if index == 0:
        tags.append(Tag.personalized)
    return tags


class SyntheticListingEnricher(ListingEnricher):
    """Mock-data generator keyed on the title's character-code sum."""

    def details(self, title: str, language: Language, country_code: str | None) -> ListingDetails:
        seed = title_seed(title)

        rating = min(5.0, round(3.5 + (seed % 15) / 10, 1))
        reviews_count = 50 + (seed % 5000)
        is_open = seed % 3 != 0
        distance_num = 0.1 + (seed % 20) / 10
        phone_number = f"+{dial_code(country_code)} 5{(seed % 90000) + 10000}"
        snippets = REVIEW_SNIPPETS[language]

        return ListingDetails(
            rating=rating,
            reviews_count=reviews_count,
            is_open=is_open,
            distance_num=distance_num,
            phone_number=phone_number,
            review_snippet=snippets[seed % len(snippets)],
            opening_hours=list(OPENING_HOURS[language]),
        )


DEFAULT_ENRICHER = SyntheticListingEnricher()
