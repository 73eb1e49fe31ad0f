from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Language(str, Enum):
    en = "en"
    ar = "ar"


class Tag(str, Enum):
    hidden_gem = "hiddenGem"
    trending = "trending"
    popular = "popular"
    personalized = "personalized"


class SortKey(str, Enum):
    distance = "distance"
    rating = "rating"
    popularity = "popularity"


class Location(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


# ── Grounding metadata ───────────────────────────────────────────────────


class GroundingSource(BaseModel):
    uri: str | None = None
    title: str | None = None


class GroundingChunk(BaseModel):
    maps: GroundingSource | None = None
    web: GroundingSource | None = None


class GroundingRequestConfig(BaseModel):
    """Tools and retrieval anchoring for the grounded recommendation call."""

    tools: list[str] = Field(default_factory=lambda: ["google_maps", "google_search"])
    lat_lng: Location | None = None


class GroundedAnswer(BaseModel):
    text: str = ""
    chunks: list[GroundingChunk] = Field(default_factory=list)


# ── Normalized output ────────────────────────────────────────────────────


class BusinessListing(BaseModel):
    id: str
    name: str
    description: str = ""
    category: str
    rating: float = Field(..., ge=3.5, le=5.0)
    reviews_count: int = Field(..., ge=50, le=5049)
    address: str | None = None
    map_url: str | None = None
    image_url: str | None = None
    price_level: str | None = None
    is_open: bool
    phone_number: str
    website: str
    opening_hours: list[str] = Field(default_factory=list)
    review_snippet: str
    distance: str
    distance_num: float = Field(..., ge=0.1, le=2.0)
    tags: list[Tag] = Field(default_factory=list)


class RecommendationResult(BaseModel):
    text: str = ""
    businesses: list[BusinessListing] = Field(default_factory=list)
    direct_match: BusinessListing | None = None


class SuggestionType(str, Enum):
    place = "place"
    category = "category"


class SearchSuggestion(BaseModel):
    text: str = Field(..., min_length=1)
    type: SuggestionType


class Highlight(BaseModel):
    type: Tag
    text: str


# ── API payloads ─────────────────────────────────────────────────────────


class RecommendationRequest(BaseModel):
    query: str = Field(..., min_length=1, max_length=200)
    is_direct_match: bool = False
    limit: int | None = Field(default=None, ge=1, le=20)
    open_now: bool = False
    sort_by: SortKey | None = None
    language: Language | None = Field(
        default=None, description="Overrides the session language for this search"
    )
    location: Location | None = Field(
        default=None, description="Overrides the session location for this search"
    )


class RecommendationResponse(BaseModel):
    text: str
    businesses: list[BusinessListing]
    direct_match: BusinessListing | None = None
    displayed: list[BusinessListing]
    highlight: Highlight | None = None


class SuggestionRequest(BaseModel):
    query: str = Field(..., max_length=200)
    language: Language | None = None


class SearchStateOut(BaseModel):
    results: RecommendationResult | None = None
    last_error: str | None = None
    loading: bool = False
    generation: int = 0
