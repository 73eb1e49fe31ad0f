from __future__ import annotations

import pytest

from daleeli.recommendations.content import default_query
from daleeli.recommendations.models import Language, Location
from daleeli.recommendations.query_builder import (
    build_recommendation_request,
    build_suggestion_prompt,
    resolve_country_name,
)

RIYADH = Location(latitude=24.7136, longitude=46.6753)


# ── Region names ─────────────────────────────────────────────────────────


class TestResolveCountryName:
    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ("SA", "Saudi Arabia"),
            ("ae", "United Arab Emirates"),
            ("KW", "Kuwait"),
        ],
    )
    def test_known_codes(self, code, expected):
        assert resolve_country_name(code) == expected

    @pytest.mark.parametrize("code", [None, "", "  ", "ZZ"])
    def test_fallback(self, code):
        assert resolve_country_name(code) == "the Middle East"


# ── Recommendation prompt ────────────────────────────────────────────────


class TestRecommendationRequest:
    def test_nearby_english(self):
        prompt, config = build_recommendation_request("cafes", RIYADH, Language.en, "SA")
        assert 'find the 4 closest authentic businesses for "cafes"' in prompt
        assert "strictly within 2km of (24.7136, 46.6753) in Saudi Arabia" in prompt
        assert "Hidden Gem" in prompt
        assert config.tools == ["google_maps", "google_search"]
        assert config.lat_lng == RIYADH

    def test_direct_match_english(self):
        prompt, _ = build_recommendation_request(
            "Kingdom Centre", RIYADH, Language.en, "SA", is_direct_match=True,
        )
        assert 'find the specific place "Kingdom Centre"' in prompt
        assert "closest authentic businesses" not in prompt

    def test_arabic_templates(self):
        nearby, _ = build_recommendation_request("مقاهي", RIYADH, Language.ar, "SA")
        direct, _ = build_recommendation_request("مقاهي", RIYADH, Language.ar, "SA", is_direct_match=True)
        assert 'ابحث عن أفضل 4 أماكن تجارية حقيقية لـ "مقاهي"' in nearby
        assert 'ابحث عن المكان المحدد "مقاهي"' in direct
        assert "2 كم" in nearby

    def test_without_location(self):
        prompt, config = build_recommendation_request("cafes", None, Language.en, None)
        assert "(unknown, unknown)" in prompt
        assert "in the Middle East" in prompt
        assert config.lat_lng is None
        assert config.tools == ["google_maps", "google_search"]


# ── Suggestion prompt & defaults ─────────────────────────────────────────


class TestSuggestionPrompt:
    def test_uses_country_code(self):
        prompt = build_suggestion_prompt("sh", Language.en, "AE")
        assert 'partial search query "sh"' in prompt
        assert "local guide app in AE" in prompt
        assert "provide 5 context-relevant" in prompt
        assert "Current Language: English." in prompt

    def test_defaults_region_and_arabic(self):
        prompt = build_suggestion_prompt("مط", Language.ar, None)
        assert "local guide app in the Middle East" in prompt
        assert "Current Language: Arabic." in prompt


def test_default_queries():
    assert default_query(Language.en) == "top tourist spots"
    assert default_query(Language.ar) == "أبرز المعالم السياحية"
