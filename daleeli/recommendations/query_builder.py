from __future__ import annotations

import pycountry

from .content import DEFAULT_REGION
from .models import GroundingRequestConfig, Language, Location

NEARBY_RESULT_COUNT = 4
SEARCH_RADIUS_KM = 2
SUGGESTION_COUNT = 5
_UNKNOWN_COORDINATE = "unknown"

# ---------------------------------------------------------------------------
# Prompt templates
# ---------------------------------------------------------------------------

_RECOMMENDATION_TEMPLATES: dict[Language, str] = {
    Language.en: """\
Using Google Maps grounding, {target} strictly within {radius}km of ({lat}, {lng}) in {country}.
For each business, extract:
1. Official name and verified address.
2. Google rating and review count.
3. Phone number and official website.
4. Opening hours for today.
5. Identify if it's a "Hidden Gem" or "Trending".
Format the response clearly. Focus only on the most immediate results.""",
    Language.ar: """\
باستخدام خرائط جوجل، {target} حصرياً ضمن نطاق {radius} كم من ({lat}، {lng}) في {country}.
لكل نشاط، استخرج:
1. الاسم الرسمي والعنوان.
2. التقييم وعدد المراجعات.
3. رقم الهاتف والموقع الإلكتروني الرسمي.
4. ساعات العمل لليوم.
5. حدد ما إذا كان "جوهرة مخفية" أو "رائج".
نسق الإجابة بوضوح. ركز فقط على النتائج الأقرب.""",
}

_NEARBY_TARGETS: dict[Language, str] = {
    Language.en: 'find the {count} closest authentic businesses for "{query}"',
    Language.ar: 'ابحث عن أفضل {count} أماكن تجارية حقيقية لـ "{query}"',
}

_DIRECT_TARGETS: dict[Language, str] = {
    Language.en: 'find the specific place "{query}"',
    Language.ar: 'ابحث عن المكان المحدد "{query}"',
}

SUGGESTION_PROMPT = """\
Based on the partial search query "{query}" for a local guide app in {region}, \
provide {count} context-relevant search autocomplete suggestions.
Identify if each suggestion is a specific "place" (e.g., 'Dubai Mall') or a \
general "category" (e.g., 'Shopping').
Current Language: {language}.
Return as a JSON array of objects with keys 'text' and 'type'."""

_LANGUAGE_NAMES: dict[Language, str] = {
    Language.en: "English",
    Language.ar: "Arabic",
}


# ---------------------------------------------------------------------------
# Region resolution
# ---------------------------------------------------------------------------


def resolve_country_name(country_code: str | None) -> str:
    """Return the English region name for an ISO 3166 alpha-2 code.

    Falls back to ``"the Middle East"`` when the code is missing or unknown.
    """
    if not country_code or not country_code.strip():
        return DEFAULT_REGION

    country = pycountry.countries.get(alpha_2=country_code.strip().upper())
    if country is None:
        return DEFAULT_REGION
    return getattr(country, "common_name", None) or country.name


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def build_recommendation_prompt(
    query: str,
    location: Location | None,
    language: Language,
    country_name: str,
    is_direct_match: bool = False,
) -> str:
    targets = _DIRECT_TARGETS if is_direct_match else _NEARBY_TARGETS
    target = targets[language].format(query=query, count=NEARBY_RESULT_COUNT)

    lat = location.latitude if location else _UNKNOWN_COORDINATE
    lng = location.longitude if location else _UNKNOWN_COORDINATE

    return _RECOMMENDATION_TEMPLATES[language].format(
        target=target,
        radius=SEARCH_RADIUS_KM,
        lat=lat,
        lng=lng,
        country=country_name,
    )


def build_request_config(location: Location | None) -> GroundingRequestConfig:
    return GroundingRequestConfig(lat_lng=location)


def build_recommendation_request(
    query: str,
    location: Location | None,
    language: Language,
    country_code: str | None,
    is_direct_match: bool = False,
) -> tuple[str, GroundingRequestConfig]:
    """Build the prompt and grounding configuration for one search.

    Pure construction: a missing location still yields a valid prompt, with
    the coordinates rendered as a placeholder and no retrieval anchoring.
    """
    country_name = resolve_country_name(country_code)
    prompt = build_recommendation_prompt(
        query, location, language, country_name, is_direct_match,
    )
    return prompt, build_request_config(location)


def build_suggestion_prompt(
    query: str,
    language: Language,
    country_code: str | None,
) -> str:
    return SUGGESTION_PROMPT.format(
        query=query,
        region=country_code or DEFAULT_REGION,
        count=SUGGESTION_COUNT,
        language=_LANGUAGE_NAMES[language],
    )
