"""Localized strings shared by the recommendation pipeline and the API."""

from __future__ import annotations

from .models import Language

DEFAULT_REGION = "the Middle East"

DEFAULT_QUERIES: dict[Language, str] = {
    Language.en: "top tourist spots",
    Language.ar: "أبرز المعالم السياحية",
}

REVIEW_SNIPPETS: dict[Language, list[str]] = {
    Language.en: [
        "Must visit location! The atmosphere is incredible.",
        "The staff was incredibly helpful and the food was divine.",
        "Beautiful interior and great service. Highly recommended.",
        "Best experience I've had in the city so far.",
    ],
    Language.ar: [
        "مكان رائع يستحق الزيارة! الأجواء مذهلة.",
        "طاقم العمل متعاون للغاية والطعام كان لذيذاً.",
        "تصميم داخلي جميل وخدمة ممتازة. أنصح به بشدة.",
        "أفضل تجربة لي في المدينة حتى الآن.",
    ],
}

OPENING_HOURS: dict[Language, list[str]] = {
    Language.en: [
        "Mon-Fri: 09:00 AM - 10:00 PM",
        "Sat-Sun: 10:00 AM - 11:00 PM",
    ],
    Language.ar: [
        "الاثنين-الجمعة: 09:00 ص - 10:00 م",
        "السبت-الأحد: 10:00 ص - 11:00 م",
    ],
}

ERROR_MESSAGES: dict[Language, dict[str, str]] = {
    Language.en: {
        "key_not_found": "The discovery service is unavailable or misconfigured. Please contact support.",
        "generic": "Something went wrong while searching. Please try again.",
    },
    Language.ar: {
        "key_not_found": "خدمة البحث غير متاحة أو غير مهيأة بشكل صحيح. يرجى التواصل مع الدعم.",
        "generic": "حدث خطأ أثناء البحث. يرجى المحاولة مرة أخرى.",
    },
}

HIGHLIGHT_TEMPLATES: dict[Language, dict[str, str]] = {
    Language.en: {
        "hiddenGem": "Celestial Discovery: {name}",
        "trending": "{name} glows bright tonight!",
    },
    Language.ar: {
        "hiddenGem": "اكتشاف سماوي: {name}",
        "trending": "{name} يتألق الليلة!",
    },
}


# Quick-search categories; the localized label is the query that gets sent.
CATEGORIES: dict[str, dict[Language, str]] = {
    "restaurants": {Language.en: "Food & Dining", Language.ar: "مطاعم ومأكولات"},
    "shopping": {Language.en: "Shopping", Language.ar: "تسوق"},
    "culture": {Language.en: "Culture & History", Language.ar: "ثقافة وتاريخ"},
    "nature": {Language.en: "Nature & Sightseeing", Language.ar: "طبيعة ومعالم"},
    "adventure": {Language.en: "Adventure", Language.ar: "مغامرة"},
    "nightlife": {Language.en: "Nightlife", Language.ar: "ترفيه ليلي"},
    "beauty": {Language.en: "Beauty & Spa", Language.ar: "جمال وسبا"},
    "fitness": {Language.en: "Gym & Fitness", Language.ar: "لياقة وبدنية"},
    "health": {Language.en: "Hospitals", Language.ar: "مستشفيات"},
    "heritage": {Language.en: "Heritage Sites", Language.ar: "مواقع تراثية"},
}

FILTER_LABELS: dict[Language, dict[str, str]] = {
    Language.en: {
        "distance": "Distance",
        "rating": "Rating",
        "openNow": "Open Now",
        "popularity": "Popularity",
        "reset": "Reset",
    },
    Language.ar: {
        "distance": "المسافة",
        "rating": "التقييم",
        "openNow": "مفتوح الآن",
        "popularity": "الأكثر شعبية",
        "reset": "إعادة تعيين",
    },
}

TAG_LABELS: dict[Language, dict[str, str]] = {
    Language.en: {
        "trending": "Trending Today",
        "hiddenGem": "Hidden Gem",
        "popular": "Traveler Favorite",
        "personalized": "Recommended for You",
    },
    Language.ar: {
        "trending": "رائج اليوم",
        "hiddenGem": "جوهرة مخفية",
        "popular": "مفضل لدى المسافرين",
        "personalized": "مقترح لك",
    },
}


def category_query(category_id: str, language: Language) -> str:
    """Search text for a quick-search category; ``KeyError`` if unknown."""
    return CATEGORIES[category_id][language]


def default_query(language: Language) -> str:
    """Query issued once on first load, as soon as a location is known."""
    return DEFAULT_QUERIES[language]


def error_message(kind: str, language: Language) -> str:
    messages = ERROR_MESSAGES[language]
    return messages.get(kind, messages["generic"])
