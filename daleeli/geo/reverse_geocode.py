"""Country lookup for the user's coordinates."""

from __future__ import annotations

import logging

import requests

from ..recommendations.models import Location
from .config import DEFAULT_GEO_CONFIG, GeoConfig

logger = logging.getLogger(__name__)
_SESSION = requests.Session()


def lookup_country_code(
    location: Location,
    config: GeoConfig = DEFAULT_GEO_CONFIG,
) -> str | None:
    """Return the ISO alpha-2 country code for *location*, or None.

    Failures are logged and ignored; search works without a country.
    """
    if not config.enabled:
        return None

    params = {
        "latitude": location.latitude,
        "longitude": location.longitude,
        "localityLanguage": config.locality_language,
    }
    try:
        response = _SESSION.get(config.reverse_geocode_url, params=params, timeout=config.timeout)
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError):
        logger.warning("Country detection failed", exc_info=True)
        return None

    country_code = payload.get("countryCode") if isinstance(payload, dict) else None
    if not country_code:
        logger.info("Reverse geocoding returned no country for %s", params)
        return None
    return str(country_code).upper()
