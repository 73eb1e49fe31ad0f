from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class GeoConfig:
    reverse_geocode_url: str = os.getenv(
        "REVERSE_GEOCODE_URL",
        "https://api.bigdatacloud.net/data/reverse-geocode-client",
    )
    locality_language: str = "en"
    timeout: float = 10.0
    enabled: bool = os.getenv("REVERSE_GEOCODE_ENABLED", "true").lower() in {"1", "true", "yes"}


DEFAULT_GEO_CONFIG = GeoConfig()
