from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class GeminiConfig:
    api_key: str = os.getenv("GEMINI_API_KEY", os.getenv("API_KEY", ""))
    recommendation_model: str = "gemini-2.5-flash"
    suggestion_model: str = "gemini-3-flash-preview"
    timeout: float = float(os.getenv("GEMINI_TIMEOUT", "15"))
    enabled: bool = True


DEFAULT_GEMINI_CONFIG = GeminiConfig()
