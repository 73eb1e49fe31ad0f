"""
Explicit session context.

Everything the pipeline needs from "the user's session" (language, country,
coordinates, who is logged in) travels in a :class:`SessionContext`.  Endpoints
load it once from the cookie session, pass it down, and save it back; nothing
else reads the cookie.
"""

from __future__ import annotations

import uuid

from fastapi import Request
from pydantic import BaseModel, Field, ValidationError

from ..recommendations.models import Language, Location

SESSION_KEY = "daleeli_session"
COUNTRY_KEY = "daleeli_country"


class SessionContext(BaseModel):
    session_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    language: Language = Language.en
    country_code: str | None = None
    location: Location | None = None
    user_email: str | None = None

    @property
    def is_logged_in(self) -> bool:
        return self.user_email is not None


class LanguageRequest(BaseModel):
    language: Language


def load_session_context(request: Request) -> SessionContext:
    raw = request.session.get(SESSION_KEY)
    try:
        ctx = SessionContext(**raw) if raw else SessionContext()
    except (TypeError, ValidationError):
        ctx = SessionContext()

    # Last known country survives a context reset
    if ctx.country_code is None and request.session.get(COUNTRY_KEY):
        ctx.country_code = request.session[COUNTRY_KEY]
    return ctx


def save_session_context(request: Request, ctx: SessionContext) -> None:
    request.session[SESSION_KEY] = ctx.model_dump(mode="json")
    if ctx.country_code:
        request.session[COUNTRY_KEY] = ctx.country_code
