from __future__ import annotations

from fastapi import HTTPException, Request

from ..session.context import load_session_context
from .users import get_profile


def get_current_user(request: Request) -> dict | None:
    """Return the logged-in user's profile, or ``None``."""
    ctx = load_session_context(request)
    if not ctx.is_logged_in:
        return None
    return get_profile(ctx.user_email)


def require_user(request: Request) -> dict:
    """Raise 401 if no user is logged in."""
    user = get_current_user(request)
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user
