from __future__ import annotations

import logging
import os

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from .auth.dependencies import get_current_user, require_user
from .auth.models import LoginRequest, ProfileUpdate, SignupRequest, UserProfile
from .auth.users import AuthError, authenticate, register_user, update_profile
from .feedback.store import (
    FeedbackRequest,
    FeedbackResponse,
    get_feedback,
    record_feedback,
)
from .geo.reverse_geocode import lookup_country_code
from .recommendations.content import (
    CATEGORIES,
    DEFAULT_QUERIES,
    FILTER_LABELS,
    TAG_LABELS,
    category_query,
    default_query,
    error_message,
)
from .recommendations.models import (
    Language,
    Location,
    RecommendationRequest,
    RecommendationResponse,
    SearchStateOut,
    SearchSuggestion,
    SortKey,
    SuggestionRequest,
)
from .recommendations.presenter import DISPLAY_LIMIT, build_highlight, present
from .recommendations.retrieval import get_local_recommendations
from .recommendations.search_state import find_search_state, get_search_state
from .recommendations.suggestions import (
    MIN_QUERY_LENGTH,
    SETTLE_WINDOW_SECONDS,
    get_search_suggestions,
)
from .session.context import (
    LanguageRequest,
    SessionContext,
    load_session_context,
    save_session_context,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Daleeli Discovery API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "daleeli-secret-change-in-production"),
)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    return {
        "languages": [lang.value for lang in Language],
        "default_queries": {lang.value: q for lang, q in DEFAULT_QUERIES.items()},
        "sort_keys": [key.value for key in SortKey],
        "display_limit": DISPLAY_LIMIT,
        "suggestions": {
            "min_query_length": MIN_QUERY_LENGTH,
            "debounce_ms": int(SETTLE_WINDOW_SECONDS * 1000),
        },
        "categories": [
            {"id": cat_id, "label": {lang.value: label for lang, label in labels.items()}}
            for cat_id, labels in CATEGORIES.items()
        ],
        "filter_labels": {lang.value: labels for lang, labels in FILTER_LABELS.items()},
        "tag_labels": {lang.value: labels for lang, labels in TAG_LABELS.items()},
    }


# ── Session endpoints ────────────────────────────────────────────────────


@app.get("/session", response_model=SessionContext)
def session_info(request: Request) -> SessionContext:
    ctx = load_session_context(request)
    save_session_context(request, ctx)
    return ctx


@app.post("/session/location", response_model=SessionContext)
def set_location(body: Location, request: Request) -> SessionContext:
    ctx = load_session_context(request)
    ctx.location = body

    country_code = lookup_country_code(body)
    if country_code:
        ctx.country_code = country_code

    save_session_context(request, ctx)
    return ctx


@app.post("/session/language", response_model=SessionContext)
def set_language(body: LanguageRequest, request: Request) -> SessionContext:
    ctx = load_session_context(request)
    if body.language != ctx.language:
        ctx.language = body.language
        # Listings carry language-specific text; start over
        state = find_search_state(ctx.session_id)
        if state is not None:
            state.reset()
    save_session_context(request, ctx)
    return ctx


# ── Search endpoints ─────────────────────────────────────────────────────


def _run_search(ctx: SessionContext, body: RecommendationRequest):
    query = body.query.strip()
    if not query:
        raise HTTPException(status_code=422, detail="Query must not be blank")

    language = body.language or ctx.language
    location = body.location or ctx.location
    state = get_search_state(ctx.session_id)
    token = state.begin()

    try:
        result = get_local_recommendations(
            query,
            location,
            language,
            ctx.country_code,
            is_direct_match=body.is_direct_match,
        )
    except Exception as exc:
        kind = state.fail(token, exc)
        logger.error("Search %r failed (%s): %s", query, kind.value, exc)
        return JSONResponse(
            status_code=502,
            content={"error": kind.value, "message": error_message(kind.value, language)},
        )

    if body.limit:
        result = result.model_copy(update={"businesses": result.businesses[:body.limit]})

    if not state.complete(token, result):
        raise HTTPException(status_code=409, detail="Superseded by a newer search")

    return RecommendationResponse(
        text=result.text,
        businesses=result.businesses,
        direct_match=result.direct_match,
        displayed=present(result.businesses, open_now=body.open_now, sort_by=body.sort_by),
        highlight=build_highlight(result, language),
    )


@app.post("/recommendations", response_model=RecommendationResponse)
def recommendations(body: RecommendationRequest, request: Request):
    ctx = load_session_context(request)
    save_session_context(request, ctx)
    return _run_search(ctx, body)


@app.post("/recommendations/initial", response_model=RecommendationResponse)
def initial_recommendations(request: Request):
    """First-load search for the session language's default query."""
    ctx = load_session_context(request)
    save_session_context(request, ctx)
    body = RecommendationRequest(query=default_query(ctx.language), limit=DISPLAY_LIMIT)
    return _run_search(ctx, body)


@app.post("/recommendations/category/{category_id}", response_model=RecommendationResponse)
def category_recommendations(category_id: str, request: Request):
    """Quick search for a category, using its label in the session language."""
    ctx = load_session_context(request)
    save_session_context(request, ctx)
    try:
        query = category_query(category_id, ctx.language)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown category {category_id!r}")
    return _run_search(ctx, RecommendationRequest(query=query, limit=DISPLAY_LIMIT))


@app.get("/recommendations/last", response_model=SearchStateOut)
def last_recommendations(request: Request) -> SearchStateOut:
    ctx = load_session_context(request)
    save_session_context(request, ctx)
    state = find_search_state(ctx.session_id)
    return state.snapshot() if state is not None else SearchStateOut()


@app.post("/suggestions", response_model=list[SearchSuggestion])
def suggestions(body: SuggestionRequest, request: Request) -> list[SearchSuggestion]:
    ctx = load_session_context(request)
    return get_search_suggestions(
        body.query,
        ctx.location,
        body.language or ctx.language,
        ctx.country_code,
    )


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/signup")
def signup(body: SignupRequest, request: Request) -> dict:
    if not body.accept_terms:
        raise HTTPException(status_code=400, detail="You must accept the Terms & Conditions")
    try:
        user = register_user(body.name, body.email, body.password, body.confirm_password)
    except AuthError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    ctx = load_session_context(request)
    ctx.user_email = user["email"]
    save_session_context(request, ctx)
    return {"status": "ok", "user": user}


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    try:
        user = authenticate(body.email, body.password)
    except AuthError as exc:
        raise HTTPException(status_code=401, detail=str(exc))

    ctx = load_session_context(request)
    ctx.user_email = user["email"]
    save_session_context(request, ctx)
    return {"status": "ok", "user": user}


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    ctx = load_session_context(request)
    ctx.user_email = None
    save_session_context(request, ctx)
    return {"status": "logged_out"}


@app.get("/auth/me", response_model=UserProfile)
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


# ── User endpoints ───────────────────────────────────────────────────────


@app.get("/profile", response_model=UserProfile)
def profile(user: dict = Depends(require_user)) -> dict:
    return user


@app.put("/profile", response_model=UserProfile)
def edit_profile(body: ProfileUpdate, user: dict = Depends(require_user)) -> dict:
    return update_profile(user["email"], **body.model_dump(exclude_none=True))


@app.post("/feedback", response_model=FeedbackResponse)
def feedback(body: FeedbackRequest, request: Request) -> FeedbackResponse:
    ctx = load_session_context(request)
    user = get_current_user(request)
    record_feedback(
        body.type,
        body.message,
        ctx.language,
        user["email"] if user else None,
    )
    return FeedbackResponse(status="recorded", total_feedback=len(get_feedback()))
