"""FastAPI application exposing search, word lookup and the word of the day."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from loguru import logger

from lexicon_search.config import EDITOR_MODE_HEADER, USER_ROLE_HEADER
from lexicon_search.core.rate_limit import FixedWindowRateLimiter, client_address
from lexicon_search.core.search.parser import parse_flag
from lexicon_search.errors import LexiconError, RateLimited
from lexicon_search.models.filters import Role, VisibilityContext
from lexicon_search.protocols import RateLimiterProtocol
from lexicon_search.service import LexiconService

router = APIRouter()


def visibility_from_request(request: Request) -> VisibilityContext:
    """Editor mode from the proxy header or the editorMode query fallback."""
    editor_mode = (
        request.headers.get(EDITOR_MODE_HEADER) == "true"
        or request.query_params.get("editorMode") == "true"
    )
    return VisibilityContext(
        editor_mode=editor_mode,
        role=Role.parse(request.headers.get(USER_ROLE_HEADER)),
    )


def enforce_rate_limit(request: Request) -> None:
    client = client_address(
        request.headers.get("x-forwarded-for"),
        request.client.host if request.client else None,
    )
    meta_only = parse_flag(request.query_params.get("metaOnly")) or parse_flag(
        request.query_params.get("meta")
    )
    limiter: RateLimiterProtocol = request.app.state.rate_limiter
    if not limiter.allow(client, meta_only=meta_only):
        raise RateLimited()


def get_service(request: Request) -> LexiconService:
    return request.app.state.service  # type: ignore[no-any-return]


@router.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/api/search", dependencies=[Depends(enforce_rate_limit)])
async def search(
    request: Request,
    service: LexiconService = Depends(get_service),
) -> dict[str, Any]:
    """Search the dictionary.

    Query parameters: q, categories, origins, letters, dictionaries, status,
    assignedTo, page, limit, metaOnly, editorMode and one per marker key.
    """
    return await service.search(dict(request.query_params), visibility_from_request(request))


@router.get("/api/words/{lemma}", dependencies=[Depends(enforce_rate_limit)])
async def get_word(
    lemma: str,
    request: Request,
    service: LexiconService = Depends(get_service),
) -> dict[str, Any]:
    preview = parse_flag(request.query_params.get("preview"))
    return await service.get_word(lemma, visibility_from_request(request), preview=preview)


@router.get("/api/word-of-the-day", dependencies=[Depends(enforce_rate_limit)])
async def word_of_the_day(service: LexiconService = Depends(get_service)) -> dict[str, Any]:
    return await service.word_of_the_day()


async def _rate_limited_handler(_request: Request, _exc: Exception) -> PlainTextResponse:
    return PlainTextResponse("Too Many Requests", status_code=429)


async def _lexicon_error_handler(_request: Request, exc: LexiconError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.warning("Request failed: {}", exc.reason)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, **exc.to_dict()},
    )


def create_app(
    service: LexiconService | None = None,
    *,
    rate_limiter: RateLimiterProtocol | None = None,
) -> FastAPI:
    """Create the HTTP application.

    Without ``service`` the archive is opened on startup from the configured
    directories and closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if getattr(app.state, "service", None) is not None:
            yield
            return

        from lexicon_search.bootstrap import open_archive

        store = open_archive()
        app.state.service = LexiconService(store)
        logger.info("HTTP API ready")
        try:
            yield
        finally:
            store.close()

    app = FastAPI(
        title="Lexicon Search",
        description="Faceted dictionary search and word of the day",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.service = service
    app.state.rate_limiter = rate_limiter or FixedWindowRateLimiter()
    app.add_exception_handler(RateLimited, _rate_limited_handler)
    app.add_exception_handler(LexiconError, _lexicon_error_handler)
    app.include_router(router)
    return app


def run_http_server(host: str = "127.0.0.1", port: int = 8000) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    from lexicon_search.logging_config import configure_logging

    configure_logging(verbose=False)
    uvicorn.run(create_app(), host=host, port=port)
