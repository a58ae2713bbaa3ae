"""MCP server exposing dictionary search, lookup and the word of the day."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any

from loguru import logger
from mcp.server.fastmcp import Context, FastMCP

from lexicon_search.bootstrap import open_archive
from lexicon_search.core.database.store import SqliteContentStore
from lexicon_search.errors import LexiconError
from lexicon_search.models.filters import Role, VisibilityContext
from lexicon_search.models.vocabulary import MarkerKey
from lexicon_search.service import LexiconService


def _error(exc: LexiconError) -> dict[str, Any]:
    return exc.to_dict()


# --- Core functions (testable without MCP context) ---


async def lexicon_search(
    service: LexiconService,
    *,
    query: str = "",
    categories: str | None = None,
    origins: str | None = None,
    letters: str | None = None,
    dictionaries: str | None = None,
    markers: dict[str, str] | None = None,
    status: str | None = None,
    assigned_to: str | None = None,
    page: int = 1,
    limit: int = 20,
    meta_only: bool = False,
    editor_mode: bool = False,
    role: str | None = None,
) -> dict[str, Any]:
    """Search dictionary entries by lemma and facets.

    List filters are comma-separated; values within a filter are ORed and
    filters are ANDed together.

    Args:
        query: Substring of the lemma (accent- and case-insensitive).
        categories: Grammatical categories, e.g. "m,adj".
        origins: Origins, e.g. "mapuche,quechua".
        letters: Index letters, e.g. "a,ñ".
        dictionaries: Source dictionaries, e.g. "duech".
        markers: Marker filters keyed by marker name, e.g. {"styleMarkers": "espon"}.
        status: Status filter (only meaningful in editor mode).
        assigned_to: Comma-separated user ids.
        page: 1-based page.
        limit: Results per page (1-1000).
        meta_only: Only return facet metadata.
        editor_mode: Include unpublished entries.
        role: Caller role, if authenticated.
    """
    params: dict[str, str] = {"q": query, "page": str(page), "limit": str(limit)}
    for key, value in (
        ("categories", categories),
        ("origins", origins),
        ("letters", letters),
        ("dictionaries", dictionaries),
        ("assignedTo", assigned_to),
        ("status", status),
    ):
        if value is not None:
            params[key] = value
    known_markers = {key.value for key in MarkerKey}
    for key, value in (markers or {}).items():
        if key not in known_markers:
            return {"error": f"Unknown marker '{key}'.", "reason": "invalid_input", "field": key}
        params[key] = value
    if meta_only:
        params["metaOnly"] = "true"

    context = VisibilityContext(editor_mode=editor_mode, role=Role.parse(role))
    try:
        return await service.search(params, context)
    except LexiconError as e:
        return _error(e)


async def lexicon_get_word(
    service: LexiconService,
    *,
    lemma: str,
    preview: bool = False,
    editor_mode: bool = False,
    role: str | None = None,
) -> dict[str, Any]:
    """Read the full entry for a lemma.

    Args:
        lemma: Exact headword.
        preview: Include the draft when the caller has a role.
        editor_mode: Include unpublished entries.
        role: Caller role, if authenticated.
    """
    context = VisibilityContext(editor_mode=editor_mode, role=Role.parse(role))
    try:
        return await service.get_word(lemma, context, preview=preview)
    except LexiconError as e:
        return _error(e)


async def lexicon_facets(service: LexiconService) -> dict[str, Any]:
    """List every value available for each filter."""
    try:
        return await service.facets()
    except LexiconError as e:
        return _error(e)


async def lexicon_word_of_the_day(service: LexiconService) -> dict[str, Any]:
    """Return today's word of the day."""
    try:
        return await service.word_of_the_day()
    except LexiconError as e:
        return _error(e)


# --- MCP Server Setup ---


@dataclass
class ServerContext:
    """Shared resources for the MCP server lifetime."""

    store: SqliteContentStore
    service: LexiconService


@asynccontextmanager
async def server_lifespan(_server: FastMCP) -> AsyncIterator[ServerContext]:
    """Open database on startup, close on shutdown."""
    store = open_archive()
    try:
        logger.info("MCP server ready")
        yield ServerContext(store=store, service=LexiconService(store))
    finally:
        store.close()


mcp_server = FastMCP(
    "lexicon-search",
    instructions="""\
A dictionary of Chilean Spanish. Entries have a lemma (headword) and numbered
meanings annotated with a grammatical category, an origin, a source dictionary
and sociolinguistic markers.

## Workflow

1. Call lexicon_facets_tool to see which categories, origins and marker values exist.
2. Search with lexicon_search_tool, combining a lemma substring with filters.
3. Call lexicon_get_word_tool with a lemma to read its examples and notes.

Pagination: when pagination.hasNext is true, request page + 1.
""",
    lifespan=server_lifespan,
)


def _service(mcp_ctx: Context) -> LexiconService:
    ctx: ServerContext = mcp_ctx.request_context.lifespan_context  # type: ignore[assignment]
    return ctx.service


# --- MCP Tool Wrappers ---


@mcp_server.tool()
async def lexicon_search_tool(
    ctx: Context,
    query: str = "",
    categories: str | None = None,
    origins: str | None = None,
    letters: str | None = None,
    dictionaries: str | None = None,
    markers: dict[str, str] | None = None,
    page: int = 1,
    limit: int = 20,
    meta_only: bool = False,
) -> dict[str, Any]:
    """Search published dictionary entries.

    Matches the query as a substring of the lemma, ignoring accents and case.
    Exact matches come first, then prefixes, then other partial matches.
    List filters are comma-separated strings, at most 10 values each.

    Args:
        query: Lemma substring (max 100 characters).
        categories: Grammatical categories, e.g. "m,adj".
        origins: Origins, e.g. "mapuche".
        letters: Index letters, e.g. "ch,ñ".
        dictionaries: Source dictionaries.
        markers: Marker filters, e.g. {"geographicalMarkers": "norte,sur"}.
        page: 1-based page.
        limit: Results per page (1-1000, default 20).
        meta_only: Only return facet metadata.
    """
    return await lexicon_search(
        _service(ctx),
        query=query,
        categories=categories,
        origins=origins,
        letters=letters,
        dictionaries=dictionaries,
        markers=markers,
        page=page,
        limit=limit,
        meta_only=meta_only,
    )


@mcp_server.tool()
async def lexicon_get_word_tool(ctx: Context, lemma: str) -> dict[str, Any]:
    """Read a published entry with all meanings, examples and editorial notes.

    Args:
        lemma: Exact headword, as returned by lexicon_search_tool.
    """
    return await lexicon_get_word(_service(ctx), lemma=lemma)


@mcp_server.tool()
async def lexicon_facets_tool(ctx: Context) -> dict[str, Any]:
    """List the values available for every search filter."""
    return await lexicon_facets(_service(ctx))


@mcp_server.tool()
async def lexicon_word_of_the_day_tool(ctx: Context) -> dict[str, Any]:
    """Return the word of the day (same for everyone on a given UTC date)."""
    return await lexicon_word_of_the_day(_service(ctx))


def run_mcp_server() -> None:
    """Run the MCP server with stdio transport."""
    from lexicon_search.logging_config import configure_logging

    configure_logging(verbose=False)
    mcp_server.run(transport="stdio")
