"""Request-level orchestration shared by the HTTP, MCP and CLI surfaces."""

import asyncio
from collections.abc import Awaitable, Mapping
from typing import Any, TypeVar

from loguru import logger

from lexicon_search.config import MAX_LEMMA_LENGTH
from lexicon_search.core.search.facets import fetch_facet_metadata
from lexicon_search.core.search.pagination import empty_pagination, paginate
from lexicon_search.core.search.parser import parse_search_params
from lexicon_search.core.search.visibility import can_include_drafts, resolve_status_scope
from lexicon_search.core.word_of_the_day import WordOfTheDaySelector
from lexicon_search.errors import (
    ContentStoreUnavailable,
    InvalidLemma,
    LemmaTooLong,
    LexiconError,
    WordNotFound,
)
from lexicon_search.models.entry import FacetMetadata, SearchResultItem
from lexicon_search.models.filters import VisibilityContext
from lexicon_search.protocols import ClockProtocol, ContentStoreProtocol
from lexicon_search.serializers import (
    facet_metadata_to_dict,
    pagination_to_dict,
    search_result_to_dict,
    word_detail_to_dict,
    word_of_the_day_to_dict,
)

T = TypeVar("T")


async def _guarded(operation: str, awaitable: Awaitable[T]) -> T:
    """Let our own errors through; turn anything else into a generic store failure."""
    try:
        return await awaitable
    except LexiconError:
        raise
    except Exception as e:
        logger.exception("Unexpected failure during {}", operation)
        raise ContentStoreUnavailable() from e


class LexiconService:
    """Search, lookup and word-of-the-day over one content store.

    One instance lives for the whole process so the word-of-the-day cache is
    shared by every request.
    """

    def __init__(
        self,
        store: ContentStoreProtocol,
        *,
        clock: ClockProtocol | None = None,
        selector: WordOfTheDaySelector | None = None,
    ) -> None:
        self.store = store
        self.selector = selector or WordOfTheDaySelector(store, clock=clock)

    async def search(
        self, params: Mapping[str, str], context: VisibilityContext
    ) -> dict[str, Any]:
        """Run a faceted search and return the success envelope.

        Raises:
            ValidationError: The parameters are rejected by the parser.
            ContentStoreUnavailable: The store failed.
        """
        parsed = parse_search_params(params)
        scope = resolve_status_scope(context, parsed.filters.status)

        metadata: FacetMetadata
        results: list[SearchResultItem] = []
        if parsed.meta_only:
            metadata = await _guarded("facets", fetch_facet_metadata(self.store))
            pagination = empty_pagination(parsed.page.limit)
        else:
            metadata, (results, total) = await _guarded(
                "search",
                asyncio.gather(
                    fetch_facet_metadata(self.store),
                    asyncio.to_thread(self.store.search, parsed.filters, scope, parsed.page),
                ),
            )
            pagination = paginate(parsed.page.page, parsed.page.limit, total)

        return {
            "success": True,
            "data": {
                "results": [search_result_to_dict(r) for r in results],
                "metadata": facet_metadata_to_dict(metadata),
                "pagination": pagination_to_dict(pagination),
            },
        }

    async def facets(self) -> dict[str, Any]:
        metadata = await _guarded("facets", fetch_facet_metadata(self.store))
        return {"success": True, "data": facet_metadata_to_dict(metadata)}

    async def get_word(
        self, lemma: str, context: VisibilityContext, *, preview: bool = False
    ) -> dict[str, Any]:
        """Look up one lemma, including drafts for editors and previews.

        Raises:
            InvalidLemma: The lemma is empty.
            LemmaTooLong: The lemma exceeds the maximum length.
            WordNotFound: No visible word has this lemma.
        """
        lemma = (lemma or "").strip()
        if not lemma:
            raise InvalidLemma("Invalid lemma parameter", field="lemma")
        if len(lemma) > MAX_LEMMA_LENGTH:
            raise LemmaTooLong("Lemma too long", field="lemma")

        include_drafts = can_include_drafts(context, preview=preview)
        detail = await _guarded(
            "get_word",
            asyncio.to_thread(self.store.get_by_lemma, lemma, include_drafts=include_drafts),
        )
        if detail is None:
            raise WordNotFound(lemma)
        return {"success": True, "data": word_detail_to_dict(detail)}

    async def word_of_the_day(self) -> dict[str, Any]:
        """Return today's word.

        Raises:
            WordOfTheDayUnavailable: No published word exists to choose from.
        """
        chosen = await _guarded("word_of_the_day", asyncio.to_thread(self.selector.get))
        return {"success": True, "data": word_of_the_day_to_dict(chosen)}
