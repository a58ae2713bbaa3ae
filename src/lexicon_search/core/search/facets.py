"""Facet metadata: every value a filter UI may offer, regardless of the current filters."""

import asyncio

from loguru import logger

from lexicon_search.core.collation import sorted_unique
from lexicon_search.errors import ContentStoreUnavailable
from lexicon_search.models.entry import FacetMetadata
from lexicon_search.models.vocabulary import (
    CATEGORY_COLUMN,
    DICTIONARY_COLUMN,
    MARKER_COLUMNS,
    ORIGIN_COLUMN,
    MarkerKey,
)
from lexicon_search.protocols import ContentStoreProtocol

_PLAIN_FACETS: list[tuple[str, str]] = [
    ("categories", CATEGORY_COLUMN),
    ("origins", ORIGIN_COLUMN),
    ("dictionaries", DICTIONARY_COLUMN),
]


async def _fetch_column(store: ContentStoreProtocol, column: str) -> tuple[str, ...]:
    values = await asyncio.to_thread(store.distinct_values, column)
    return sorted_unique(values)


async def fetch_facet_metadata(store: ContentStoreProtocol) -> FacetMetadata:
    """Collect distinct values for every facet dimension concurrently.

    Each dimension is fetched on its own. A dimension whose lookup fails is
    reported empty and logged; an unreachable store fails the whole call.
    """
    dimensions: list[tuple[str | MarkerKey, str]] = [
        *_PLAIN_FACETS,
        *((key, MARKER_COLUMNS[key]) for key in MarkerKey),
    ]
    results = await asyncio.gather(
        *(_fetch_column(store, column) for _, column in dimensions),
        return_exceptions=True,
    )

    collected: dict[str | MarkerKey, tuple[str, ...]] = {}
    for (name, column), result in zip(dimensions, results, strict=True):
        if isinstance(result, ContentStoreUnavailable):
            raise result
        if isinstance(result, Exception):
            logger.warning("Facet lookup for column {} failed: {!r}", column, result)
            collected[name] = ()
        elif isinstance(result, BaseException):
            raise result
        else:
            collected[name] = result

    return FacetMetadata(
        categories=collected["categories"],
        origins=collected["origins"],
        dictionaries=collected["dictionaries"],
        markers={key: collected[key] for key in MarkerKey},
    )
