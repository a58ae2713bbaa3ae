"""Turn raw query-string parameters into a validated search request."""

import math
import re
from collections.abc import Mapping

from loguru import logger

from lexicon_search.config import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    MAX_FILTER_OPTIONS,
    MAX_LIMIT,
    MAX_QUERY_LENGTH,
)
from lexicon_search.errors import InvalidPagination, QueryTooLong, TooManyFilterOptions
from lexicon_search.models.filters import (
    STATUS_ABSENT,
    FilterSpec,
    PageSpec,
    ParsedSearch,
    StatusFilter,
    StatusPresent,
)
from lexicon_search.models.vocabulary import MarkerKey

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

_TRUTHY = frozenset({"true", "1"})

# SQLite binds integers as signed 64-bit.
_MAX_OFFSET = 2**63 - 1


def parse_list(value: str | None) -> tuple[str, ...]:
    """Split a comma-separated value, trimming entries and dropping empties.

    Repeated entries are kept and count toward the option limit.
    """
    if not value:
        return ()
    return tuple(entry.strip() for entry in value.split(",") if entry.strip())


def _parse_int(value: str | None, default: int) -> int:
    if value is None:
        return default
    match = _LEADING_INT.match(value)
    if not match:
        return default
    return int(match.group(1))


def _parse_status(params: Mapping[str, str]) -> StatusFilter:
    if "status" not in params:
        return STATUS_ABSENT
    return StatusPresent((params["status"] or "").strip())


def parse_flag(value: str | None) -> bool:
    return value is not None and value.strip().lower() in _TRUTHY


def _check_cardinality(lists: list[tuple[str, tuple[str, ...]]]) -> None:
    for field, values in lists:
        if len(values) > MAX_FILTER_OPTIONS:
            msg = f"Too many filter options for '{field}' (max {MAX_FILTER_OPTIONS})"
            raise TooManyFilterOptions(msg, field=field)


def parse_page(params: Mapping[str, str]) -> PageSpec:
    """Read ``page`` and ``limit``, clamping them and defaulting non-numbers."""
    page = max(1, _parse_int(params.get("page"), DEFAULT_PAGE))
    limit = min(MAX_LIMIT, max(1, _parse_int(params.get("limit"), DEFAULT_LIMIT)))
    page = min(page, _MAX_OFFSET // limit + 1)
    for field, value in (("page", page), ("limit", limit)):
        if not math.isfinite(value):
            raise InvalidPagination(f"Invalid {field}", field=field)
    return PageSpec(page=page, limit=limit)


def parse_search_params(params: Mapping[str, str]) -> ParsedSearch:
    """Validate raw search parameters.

    Args:
        params: Query-string parameters, one value per key.

    Returns:
        ParsedSearch with filters, page and the meta-only flag.

    Raises:
        QueryTooLong: ``q`` exceeds the maximum length after trimming.
        TooManyFilterOptions: Any list dimension exceeds the option limit.
        InvalidPagination: Page or limit is not a finite number.
    """
    query = (params.get("q") or "").strip()
    if len(query) > MAX_QUERY_LENGTH:
        raise QueryTooLong("Query too long", field="q")

    categories = parse_list(params.get("categories"))
    origins = parse_list(params.get("origins"))
    letters = parse_list(params.get("letters"))
    dictionaries = parse_list(params.get("dictionaries"))
    assigned_to = parse_list(params.get("assignedTo"))
    markers = {key: parse_list(params.get(key.value)) for key in MarkerKey}

    _check_cardinality(
        [
            ("categories", categories),
            ("origins", origins),
            ("letters", letters),
            ("dictionaries", dictionaries),
            ("assignedTo", assigned_to),
            *((key.value, values) for key, values in markers.items()),
        ]
    )

    page = parse_page(params)
    meta_only = parse_flag(params.get("metaOnly")) or parse_flag(params.get("meta"))

    filters = FilterSpec(
        query=query,
        categories=categories,
        origins=origins,
        letters=letters,
        dictionaries=dictionaries,
        status=_parse_status(params),
        assigned_to=assigned_to,
        markers={key: values for key, values in markers.items() if values},
    )
    logger.debug("Parsed search: {} page={} meta_only={}", filters, page, meta_only)
    return ParsedSearch(filters=filters, page=page, meta_only=meta_only)
