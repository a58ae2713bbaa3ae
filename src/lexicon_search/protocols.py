"""Protocols for dependency injection in the search core."""

from datetime import datetime
from typing import Protocol, runtime_checkable

from lexicon_search.models.entry import SearchResultItem, WordDetail
from lexicon_search.models.filters import FilterSpec, PageSpec, StatusScope


@runtime_checkable
class ContentStoreProtocol(Protocol):
    """Protocol for the read side of the dictionary content store.

    Implementations raise ContentStoreUnavailable when the backend fails.
    """

    def search(
        self, filters: FilterSpec, scope: StatusScope, page: PageSpec
    ) -> tuple[list[SearchResultItem], int]:
        """Return one page of matches and the total match count."""
        ...

    def distinct_values(self, column: str) -> list[str]:
        """Return the distinct non-null values of a facet column."""
        ...

    def get_by_lemma(self, lemma: str, *, include_drafts: bool = False) -> WordDetail | None:
        """Return the full record for a lemma, or None."""
        ...


@runtime_checkable
class RateLimiterProtocol(Protocol):
    """Protocol for the pre-parse request gate."""

    def allow(self, client: str, *, meta_only: bool = False) -> bool:
        """Record a request from ``client`` and return whether it may proceed."""
        ...


@runtime_checkable
class ClockProtocol(Protocol):
    """Protocol for the source of "now"."""

    def now(self) -> datetime:
        """Return the current time as an aware datetime."""
        ...
