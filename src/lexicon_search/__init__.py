"""Faceted search over a Spanish dictionary archive."""

from lexicon_search.core.database.store import SqliteContentStore
from lexicon_search.protocols import ClockProtocol, ContentStoreProtocol, RateLimiterProtocol
from lexicon_search.service import LexiconService

__all__ = [
    "ClockProtocol",
    "ContentStoreProtocol",
    "LexiconService",
    "RateLimiterProtocol",
    "SqliteContentStore",
]
