"""SQLite-backed implementation of the content store."""

import sqlite3
import threading
from collections.abc import Callable
from typing import TypeVar

from loguru import logger

from lexicon_search.core.database import queries
from lexicon_search.core.search.searcher import search_words
from lexicon_search.errors import ContentStoreUnavailable
from lexicon_search.models.entry import SearchResultItem, WordDetail
from lexicon_search.models.filters import FilterSpec, PageSpec, StatusScope

T = TypeVar("T")


class SqliteContentStore:
    """Serialize access to one SQLite connection and hide backend errors.

    Calls may arrive from several worker threads at once; a lock keeps a
    single statement in flight on the connection.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn
        self._lock = threading.Lock()

    def _run(self, operation: str, fn: Callable[[sqlite3.Connection], T]) -> T:
        try:
            with self._lock:
                return fn(self.conn)
        except sqlite3.Error as e:
            logger.exception("Content store {} failed", operation)
            raise ContentStoreUnavailable() from e

    def search(
        self, filters: FilterSpec, scope: StatusScope, page: PageSpec
    ) -> tuple[list[SearchResultItem], int]:
        return self._run("search", lambda conn: search_words(conn, filters, scope, page))

    def distinct_values(self, column: str) -> list[str]:
        return self._run("distinct_values", lambda conn: queries.distinct_values(conn, column))

    def get_by_lemma(self, lemma: str, *, include_drafts: bool = False) -> WordDetail | None:
        return self._run(
            "get_by_lemma",
            lambda conn: queries.get_word_by_lemma(conn, lemma, include_drafts=include_drafts),
        )

    def close(self) -> None:
        with self._lock:
            self.conn.close()
