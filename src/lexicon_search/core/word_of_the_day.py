"""Deterministic daily word pick with a process-wide cache."""

import threading
from contextlib import AbstractContextManager
from datetime import UTC, date, datetime

from loguru import logger

from lexicon_search.config import FALLBACK_LETTER, LETTERS, WORD_OF_THE_DAY_POOL_SIZE
from lexicon_search.core.collation import sort_key
from lexicon_search.core.search.visibility import PUBLISHED_ONLY
from lexicon_search.errors import WordOfTheDayUnavailable
from lexicon_search.models.entry import SearchResultItem, WordOfTheDay
from lexicon_search.models.filters import FilterSpec, PageSpec
from lexicon_search.protocols import ClockProtocol, ContentStoreProtocol


def hash_seed(seed: str) -> int:
    """Polynomial rolling hash (base 31, unsigned 32-bit).

    Stable across processes, unlike ``hash()``.
    """
    value = 0
    for ch in seed:
        value = (value * 31 + ord(ch)) & 0xFFFFFFFF
    return value


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(UTC)


class WordOfTheDaySelector:
    """Pick one published word per UTC calendar day.

    The pick depends only on the date and the published content, so concurrent
    cold requests agree; the lock merely avoids computing the same day twice.
    Entries are never evicted.
    """

    def __init__(
        self,
        store: ContentStoreProtocol,
        *,
        clock: ClockProtocol | None = None,
        lock: AbstractContextManager[object] | None = None,
    ) -> None:
        self.store = store
        self.clock = clock or SystemClock()
        self._lock = lock if lock is not None else threading.Lock()
        self._cache: dict[str, WordOfTheDay] = {}

    def seed_for(self, day: date | None = None) -> str:
        if day is None:
            day = self.clock.now().astimezone(UTC).date()
        return day.isoformat()

    def get(self, day: date | None = None) -> WordOfTheDay:
        """Return the word of the day, computing and caching it on first use.

        Raises:
            WordOfTheDayUnavailable: Neither the hashed letter nor the
                fallback letter has any published word.
        """
        seed = self.seed_for(day)
        cached = self._cache.get(seed)
        if cached is not None:
            logger.debug("Word of the day cache hit for {}", seed)
            return cached

        with self._lock:
            cached = self._cache.get(seed)
            if cached is not None:
                return cached
            chosen = self._select(seed)
            self._cache[seed] = chosen
            return chosen

    def _published_words(self, letter: str) -> list[SearchResultItem]:
        results, _total = self.store.search(
            FilterSpec(letters=(letter,)),
            PUBLISHED_ONLY,
            PageSpec(page=1, limit=WORD_OF_THE_DAY_POOL_SIZE),
        )
        return results

    def _select(self, seed: str) -> WordOfTheDay:
        letter = LETTERS[hash_seed(seed) % len(LETTERS)]
        pool = self._published_words(letter)
        if not pool:
            logger.debug("No published words for letter {}, falling back to {}", letter, FALLBACK_LETTER)
            letter = FALLBACK_LETTER
            pool = self._published_words(letter)

        if not pool:
            msg = f"No words found for {seed} (letter={letter}, no filters, results=0)"
            raise WordOfTheDayUnavailable(msg)

        pool = sorted(pool, key=lambda item: sort_key(item.word.lemma))
        chosen = pool[hash_seed(f"{seed}:{letter}") % len(pool)]

        detail = self.store.get_by_lemma(chosen.word.lemma)
        if detail is not None:
            result = WordOfTheDay(word=detail.word, letter=detail.letter)
        else:
            result = WordOfTheDay(word=chosen.word, letter=chosen.letter)
        logger.info("Word of the day for {}: {} ({})", seed, result.word.lemma, result.letter)
        return result
