"""Tests for the word-of-the-day selector."""

import threading
from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from lexicon_search.config import FALLBACK_LETTER, LETTERS
from lexicon_search.core.collation import sort_key
from lexicon_search.core.database.store import SqliteContentStore
from lexicon_search.core.word_of_the_day import WordOfTheDaySelector, hash_seed
from lexicon_search.errors import WordOfTheDayUnavailable
from tests.unit.fakes import CountingLock, FakeContentStore, FixedClock

DAY = datetime(2024, 3, 15, 12, 0, tzinfo=UTC)


def _fallback_only_store() -> FakeContentStore:
    store = FakeContentStore()
    for lemma in ("once", "ojota", "ocho", "ñuble"):
        store.add_word(lemma, lemma[0])
    store.add_word("oreja", "o", status="redacted")
    return store


def test_hash_seed_is_stable() -> None:
    assert hash_seed("") == 0
    assert hash_seed("a") == 97
    assert hash_seed("ab") == 97 * 31 + 98
    assert 0 <= hash_seed("2024-03-15" * 50) < 2**32


def test_seed_is_the_utc_date() -> None:
    late_evening_in_chile = datetime(2024, 3, 15, 22, 30, tzinfo=timezone(timedelta(hours=-3)))
    selector = WordOfTheDaySelector(FakeContentStore(), clock=FixedClock(late_evening_in_chile))
    assert selector.seed_for() == "2024-03-16"


def test_same_day_is_computed_once() -> None:
    store = _fallback_only_store()
    lock = CountingLock()
    selector = WordOfTheDaySelector(store, clock=FixedClock(DAY), lock=lock)

    first = selector.get()
    searches = store.count("search")
    second = selector.get()

    assert first == second
    assert store.count("search") == searches
    assert lock.acquired == 1


def test_pick_is_deterministic_across_instances() -> None:
    a = WordOfTheDaySelector(_fallback_only_store(), clock=FixedClock(DAY)).get()
    b = WordOfTheDaySelector(_fallback_only_store(), clock=FixedClock(DAY)).get()
    assert a == b


def test_falls_back_to_the_fallback_letter() -> None:
    store = _fallback_only_store()
    chosen = WordOfTheDaySelector(store, clock=FixedClock(DAY)).get()

    seed = "2024-03-15"
    hashed = LETTERS[hash_seed(seed) % len(LETTERS)]
    published_o = sorted(["once", "ojota", "ocho"], key=sort_key)
    if hashed == "ñ":
        assert chosen.word.lemma == "ñuble"
    else:
        assert chosen.letter == FALLBACK_LETTER
        assert chosen.word.lemma == published_o[hash_seed(f"{seed}:o") % len(published_o)]


def test_drafts_are_never_chosen() -> None:
    store = FakeContentStore()
    store.add_word("oreja", "o", status="redacted")
    with pytest.raises(WordOfTheDayUnavailable):
        WordOfTheDaySelector(store, clock=FixedClock(DAY)).get()


def test_empty_store_raises() -> None:
    with pytest.raises(WordOfTheDayUnavailable) as exc_info:
        WordOfTheDaySelector(FakeContentStore(), clock=FixedClock(DAY)).get()
    assert exc_info.value.status_code == 500


def test_each_day_has_its_own_cache_entry() -> None:
    store = _fallback_only_store()
    selector = WordOfTheDaySelector(store, clock=FixedClock(DAY))
    selector.get(date(2024, 3, 15))
    before = store.count("search")
    selector.get(date(2024, 3, 16))
    assert store.count("search") > before


def test_pick_from_database_is_published(store: SqliteContentStore) -> None:
    chosen = WordOfTheDaySelector(store, clock=FixedClock(DAY)).get()
    detail = store.get_by_lemma(chosen.word.lemma)
    assert detail is not None
    assert detail.status == "published"
    assert chosen.word.meanings


def test_concurrent_cold_requests_agree_and_select_once() -> None:
    store = _fallback_only_store()
    store.delay = 0.01
    selector = WordOfTheDaySelector(store, clock=FixedClock(DAY))
    barrier = threading.Barrier(8)
    results: list[object] = []

    def worker() -> None:
        barrier.wait()
        results.append(selector.get())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 8
    assert all(r == results[0] for r in results)
    assert store.count("get_by_lemma") == 1
    assert results[0] == selector.get()
