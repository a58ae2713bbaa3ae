"""Tests for domain models, vocabulary and errors."""

import pytest

from lexicon_search.errors import ContentStoreUnavailable, TooManyFilterOptions, WordNotFound
from lexicon_search.models.entry import Word
from lexicon_search.models.filters import FilterSpec, PageSpec, StatusScope
from lexicon_search.models.vocabulary import FACET_COLUMNS, MARKER_COLUMNS, MARKER_LABELS, MarkerKey


def test_word_is_frozen() -> None:
    word = Word(lemma="once", root="once")
    with pytest.raises(AttributeError):
        word.lemma = "changed"  # type: ignore[misc]


def test_every_marker_has_a_column_and_label() -> None:
    assert set(MARKER_COLUMNS) == set(MarkerKey)
    assert set(MARKER_LABELS) == set(MarkerKey)
    assert set(MARKER_COLUMNS.values()) <= FACET_COLUMNS


def test_page_offset() -> None:
    assert PageSpec(page=3, limit=20).offset == 40


def test_marker_values_default_to_empty() -> None:
    assert FilterSpec().marker_values(MarkerKey.STYLE) == ()


def test_status_scope_allows() -> None:
    assert StatusScope(None).allows("imported")
    assert not StatusScope(frozenset({"published"})).allows("imported")


def test_error_payloads() -> None:
    assert TooManyFilterOptions("too many", field="letters").to_dict() == {
        "error": "too many",
        "reason": "too_many_filter_options",
        "field": "letters",
    }
    assert ContentStoreUnavailable().to_dict() == {
        "error": "Internal server error",
        "reason": "internal_error",
    }
    assert WordNotFound("x").status_code == 404
