"""Render domain models as the JSON shapes clients consume."""

from typing import Any

from lexicon_search.models.entry import (
    Example,
    FacetMetadata,
    Meaning,
    PaginationResult,
    SearchResultItem,
    Word,
    WordDetail,
    WordOfTheDay,
)
from lexicon_search.models.vocabulary import MarkerKey


def _example(example: Example) -> dict[str, Any]:
    data: dict[str, Any] = {"value": example.value}
    for key in ("author", "title", "source", "date", "page"):
        value = getattr(example, key)
        if value is not None:
            data[key] = value
    return data


def _meaning(meaning: Meaning) -> dict[str, Any]:
    data: dict[str, Any] = {
        "number": meaning.number,
        "meaning": meaning.meaning,
        "origin": meaning.origin,
        "observation": meaning.observation,
        "remission": meaning.remission,
        "grammarCategory": meaning.grammar_category,
        "dictionary": meaning.dictionary,
    }
    for key in MarkerKey:
        data[key.value] = meaning.markers.get(key)
    data["examples"] = [_example(e) for e in meaning.examples] or None
    return data


def word_to_dict(word: Word) -> dict[str, Any]:
    return {
        "lemma": word.lemma,
        "root": word.root,
        "values": [_meaning(m) for m in word.meanings],
    }


def search_result_to_dict(item: SearchResultItem) -> dict[str, Any]:
    return {
        "word": word_to_dict(item.word),
        "letter": item.letter,
        "matchType": item.match_type,
        "status": item.status,
        "assignedTo": item.assigned_to,
        "createdBy": item.created_by,
    }


def facet_metadata_to_dict(metadata: FacetMetadata) -> dict[str, Any]:
    return {
        "categories": list(metadata.categories),
        "origins": list(metadata.origins),
        "dictionaries": list(metadata.dictionaries),
        "markers": {key.value: list(metadata.markers.get(key, ())) for key in MarkerKey},
    }


def pagination_to_dict(pagination: PaginationResult) -> dict[str, Any]:
    return {
        "page": pagination.page,
        "limit": pagination.limit,
        "total": pagination.total,
        "totalPages": pagination.total_pages,
        "hasNext": pagination.has_next,
        "hasPrev": pagination.has_prev,
    }


def word_detail_to_dict(detail: WordDetail) -> dict[str, Any]:
    return {
        "word": word_to_dict(detail.word),
        "letter": detail.letter,
        "status": detail.status,
        "assignedTo": detail.assigned_to,
        "createdBy": detail.created_by,
        "wordId": detail.word_id,
        "comments": [
            {
                "id": c.id,
                "note": c.note,
                "createdAt": c.created_at,
                "user": {"username": c.username} if c.username else None,
            }
            for c in detail.comments
        ],
    }


def word_of_the_day_to_dict(chosen: WordOfTheDay) -> dict[str, Any]:
    return {"word": word_to_dict(chosen.word), "letter": chosen.letter}
