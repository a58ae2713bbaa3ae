"""Faceted dictionary search over the SQLite content store."""

import re
import sqlite3
from collections.abc import Iterable, Sequence

from loguru import logger

from lexicon_search.core.collation import fold
from lexicon_search.models.entry import Example, Meaning, SearchResultItem, Word
from lexicon_search.models.filters import FilterSpec, PageSpec, StatusScope
from lexicon_search.models.vocabulary import (
    CATEGORY_COLUMN,
    DICTIONARY_COLUMN,
    MARKER_COLUMNS,
    ORIGIN_COLUMN,
    MarkerKey,
)

_MEANING_COLUMNS = (
    "word_id, id, number, origin, meaning, observation, remission, grammar_categ, dictionary, "
    + ", ".join(MARKER_COLUMNS[key] for key in MarkerKey)
)

_MATCH_TYPES = {0: "exact", 1: "partial", 2: "partial", 3: "partial"}

_INTEGER = re.compile(r"-?[0-9]+")
_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _in_clause(column: str, values: Sequence[str | int]) -> tuple[str, list[str | int]]:
    placeholders = ", ".join("?" for _ in values)
    return f"{column} IN ({placeholders})", list(values)


def _build_where(filters: FilterSpec, scope: StatusScope) -> tuple[str, list[str | int]]:
    """AND across dimensions, OR within each. Empty dimensions add nothing."""
    clauses: list[str] = []
    params: list[str | int] = []

    def add(clause: str, clause_params: Iterable[str | int]) -> None:
        clauses.append(clause)
        params.extend(clause_params)

    if scope.statuses is not None:
        if scope.statuses:
            add(*_in_clause("w.status", sorted(scope.statuses)))
        else:
            clauses.append("0")

    if filters.assigned_to:
        ids = [
            int(v)
            for v in filters.assigned_to
            if _INTEGER.fullmatch(v) and _INT64_MIN <= int(v) <= _INT64_MAX
        ]
        if ids:
            add(*_in_clause("w.assigned_to", ids))

    if filters.query:
        add("fold(w.lemma) LIKE ? ESCAPE '\\'", [f"%{_escape_like(fold(filters.query))}%"])

    if filters.letters:
        add(*_in_clause("fold(w.letter)", [fold(letter) for letter in filters.letters]))

    if filters.origins:
        add(
            "(" + " OR ".join("fold(m.origin) LIKE ? ESCAPE '\\'" for _ in filters.origins) + ")",
            [f"%{_escape_like(fold(origin))}%" for origin in filters.origins],
        )

    if filters.dictionaries:
        add(*_in_clause(f"m.{DICTIONARY_COLUMN}", filters.dictionaries))

    if filters.categories:
        add(*_in_clause(f"m.{CATEGORY_COLUMN}", filters.categories))

    for key in MarkerKey:
        values = filters.marker_values(key)
        if values:
            add(*_in_clause(f"m.{MARKER_COLUMNS[key]}", values))

    where_sql = " AND ".join(clauses) if clauses else "1"
    return where_sql, params


def _priority_sql(query: str) -> tuple[str, list[str | int]]:
    """Rank exact lemma, prefix, inner-word prefix, then substring matches."""
    if not query:
        return "4", []
    folded = fold(query)
    escaped = _escape_like(folded)
    return (
        "CASE"
        " WHEN fold(w.lemma) = ? THEN 0"
        " WHEN fold(w.lemma) LIKE ? ESCAPE '\\' THEN 1"
        " WHEN fold(w.lemma) LIKE ? ESCAPE '\\' THEN 2"
        " WHEN fold(w.lemma) LIKE ? ESCAPE '\\' THEN 3"
        " ELSE 4 END",
        [folded, f"{escaped}%", f"% {escaped}%", f"%{escaped}%"],
    )


def _row_to_meaning(row: sqlite3.Row | tuple, examples: tuple[Example, ...] = ()) -> Meaning:
    markers = {key: row[9 + i] for i, key in enumerate(MarkerKey)}
    return Meaning(
        number=row[2],
        origin=row[3],
        meaning=row[4],
        observation=row[5],
        remission=row[6],
        grammar_category=row[7],
        dictionary=row[8],
        markers=markers,
        examples=examples,
    )


def load_meanings(
    conn: sqlite3.Connection,
    word_ids: Sequence[int],
    *,
    with_examples: bool = False,
) -> dict[int, tuple[Meaning, ...]]:
    """Fetch meanings (ordered by number) for each word id."""
    if not word_ids:
        return {}
    clause, params = _in_clause("word_id", word_ids)
    rows = conn.execute(
        f"SELECT {_MEANING_COLUMNS} FROM meanings WHERE {clause} ORDER BY word_id, number, id",
        params,
    ).fetchall()

    examples_by_meaning: dict[int, list[Example]] = {}
    if with_examples and rows:
        ex_clause, ex_params = _in_clause("meaning_id", [r[1] for r in rows])
        for ex in conn.execute(
            f"SELECT meaning_id, value, author, title, source, date, page "
            f"FROM examples WHERE {ex_clause} ORDER BY meaning_id, id",
            ex_params,
        ).fetchall():
            examples_by_meaning.setdefault(ex[0], []).append(
                Example(value=ex[1], author=ex[2], title=ex[3], source=ex[4], date=ex[5], page=ex[6])
            )

    result: dict[int, list[Meaning]] = {}
    for r in rows:
        examples = tuple(examples_by_meaning.get(r[1], ()))
        result.setdefault(r[0], []).append(_row_to_meaning(r, examples))
    return {word_id: tuple(meanings) for word_id, meanings in result.items()}


def search_words(
    conn: sqlite3.Connection,
    filters: FilterSpec,
    scope: StatusScope,
    page: PageSpec,
) -> tuple[list[SearchResultItem], int]:
    """Search words matching every filter within the status scope.

    Args:
        conn: Database connection with collation functions registered.
        filters: Validated filters.
        scope: Statuses the caller may see.
        page: Page to return.

    Returns:
        Tuple of (results, total_count). The count is taken before paging.
    """
    where_sql, params = _build_where(filters, scope)

    count_sql = f"""
        SELECT COUNT(DISTINCT w.id)
        FROM words w
        LEFT JOIN meanings m ON m.word_id = w.id
        WHERE {where_sql}
    """
    total = conn.execute(count_sql, params).fetchone()[0]

    priority_sql, priority_params = _priority_sql(filters.query)
    select_sql = f"""
        SELECT w.id, w.lemma, w.root, w.letter, w.status, w.assigned_to, w.created_by,
               {priority_sql} AS priority
        FROM words w
        LEFT JOIN meanings m ON m.word_id = w.id
        WHERE {where_sql}
        GROUP BY w.id
        ORDER BY priority, w.lemma COLLATE es, w.id
        LIMIT ? OFFSET ?
    """
    logger.debug("search where={} params={}", where_sql, params)
    rows = conn.execute(
        select_sql, [*priority_params, *params, page.limit, page.offset]
    ).fetchall()

    meanings = load_meanings(conn, [r[0] for r in rows])
    results = [
        SearchResultItem(
            word=Word(lemma=r[1], root=r[2] or r[1], meanings=meanings.get(r[0], ())),
            letter=r[3],
            match_type=_MATCH_TYPES.get(r[7], "filter"),
            status=r[4],
            assigned_to=r[5],
            created_by=r[6],
        )
        for r in rows
    ]
    return results, total
