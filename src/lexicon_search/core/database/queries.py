"""Lookup queries against the content store that are not list searches."""

import sqlite3
from datetime import UTC, datetime

from lexicon_search.config import PUBLISHED_STATUS
from lexicon_search.core.search.searcher import load_meanings
from lexicon_search.models.entry import Word, WordDetail, WordNote
from lexicon_search.models.vocabulary import FACET_COLUMNS


def get_word_by_lemma(
    conn: sqlite3.Connection,
    lemma: str,
    *,
    include_drafts: bool = False,
) -> WordDetail | None:
    """Return the full record for ``lemma``, or None.

    Only published words are returned unless ``include_drafts`` is set.
    """
    sql = (
        "SELECT id, lemma, root, letter, status, assigned_to, created_by "
        "FROM words WHERE lemma = ?"
    )
    params: list[str] = [lemma]
    if not include_drafts:
        sql += " AND status = ?"
        params.append(PUBLISHED_STATUS)
    row = conn.execute(sql + " ORDER BY id LIMIT 1", params).fetchone()
    if row is None:
        return None

    word_id = row[0]
    meanings = load_meanings(conn, [word_id], with_examples=True)
    notes = conn.execute(
        "SELECT id, note, created_at, username FROM notes WHERE word_id = ? "
        "ORDER BY created_at DESC, id DESC",
        (word_id,),
    ).fetchall()
    return WordDetail(
        word_id=word_id,
        word=Word(lemma=row[1], root=row[2] or row[1], meanings=meanings.get(word_id, ())),
        letter=row[3],
        status=row[4],
        assigned_to=row[5],
        created_by=row[6],
        comments=tuple(
            WordNote(
                id=n[0],
                note=n[1],
                created_at=datetime.fromtimestamp(n[2] / 1000, tz=UTC).isoformat(),
                username=n[3],
            )
            for n in notes
        ),
    )


def distinct_values(conn: sqlite3.Connection, column: str) -> list[str]:
    """Return the distinct non-null values of a meanings facet column, unsorted."""
    if column not in FACET_COLUMNS:
        msg = f"Unknown facet column: {column!r}"
        raise ValueError(msg)
    rows = conn.execute(
        f"SELECT DISTINCT {column} FROM meanings WHERE {column} IS NOT NULL"
    ).fetchall()
    return [r[0] for r in rows]
