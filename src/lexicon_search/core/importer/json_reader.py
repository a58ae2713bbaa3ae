"""Parse dictionary JSON export files into domain models."""

from dataclasses import dataclass
from typing import Any

from lexicon_search.config import LETTERS, STATUS_OPTIONS
from lexicon_search.core.collation import fold
from lexicon_search.models.entry import Example, Meaning
from lexicon_search.models.vocabulary import MarkerKey

_DEFAULT_STATUS = "imported"


@dataclass(frozen=True)
class ImportedNote:
    note: str
    username: str | None = None
    created_at: int | None = None


@dataclass(frozen=True)
class WordRecord:
    """One entry of an export file, ready to insert."""

    lemma: str
    root: str | None
    letter: str
    variant: str | None
    status: str
    created_by: int | None
    assigned_to: int | None
    meanings: tuple[Meaning, ...]
    notes: tuple[ImportedNote, ...] = ()


def _text(raw: dict[str, Any], key: str) -> str | None:
    value = raw.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _optional_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    return int(value)


def derive_letter(lemma: str) -> str:
    """Index letter of a lemma: its first folded character, or ``a`` as a last resort."""
    for ch in fold(lemma):
        if ch in LETTERS:
            return ch
    return LETTERS[0]


def _parse_examples(raw: Any) -> tuple[Example, ...]:
    if raw is None:
        return ()
    items = raw if isinstance(raw, list) else [raw]
    examples: list[Example] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        value = _text(item, "value")
        if not value:
            continue
        examples.append(
            Example(
                value=value,
                author=_text(item, "author"),
                title=_text(item, "title"),
                source=_text(item, "source"),
                date=_text(item, "date"),
                page=_text(item, "page"),
            )
        )
    return tuple(examples)


def _parse_meaning(raw: dict[str, Any], index: int) -> Meaning:
    number = raw.get("number")
    number = number if isinstance(number, int) else index + 1
    return Meaning(
        number=number,
        meaning=_text(raw, "meaning") or f"Definición {number}",
        origin=_text(raw, "origin"),
        observation=_text(raw, "observation"),
        remission=_text(raw, "remission"),
        grammar_category=_text(raw, "grammarCategory"),
        dictionary=_text(raw, "dictionary"),
        markers={key: _text(raw, key.value) for key in MarkerKey},
        examples=_parse_examples(raw.get("examples", raw.get("example"))),
    )


def parse_word(raw: dict[str, Any]) -> WordRecord:
    """Parse one raw entry.

    Raises:
        ValueError: The entry has no lemma or an unknown status.
    """
    lemma = _text(raw, "lemma")
    if not lemma:
        msg = f"Entry without lemma: {raw!r}"
        raise ValueError(msg)

    status = _text(raw, "status") or _DEFAULT_STATUS
    if status not in STATUS_OPTIONS:
        msg = f"Unknown status {status!r} for {lemma!r}"
        raise ValueError(msg)

    letter = fold(_text(raw, "letter") or derive_letter(lemma))
    meanings = [m for m in raw.get("meanings", raw.get("values", [])) if isinstance(m, dict)]
    notes = tuple(
        ImportedNote(
            note=n["note"],
            username=_text(n, "username"),
            created_at=_optional_int(n.get("createdAt")),
        )
        for n in raw.get("notes", [])
        if isinstance(n, dict) and _text(n, "note")
    )
    return WordRecord(
        lemma=lemma,
        root=_text(raw, "root"),
        letter=letter,
        variant=_text(raw, "variant"),
        status=status,
        created_by=_optional_int(raw.get("createdBy")),
        assigned_to=_optional_int(raw.get("assignedTo")),
        meanings=tuple(_parse_meaning(m, i) for i, m in enumerate(meanings)),
        notes=notes,
    )


def parse_export_data(data: Any) -> list[WordRecord]:
    """Parse an export file (``{"words": [...]}``) into word records.

    Raises:
        ValueError: The file is not an object with a ``words`` list, or an
            entry is invalid.
    """
    if not isinstance(data, dict) or not isinstance(data.get("words", []), list):
        msg = f"Expected an object with a 'words' list, got {type(data).__name__}"
        raise ValueError(msg)
    return [parse_word(raw) for raw in data.get("words", [])]
