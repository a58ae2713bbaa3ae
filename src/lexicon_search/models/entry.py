"""Domain models for dictionary entries and search responses."""

from dataclasses import dataclass, field

from lexicon_search.models.vocabulary import MarkerKey


@dataclass(frozen=True)
class Example:
    """A usage example with optional citation."""

    value: str
    author: str | None = None
    title: str | None = None
    source: str | None = None
    date: str | None = None
    page: str | None = None


@dataclass(frozen=True)
class Meaning:
    """A single numbered sense of a word."""

    number: int
    meaning: str
    origin: str | None = None
    observation: str | None = None
    remission: str | None = None
    grammar_category: str | None = None
    dictionary: str | None = None
    markers: dict[MarkerKey, str | None] = field(default_factory=dict)
    examples: tuple[Example, ...] = ()


@dataclass(frozen=True)
class Word:
    """A lemma with its ordered senses."""

    lemma: str
    root: str
    meanings: tuple[Meaning, ...] = ()


@dataclass(frozen=True)
class SearchResultItem:
    word: Word
    letter: str
    match_type: str
    status: str
    assigned_to: int | None = None
    created_by: int | None = None


@dataclass(frozen=True)
class WordNote:
    """An editorial comment on a word."""

    id: int
    note: str
    created_at: str
    username: str | None = None


@dataclass(frozen=True)
class WordDetail:
    """Full record of one word, as returned by a lemma lookup."""

    word_id: int
    word: Word
    letter: str
    status: str
    assigned_to: int | None = None
    created_by: int | None = None
    comments: tuple[WordNote, ...] = ()


@dataclass(frozen=True)
class FacetMetadata:
    """Distinct values per facet dimension, sorted in Spanish collation."""

    categories: tuple[str, ...] = ()
    origins: tuple[str, ...] = ()
    dictionaries: tuple[str, ...] = ()
    markers: dict[MarkerKey, tuple[str, ...]] = field(default_factory=dict)


@dataclass(frozen=True)
class PaginationResult:
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


@dataclass(frozen=True)
class WordOfTheDay:
    word: Word
    letter: str
