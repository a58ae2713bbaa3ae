"""Typed request-side models: filters, paging and visibility context."""

from dataclasses import dataclass, field
from enum import Enum

from lexicon_search.models.vocabulary import MarkerKey


@dataclass(frozen=True)
class StatusAbsent:
    """No ``status`` parameter was sent; scope comes from the visibility policy."""


@dataclass(frozen=True)
class StatusPresent:
    """A ``status`` parameter was sent, possibly with an empty value."""

    value: str


StatusFilter = StatusAbsent | StatusPresent

STATUS_ABSENT = StatusAbsent()


@dataclass(frozen=True)
class FilterSpec:
    """Validated search filters.

    List dimensions are tuples in request order; repeated values are kept.
    """

    query: str = ""
    categories: tuple[str, ...] = ()
    origins: tuple[str, ...] = ()
    letters: tuple[str, ...] = ()
    dictionaries: tuple[str, ...] = ()
    status: StatusFilter = STATUS_ABSENT
    assigned_to: tuple[str, ...] = ()
    markers: dict[MarkerKey, tuple[str, ...]] = field(default_factory=dict)

    def marker_values(self, key: MarkerKey) -> tuple[str, ...]:
        return self.markers.get(key, ())


@dataclass(frozen=True)
class PageSpec:
    page: int = 1
    limit: int = 20

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class ParsedSearch:
    """Output of the query parser."""

    filters: FilterSpec
    page: PageSpec
    meta_only: bool = False


class Role(str, Enum):
    LEXICOGRAPHER = "lexicographer"
    EDITOR = "editor"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"

    @classmethod
    def parse(cls, value: str | None) -> "Role | None":
        """Map a raw role string to a Role, treating unknown values as absent."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class VisibilityContext:
    editor_mode: bool = False
    role: Role | None = None


@dataclass(frozen=True)
class StatusScope:
    """Statuses a query may return. ``statuses=None`` means unrestricted."""

    statuses: frozenset[str] | None = None

    @property
    def unrestricted(self) -> bool:
        return self.statuses is None

    def allows(self, status: str) -> bool:
        return self.statuses is None or status in self.statuses
