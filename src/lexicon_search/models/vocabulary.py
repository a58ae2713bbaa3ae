"""Facet vocabulary: the closed set of filterable dimensions and their columns."""

from enum import Enum


class MarkerKey(str, Enum):
    """Lexicographic marker dimensions attached to a meaning.

    The value is the query-string parameter name. Order is the order
    dimensions are parsed, filtered and reported in.
    """

    SOCIAL_VALUATIONS = "socialValuations"
    SOCIAL_STRATUM = "socialStratumMarkers"
    STYLE = "styleMarkers"
    INTENTIONALITY = "intentionalityMarkers"
    GEOGRAPHICAL = "geographicalMarkers"
    CHRONOLOGICAL = "chronologicalMarkers"
    FREQUENCY = "frequencyMarkers"


MARKER_COLUMNS: dict[MarkerKey, str] = {
    MarkerKey.SOCIAL_VALUATIONS: "social_valuation",
    MarkerKey.SOCIAL_STRATUM: "social_mark",
    MarkerKey.STYLE: "style_mark",
    MarkerKey.INTENTIONALITY: "inten_mark",
    MarkerKey.GEOGRAPHICAL: "geo_mark",
    MarkerKey.CHRONOLOGICAL: "chrono_mark",
    MarkerKey.FREQUENCY: "freq_mark",
}

_missing = [key for key in MarkerKey if key not in MARKER_COLUMNS]
if _missing:
    msg = f"Marker keys without a column mapping: {_missing!r}"
    raise RuntimeError(msg)

CATEGORY_COLUMN = "grammar_categ"
ORIGIN_COLUMN = "origin"
DICTIONARY_COLUMN = "dictionary"

# Every meanings column whose distinct values may be requested as facet metadata.
FACET_COLUMNS: frozenset[str] = frozenset(
    {CATEGORY_COLUMN, ORIGIN_COLUMN, DICTIONARY_COLUMN, *MARKER_COLUMNS.values()}
)

MARKER_LABELS: dict[MarkerKey, str] = {
    MarkerKey.SOCIAL_VALUATIONS: "Valoración social",
    MarkerKey.SOCIAL_STRATUM: "Marca de estrato social",
    MarkerKey.STYLE: "Marca de estilo",
    MarkerKey.INTENTIONALITY: "Marca de intencionalidad",
    MarkerKey.GEOGRAPHICAL: "Marca geográfica",
    MarkerKey.CHRONOLOGICAL: "Marca cronológica",
    MarkerKey.FREQUENCY: "Marca de frecuencia",
}
