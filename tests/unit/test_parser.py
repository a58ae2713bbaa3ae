"""Tests for search parameter parsing."""

import pytest

from lexicon_search.core.search.parser import parse_flag, parse_list, parse_page, parse_search_params
from lexicon_search.errors import QueryTooLong, TooManyFilterOptions
from lexicon_search.models.filters import STATUS_ABSENT, StatusPresent
from lexicon_search.models.vocabulary import MarkerKey


def test_parse_list_trims_and_drops_empty_entries() -> None:
    assert parse_list(" m, f ,,adj, ") == ("m", "f", "adj")
    assert parse_list("") == ()
    assert parse_list(None) == ()


def test_parse_list_keeps_duplicates() -> None:
    assert parse_list("m,m") == ("m", "m")


def test_defaults_for_empty_request() -> None:
    parsed = parse_search_params({})
    assert parsed.filters.query == ""
    assert parsed.filters.status is STATUS_ABSENT
    assert parsed.filters.markers == {}
    assert parsed.page.page == 1
    assert parsed.page.limit == 20
    assert parsed.meta_only is False


def test_query_is_trimmed() -> None:
    assert parse_search_params({"q": "  pololo "}).filters.query == "pololo"


def test_query_of_exactly_max_length_is_accepted() -> None:
    assert len(parse_search_params({"q": "a" * 100}).filters.query) == 100


def test_query_too_long_is_rejected() -> None:
    with pytest.raises(QueryTooLong) as exc_info:
        parse_search_params({"q": "a" * 101})
    assert exc_info.value.field == "q"
    assert exc_info.value.status_code == 400


def test_query_length_is_measured_after_trimming() -> None:
    parsed = parse_search_params({"q": "  " + "a" * 100 + "  "})
    assert len(parsed.filters.query) == 100


def test_ten_options_are_accepted_eleven_rejected() -> None:
    ten = ",".join(f"c{i}" for i in range(10))
    assert len(parse_search_params({"categories": ten}).filters.categories) == 10

    with pytest.raises(TooManyFilterOptions) as exc_info:
        parse_search_params({"categories": ten + ",extra"})
    assert exc_info.value.field == "categories"


def test_marker_dimensions_are_capped_too() -> None:
    eleven = ",".join(str(i) for i in range(11))
    with pytest.raises(TooManyFilterOptions) as exc_info:
        parse_search_params({"geographicalMarkers": eleven})
    assert exc_info.value.field == "geographicalMarkers"


def test_duplicates_count_toward_the_cap() -> None:
    with pytest.raises(TooManyFilterOptions):
        parse_search_params({"origins": ",".join(["mapuche"] * 11)})


def test_first_offending_dimension_is_reported() -> None:
    eleven = ",".join(str(i) for i in range(11))
    with pytest.raises(TooManyFilterOptions) as exc_info:
        parse_search_params({"letters": eleven, "origins": eleven})
    assert exc_info.value.field == "origins"


def test_markers_are_parsed_per_key() -> None:
    parsed = parse_search_params({"styleMarkers": "espon,vulg", "frequencyMarkers": ""})
    assert parsed.filters.marker_values(MarkerKey.STYLE) == ("espon", "vulg")
    assert MarkerKey.FREQUENCY not in parsed.filters.markers


def test_status_presence_is_distinguished_from_absence() -> None:
    assert parse_search_params({"status": ""}).filters.status == StatusPresent("")
    assert parse_search_params({"status": "redacted"}).filters.status == StatusPresent("redacted")


@pytest.mark.parametrize(
    ("params", "page", "limit"),
    [
        ({"page": "0", "limit": "0"}, 1, 1),
        ({"page": "-3", "limit": "5000"}, 1, 1000),
        ({"page": "abc", "limit": "xyz"}, 1, 20),
        ({"page": "3", "limit": "15"}, 3, 15),
        ({"page": "2abc", "limit": "10.5"}, 2, 10),
    ],
)
def test_paging_is_clamped(params: dict[str, str], page: int, limit: int) -> None:
    parsed = parse_page(params)
    assert (parsed.page, parsed.limit) == (page, limit)


def test_meta_only_accepts_both_parameter_names() -> None:
    assert parse_search_params({"metaOnly": "true"}).meta_only
    assert parse_search_params({"meta": "1"}).meta_only
    assert not parse_search_params({"metaOnly": "false"}).meta_only


def test_parse_flag() -> None:
    assert parse_flag("TRUE")
    assert not parse_flag(None)
    assert not parse_flag("yes")


def test_repeated_letters_are_kept() -> None:
    assert parse_search_params({"letters": "a,a,b"}).filters.letters == ("a", "a", "b")


def test_huge_page_is_capped_to_a_bindable_offset() -> None:
    parsed = parse_page({"page": "99999999999999999999", "limit": "20"})
    assert parsed.offset <= 2**63 - 1
    assert parsed.page > 1
