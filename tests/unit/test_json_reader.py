"""Tests for parsing dictionary export files."""

import pytest

from lexicon_search.core.importer.json_reader import derive_letter, parse_export_data, parse_word
from lexicon_search.models.vocabulary import MarkerKey


def test_parse_word_with_meanings_and_examples() -> None:
    record = parse_word(
        {
            "lemma": " pololo ",
            "status": "published",
            "createdBy": "3",
            "meanings": [
                {
                    "meaning": "Novio.",
                    "grammarCategory": "m",
                    "styleMarkers": "espon",
                    "examples": [{"value": "Mi pololo.", "author": "X"}, {"value": ""}],
                }
            ],
        }
    )
    assert record.lemma == "pololo"
    assert record.letter == "p"
    assert record.created_by == 3
    meaning = record.meanings[0]
    assert meaning.number == 1
    assert meaning.markers[MarkerKey.STYLE] == "espon"
    assert meaning.markers[MarkerKey.GEOGRAPHICAL] is None
    assert [e.value for e in meaning.examples] == ["Mi pololo."]


def test_status_defaults_to_imported() -> None:
    assert parse_word({"lemma": "once"}).status == "imported"


def test_values_key_is_accepted_for_meanings() -> None:
    record = parse_word({"lemma": "once", "values": [{"number": 4, "meaning": "Merienda"}]})
    assert record.meanings[0].number == 4


def test_missing_lemma_is_rejected() -> None:
    with pytest.raises(ValueError, match="without lemma"):
        parse_word({"lemma": "  "})


def test_unknown_status_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown status"):
        parse_word({"lemma": "once", "status": "deleted"})


def test_derive_letter_keeps_enye_and_strips_accents() -> None:
    assert derive_letter("ñandú") == "ñ"
    assert derive_letter("Ébano") == "e"
    assert derive_letter("¡ojo!") == "o"


def test_explicit_letter_is_folded() -> None:
    assert parse_word({"lemma": "chancho", "letter": "C"}).letter == "c"


def test_parse_export_data_reads_notes() -> None:
    records = parse_export_data(
        {"words": [{"lemma": "cahuín", "notes": [{"note": "ok", "username": "ana"}, {"note": ""}]}]}
    )
    assert len(records) == 1
    assert [n.note for n in records[0].notes] == ["ok"]


@pytest.mark.parametrize("data", [[{"lemma": "once"}], {"words": {"lemma": "once"}}, "words"])
def test_export_must_be_an_object_with_a_words_list(data: object) -> None:
    with pytest.raises(ValueError, match="'words' list"):
        parse_export_data(data)
