"""Tests for era-name and era-metadata cell parsing."""

from tracker_core.fields import count_era_metadata, parse_era_name
from tracker_core.fields.shapes import has_dated_parenthetical, is_bare_date, is_descriptive, is_metadata_cell


def test_era_name_with_alternates_and_description() -> None:
    era = parse_era_name("Yandhi (Yandhi Sessions, Fallen)\nThe shelved album\n(Sept 2018)")
    assert era.main_name == "Yandhi"
    assert era.alternate_names == ["Yandhi Sessions", "Fallen"]
    assert era.description == "The shelved album"


def test_era_name_only_parenthetical() -> None:
    assert parse_era_name("(Untitled)").main_name == "Untitled"


def test_count_era_metadata() -> None:
    metadata = count_era_metadata("3 OG Files\n5 Full\n1 Tagged\n2 Partials\n10 Snippets\n1 Stem Bounce\n4 Unavailable")
    assert metadata.og_files == 3
    assert metadata.full_files == 5
    assert metadata.tagged_files == 1
    assert metadata.partial_files == 2
    assert metadata.snippet_files == 10
    assert metadata.stem_bounce_files == 1
    assert metadata.unavailable_files == 4
    assert metadata.total == 26


def test_count_era_metadata_missing_categories_are_zero() -> None:
    metadata = count_era_metadata("2 OG Files")
    assert metadata.og_files == 2
    assert metadata.full_files == 0
    assert not metadata.is_empty


def test_cell_shapes() -> None:
    assert is_metadata_cell("1 OG File\n2 Full")
    assert not is_metadata_cell("Donda")
    assert is_bare_date("(March 15, 2021)")
    assert not is_bare_date("Donda 2")
    assert is_descriptive("(Recorded in Wyoming)")
    assert has_dated_parenthetical("Sessions (June 2018 - Sept 2018)")
