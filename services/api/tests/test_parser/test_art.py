"""Tests for cover-art sheet parsing and matching."""

from tracker_core.art import apply_art, parse_art_table, resolve_picture
from tracker_core.models import Era, RawTable


def test_parse_art_table() -> None:
    table = RawTable(
        rows=[
            ["Era", "Cover"],
            ["Donda", "https://i.imgur.com/donda.png"],
            ["Donda 2 (Stem Player)", "", "https://i.ibb.co/d2/cover.jpg"],
            ["Notes", "no image here"],
            ["Donda", "https://i.imgur.com/other.png"],
        ]
    )
    assert parse_art_table(table) == {
        "Donda": "https://i.imgur.com/donda.png",
        "Donda 2": "https://i.ibb.co/d2/cover.jpg",
    }


def test_parse_art_table_not_an_art_sheet() -> None:
    assert parse_art_table(RawTable(rows=[["Era", "Name"], ["Donda", "Hurricane"]])) == {}


def test_resolve_picture_exact_case_insensitive() -> None:
    assert resolve_picture("YEEZUS", {"Yeezus": "https://i.imgur.com/y.png"}) == "https://i.imgur.com/y.png"


def test_resolve_picture_fuzzy() -> None:
    art = {"The Life Of Pablo.": "https://i.imgur.com/tlop.png"}
    assert resolve_picture("The Life of Pablo", art) == "https://i.imgur.com/tlop.png"


def test_resolve_picture_does_not_cross_similar_eras() -> None:
    assert resolve_picture("Donda 2", {"Donda": "https://i.imgur.com/donda.png"}) is None


def test_resolve_picture_empty_art() -> None:
    assert resolve_picture("Donda", {}) is None


def test_apply_art_fills_only_missing_pictures() -> None:
    albums = [Era(name="Donda"), Era(name="Yeezus", picture="https://i.imgur.com/keep.png"), Era(name="Yandhi")]
    art = {"Donda": "https://i.imgur.com/donda.png", "Yeezus": "https://i.imgur.com/y.png"}
    assert apply_art(albums, art) == 1
    assert albums[0].picture == "https://i.imgur.com/donda.png"
    assert albums[1].picture == "https://i.imgur.com/keep.png"
    assert albums[2].picture is None
