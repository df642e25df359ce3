"""Tests for row classification and the structural fold."""

from datetime import date

from tracker_core.classifier import RowClassifier, find_footer_start
from tracker_core.headers import resolve_headers
from tracker_core.models import RawTable

_HEADER = ["Era", "Name", "Notes", "Track Length", "Leak Date", "Quality", "Links"]
_PILLOWCASE = "https://pillowcase.su/f/0123456789abcdef0123456789abcdef"
TODAY = date(2024, 6, 15)


def _row(era: str = "", name: str = "", notes: str = "", length: str = "", leak: str = "", quality: str = "", links: str = "") -> list[str]:
    return [era, name, notes, length, leak, quality, links]


def _classifier(rows: list[list[str]]) -> tuple[RowClassifier, list[list[str]]]:
    table_rows = [_HEADER, *rows]
    resolution = resolve_headers(RawTable(rows=table_rows))
    return RowClassifier(resolution, today=TODAY), table_rows


def _fold(*rows: list[str]):
    classifier, table_rows = _classifier(list(rows))
    return classifier.run(table_rows, 1)


def test_era_row_then_track_row() -> None:
    state = _fold(
        _row("Donda"),
        _row(
            name="Hurricane (feat. The Weeknd & Lil Baby)",
            notes="Early version",
            length="4:03",
            leak="03/15/2021",
            quality="CDQ",
            links=_PILLOWCASE,
        ),
    )
    assert list(state.eras) == ["Donda"]
    track = state.eras["Donda"].tracks[0]
    assert track.id == "Donda-Hurricane (feat. The Weeknd & Lil Baby)-0"
    assert track.era == "Donda"
    assert track.title.main == "Hurricane"
    assert track.title.features == ["The Weeknd", "Lil Baby"]
    assert track.notes == "Early version"
    assert track.track_length == "4:03"
    assert track.leak_date == "2021-03-15"
    assert track.quality == "CD Quality"
    assert track.links[0].platform == "Pillowcase"
    assert state.tracks == [track]


def test_sub_era_named_after_parent() -> None:
    state = _fold(
        _row("Donda"),
        _row(name="Donda Chant"),
        _row("Sub-Era", "Alternate Version"),
        _row("Donda", "Jail"),
    )
    assert list(state.eras) == ["Donda", "Donda: Alternate Version"]
    assert [t.title.main for t in state.eras["Donda"].tracks] == ["Donda Chant"]
    assert [t.title.main for t in state.eras["Donda: Alternate Version"].tracks] == ["Jail"]


def test_era_metadata_row() -> None:
    state = _fold(_row("2 OG Files\n1 Full", "Yandhi (Yandhi 2019)", "https://i.imgur.com/yandhi.png"))
    era = state.eras["Yandhi"]
    assert era.alternate_names == ["Yandhi 2019"]
    assert era.metadata.og_files == 2
    assert era.metadata.full_files == 1
    assert era.picture == "https://i.imgur.com/yandhi.png"
    assert state.current_era == "Yandhi"


def test_continuation_rows_fill_notes_and_description() -> None:
    state = _fold(
        _row("Yeezus"),
        _row("(Recorded in Paris, Feb 2013 - May 2013)"),
        _row("A minimalist, abrasive album made with Rick Rubin in the final weeks before its launch."),
        _row(name="Black Skinhead"),
    )
    era = state.eras["Yeezus"]
    assert era.notes == "(Recorded in Paris, Feb 2013 - May 2013)"
    assert era.description == "A minimalist, abrasive album made with Rick Rubin in the final weeks before its launch."
    assert len(era.tracks) == 1


def test_inline_era_switch() -> None:
    state = _fold(
        _row("Yeezus", "Black Skinhead"),
        _row("Yeezus", "Bound 2"),
        _row("Donda", "Hurricane"),
    )
    assert [t.title.main for t in state.eras["Yeezus"].tracks] == ["Black Skinhead", "Bound 2"]
    assert [t.title.main for t in state.eras["Donda"].tracks] == ["Hurricane"]
    assert state.eras["Yeezus"].tracks[1].id == "Yeezus-Bound 2-1"


def test_tracks_before_any_era_go_to_fallback() -> None:
    state = _fold(_row(name="Mystery Song"))
    assert list(state.eras) == ["Miscellaneous"]


def test_template_rows_skipped() -> None:
    state = _fold(
        _row("Template Era"),
        _row(name="How to add a new entry"),
        _row("Links"),
        _row("Donda"),
        _row(name="Hurricane"),
    )
    assert list(state.eras) == ["Donda"]
    assert len(state.tracks) == 1


def test_track_markers() -> None:
    state = _fold(_row("Donda"), _row(name="⭐ Life Of The Party"), _row(name="🥇 Never Stop"))
    special, wanted = state.eras["Donda"].tracks
    assert special.is_special is True
    assert special.special_type == "⭐"
    assert special.title.main == "Life Of The Party"
    assert wanted.is_wanted is True
    assert wanted.wanted_type == "🥇"
    assert wanted.is_special is False


def test_unclassifiable_rows_are_skipped() -> None:
    state = _fold(_row("03/15/2021"), _row("Donda"), _row(name="Hurricane"))
    assert state.skipped_rows == 1
    assert list(state.eras) == ["Donda"]


def test_classify_names_first_matching_rule() -> None:
    classifier, _ = _classifier([])
    state = classifier.run([], 0)
    assert classifier.classify(classifier.view(0, _row("Donda")), state) == "era_name"
    assert classifier.classify(classifier.view(0, _row("Sub-Era", "Stem Player")), state) == "sub_era"
    assert classifier.classify(classifier.view(0, _row("1 OG File", "Donda")), state) == "era_metadata"
    assert classifier.classify(classifier.view(0, _row(name="Hurricane")), state) == "track"


def test_find_footer_start() -> None:
    rows = [_HEADER, _row("Donda"), _row(name="Hurricane"), _row("Update Notes"), _row("100 Total Links")]
    assert find_footer_start(rows, 1, 0) == 3
    assert find_footer_start(rows[:3], 1, 0) is None
