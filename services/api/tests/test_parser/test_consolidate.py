"""Tests for era-alias consolidation."""

from tracker_core.consolidate import DEFAULT_ERA_ALIASES, EraAlias, consolidate_eras
from tracker_core.models import Era, EraMetadata, Track, TrackTitle


def _track(name: str, era: str) -> Track:
    return Track(id=f"{era}-{name}-0", era=era, title=TrackTitle(main=name), raw_name=name)


def test_aliased_eras_merge_in_first_seen_order() -> None:
    eras = [
        Era(name="Donda", tracks=[_track("Hurricane", "Donda")]),
        Era(
            name="Donda 2 (Stem Player)",
            picture="https://i.imgur.com/d2.png",
            metadata=EraMetadata(og_files=1),
            tracks=[_track("True Love", "Donda 2 (Stem Player)")],
        ),
        Era(name="Yeezus"),
        Era(name="DONDA 2 Sessions", metadata=EraMetadata(og_files=2, full_files=1), tracks=[_track("Broken Road", "DONDA 2 Sessions")]),
    ]
    merged = consolidate_eras(eras, DEFAULT_ERA_ALIASES)

    assert [era.name for era in merged] == ["Donda", "Donda 2", "Yeezus"]
    donda_2 = merged[1]
    assert [t.title.main for t in donda_2.tracks] == ["True Love", "Broken Road"]
    assert {t.era for t in donda_2.tracks} == {"Donda 2"}
    assert donda_2.alternate_names == ["Donda 2 (Stem Player)", "DONDA 2 Sessions"]
    assert donda_2.metadata.og_files == 3
    assert donda_2.metadata.full_files == 1
    assert donda_2.picture == "https://i.imgur.com/d2.png"


def test_unmatched_eras_untouched() -> None:
    eras = [Era(name="Yandhi"), Era(name="Jesus Is King")]
    assert consolidate_eras(eras, [EraAlias(match="vultures", canonical="Vultures")]) == eras


def test_exact_duplicates_merge() -> None:
    eras = [
        Era(name="Yeezus", tracks=[_track("Bound 2", "Yeezus")], notes="(2013)"),
        Era(name="Yeezus", tracks=[_track("Send It Up", "Yeezus")], notes="(Recorded in Paris)"),
    ]
    merged = consolidate_eras(eras, ())
    assert len(merged) == 1
    assert len(merged[0].tracks) == 2
    assert merged[0].notes == "(2013)\n(Recorded in Paris)"


def test_alias_match_is_case_insensitive() -> None:
    assert EraAlias(match="donda 2", canonical="Donda 2").applies_to("The DONDA 2 Era")
    assert not EraAlias(match="donda 2", canonical="Donda 2").applies_to("Donda")


def test_donda_2_and_2025_version_merge() -> None:
    eras = [
        Era(name="Donda 2", tracks=[_track("True Love", "Donda 2"), _track("Broken Road", "Donda 2")]),
        Era(name="Donda 2 (2025 Version)", tracks=[_track("Pablo", "Donda 2 (2025 Version)")]),
    ]
    merged = consolidate_eras(eras, DEFAULT_ERA_ALIASES)

    assert [era.name for era in merged] == ["Donda 2"]
    assert [t.title.main for t in merged[0].tracks] == ["True Love", "Broken Road", "Pablo"]
    assert {t.era for t in merged[0].tracks} == {"Donda 2"}
