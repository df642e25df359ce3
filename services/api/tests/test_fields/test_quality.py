"""Tests for quality-label standardization."""

import pytest

from tracker_core.fields import standardize_quality


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("hq", "High Quality"),
        ("HQ", "High Quality"),
        ("High-Quality", "High Quality"),
        ("  high   quality ", "High Quality"),
        ("320kbps", "High Quality"),
        ("LQ", "Low Quality"),
        ("CDQ", "CD Quality"),
        ("FLAC", "Lossless"),
        ("OG", "OG File"),
        ("N/A", "Not Available"),
        ("Phone Recording", "Recording"),
    ],
)
def test_synonyms(text: str, expected: str) -> None:
    assert standardize_quality(text) == expected


def test_substring_match() -> None:
    assert standardize_quality("CDQ (from vinyl)") == "CD Quality"
    assert standardize_quality("high quality mp3") == "High Quality"


def test_short_synonyms_match_whole_words() -> None:
    assert standardize_quality("HQ Snippet") == "High Quality"
    assert standardize_quality("OG (Tagged)") == "OG File"
    assert standardize_quality("prologue") == "Prologue"
    assert standardize_quality("Encoded") == "Encoded"


def test_unknown_label_title_cased() -> None:
    assert standardize_quality("radio rip") == "Radio Rip"


def test_blank() -> None:
    assert standardize_quality("   ") == ""
