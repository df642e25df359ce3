"""Tests for link-cell parsing and platform categorization."""

import pytest

from tracker_core.fields import categorize_link, parse_links, split_link_cell


@pytest.mark.parametrize(
    "url",
    [
        "https://pillowcase.su/f/0123456789abcdef0123456789abcdef",
        "https://pillows.su/f/0123456789abcdef0123456789abcdef",
        "https://pillowcases.top/f/0123456789abcdef0123456789abcdef",
    ],
)
def test_pillowcase_family(url: str) -> None:
    link = categorize_link(url)
    assert link.platform == "Pillowcase"
    assert link.type == "download"
    assert link.is_valid is True


@pytest.mark.parametrize(
    ("url", "platform", "kind"),
    [
        ("https://soundcloud.com/artist/song", "SoundCloud", "stream"),
        ("https://youtu.be/abc123", "YouTube", "stream"),
        ("https://www.youtube.com/watch?v=abc", "YouTube", "stream"),
        ("https://open.spotify.com/track/1", "Spotify", "stream"),
        ("https://drive.google.com/file/d/1/view", "Google Drive", "download"),
        ("https://www.dropbox.com/s/x/song.mp3", "Dropbox", "download"),
        ("https://mega.nz/file/abc", "MEGA", "download"),
        ("https://music.froste.lol/song/1", "Froste", "download"),
        ("https://x.com/someone/status/1", "Twitter", "social"),
        ("https://cdn.example.com/files/song.mp3", "Direct", "audio"),
        ("https://example.com/page", "Web", "web"),
    ],
)
def test_platforms(url: str, platform: str, kind: str) -> None:
    link = categorize_link(url)
    assert (link.platform, link.type, link.is_valid) == (platform, kind, True)


def test_lookalike_host_not_matched() -> None:
    assert categorize_link("https://notyoutube.com/watch").platform == "Web"


def test_non_url_is_invalid() -> None:
    link = categorize_link("Not Available")
    assert link.platform == "Unknown"
    assert link.is_valid is False


def test_split_link_cell() -> None:
    assert split_link_cell("https://a.com/1, https://b.com/2\nhttps://c.com/3") == [
        "https://a.com/1",
        "https://b.com/2",
        "https://c.com/3",
    ]


def test_parse_links_drops_words_next_to_urls() -> None:
    links = parse_links("Link: https://youtu.be/x (mirror) https://soundcloud.com/y")
    assert [link.platform for link in links] == ["YouTube", "SoundCloud"]


def test_parse_links_without_urls() -> None:
    links = parse_links("Source Needed")
    assert len(links) == 1
    assert links[0].url == "Source Needed"
    assert links[0].is_valid is False


def test_parse_links_blank() -> None:
    assert parse_links("  ") == []
