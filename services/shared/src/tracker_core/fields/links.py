"""Link-cell splitting and platform categorization."""

import re
from dataclasses import dataclass
from urllib.parse import urlsplit

from tracker_core.constants import AUDIO_EXTENSION_PATTERN, PILLOWCASE_HOST_PATTERN
from tracker_core.models import TrackLink

_HTTP_PATTERN = re.compile(r"^https?://\S+$", re.IGNORECASE)
_CELL_SPLIT_PATTERN = re.compile(r"[\s,]+")


@dataclass(frozen=True, slots=True)
class _Platform:
    """A known host family and what its links can do."""

    name: str
    type: str
    hosts: tuple[str, ...]


# Evaluated top to bottom; first host match wins. Pillowcase is matched separately by pattern.
_PLATFORMS: tuple[_Platform, ...] = (
    _Platform("SoundCloud", "stream", ("soundcloud.com", "snd.sc")),
    _Platform("YouTube", "stream", ("youtube.com", "youtu.be", "music.youtube.com")),
    _Platform("Spotify", "stream", ("spotify.com", "spotify.link")),
    _Platform("Apple Music", "stream", ("music.apple.com",)),
    _Platform("Google Drive", "download", ("drive.google.com", "drive.usercontent.google.com")),
    _Platform("Dropbox", "download", ("dropbox.com", "dropboxusercontent.com")),
    _Platform("MEGA", "download", ("mega.nz", "mega.io", "mega.co.nz")),
    _Platform("Froste", "download", ("froste.lol",)),
    _Platform("Twitter", "social", ("twitter.com", "x.com")),
    _Platform("Instagram", "social", ("instagram.com",)),
    _Platform("TikTok", "social", ("tiktok.com",)),
    _Platform("Reddit", "social", ("reddit.com", "redd.it")),
    _Platform("Discord", "social", ("discord.com", "discord.gg")),
)

PILLOWCASE = "Pillowcase"


def _host_matches(host: str, domain: str) -> bool:
    return host == domain or host.endswith(f".{domain}")


def _split(url: str) -> tuple[str, str]:
    """Lowercased host and path, or blanks for malformed URLs."""
    try:
        parts = urlsplit(url)
        return (parts.hostname or "").lower(), parts.path
    except ValueError:
        return "", ""


def categorize_link(url: str) -> TrackLink:
    """Classify a URL by platform and capability.

    Non-``http(s)`` text is ``{Unknown, unknown, is_valid=False}``.
    """
    url = url.strip()
    if not _HTTP_PATTERN.match(url):
        return TrackLink(url=url, platform="Unknown", type="unknown", is_valid=False)

    if PILLOWCASE_HOST_PATTERN.search(url):
        return TrackLink(url=url, platform=PILLOWCASE, type="download", is_valid=True)

    host, path = _split(url)
    for platform in _PLATFORMS:
        if any(_host_matches(host, domain) for domain in platform.hosts):
            return TrackLink(url=url, platform=platform.name, type=platform.type, is_valid=True)

    if AUDIO_EXTENSION_PATTERN.search(path):
        return TrackLink(url=url, platform="Direct", type="audio", is_valid=True)

    return TrackLink(url=url, platform="Web", type="web", is_valid=True)


def split_link_cell(text: str) -> list[str]:
    """Split a cell holding several URLs (comma, whitespace or newline separated)."""
    return [part for part in _CELL_SPLIT_PATTERN.split(text.strip()) if part]


def parse_links(text: str) -> list[TrackLink]:
    """Categorized links from a link cell; non-URL words are dropped when URLs are present."""
    parts = split_link_cell(text)
    if not parts:
        return []
    urls = [part for part in parts if _HTTP_PATTERN.match(part)]
    if urls:
        return [categorize_link(url) for url in urls]
    # No URL at all: keep the text as a single invalid entry so it stays visible.
    return [categorize_link(" ".join(parts))]
