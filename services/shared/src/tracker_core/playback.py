"""Resolve a track's links to a directly playable media URL."""

from tracker_core.constants import (
    AUDIO_EXTENSION_PATTERN,
    HEX_FILE_ID_PATTERN,
    PILLOWCASE_DOWNLOAD_URL,
    PILLOWCASE_FILE_ID_PATTERN,
    PILLOWCASE_HOST_PATTERN,
)
from tracker_core.models import PlayableSource, Track


def pillowcase_file_id(url: str) -> str | None:
    """The 32-hex file id of a Pillowcase URL (``/f/<id>`` or any 32-hex run)."""
    if not PILLOWCASE_HOST_PATTERN.search(url):
        return None
    match = PILLOWCASE_FILE_ID_PATTERN.search(url) or HEX_FILE_ID_PATTERN.search(url)
    if match is None:
        return None
    return (match.group(1) if match.groups() else match.group(0)).lower()


def _pillowcase(url: str) -> PlayableSource | None:
    file_id = pillowcase_file_id(url)
    if file_id is None:
        return None
    return PlayableSource(
        kind="pillowcase",
        url=PILLOWCASE_DOWNLOAD_URL.format(file_id=file_id),
        source_url=url,
        file_id=file_id,
    )


def _froste(url: str) -> PlayableSource | None:
    if "froste.lol" not in url.lower():
        return None
    return PlayableSource(kind="froste", url=f"{url.rstrip('/')}/download", source_url=url)


def _youtube(url: str) -> PlayableSource | None:
    lowered = url.lower()
    if "youtube.com" not in lowered and "youtu.be" not in lowered:
        return None
    return PlayableSource(kind="youtube", url=url, source_url=url)


def _soundcloud(url: str) -> PlayableSource | None:
    if "soundcloud.com" not in url.lower():
        return None
    return PlayableSource(kind="soundcloud", url=url, source_url=url)


def _direct_audio(url: str) -> PlayableSource | None:
    if not AUDIO_EXTENSION_PATTERN.search(url):
        return None
    return PlayableSource(kind="audio", url=url, source_url=url)


# Resolvers in priority order
_RESOLVERS = (_pillowcase, _froste, _youtube, _soundcloud, _direct_audio)


def resolve_link(url: str) -> PlayableSource:
    """Resolve one URL; unknown hosts are returned as ``other`` unchanged."""
    url = url.strip()
    for resolver in _RESOLVERS:
        source = resolver(url)
        if source is not None:
            return source
    return PlayableSource(kind="other", url=url, source_url=url)


def resolve_playable_source(track: Track) -> PlayableSource | None:
    """Best playable source across all of a track's links.

    Each resolver is tried over every link before the next one, so a
    Pillowcase link wins over an earlier YouTube link. Falls back to the
    first valid link.
    """
    urls = [link.url for link in track.links if link.is_valid]
    if not urls:
        return None
    for resolver in _RESOLVERS:
        for url in urls:
            source = resolver(url)
            if source is not None:
                return source
    return PlayableSource(kind="other", url=urls[0], source_url=urls[0])
