"""Track-title decomposition: credits, alternate names and marker emoji."""

import re
import unicodedata
from collections.abc import Iterable

from tracker_core.constants import (
    DECORATIVE_MARKERS,
    REPLACEMENT_CHARACTER,
    SPECIAL_MARKERS,
    WANTED_MARKERS,
)
from tracker_core.models import TrackTitle

# Innermost (...) or [...] group
_GROUP_PATTERN = re.compile(r"\(([^()\[\]]*)\)|\[([^()\[\]]*)\]")

# Credit rules, tested in order against the content of each group.
_CREDIT_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"^(?:ref\.?|reference)(?:\s+(?:track|by|for))?:?\s+(.+)$", re.IGNORECASE), "references"),
    (re.compile(r"^(?:prod(?:uced|uction)?\.?)(?:\s+by)?:?\s+(.+)$", re.IGNORECASE), "producers"),
    (re.compile(r"^(?:ft|feat|featuring)\.?:?\s+(.+)$", re.IGNORECASE), "features"),
    (re.compile(r"^(?:with\s+|w/\s*)(.+)$", re.IGNORECASE), "collaborators"),
)

_TECHNICAL_PATTERN = re.compile(
    r"^(?:\d+(?:\.\d+)?\s*(?:kbps|kb/s|khz|hz|bit|mb|gb)|\d{1,2}:\d{2}(?::\d{2})?|"
    r"mp3|m4a|aac|ogg|opus|flac|wav|alac|lossless|cdq|hq|lq|\d+)$",
    re.IGNORECASE,
)

_VERSION_KEYWORDS = (
    "v\\d+",
    "version",
    "demo",
    "snippet",
    "mix",
    "edit",
    "remix",
    "reprise",
    "instrumental",
    "acapella",
    "a cappella",
    "freestyle",
    "live",
    "rough",
    "ref",
    "alt",
    "alternate",
    "clean",
    "explicit",
    "extended",
    "intro",
    "outro",
    "interlude",
    "session",
    "take",
    "cut",
    "draft",
    "mastered",
    "unmastered",
    "mixed",
    "unmixed",
)
_VERSION_PATTERN = re.compile(
    r"^(?:(?:" + "|".join(_VERSION_KEYWORDS) + r")\.?\s*\d*\s*)+$",
    re.IGNORECASE,
)

# Unparenthesized credit phrases, e.g. "Song ft. A & B prod. C".
# A bare "with" counts only in lowercase ("Stay With Me" is a title).
_TRAILING_CREDIT_PATTERN = re.compile(
    r"\s(?P<keyword>ft\.?|feat\.?|featuring|(?-i:with)|w/|prod\.?\s+by|prod\.?|produced\s+by)\s+",
    re.IGNORECASE,
)
_ARTIST_SEPARATOR = " - "
_PAYLOAD_SPLIT_PATTERN = re.compile(r"\s*[&,]\s*")
_UNKNOWN_WORD = "unknown"
_UNKNOWN_MARK = "???"
_VARIATION_SELECTOR = "\ufe0f"


def find_marker(text: str, markers: Iterable[str]) -> str | None:
    """Return the first of ``markers`` present in ``text`` (by position)."""
    found = [(text.index(m), m) for m in markers if m in text]
    return min(found)[1] if found else None


def strip_markers(text: str) -> str:
    """NFC-normalize and drop replacement characters and marker emoji."""
    cleaned = unicodedata.normalize("NFC", text)
    for marker in (*SPECIAL_MARKERS, *WANTED_MARKERS, *DECORATIVE_MARKERS, REPLACEMENT_CHARACTER, _VARIATION_SELECTOR):
        cleaned = cleaned.replace(marker, " ")
    return cleaned


def _collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


def _split_payload(payload: str) -> list[str]:
    return [part for part in (p.strip(" .") for p in _PAYLOAD_SPLIT_PATTERN.split(payload)) if part]


def _classify_group(content: str, credits: dict[str, list[str]], alternate_names: list[str]) -> None:
    content = _collapse_whitespace(content)
    if not content:
        return
    for pattern, bucket in _CREDIT_RULES:
        match = pattern.match(content)
        if match:
            credits[bucket].extend(_split_payload(match.group(1)))
            return
    if _TECHNICAL_PATTERN.match(content) or _VERSION_PATTERN.match(content):
        return
    alternate_names.extend(part for part in (p.strip() for p in content.split(",")) if part)


def _collapse_artist_prefix(title: str) -> str:
    if title.count(_ARTIST_SEPARATOR) != 1:
        return title
    _, track = title.split(_ARTIST_SEPARATOR)
    return track.strip() or title


def _bucket_for_keyword(keyword: str) -> str:
    keyword = keyword.lower()
    if keyword.startswith(("ft", "feat")):
        return "features"
    if keyword.startswith(("with", "w/")):
        return "collaborators"
    return "producers"


def _extract_trailing_credits(title: str, credits: dict[str, list[str]]) -> str:
    matches = list(_TRAILING_CREDIT_PATTERN.finditer(title))
    if not matches or not title[: matches[0].start()].strip():
        return title
    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(title)
        credits[_bucket_for_keyword(match.group("keyword"))].extend(_split_payload(title[match.end() : end]))
    return title[: matches[0].start()]


def parse_track_title(raw: str) -> TrackTitle:
    """Split a raw track-name cell into its display title and credits.

    Groups are consumed innermost first, left to right, until none remain.
    Each is a credit (ref/prod/feat/with), a technical or version tag
    (dropped), or a list of alternate names.
    """
    credits: dict[str, list[str]] = {"references": [], "producers": [], "features": [], "collaborators": []}
    alternate_names: list[str] = []

    working = strip_markers(raw or "")
    while match := _GROUP_PATTERN.search(working):
        content = match.group(1) if match.group(1) is not None else match.group(2)
        _classify_group(content, credits, alternate_names)
        working = f"{working[: match.start()]} {working[match.end() :]}"

    title = _collapse_whitespace(working)
    title = _collapse_artist_prefix(title)
    trimmed = _collapse_whitespace(_extract_trailing_credits(title, credits))
    if trimmed != title:
        title = _collapse_artist_prefix(trimmed)

    return TrackTitle(
        main=title,
        is_unknown=not title or _UNKNOWN_MARK in title or _UNKNOWN_WORD in title.lower(),
        features=credits["features"],
        collaborators=credits["collaborators"],
        producers=credits["producers"],
        references=credits["references"],
        alternate_names=alternate_names,
    )
