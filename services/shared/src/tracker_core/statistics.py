"""Footer statistics mining and recomputation from parsed tracks."""

import logging
import re
from collections.abc import Iterable, Sequence

from tracker_core.models import (
    ActualCounts,
    AvailabilityStatistics,
    Era,
    HighlightedStatistics,
    LinkStatistics,
    QualityStatistics,
    Track,
    TrackerStatistics,
)

logger = logging.getLogger(__name__)


def _count(label: str) -> re.Pattern[str]:
    return re.compile(rf"(\d[\d,]*)\s*{label}", re.IGNORECASE)


# bucket -> field -> "<number> <label>" pattern
FOOTER_PATTERNS: dict[str, dict[str, re.Pattern[str]]] = {
    "links": {
        "total_links": _count(r"total\s+links?\b"),
        "missing_links": _count(r"missing\s+links?\b"),
        "sources_needed": _count(r"sources?\s+needed\b"),
        "not_available": _count(r"not\s+ava(?:i)?lable\b"),
    },
    "quality": {
        "lossless": _count(r"lossless\b"),
        "cd_quality": _count(r"cd\s+quality\b"),
        "high_quality": _count(r"high\s+quality\b"),
        "low_quality": _count(r"low\s+quality\b"),
        "recordings": _count(r"recordings?\b"),
        "not_available": _count(r"not\s+available\b"),
    },
    "availability": {
        "total_full": _count(r"total\s+full\b"),
        "og_files": _count(r"og\s+files?\b"),
        "stem_bounces": _count(r"stem\s+bounces?\b"),
        "full": _count(r"full\b(?!\s*links)"),
        "tagged": _count(r"tagged\b"),
        "partial": _count(r"partials?\b"),
        "snippets": _count(r"snippets?\b"),
        "unavailable": _count(r"unavailable\b"),
    },
    "highlighted": {
        "best_of": _count(r"best\s+of\b"),
        "special": _count(r"special\b"),
        "grails": _count(r"grails?\b"),
        "wanted": _count(r"wanted\b"),
        "worst_of": _count(r"worst\s+of\b"),
    },
}

# Which quality label and availability category a standardized value counts toward
_QUALITY_FIELDS = {
    "Lossless": "lossless",
    "CD Quality": "cd_quality",
    "High Quality": "high_quality",
    "Low Quality": "low_quality",
    "Recording": "recordings",
    "Not Available": "not_available",
}
_AVAILABILITY_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("og", "og_files"),
    ("stem", "stem_bounces"),
    ("full", "full"),
    ("tagged", "tagged"),
    ("partial", "partial"),
    ("snippet", "snippets"),
    ("unavailable", "unavailable"),
    ("n/a", "unavailable"),
)
_SPECIAL_FIELDS = {"⭐": "best_of", "✨": "special", "🏆": "grails"}


def extract_statistics(rows: Sequence[Sequence[str]], footer_start: int | None) -> TrackerStatistics:
    """Mine ``<number> <label>`` counts from every cell from ``footer_start`` on.

    Patterns match independently per cell; the first match for a category wins.
    """
    found: dict[str, dict[str, int]] = {bucket: {} for bucket in FOOTER_PATTERNS}
    if footer_start is not None:
        for row in rows[footer_start:]:
            for cell in row:
                if not cell:
                    continue
                for bucket, patterns in FOOTER_PATTERNS.items():
                    for name, pattern in patterns.items():
                        if name in found[bucket]:
                            continue
                        match = pattern.search(cell)
                        if match:
                            found[bucket][name] = int(match.group(1).replace(",", ""))

    return TrackerStatistics(
        links=LinkStatistics(**found["links"]),
        quality=QualityStatistics(**found["quality"]),
        availability=AvailabilityStatistics(**found["availability"]),
        highlighted=HighlightedStatistics(**found["highlighted"]),
    )


def availability_category(track: Track) -> str | None:
    """AvailabilityStatistics field for a track, from available length then quality."""
    for source in (track.available_length, track.quality):
        lowered = source.lower()
        for keyword, name in _AVAILABILITY_KEYWORDS:
            if keyword in lowered:
                return name
    return None


def compute_highlighted(tracks: Iterable[Track]) -> HighlightedStatistics:
    counts: dict[str, int] = {}
    for track in tracks:
        if track.special_type in _SPECIAL_FIELDS:
            name = _SPECIAL_FIELDS[track.special_type]
            counts[name] = counts.get(name, 0) + 1
        if track.is_wanted:
            counts["wanted"] = counts.get("wanted", 0) + 1
    return HighlightedStatistics(**counts)


def compute_actual_counts(albums: Sequence[Era]) -> ActualCounts:
    tracks = [track for album in albums for track in album.tracks]
    return ActualCounts(
        albums=len(albums),
        tracks=len(tracks),
        links=sum(1 for track in tracks for link in track.links if link.is_valid),
        special=sum(1 for track in tracks if track.is_special),
        wanted=sum(1 for track in tracks if track.is_wanted),
    )


def recompute_statistics(albums: Sequence[Era]) -> TrackerStatistics:
    """Statistics counted from the tracks themselves, for filtered views."""
    tracks = [track for album in albums for track in album.tracks]
    links = LinkStatistics()
    quality: dict[str, int] = {}
    availability: dict[str, int] = {}
    for track in tracks:
        valid = [link for link in track.links if link.is_valid]
        links.total_links += len(valid)
        if not valid:
            links.missing_links += 1
        if field_name := _QUALITY_FIELDS.get(track.quality):
            quality[field_name] = quality.get(field_name, 0) + 1
        if category := availability_category(track):
            availability[category] = availability.get(category, 0) + 1

    stats = AvailabilityStatistics(**availability)
    stats.total_full = stats.og_files + stats.full
    return TrackerStatistics(
        links=links,
        quality=QualityStatistics(**quality),
        availability=stats,
        highlighted=compute_highlighted(tracks),
        actual=compute_actual_counts(albums),
    )


def check_consistency(statistics: TrackerStatistics) -> bool:
    """Log a warning when mined availability totals disagree with the parsed track count."""
    mined = statistics.availability.total
    actual = statistics.actual.tracks
    if mined and mined != actual:
        logger.warning("Footer statistics list %d tracks but %d were parsed", mined, actual)
        return False
    return True
