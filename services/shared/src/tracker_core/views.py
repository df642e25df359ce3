"""Sheet-type views (unreleased, best, recent) over a parsed Artist."""

import enum
import logging
from collections.abc import Callable
from datetime import date, timedelta

from tracker_core.constants import DEFAULT_RECENT_WINDOW_DAYS
from tracker_core.fields import normalize_date
from tracker_core.models import Artist, Era, EraMetadata, Track
from tracker_core.statistics import availability_category, recompute_statistics

logger = logging.getLogger(__name__)


class SheetType(enum.StrEnum):
    """Post-parse view over the same tree."""

    UNRELEASED = "unreleased"
    BEST = "best"
    RECENT = "recent"


_METADATA_FIELDS = {
    "og_files": "og_files",
    "full": "full_files",
    "tagged": "tagged_files",
    "partial": "partial_files",
    "snippets": "snippet_files",
    "stem_bounces": "stem_bounce_files",
    "unavailable": "unavailable_files",
}


def recompute_era_metadata(tracks: list[Track]) -> EraMetadata:
    """Era file counts from track membership."""
    counts: dict[str, int] = {}
    for track in tracks:
        category = availability_category(track)
        if category is None:
            continue
        name = _METADATA_FIELDS[category]
        counts[name] = counts.get(name, 0) + 1
    return EraMetadata(**counts)


def _filtered(
    artist: Artist,
    keep: Callable[[Track], bool],
    order: Callable[[list[Track]], list[Track]] | None = None,
) -> Artist:
    albums: list[Era] = []
    for album in artist.albums:
        tracks = [track for track in album.tracks if keep(track)]
        if not tracks:
            continue
        if order is not None:
            tracks = order(tracks)
        albums.append(album.model_copy(update={"tracks": tracks, "metadata": recompute_era_metadata(tracks)}))
    return artist.model_copy(update={"albums": albums, "statistics": recompute_statistics(albums)})


def best_view(artist: Artist) -> Artist:
    """Only tracks carrying a special marker."""
    return _filtered(artist, lambda track: track.is_special)


def recent_view(artist: Artist, *, today: date | None = None, days: int = DEFAULT_RECENT_WINDOW_DAYS) -> Artist:
    """Tracks leaked within ``days`` of ``today``, newest first within each era."""
    today = today or date.today()
    cutoff = today - timedelta(days=days)

    def leaked(track: Track) -> date | None:
        return normalize_date(track.leak_date, today)

    def keep(track: Track) -> bool:
        leak_date = leaked(track)
        return leak_date is not None and cutoff <= leak_date <= today

    def newest_first(tracks: list[Track]) -> list[Track]:
        return sorted(tracks, key=lambda track: leaked(track) or date.min, reverse=True)

    return _filtered(artist, keep, newest_first)


def apply_sheet_type(
    artist: Artist,
    sheet_type: SheetType | str,
    *,
    today: date | None = None,
    recent_days: int = DEFAULT_RECENT_WINDOW_DAYS,
) -> Artist:
    """Return the requested view. The input tree is never mutated."""
    sheet_type = SheetType(sheet_type)
    if sheet_type is SheetType.BEST:
        view = best_view(artist)
    elif sheet_type is SheetType.RECENT:
        view = recent_view(artist, today=today, days=recent_days)
    else:
        return artist
    logger.debug("%s view kept %d of %d tracks", sheet_type, view.track_count, artist.track_count)
    return view
