"""JSON and CSV downloads of a parsed tracker."""

import csv
import enum
import io
import json
import re
from datetime import UTC, date, datetime

from pydantic import Field

from tracker_core.models import Artist, Track, TrackerModel

EXPORT_VERSION = "2.1"

# One flattened row per track; list fields are joined with ", "
CSV_COLUMNS: tuple[str, ...] = (
    "trackerName",
    "era",
    "trackId",
    "trackName",
    "rawName",
    "notes",
    "trackLength",
    "fileDate",
    "leakDate",
    "availableLength",
    "quality",
    "type",
    "links",
    "isSpecial",
    "specialType",
    "isWanted",
    "wantedType",
    "features",
    "collaborators",
    "producers",
    "references",
    "alternateNames",
)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9]")


class ExportFormat(enum.StrEnum):
    JSON = "json"
    CSV = "csv"

    @property
    def media_type(self) -> str:
        return "application/json" if self is ExportFormat.JSON else "text/csv"


class ExportMetadata(TrackerModel):
    total_tracks: int = 0
    total_albums: int = 0
    export_version: str = EXPORT_VERSION


class TrackerExport(TrackerModel):
    """Envelope written by the JSON export."""

    tracker_name: str
    doc_id: str
    source_url: str
    last_updated: datetime = Field(default_factory=lambda: datetime.now(UTC))
    has_statistics_page: bool = False
    artist: Artist
    metadata: ExportMetadata | None = None


def has_mined_statistics(artist: Artist) -> bool:
    """Whether the sheet carried a footer statistics block."""
    stats = artist.statistics
    buckets = (stats.links, stats.quality, stats.availability, stats.highlighted)
    return any(value for bucket in buckets for value in bucket.model_dump().values())


def export_json(artist: Artist, doc_id: str, source_url: str, *, include_metadata: bool = True) -> str:
    envelope = TrackerExport(
        tracker_name=artist.name,
        doc_id=doc_id,
        source_url=source_url,
        has_statistics_page=has_mined_statistics(artist),
        artist=artist,
        metadata=ExportMetadata(total_tracks=artist.track_count, total_albums=len(artist.albums))
        if include_metadata
        else None,
    )
    exclude = None if include_metadata else {"metadata"}
    return envelope.model_dump_json(by_alias=True, indent=2, exclude=exclude)


def _flag(value: bool) -> str:
    return "true" if value else "false"


def track_row(artist_name: str, era_name: str, track: Track) -> dict[str, str]:
    title = track.title
    return {
        "trackerName": artist_name,
        "era": era_name,
        "trackId": track.id,
        "trackName": title.main,
        "rawName": track.raw_name,
        "notes": track.notes,
        "trackLength": track.track_length,
        "fileDate": track.file_date,
        "leakDate": track.leak_date,
        "availableLength": track.available_length,
        "quality": track.quality,
        "type": track.type,
        "links": json.dumps([link.model_dump(by_alias=True) for link in track.links], ensure_ascii=False),
        "isSpecial": _flag(track.is_special),
        "specialType": track.special_type or "",
        "isWanted": _flag(track.is_wanted),
        "wantedType": track.wanted_type or "",
        "features": ", ".join(title.features),
        "collaborators": ", ".join(title.collaborators),
        "producers": ", ".join(title.producers),
        "references": ", ".join(title.references),
        "alternateNames": ", ".join(title.alternate_names),
    }


def export_csv(artist: Artist) -> str:
    """Header row plus one row per track, in era order."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_COLUMNS, lineterminator="\n")
    writer.writeheader()
    for album in artist.albums:
        for track in album.tracks:
            writer.writerow(track_row(artist.name, album.name, track))
    return buffer.getvalue()


def export_filename(artist_name: str, doc_id: str, fmt: ExportFormat, today: date | None = None) -> str:
    """``<Artist_Name>_<docId>_<YYYY-MM-DD>.<ext>`` with non-alphanumerics replaced."""
    today = today or datetime.now(UTC).date()
    sanitized = _UNSAFE_FILENAME_CHARS.sub("_", artist_name)
    return f"{sanitized}_{doc_id}_{today.isoformat()}.{fmt.value}"
