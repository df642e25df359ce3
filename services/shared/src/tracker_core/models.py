"""Pydantic domain models for parsed trackers.

Attributes are snake_case in Python; JSON (cache file and HTTP responses)
uses camelCase aliases. Both spellings are accepted on input.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TrackerModel(BaseModel):
    """Base model with camelCase JSON aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Raw table
# ---------------------------------------------------------------------------


class RawColumn(TrackerModel):
    """Column metadata from the gviz payload. ``label`` may span several lines."""

    id: str = ""
    label: str = ""


class RawTable(TrackerModel):
    """Rectangular table of cell strings; blank cells are ``""``."""

    cols: list[RawColumn] = Field(default_factory=list)
    rows: list[list[str]] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Tracks
# ---------------------------------------------------------------------------


class TrackTitle(TrackerModel):
    """Decomposition of a raw track-name cell."""

    main: str
    is_unknown: bool = False
    features: list[str] = Field(default_factory=list)
    collaborators: list[str] = Field(default_factory=list)
    producers: list[str] = Field(default_factory=list)
    references: list[str] = Field(default_factory=list)
    alternate_names: list[str] = Field(default_factory=list)


class TrackLink(TrackerModel):
    """A single link cell entry with its platform category."""

    url: str
    platform: str = "Unknown"
    type: str = "unknown"
    is_valid: bool = False


class Track(TrackerModel):
    """One data row of the tracker."""

    id: str
    era: str
    title: TrackTitle
    raw_name: str
    notes: str = ""
    track_length: str = ""
    file_date: str = ""
    leak_date: str = ""
    available_length: str = ""
    quality: str = ""
    type: str = ""
    links: list[TrackLink] = Field(default_factory=list)
    is_special: bool = False
    special_type: str | None = None
    is_wanted: bool = False
    wanted_type: str | None = None


# ---------------------------------------------------------------------------
# Eras
# ---------------------------------------------------------------------------


class EraMetadata(TrackerModel):
    """Per-category file counts for an era."""

    og_files: int = 0
    full_files: int = 0
    tagged_files: int = 0
    partial_files: int = 0
    snippet_files: int = 0
    stem_bounce_files: int = 0
    unavailable_files: int = 0

    @property
    def total(self) -> int:
        return (
            self.og_files
            + self.full_files
            + self.tagged_files
            + self.partial_files
            + self.snippet_files
            + self.stem_bounce_files
            + self.unavailable_files
        )

    @property
    def is_empty(self) -> bool:
        return self.total == 0

    def merged_with(self, other: "EraMetadata") -> "EraMetadata":
        """Return the category-wise sum of two metadata blocks."""
        return EraMetadata(
            og_files=self.og_files + other.og_files,
            full_files=self.full_files + other.full_files,
            tagged_files=self.tagged_files + other.tagged_files,
            partial_files=self.partial_files + other.partial_files,
            snippet_files=self.snippet_files + other.snippet_files,
            stem_bounce_files=self.stem_bounce_files + other.stem_bounce_files,
            unavailable_files=self.unavailable_files + other.unavailable_files,
        )


class Era(TrackerModel):
    """An album/era grouping of tracks."""

    id: str = ""
    name: str
    alternate_names: list[str] = Field(default_factory=list)
    description: str | None = None
    notes: str | None = None  # timeline
    picture: str | None = None
    metadata: EraMetadata = Field(default_factory=EraMetadata)
    tracks: list[Track] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------


class LinkStatistics(TrackerModel):
    total_links: int = 0
    missing_links: int = 0
    sources_needed: int = 0
    not_available: int = 0


class QualityStatistics(TrackerModel):
    lossless: int = 0
    cd_quality: int = 0
    high_quality: int = 0
    low_quality: int = 0
    recordings: int = 0
    not_available: int = 0


class AvailabilityStatistics(TrackerModel):
    total_full: int = 0
    og_files: int = 0
    stem_bounces: int = 0
    full: int = 0
    tagged: int = 0
    partial: int = 0
    snippets: int = 0
    unavailable: int = 0

    @property
    def total(self) -> int:
        return (
            self.og_files
            + self.stem_bounces
            + self.full
            + self.tagged
            + self.partial
            + self.snippets
            + self.unavailable
        )


class HighlightedStatistics(TrackerModel):
    best_of: int = 0
    special: int = 0
    grails: int = 0
    wanted: int = 0
    worst_of: int = 0


class ActualCounts(TrackerModel):
    """Counts taken from the parsed tree rather than the sheet footer."""

    albums: int = 0
    tracks: int = 0
    links: int = 0
    special: int = 0
    wanted: int = 0


class TrackerStatistics(TrackerModel):
    """Footer-mined (or recomputed) aggregate counts plus actual tree counts."""

    links: LinkStatistics = Field(default_factory=LinkStatistics)
    quality: QualityStatistics = Field(default_factory=QualityStatistics)
    availability: AvailabilityStatistics = Field(default_factory=AvailabilityStatistics)
    highlighted: HighlightedStatistics = Field(default_factory=HighlightedStatistics)
    actual: ActualCounts = Field(default_factory=ActualCounts)


# ---------------------------------------------------------------------------
# Artist
# ---------------------------------------------------------------------------


class Artist(TrackerModel):
    """Root of a parsed tracker."""

    name: str
    albums: list[Era] = Field(default_factory=list)
    statistics: TrackerStatistics = Field(default_factory=TrackerStatistics)
    last_updated: datetime

    @property
    def track_count(self) -> int:
        return sum(len(album.tracks) for album in self.albums)


# ---------------------------------------------------------------------------
# Playback
# ---------------------------------------------------------------------------


class PlayableSource(TrackerModel):
    """A link resolved to a URL a media element can play directly."""

    kind: str  # pillowcase | froste | youtube | soundcloud | audio | other
    url: str
    source_url: str
    file_id: str | None = None
