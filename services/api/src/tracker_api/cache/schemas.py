"""Pydantic response models for cache administration endpoints."""

from datetime import datetime

from pydantic import Field

from tracker_core.models import TrackerModel


class CacheEntry(TrackerModel):
    """Summary of one cached tracker."""

    doc_id: str
    artist_name: str
    last_updated: datetime
    track_count: int
    fresh: bool


class CacheStats(TrackerModel):
    """All cache entries."""

    total: int
    entries: list[CacheEntry] = Field(default_factory=list)


class CacheClearResult(TrackerModel):
    """Outcome of a clear request."""

    cleared: int
