"""Request and response models for tracker endpoints."""

from pydantic import Field

from tracker_core.models import Artist, TrackerModel
from tracker_core.views import SheetType


class ParseRequest(TrackerModel):
    """Body of ``POST /trackers/parse``."""

    url: str = Field(min_length=1)
    sheet_type: SheetType = SheetType.UNRELEASED
    force_refresh: bool = False
    artist_name: str | None = None


class ParseResponse(TrackerModel):
    """A parsed (or cached) tracker, filtered to the requested sheet type."""

    id: str
    sheet_type: SheetType
    cached: bool
    artist: Artist
