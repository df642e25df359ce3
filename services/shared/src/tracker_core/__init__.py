"""Google Sheets tracker fetching and parsing."""

from tracker_core.assembler import TrackerParser, parse_table
from tracker_core.client import SheetsClient
from tracker_core.consolidate import DEFAULT_ERA_ALIASES, EraAlias, consolidate_eras
from tracker_core.exceptions import (
    InvalidSheetUrlError,
    ParseError,
    SheetAccessDeniedError,
    SheetFetchError,
    SheetNotFoundError,
    TrackerError,
)
from tracker_core.models import Artist, Era, Track, TrackerStatistics
from tracker_core.unwrap import unwrap_response
from tracker_core.views import SheetType, apply_sheet_type

__all__ = [
    "DEFAULT_ERA_ALIASES",
    "Artist",
    "Era",
    "EraAlias",
    "InvalidSheetUrlError",
    "ParseError",
    "SheetAccessDeniedError",
    "SheetFetchError",
    "SheetNotFoundError",
    "SheetType",
    "SheetsClient",
    "Track",
    "TrackerError",
    "TrackerParser",
    "TrackerStatistics",
    "apply_sheet_type",
    "consolidate_eras",
    "parse_table",
    "unwrap_response",
]
