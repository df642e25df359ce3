"""Per-cell sub-parsers: titles, dates, quality, links and era cells."""

from tracker_core.fields.dates import format_date, normalize_date
from tracker_core.fields.eras import EraName, count_era_metadata, parse_era_name
from tracker_core.fields.links import categorize_link, parse_links, split_link_cell
from tracker_core.fields.quality import standardize_quality
from tracker_core.fields.titles import find_marker, parse_track_title, strip_markers

__all__ = [
    "EraName",
    "categorize_link",
    "count_era_metadata",
    "find_marker",
    "format_date",
    "normalize_date",
    "parse_era_name",
    "parse_links",
    "parse_track_title",
    "split_link_cell",
    "standardize_quality",
    "strip_markers",
]
