"""Header-row detection, column mapping, and era info mined from column labels."""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field

from tracker_core.constants import (
    HEADER_KEYWORD_MIN_CELLS,
    HEADER_KEYWORDS,
    HEADER_NAME_CELLS,
    HEADER_SCAN_LIMIT,
    KNOWN_ERA_PATTERNS,
)
from tracker_core.fields.shapes import dated_parentheticals, first_line, is_purely_parenthetical
from tracker_core.models import RawColumn, RawTable

logger = logging.getLogger(__name__)

DESCRIPTION_MIN_LENGTH = 50

_ERA_HEADER_PATTERN = re.compile(r"\bera\b|album|project")


@dataclass(slots=True)
class HeaderEraInfo:
    """Description/timeline for an era, mined from a multi-line column label."""

    name: str
    description: str | None = None
    timeline: str | None = None


@dataclass(slots=True)
class HeaderResolution:
    """Where the header is and which column holds which field."""

    header_row_index: int  # -1 when the header came from column labels
    headers: list[str]
    columns: dict[str, int] = field(default_factory=dict)
    era_info: dict[str, HeaderEraInfo] = field(default_factory=dict)
    source: str = "first_row"

    @property
    def data_start(self) -> int:
        return self.header_row_index + 1

    @property
    def era_column(self) -> int:
        return self.columns.get("era", 0)

    @property
    def name_column(self) -> int:
        return self.columns.get("name", 1)

    def column(self, name: str) -> int | None:
        return self.columns.get(name)


# ---------------------------------------------------------------------------
# Column mapping
# ---------------------------------------------------------------------------

# Each header cell maps to the first field whose predicate accepts it.
_COLUMN_RULES: tuple[tuple[str, Callable[[str], bool]], ...] = (
    ("era", lambda c: bool(_ERA_HEADER_PATTERN.search(c))),
    (
        "name",
        lambda c: c in HEADER_NAME_CELLS
        or c.startswith("name")
        or "song title" in c
        or "track title" in c
        or c in {"title", "song", "track"},
    ),
    ("notes", lambda c: "note" in c or "description" in c),
    ("available_length", lambda c: "available" in c),
    ("track_length", lambda c: ("track" in c and "length" in c) or "duration" in c or c in {"length", "time"}),
    ("leak_date", lambda c: "leak" in c or "release date" in c),
    ("file_date", lambda c: ("file" in c and "date" in c) or "recorded" in c or "recording date" in c),
    ("type", lambda c: c == "type" or c.startswith("type ")),
    ("quality", lambda c: "quality" in c or "bitrate" in c or "format" in c),
    ("links", lambda c: "link" in c or "url" in c or "download" in c),
)


def normalize_header_cell(text: str) -> str:
    return first_line(text).lower()


def map_columns(headers: list[str]) -> dict[str, int]:
    """Canonical field -> column index; the first column for a field wins."""
    columns: dict[str, int] = {}
    for index, header in enumerate(headers):
        cell = normalize_header_cell(header)
        if not cell:
            continue
        for name, predicate in _COLUMN_RULES:
            if predicate(cell):
                columns.setdefault(name, index)
                break
    return columns


# ---------------------------------------------------------------------------
# Header detection rules
# ---------------------------------------------------------------------------


def _is_exact_header(row: list[str]) -> bool:
    cells = {normalize_header_cell(cell) for cell in row}
    return "era" in cells and bool(cells & HEADER_NAME_CELLS)


def _is_keyword_header(row: list[str]) -> bool:
    hits = 0
    for cell in row:
        lowered = cell.lower()
        if any(keyword in lowered for keyword in HEADER_KEYWORDS):
            hits += 1
    return hits >= HEADER_KEYWORD_MIN_CELLS


def mine_label(label: str) -> HeaderEraInfo | None:
    """Era name, description and timeline hidden in a multi-line column label."""
    name = None
    for pattern in KNOWN_ERA_PATTERNS:
        match = pattern.search(label)
        if match:
            name = match.group(0).strip()
            break
    if name is None:
        return None

    description = None
    for line in (line.strip() for line in label.split("\n")):
        if len(line) >= DESCRIPTION_MIN_LENGTH and not is_purely_parenthetical(line):
            description = line
            break
    timeline = "\n".join(dated_parentheticals(label)) or None
    return HeaderEraInfo(name=name, description=description, timeline=timeline)


def mine_labels(cols: list[RawColumn]) -> dict[str, HeaderEraInfo]:
    era_info: dict[str, HeaderEraInfo] = {}
    for col in cols:
        info = mine_label(col.label)
        if info is not None and info.name not in era_info:
            era_info[info.name] = info
    return era_info


def resolve_headers(table: RawTable) -> HeaderResolution:
    """Locate the header row and map its columns.

    Rules, first match wins, each tried across the first 20 rows before the next:
    an exact ``era`` + ``name`` row; a row with three or more keyword cells;
    the column labels; row 0.
    """
    window = table.rows[:HEADER_SCAN_LIMIT]
    era_info = mine_labels(table.cols)

    for source, rule in (("exact", _is_exact_header), ("keywords", _is_keyword_header)):
        for index, row in enumerate(window):
            if rule(row):
                logger.debug("Header row %d found by %s rule", index, source)
                return HeaderResolution(
                    header_row_index=index,
                    headers=list(row),
                    columns=map_columns(row),
                    era_info=era_info,
                    source=source,
                )

    if any(col.label.strip() for col in table.cols):
        headers = [first_line(col.label) for col in table.cols]
        logger.debug("Using column labels as header: %s", headers)
        return HeaderResolution(
            header_row_index=-1,
            headers=headers,
            columns=map_columns(headers),
            era_info=era_info,
            source="labels",
        )

    headers = list(table.rows[0]) if table.rows else []
    logger.debug("No header found; falling back to row 0")
    return HeaderResolution(
        header_row_index=0,
        headers=headers,
        columns=map_columns(headers),
        era_info=era_info,
        source="first_row",
    )
