"""Row classification and structural parsing.

The data rows are folded into a :class:`ParseState` accumulator. Each row is
tested against an ordered list of (guard, handler) rules and the first guard
that accepts it decides what the row is. The guards overlap (a track row
usually also looks like an era-name row with a filled second cell, a
continuation row would pass the bare era-name guard without the descriptive
check), so the order of ``RowClassifier.rules`` is significant.

Rows never raise: a row no rule accepts is skipped.
"""

import functools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import TypeAlias

from tracker_core.constants import (
    FALLBACK_ERA_NAME,
    FOOTER_MARKERS,
    SPECIAL_MARKERS,
    STRAY_LABEL_CELLS,
    SUB_ERA_ALT_MARKER,
    SUB_ERA_MARKER,
    TEMPLATE_ERA_MARKER,
    TEMPLATE_NAME_MARKERS,
    WANTED_MARKERS,
)
from tracker_core.fields import (
    count_era_metadata,
    find_marker,
    format_date,
    parse_era_name,
    parse_links,
    parse_track_title,
    standardize_quality,
)
from tracker_core.fields.eras import EraName
from tracker_core.fields.shapes import (
    dated_parentheticals,
    first_line,
    has_balanced_parenthetical,
    has_dated_parenthetical,
    has_timeline_keyword,
    is_bare_date,
    is_descriptive,
    is_image_url,
    is_metadata_cell,
    is_purely_parenthetical,
    is_time,
    is_url,
)
from tracker_core.headers import HeaderEraInfo, HeaderResolution
from tracker_core.models import Era, EraMetadata, Track

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 10
MIN_INLINE_ERA_LENGTH = 3


@dataclass(slots=True)
class ParseState:
    """Accumulator threaded through the row fold."""

    current_era: str | None = None
    parent_era: str | None = None  # last top-level era; sub-eras are named after it
    eras: dict[str, Era] = field(default_factory=dict)
    tracks: list[Track] = field(default_factory=list)
    skipped_rows: int = 0


@dataclass(frozen=True, slots=True)
class RowView:
    """One data row split into the era cell, the name cell and everything else."""

    index: int
    cells: list[str]
    first: str
    second: str
    rest: list[str]

    @property
    def text(self) -> str:
        return " ".join(part for part in (self.first, *self.rest) if part)


@dataclass(frozen=True, slots=True)
class _MinedEraCells:
    picture: str | None
    description: str | None
    notes: str | None


Guard: TypeAlias = Callable[[RowView, ParseState], bool]
Handler: TypeAlias = Callable[[RowView, ParseState], ParseState]


def _cell(cells: list[str], index: int | None) -> str:
    if index is None or index < 0 or index >= len(cells):
        return ""
    return cells[index]


def _append_text(existing: str | None, addition: str) -> str:
    if not existing:
        return addition
    if addition in existing:
        return existing
    return f"{existing}\n{addition}"


def find_footer_start(rows: list[list[str]], start: int, era_column: int) -> int | None:
    """Index of the first row whose first cell carries a footer marker."""
    for index in range(max(start, 0), len(rows)):
        first = _cell(rows[index], era_column).lower()
        if any(marker in first for marker in FOOTER_MARKERS):
            return index
    return None


class RowClassifier:
    """Folds data rows into eras and tracks using the rules in ``self.rules``."""

    def __init__(self, resolution: HeaderResolution, *, today: date | None = None) -> None:
        self._resolution = resolution
        self._today = today
        self._era_info = {name.lower(): info for name, info in resolution.era_info.items()}
        self._era_column = resolution.era_column
        self._name_column = resolution.name_column
        self.rules: tuple[tuple[str, Guard, Handler], ...] = (
            ("template", self._is_template_row, self._skip_row),
            ("sub_era", self._is_sub_era_row, self._start_sub_era),
            ("era_metadata", self._is_era_metadata_row, self._merge_metadata_era),
            ("era_name", self._is_era_name_row, self._merge_named_era),
            ("era_continuation", self._is_continuation_row, self._continue_era),
            ("track", self._is_track_row, self._add_track),
        )
        self._handlers: dict[str, Handler] = {name: handler for name, _, handler in self.rules}

    # ------------------------------------------------------------------
    # Fold
    # ------------------------------------------------------------------

    def view(self, index: int, cells: list[str]) -> RowView:
        skip = {self._era_column, self._name_column}
        rest = [cell.strip() for i, cell in enumerate(cells) if i not in skip and cell.strip()]
        return RowView(
            index=index,
            cells=cells,
            first=_cell(cells, self._era_column).strip(),
            second=_cell(cells, self._name_column).strip(),
            rest=rest,
        )

    def classify(self, row: RowView, state: ParseState) -> str | None:
        """Name of the first rule whose guard accepts ``row``."""
        for name, guard, _ in self.rules:
            if guard(row, state):
                return name
        return None

    def step(self, state: ParseState, row: RowView) -> ParseState:
        name = self.classify(row, state)
        if name is None:
            state.skipped_rows += 1
            return state
        logger.debug("Row %d classified as %s", row.index, name)
        return self._handlers[name](row, state)

    def run(self, rows: list[list[str]], start: int = 0, stop: int | None = None) -> ParseState:
        """Fold ``rows[start:stop]`` into a fresh state."""
        end = len(rows) if stop is None else stop
        views = (self.view(index, rows[index]) for index in range(max(start, 0), end))
        return functools.reduce(self.step, views, ParseState())

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    @staticmethod
    def _is_template_row(row: RowView, state: ParseState) -> bool:
        name = row.second.lower()
        era = row.first.lower()
        if any(marker in name for marker in TEMPLATE_NAME_MARKERS):
            return True
        if TEMPLATE_ERA_MARKER in era:
            return True
        return era in STRAY_LABEL_CELLS and (not name or name in STRAY_LABEL_CELLS)

    @staticmethod
    def _is_plain_second_cell(row: RowView) -> bool:
        return bool(row.second) and not is_bare_date(row.second) and not is_url(row.second)

    def _is_sub_era_row(self, row: RowView, state: ParseState) -> bool:
        era = row.first.lower()
        return (SUB_ERA_MARKER in era or era == SUB_ERA_ALT_MARKER) and self._is_plain_second_cell(row)

    def _is_era_metadata_row(self, row: RowView, state: ParseState) -> bool:
        return bool(row.first) and is_metadata_cell(row.first) and self._is_plain_second_cell(row)

    @staticmethod
    def _is_era_name_row(row: RowView, state: ParseState) -> bool:
        first = row.first
        return (
            bool(first)
            and not row.second
            and not is_bare_date(first)
            and not is_time(first)
            and not is_url(first)
            and not is_metadata_cell(first)
            and not is_descriptive(first)
            and not has_dated_parenthetical(first)
        )

    @staticmethod
    def _is_continuation_row(row: RowView, state: ParseState) -> bool:
        return state.current_era in state.eras and bool(row.first) and not row.second

    @staticmethod
    def _is_track_row(row: RowView, state: ParseState) -> bool:
        return bool(row.second)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    @staticmethod
    def _skip_row(row: RowView, state: ParseState) -> ParseState:
        return state

    def _start_sub_era(self, row: RowView, state: ParseState) -> ParseState:
        label = first_line(row.second)
        parent = state.parent_era or state.current_era
        name = f"{parent}: {label}" if parent else label

        mined = self._mine_cells(row.rest)
        info = self._header_info(name) or self._header_info(label)
        era = state.eras.get(name)
        if era is None:
            era = Era(name=name)
            state.eras[name] = era
            logger.debug("Started sub-era %r at row %d", name, row.index)
        self._fill_text(era, info, mined.description, mined.notes)
        state.current_era = name
        return state

    def _merge_metadata_era(self, row: RowView, state: ParseState) -> ParseState:
        era_name = parse_era_name(row.second)
        self._merge_era(state, era_name, self._mine_cells(row.rest), count_era_metadata(row.first))
        return state

    def _merge_named_era(self, row: RowView, state: ParseState) -> ParseState:
        era_name = parse_era_name(row.first)
        self._merge_era(state, era_name, self._mine_cells(row.rest), None)
        return state

    def _continue_era(self, row: RowView, state: ParseState) -> ParseState:
        era = state.eras[state.current_era or ""]
        if any(has_balanced_parenthetical(cell) for cell in row.rest):
            era.notes = _append_text(era.notes, row.text)
        elif has_timeline_keyword(row.first) or has_dated_parenthetical(row.first):
            era.notes = _append_text(era.notes, row.first)
        elif is_purely_parenthetical(row.first) or len(row.first) > MIN_DESCRIPTION_LENGTH:
            era.description = _append_text(era.description, row.first)
        return state

    def _add_track(self, row: RowView, state: ParseState) -> ParseState:
        if self._looks_like_inline_era(row):
            self._switch_inline_era(state, parse_era_name(row.first).main_name)
        if state.current_era is None:
            state.current_era = FALLBACK_ERA_NAME
        era = state.eras.get(state.current_era)
        if era is None:
            era = Era(name=state.current_era)
            state.eras[era.name] = era

        track = self.build_track(row, era.name, len(era.tracks))
        era.tracks.append(track)
        state.tracks.append(track)
        return state

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _header_info(self, name: str) -> HeaderEraInfo | None:
        return self._era_info.get(name.lower())

    @staticmethod
    def _mine_cells(cells: list[str]) -> _MinedEraCells:
        """Image URL, description and dated notes from the cells beside an era name."""
        picture = None
        description = None
        notes: list[str] = []
        for cell in cells:
            if is_url(cell):
                if picture is None and is_image_url(cell):
                    picture = cell
                continue
            dated = dated_parentheticals(cell)
            if dated:
                notes.extend(dated)
                continue
            if description is None and len(cell) > MIN_DESCRIPTION_LENGTH:
                description = cell
        return _MinedEraCells(picture=picture, description=description, notes="\n".join(notes) or None)

    @staticmethod
    def _fill_text(era: Era, info: HeaderEraInfo | None, description: str | None, notes: str | None) -> None:
        if info is not None:
            era.description = era.description or info.description
            era.notes = era.notes or info.timeline
        era.description = era.description or description
        era.notes = era.notes or notes

    def _merge_era(
        self,
        state: ParseState,
        era_name: EraName,
        mined: _MinedEraCells,
        metadata: EraMetadata | None,
    ) -> None:
        name = era_name.main_name
        era = state.eras.get(name)
        if era is None:
            era = Era(name=name)
            state.eras[name] = era
            logger.debug("Found era %r", name)

        for alternate in era_name.alternate_names:
            if alternate not in era.alternate_names:
                era.alternate_names.append(alternate)
        self._fill_text(era, self._header_info(name), era_name.description or mined.description, mined.notes)
        if era.picture is None and mined.picture:
            era.picture = mined.picture
        if metadata is not None and era.metadata.is_empty:
            era.metadata = metadata

        state.current_era = name
        state.parent_era = name

    @staticmethod
    def _looks_like_inline_era(row: RowView) -> bool:
        first = row.first
        return (
            bool(first)
            and first != row.second
            and not is_time(first)
            and not is_url(first)
            and not is_bare_date(first)
            and not is_metadata_cell(first)
            and len(first) > MIN_INLINE_ERA_LENGTH
        )

    @staticmethod
    def _switch_inline_era(state: ParseState, name: str) -> None:
        if not name:
            return
        # Rows inside a sub-era often repeat the parent's name in the era column.
        if state.parent_era == name and (state.current_era or "").startswith(f"{name}: "):
            return
        if name not in state.eras:
            state.eras[name] = Era(name=name)
            logger.debug("Inline era switch to %r", name)
        state.current_era = name
        state.parent_era = name

    def build_track(self, row: RowView, era_name: str, index_in_era: int) -> Track:
        """Build a Track from a row using the field sub-parsers."""
        raw_name = _cell(row.cells, self._name_column)

        def value(field_name: str) -> str:
            return _cell(row.cells, self._resolution.column(field_name)).strip()

        special_type = find_marker(raw_name, SPECIAL_MARKERS)
        wanted_type = find_marker(raw_name, WANTED_MARKERS)
        return Track(
            id=f"{era_name}-{raw_name.strip()}-{index_in_era}",
            era=era_name,
            title=parse_track_title(raw_name),
            raw_name=raw_name,
            notes=value("notes"),
            track_length=value("track_length"),
            file_date=format_date(value("file_date"), self._today),
            leak_date=format_date(value("leak_date"), self._today),
            available_length=value("available_length"),
            quality=standardize_quality(value("quality")),
            type=value("type"),
            links=parse_links(value("links")),
            is_special=special_type is not None,
            special_type=special_type,
            is_wanted=wanted_type is not None,
            wanted_type=wanted_type,
        )
