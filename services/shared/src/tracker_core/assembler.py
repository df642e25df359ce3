"""Assembly of the Artist tree from a raw table, and the URL-to-Artist parser."""

import logging
from collections.abc import Sequence
from datetime import UTC, date, datetime

from tracker_core.art import apply_art
from tracker_core.classifier import ParseState, RowClassifier, find_footer_start
from tracker_core.client import SheetsClient
from tracker_core.constants import (
    ARTIST_CELL_MAX_LENGTH,
    ARTIST_SCAN_ROWS,
    TRACKER_WORD_PATTERN,
    UNKNOWN_ARTIST,
)
from tracker_core.consolidate import DEFAULT_ERA_ALIASES, EraAlias, consolidate_eras
from tracker_core.headers import HeaderResolution, resolve_headers
from tracker_core.models import Artist, Era, RawTable
from tracker_core.statistics import check_consistency, compute_actual_counts, extract_statistics
from tracker_core.urls import extract_document_id, extract_gid

logger = logging.getLogger(__name__)


def _strip_tracker_word(text: str) -> str:
    return " ".join(TRACKER_WORD_PATTERN.sub(" ", text).split()).strip(" -:|")


def artist_from_title(title: str | None) -> str | None:
    """``"Kanye West Tracker"`` -> ``"Kanye West"``."""
    if not title:
        return None
    return _strip_tracker_word(title) or None


def mine_artist_name(table: RawTable, resolution: HeaderResolution) -> str | None:
    """A short cell above the header row, or a column label, mentioning "tracker"."""
    candidates: list[str] = []
    for row in table.rows[: min(ARTIST_SCAN_ROWS, max(resolution.header_row_index, 0))]:
        candidates.extend(row)
    candidates.extend(col.label for col in table.cols)
    for candidate in candidates:
        line = candidate.strip().split("\n", 1)[0]
        if not line or len(line) > ARTIST_CELL_MAX_LENGTH or not TRACKER_WORD_PATTERN.search(line):
            continue
        name = _strip_tracker_word(line)
        if name:
            return name
    return None


def finalize_eras(state: ParseState, aliases: Sequence[EraAlias]) -> list[Era]:
    """Consolidate aliases, drop empty eras, and number the rest."""
    albums = [
        era
        for era in consolidate_eras(list(state.eras.values()), aliases)
        if era.tracks or era.notes or not era.metadata.is_empty
    ]
    for index, album in enumerate(albums):
        album.id = f"album-{index}"
    return albums


def parse_table(
    table: RawTable,
    *,
    artist_name: str | None = None,
    document_title: str | None = None,
    aliases: Sequence[EraAlias] = DEFAULT_ERA_ALIASES,
    now: datetime | None = None,
    today: date | None = None,
) -> Artist:
    """Parse an unwrapped table into an Artist.

    Never raises for odd rows; a sheet nothing can be recovered from yields
    an Artist with no albums.
    """
    resolution = resolve_headers(table)
    footer_start = find_footer_start(table.rows, resolution.data_start, resolution.era_column)
    state = RowClassifier(resolution, today=today).run(table.rows, resolution.data_start, footer_start)
    albums = finalize_eras(state, aliases)

    statistics = extract_statistics(table.rows, footer_start)
    statistics.actual = compute_actual_counts(albums)
    check_consistency(statistics)

    name = (
        artist_name
        or artist_from_title(document_title)
        or mine_artist_name(table, resolution)
        or UNKNOWN_ARTIST
    )
    logger.info(
        "Parsed tracker %r: %d eras, %d tracks (header via %s, %d rows skipped)",
        name,
        len(albums),
        statistics.actual.tracks,
        resolution.source,
        state.skipped_rows,
    )
    return Artist(
        name=name,
        albums=albums,
        statistics=statistics,
        last_updated=now or datetime.now(UTC),
    )


class TrackerParser:
    """Fetch, unwrap and parse a tracker by share URL."""

    def __init__(
        self,
        client: SheetsClient | None = None,
        *,
        aliases: Sequence[EraAlias] = DEFAULT_ERA_ALIASES,
        art_lookup: bool = True,
    ) -> None:
        self._client = client or SheetsClient()
        self._aliases = tuple(aliases)
        self._art_lookup = art_lookup

    async def parse_url(self, url: str, *, artist_name: str | None = None) -> Artist:
        """Parse the tracker at ``url``.

        Raises InvalidSheetUrlError before any request for a malformed URL,
        SheetFetchError on transport failure and ParseError on an
        undecodable response. Art and title lookups never raise.
        """
        doc_id = extract_document_id(url)
        gid = extract_gid(url)
        table = await self._client.fetch_table(doc_id, gid)

        document_title = None
        if not artist_name:
            document_title = await self._client.fetch_document_title(doc_id)

        artist = parse_table(
            table,
            artist_name=artist_name,
            document_title=document_title,
            aliases=self._aliases,
        )
        if self._art_lookup:
            art = await self._client.fetch_art(doc_id)
            if art:
                apply_art(artist.albums, art)
        return artist
