"""Tracker parse/search orchestration over the parser and the file cache."""

import logging

from tracker_api.cache.service import TrackerCacheService
from tracker_api.settings import AppSettings
from tracker_api.trackers.schemas import ParseResponse
from tracker_core import SheetsClient, TrackerParser
from tracker_core.export import ExportFormat, export_csv, export_filename, export_json
from tracker_core.search import SearchResult, search_artist
from tracker_core.urls import build_sheet_url, cache_key_for_url
from tracker_core.views import SheetType, apply_sheet_type

logger = logging.getLogger(__name__)


class TrackerNotCachedError(Exception):
    """Search was requested for a tracker that has not been parsed yet."""

    def __init__(self, doc_id: str) -> None:
        self.doc_id = doc_id
        super().__init__(f"Tracker {doc_id} has not been parsed yet")


class TrackerService:
    """Serve trackers from the cache, parsing on a miss or forced refresh."""

    def __init__(
        self,
        parser: TrackerParser,
        cache: TrackerCacheService,
        *,
        recent_window_days: int,
    ) -> None:
        self._parser = parser
        self._cache = cache
        self._recent_window_days = recent_window_days

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "TrackerService":
        parser = TrackerParser(
            SheetsClient(request_timeout=settings.SHEETS_REQUEST_TIMEOUT),
            aliases=settings.ERA_ALIASES,
            art_lookup=settings.ART_SHEET_LOOKUP_ENABLED,
        )
        cache = TrackerCacheService(settings.CACHE_FILE, max_age_minutes=settings.CACHE_MAX_AGE_MINUTES)
        return cls(parser, cache, recent_window_days=settings.RECENT_WINDOW_DAYS)

    async def parse(
        self,
        url: str,
        *,
        sheet_type: SheetType = SheetType.UNRELEASED,
        force_refresh: bool = False,
        artist_name: str | None = None,
    ) -> ParseResponse:
        """Full tree from cache or a fresh parse, then the sheet-type view.

        The cache always holds the unfiltered tree.
        """
        key = cache_key_for_url(url)
        artist = None if force_refresh else self._cache.get_fresh(key)
        cached = artist is not None
        if artist is None:
            logger.info("Parsing tracker", extra={"doc_id": key, "sheet_type": str(sheet_type)})
            artist = await self._parser.parse_url(url, artist_name=artist_name)
            self._cache.put(key, artist)

        view = apply_sheet_type(artist, sheet_type, recent_days=self._recent_window_days)
        return ParseResponse(id=key, sheet_type=sheet_type, cached=cached, artist=view)

    def search(self, doc_id: str, query: str) -> SearchResult:
        """Search the cached tree for ``doc_id`` regardless of its age."""
        artist = self._cache.get(doc_id)
        if artist is None:
            raise TrackerNotCachedError(doc_id)
        return search_artist(artist, query)

    def export(self, doc_id: str, fmt: ExportFormat, *, include_metadata: bool = True) -> tuple[str, str]:
        """Export body and download filename for a cached tracker."""
        artist = self._cache.get(doc_id)
        if artist is None:
            raise TrackerNotCachedError(doc_id)
        if fmt is ExportFormat.CSV:
            content = export_csv(artist)
        else:
            content = export_json(artist, doc_id, build_sheet_url(doc_id), include_metadata=include_metadata)
        logger.info("Exporting tracker", extra={"doc_id": doc_id, "export_format": str(fmt)})
        return content, export_filename(artist.name, doc_id, fmt)
