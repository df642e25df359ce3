"""Tracker parse and search endpoints — class-based router."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from tracker_api.settings import AppSettings, get_settings
from tracker_api.trackers.schemas import ParseRequest, ParseResponse
from tracker_api.trackers.service import TrackerNotCachedError, TrackerService
from tracker_core.exceptions import InvalidSheetUrlError, ParseError, SheetFetchError, TrackerError
from tracker_core.export import ExportFormat
from tracker_core.search import SearchResult
from tracker_core.urls import build_sheet_url
from tracker_core.views import SheetType

# Upstream statuses passed through; anything else is a bad gateway
_PASSTHROUGH_STATUSES = frozenset({403, 404})


def get_tracker_service(settings: Annotated[AppSettings, Depends(get_settings)]) -> TrackerService:
    return TrackerService.from_settings(settings)


def to_http_error(exc: TrackerError) -> HTTPException:
    """Map a parser failure onto a single user-facing HTTP error."""
    if isinstance(exc, InvalidSheetUrlError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, SheetFetchError):
        status = exc.status_code if exc.status_code in _PASSTHROUGH_STATUSES else 502
        return HTTPException(status_code=status, detail=exc.detail)
    if isinstance(exc, ParseError):
        return HTTPException(status_code=502, detail=f"Failed to parse Google Sheet: {exc}")
    return HTTPException(status_code=500, detail=str(exc))


class TrackersRouter:
    """Class-based router for tracker endpoints."""

    def __init__(self) -> None:
        self.router = APIRouter()
        self._register_routes()

    def _register_routes(self) -> None:
        r = self.router
        r.add_api_route("/parse", self.parse, methods=["POST"], response_model=ParseResponse)
        r.add_api_route("/parse", self.parse_by_query, methods=["GET"], response_model=ParseResponse)
        r.add_api_route("/{doc_id}/search", self.search, methods=["GET"], response_model=SearchResult)
        r.add_api_route("/{doc_id}/export", self.export, methods=["GET"], response_class=Response)

    @staticmethod
    async def _parse(
        service: TrackerService,
        url: str,
        sheet_type: SheetType,
        force_refresh: bool,
        artist_name: str | None,
    ) -> ParseResponse:
        try:
            return await service.parse(
                url,
                sheet_type=sheet_type,
                force_refresh=force_refresh,
                artist_name=artist_name,
            )
        except TrackerError as exc:
            raise to_http_error(exc) from exc

    async def parse(
        self,
        body: ParseRequest,
        service: Annotated[TrackerService, Depends(get_tracker_service)],
    ) -> ParseResponse:
        """Parse a tracker from its share URL."""
        return await self._parse(service, body.url, body.sheet_type, body.force_refresh, body.artist_name)

    async def parse_by_query(
        self,
        service: Annotated[TrackerService, Depends(get_tracker_service)],
        url: str | None = Query(default=None),
        doc_id: str | None = Query(default=None, alias="docId"),
        sheet_type: SheetType = Query(default=SheetType.UNRELEASED, alias="sheetType"),
        force_refresh: bool = Query(default=False, alias="forceRefresh"),
        artist_name: str | None = Query(default=None, alias="artistName"),
    ) -> ParseResponse:
        """Parse by ``url`` or by a ``docId`` cache key (``<id>`` or ``<id>_gid_<gid>``)."""
        if url is None and doc_id is None:
            raise HTTPException(status_code=400, detail="Either url or docId is required")
        target = url if url is not None else build_sheet_url(doc_id or "")
        return await self._parse(service, target, sheet_type, force_refresh, artist_name)

    async def search(
        self,
        doc_id: str,
        service: Annotated[TrackerService, Depends(get_tracker_service)],
        q: str = Query(min_length=1),
    ) -> SearchResult:
        """Search a cached tracker by title, alternate name or raw name."""
        try:
            return service.search(doc_id, q)
        except TrackerNotCachedError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

    async def export(
        self,
        doc_id: str,
        service: Annotated[TrackerService, Depends(get_tracker_service)],
        fmt: ExportFormat = Query(default=ExportFormat.JSON, alias="format"),
        include_metadata: bool = Query(default=True, alias="includeMetadata"),
    ) -> Response:
        """Download a cached tracker as JSON or as one CSV row per track."""
        try:
            content, filename = service.export(doc_id, fmt, include_metadata=include_metadata)
        except TrackerNotCachedError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return Response(
            content=content,
            media_type=fmt.media_type,
            headers={
                "Content-Disposition": f'attachment; filename="{filename}"',
                "Cache-Control": "no-cache, no-store, must-revalidate",
            },
        )


_instance = TrackersRouter()
router = _instance.router
