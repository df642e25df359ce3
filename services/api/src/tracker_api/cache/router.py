"""Cache administration endpoints — class-based router."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from tracker_api.cache.schemas import CacheClearResult, CacheStats
from tracker_api.cache.service import TrackerCacheService
from tracker_api.settings import AppSettings, get_settings


def get_cache_service(settings: Annotated[AppSettings, Depends(get_settings)]) -> TrackerCacheService:
    """Cache service bound to the configured file."""
    return TrackerCacheService(settings.CACHE_FILE, max_age_minutes=settings.CACHE_MAX_AGE_MINUTES)


class CacheRouter:
    """Class-based router for inspecting and clearing the parsed-tracker cache."""

    def __init__(self) -> None:
        self.router = APIRouter()
        self._register_routes()

    def _register_routes(self) -> None:
        r = self.router
        r.add_api_route("", self.stats, methods=["GET"], response_model=CacheStats)
        r.add_api_route("", self.clear_all, methods=["DELETE"], response_model=CacheClearResult)
        r.add_api_route("/{doc_id}", self.clear_one, methods=["DELETE"], response_model=CacheClearResult)

    async def stats(self, cache: Annotated[TrackerCacheService, Depends(get_cache_service)]) -> CacheStats:
        """List cached trackers with their age and track count."""
        entries = cache.entries()
        return CacheStats(total=len(entries), entries=entries)

    async def clear_all(
        self,
        cache: Annotated[TrackerCacheService, Depends(get_cache_service)],
    ) -> CacheClearResult:
        """Remove every cached tracker."""
        return CacheClearResult(cleared=cache.clear_all())

    async def clear_one(
        self,
        doc_id: str,
        cache: Annotated[TrackerCacheService, Depends(get_cache_service)],
    ) -> CacheClearResult:
        """Remove one cached tracker (``doc_id`` may carry a ``_gid_`` suffix)."""
        if not cache.clear(doc_id):
            raise HTTPException(status_code=404, detail=f"No cache entry for {doc_id}")
        return CacheClearResult(cleared=1)


_instance = CacheRouter()
router = _instance.router
