"""Flat-file cache of parsed trackers."""

from tracker_api.cache.router import router
from tracker_api.cache.service import TrackerCacheService

__all__ = ["TrackerCacheService", "router"]
