"""Tracker parse and search endpoints."""

from tracker_api.trackers.router import router

__all__ = ["router"]
