"""Resolve tracker links to directly playable media URLs."""

from tracker_api.playback.router import router

__all__ = ["router"]
