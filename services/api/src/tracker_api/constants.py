"""Centralized constants for the API service."""

import enum
from dataclasses import dataclass

# --- Service identity ---


class ServiceName(enum.StrEnum):
    """Service names used for logging and identification."""

    API = "api"


# --- Application metadata ---

APP_TITLE = "Tracker Hub API"
APP_DESCRIPTION = "Parse public Google Sheets music trackers into artists, eras and tracks"
APP_VERSION = "0.1.0"


# --- Route configuration ---


@dataclass(frozen=True, slots=True)
class _Route:
    """A route prefix paired with its OpenAPI tag."""

    prefix: str
    tag: str


class Routes:
    """API route prefixes and tags — single source of truth."""

    TRACKERS = _Route("/trackers", "trackers")
    CACHE = _Route("/cache", "cache")
    PLAYBACK = _Route("/playback", "playback")
    HEALTH = "/healthz"


# Default configuration values
DEFAULT_CACHE_FILE = "cache/parsed-docs.json"
DEFAULT_CACHE_MAX_AGE_MINUTES = 60
