"""Parsed-tracker cache service — a flat JSON file keyed by document id."""

import json
import logging
import os
import tempfile
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from tracker_api.cache.schemas import CacheEntry
from tracker_core.models import Artist

logger = logging.getLogger(__name__)


class TrackerCacheService:
    """Reads and writes Artist snapshots in a single JSON object on disk.

    Entries are fresh while ``now - last_updated`` is under ``max_age_minutes``.
    Every write is a whole-file read-modify-write with no locking, so
    concurrent writers can lose each other's updates.
    """

    def __init__(self, path: str | Path, *, max_age_minutes: int = 60) -> None:
        self._path = Path(path)
        self._max_age = timedelta(minutes=max_age_minutes)

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # File access
    # ------------------------------------------------------------------

    def load(self) -> dict[str, Any]:
        """The raw cache object; a missing or unreadable file is an empty cache."""
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            logger.warning("Cache file %s is not valid JSON; treating it as empty", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Cache file %s does not hold an object; treating it as empty", self._path)
            return {}
        return data

    def _save(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    # ------------------------------------------------------------------
    # Entries
    # ------------------------------------------------------------------

    def get(self, key: str) -> Artist | None:
        """The cached Artist for ``key`` regardless of age, or ``None``."""
        raw = self.load().get(key)
        if raw is None:
            return None
        try:
            return Artist.model_validate(raw)
        except ValidationError:
            logger.warning("Discarding malformed cache entry %s", key)
            return None

    def is_fresh(self, artist: Artist, now: datetime | None = None) -> bool:
        now = now or datetime.now(UTC)
        last_updated = artist.last_updated
        if last_updated.tzinfo is None:
            last_updated = last_updated.replace(tzinfo=UTC)
        return now - last_updated < self._max_age

    def get_fresh(self, key: str, now: datetime | None = None) -> Artist | None:
        """The cached Artist for ``key`` if still within the freshness window."""
        artist = self.get(key)
        if artist is None:
            return None
        if not self.is_fresh(artist, now):
            logger.debug("Cache expired for %s", key)
            return None
        logger.debug("Cache hit for %s", key)
        return artist

    def put(self, key: str, artist: Artist) -> None:
        data = self.load()
        data[key] = artist.model_dump(mode="json", by_alias=True)
        self._save(data)
        logger.info("Cached %s (%d tracks)", key, artist.track_count)

    def clear(self, key: str) -> bool:
        """Remove one entry; returns whether it existed."""
        data = self.load()
        if key not in data:
            return False
        del data[key]
        self._save(data)
        logger.info("Cleared cache entry %s", key)
        return True

    def clear_all(self) -> int:
        """Remove every entry; returns how many there were."""
        count = len(self.load())
        self._save({})
        logger.info("Cleared %d cache entries", count)
        return count

    def entries(self, now: datetime | None = None) -> list[CacheEntry]:
        """One summary per readable entry."""
        summaries: list[CacheEntry] = []
        for key, raw in self.load().items():
            try:
                artist = Artist.model_validate(raw)
            except ValidationError:
                logger.warning("Skipping malformed cache entry %s", key)
                continue
            summaries.append(
                CacheEntry(
                    doc_id=key,
                    artist_name=artist.name,
                    last_updated=artist.last_updated,
                    track_count=artist.track_count,
                    fresh=self.is_fresh(artist, now),
                )
            )
        return summaries
