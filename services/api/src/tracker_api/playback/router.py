"""Playback resolution endpoint — class-based router."""

from fastapi import APIRouter, HTTPException, Query

from tracker_core.models import PlayableSource
from tracker_core.playback import resolve_link


class PlaybackRouter:
    """Class-based router for resolving tracker links to playable URLs."""

    def __init__(self) -> None:
        self.router = APIRouter()
        self._register_routes()

    def _register_routes(self) -> None:
        self.router.add_api_route("/resolve", self.resolve, methods=["GET"], response_model=PlayableSource)

    @staticmethod
    async def resolve(url: str = Query(min_length=1)) -> PlayableSource:
        """Resolve a single link (Pillowcase, Froste, YouTube, SoundCloud or direct audio)."""
        if not url.strip().lower().startswith(("http://", "https://")):
            raise HTTPException(status_code=400, detail="Only http(s) links can be resolved")
        return resolve_link(url)


_instance = PlaybackRouter()
router = _instance.router
