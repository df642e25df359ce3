"""Main FastAPI application for the Tracker Hub API."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tracker_api.cache import router as cache_router
from tracker_api.constants import APP_DESCRIPTION, APP_TITLE, APP_VERSION, Routes, ServiceName
from tracker_api.logging import configure_logging
from tracker_api.middleware import (
    RateLimitMiddleware,
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
)
from tracker_api.playback import router as playback_router
from tracker_api.settings import get_settings
from tracker_api.trackers import router as trackers_router


class TrackerHubApp:
    """Application container — configures middleware, routers, and lifespan."""

    app: FastAPI

    def __init__(self) -> None:
        configure_logging(ServiceName.API, get_settings().LOG_LEVEL)
        self.app = FastAPI(
            title=APP_TITLE,
            description=APP_DESCRIPTION,
            version=APP_VERSION,
            lifespan=self._lifespan,
        )
        self._setup_middleware()
        self._setup_routers()

    @staticmethod
    @asynccontextmanager
    async def _lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """Application lifespan: make sure the cache directory exists."""
        Path(get_settings().CACHE_FILE).parent.mkdir(parents=True, exist_ok=True)
        yield

    def _setup_middleware(self) -> None:
        settings = get_settings()

        # Rate limiting (parse endpoint only)
        self.app.add_middleware(RateLimitMiddleware, parse_limit=settings.RATE_LIMIT_PARSE_PER_MINUTE)

        # Security headers
        self.app.add_middleware(SecurityHeadersMiddleware)

        # Request-ID (generates/propagates X-Request-ID)
        self.app.add_middleware(RequestIDMiddleware)

        # CORS
        origins = [o.strip() for o in settings.CORS_ALLOWED_ORIGINS.split(",") if o.strip()]
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    def _setup_routers(self) -> None:
        self.app.include_router(trackers_router, prefix=Routes.TRACKERS.prefix, tags=[Routes.TRACKERS.tag])
        self.app.include_router(cache_router, prefix=Routes.CACHE.prefix, tags=[Routes.CACHE.tag])
        self.app.include_router(playback_router, prefix=Routes.PLAYBACK.prefix, tags=[Routes.PLAYBACK.tag])

        @self.app.get(Routes.HEALTH)
        async def health_check() -> dict[str, str]:
            """Health check endpoint."""
            return {"status": "healthy"}

        @self.app.get("/")
        async def root() -> dict[str, str]:
            """Root endpoint."""
            return {"message": APP_TITLE, "version": APP_VERSION}


_application = TrackerHubApp()
app: FastAPI = _application.app
