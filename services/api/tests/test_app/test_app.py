"""Tests for application wiring: health, middleware and settings."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from tracker_api.constants import APP_TITLE, APP_VERSION
from tracker_api.main import app
from tracker_api.middleware import RateLimitMiddleware, RequestIDMiddleware, SecurityHeadersMiddleware
from tracker_api.settings import AppSettings

client = TestClient(app)


def test_health() -> None:
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy"}


def test_root() -> None:
    assert client.get("/").json() == {"message": APP_TITLE, "version": APP_VERSION}


def test_security_headers() -> None:
    resp = client.get("/healthz")
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["X-Frame-Options"] == "DENY"


def test_request_id_generated_and_propagated() -> None:
    assert len(client.get("/healthz").headers["X-Request-ID"]) == 32
    assert client.get("/healthz", headers={"X-Request-ID": "abc"}).headers["X-Request-ID"] == "abc"


def _limited_app(limit: int) -> FastAPI:
    limited = FastAPI()
    limited.add_middleware(RateLimitMiddleware, parse_limit=limit)
    limited.add_middleware(SecurityHeadersMiddleware)
    limited.add_middleware(RequestIDMiddleware)

    @limited.post("/trackers/parse")
    async def parse() -> dict[str, str]:
        return {"status": "ok"}

    @limited.get("/cache")
    async def cache() -> dict[str, str]:
        return {"status": "ok"}

    return limited


def test_rate_limit_applies_to_parse_only() -> None:
    limited = TestClient(_limited_app(2))
    assert limited.post("/trackers/parse").status_code == 200
    assert limited.post("/trackers/parse").status_code == 200
    resp = limited.post("/trackers/parse")
    assert resp.status_code == 429
    assert resp.headers["Retry-After"] == "60"
    assert limited.get("/cache").status_code == 200


def test_rate_limit_keyed_by_forwarded_ip() -> None:
    limited = TestClient(_limited_app(1))
    assert limited.post("/trackers/parse", headers={"X-Forwarded-For": "1.1.1.1"}).status_code == 200
    assert limited.post("/trackers/parse", headers={"X-Forwarded-For": "2.2.2.2"}).status_code == 200
    assert limited.post("/trackers/parse", headers={"X-Forwarded-For": "1.1.1.1"}).status_code == 429


def test_settings_defaults() -> None:
    settings = AppSettings()
    assert settings.CACHE_MAX_AGE_MINUTES == 60
    assert settings.RECENT_WINDOW_DAYS == 30
    assert [alias.canonical for alias in settings.ERA_ALIASES] == ["Donda 2"]


def test_era_aliases_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ERA_ALIASES", '[{"match": "vultures", "canonical": "Vultures"}]')
    monkeypatch.setenv("CACHE_MAX_AGE_MINUTES", "5")
    settings = AppSettings()
    assert settings.ERA_ALIASES[0].canonical == "Vultures"
    assert settings.CACHE_MAX_AGE_MINUTES == 5
