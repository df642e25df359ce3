"""Tests for the playback resolution endpoint."""

from fastapi.testclient import TestClient

from tracker_api.main import app

client = TestClient(app)


def test_resolve_endpoint() -> None:
    resp = client.get(
        "/playback/resolve",
        params={"url": "https://pillowcase.su/f/0123456789abcdef0123456789abcdef"},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["kind"] == "pillowcase"
    assert data["url"] == "https://api.pillows.su/api/download/0123456789abcdef0123456789abcdef.mp3"
    assert data["sourceUrl"] == "https://pillowcase.su/f/0123456789abcdef0123456789abcdef"
    assert data["fileId"] == "0123456789abcdef0123456789abcdef"


def test_resolve_rejects_non_http() -> None:
    resp = client.get("/playback/resolve", params={"url": "ftp://example.com/song.mp3"})
    assert resp.status_code == 400


def test_resolve_requires_url() -> None:
    assert client.get("/playback/resolve").status_code == 422
