"""Tests for SheetsClient."""

import json

import httpx
import pytest
import respx

from tracker_core.client import SheetsClient
from tracker_core.exceptions import (
    ParseError,
    SheetAccessDeniedError,
    SheetFetchError,
    SheetNotFoundError,
)

DOC_ID = "abc123"
QUERY_URL = f"https://docs.google.com/spreadsheets/d/{DOC_ID}/gviz/tq"
EDIT_URL = f"https://docs.google.com/spreadsheets/d/{DOC_ID}/edit"


def _gviz(rows: list[list[str]], labels: list[str] | None = None) -> str:
    """Helper to build a JSONP-wrapped gviz response."""
    width = max((len(row) for row in rows), default=len(labels or []))
    cols = [{"id": chr(65 + i), "label": (labels or [])[i] if i < len(labels or []) else ""} for i in range(width)]
    payload = {
        "version": "0.6",
        "status": "ok",
        "table": {"cols": cols, "rows": [{"c": [{"v": cell} if cell else None for cell in row]} for row in rows]},
    }
    return f"/*O_o*/\ngoogle.visualization.Query.setResponse({json.dumps(payload)});"


@respx.mock
async def test_fetch_table_success() -> None:
    route = respx.get(QUERY_URL).mock(return_value=httpx.Response(200, text=_gviz([["Era", "Name"], ["Donda", "Jail"]])))

    table = await SheetsClient().fetch_table(DOC_ID, "42")
    assert table.rows == [["Era", "Name"], ["Donda", "Jail"]]
    request = route.calls[0].request
    assert request.url.params["gid"] == "42"
    assert request.url.params["tqx"] == "out:json"
    assert "TrackerHub" in request.headers["user-agent"]


@respx.mock
async def test_403_raises_access_denied() -> None:
    respx.get(QUERY_URL).mock(return_value=httpx.Response(403))

    with pytest.raises(SheetAccessDeniedError, match="publicly accessible") as exc_info:
        await SheetsClient().fetch_table(DOC_ID)
    assert exc_info.value.status_code == 403


@respx.mock
async def test_login_redirect_raises_access_denied() -> None:
    respx.get(QUERY_URL).mock(
        return_value=httpx.Response(302, headers={"Location": "https://accounts.google.com/ServiceLogin?continue=x"})
    )
    respx.get(url__startswith="https://accounts.google.com/").mock(return_value=httpx.Response(200, text="<html/>"))

    with pytest.raises(SheetAccessDeniedError):
        await SheetsClient().fetch_table(DOC_ID)


@respx.mock
async def test_404_raises_not_found() -> None:
    respx.get(QUERY_URL).mock(return_value=httpx.Response(404))

    with pytest.raises(SheetNotFoundError, match="not found") as exc_info:
        await SheetsClient().fetch_table(DOC_ID)
    assert exc_info.value.status_code == 404


@respx.mock
async def test_other_status_raises_fetch_error() -> None:
    respx.get(QUERY_URL).mock(return_value=httpx.Response(500))

    with pytest.raises(SheetFetchError, match="HTTP 500") as exc_info:
        await SheetsClient().fetch_table(DOC_ID)
    assert exc_info.value.status_code == 500


@respx.mock
async def test_timeout_raises_fetch_error() -> None:
    respx.get(QUERY_URL).mock(side_effect=httpx.ConnectTimeout("timed out"))

    with pytest.raises(SheetFetchError, match="timed out") as exc_info:
        await SheetsClient(request_timeout=0.1).fetch_table(DOC_ID)
    assert exc_info.value.status_code == 504


@respx.mock
async def test_transport_error_raises_fetch_error() -> None:
    respx.get(QUERY_URL).mock(side_effect=httpx.ConnectError("connection refused"))

    with pytest.raises(SheetFetchError) as exc_info:
        await SheetsClient().fetch_table(DOC_ID)
    assert exc_info.value.status_code == 502


@respx.mock
async def test_undecodable_body_raises_parse_error() -> None:
    respx.get(QUERY_URL).mock(return_value=httpx.Response(200, text="<html>Sign in</html>"))

    with pytest.raises(ParseError):
        await SheetsClient().fetch_table(DOC_ID)


@respx.mock
async def test_fetch_document_title() -> None:
    respx.get(EDIT_URL).mock(
        return_value=httpx.Response(200, text="<html><head><title>Kanye West Tracker - Google Sheets</title></head></html>")
    )
    assert await SheetsClient().fetch_document_title(DOC_ID) == "Kanye West Tracker"


@respx.mock
async def test_fetch_document_title_failure_returns_none() -> None:
    respx.get(EDIT_URL).mock(return_value=httpx.Response(403))
    assert await SheetsClient().fetch_document_title(DOC_ID) is None


@respx.mock
async def test_fetch_art_tries_candidates_in_order() -> None:
    art = _gviz([["Donda", "https://i.imgur.com/donda.png"]])
    seen: list[str] = []

    def _respond(request: httpx.Request) -> httpx.Response:
        sheet = request.url.params["sheet"]
        seen.append(sheet)
        if sheet == "Album Art":
            return httpx.Response(200, text=art)
        return httpx.Response(404)

    respx.get(QUERY_URL).mock(side_effect=_respond)

    assert await SheetsClient().fetch_art(DOC_ID) == {"Donda": "https://i.imgur.com/donda.png"}
    assert seen == ["Art", "Album Art"]


@respx.mock
async def test_fetch_art_skips_tabs_without_images() -> None:
    def _respond(request: httpx.Request) -> httpx.Response:
        if request.url.params["sheet"] == "Art":
            return httpx.Response(200, text=_gviz([["Era", "Name"], ["Donda", "Jail"]]))
        return httpx.Response(400)

    respx.get(QUERY_URL).mock(side_effect=_respond)

    assert await SheetsClient().fetch_art(DOC_ID) == {}
