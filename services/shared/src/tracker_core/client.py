"""Async Google Sheets client for public gviz table queries."""

import logging

import httpx

from tracker_core.art import parse_art_table
from tracker_core.constants import (
    ART_SHEET_CANDIDATES,
    DEFAULT_REQUEST_TIMEOUT,
    DOCUMENT_TITLE_PATTERN,
    DOCUMENT_TITLE_SUFFIX_PATTERN,
    USER_AGENT,
)
from tracker_core.exceptions import (
    SheetAccessDeniedError,
    SheetFetchError,
    SheetNotFoundError,
    TrackerError,
)
from tracker_core.models import RawTable
from tracker_core.unwrap import unwrap_response
from tracker_core.urls import build_edit_url, build_query_url, build_sheet_query_url

logger = logging.getLogger(__name__)

_LOGIN_HOST = "accounts.google.com"
_TIMEOUT_MESSAGE = "Request to Google Sheets timed out. Please try again."


class SheetsClient:
    """Fetches public Google Sheets tables.

    One request per call with a fixed timeout and no retry. HTTP 403 (or a
    redirect to the Google sign-in page) raises SheetAccessDeniedError, 404
    raises SheetNotFoundError; every other failure raises SheetFetchError.
    """

    def __init__(
        self,
        *,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._request_timeout = request_timeout
        self._transport = transport

    async def _get(self, url: str) -> httpx.Response:
        try:
            async with httpx.AsyncClient(
                timeout=self._request_timeout,
                headers={"User-Agent": USER_AGENT},
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(url)
        except httpx.TimeoutException as exc:
            raise SheetFetchError(504, _TIMEOUT_MESSAGE) from exc
        except httpx.HTTPError as exc:
            raise SheetFetchError(502, str(exc) or type(exc).__name__) from exc

        if response.status_code == 403 or response.url.host == _LOGIN_HOST:
            raise SheetAccessDeniedError()
        if response.status_code == 404:
            raise SheetNotFoundError()
        if response.status_code >= 400:
            raise SheetFetchError(response.status_code)
        return response

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    async def fetch_table_text(self, doc_id: str, gid: str | None = None) -> str:
        """Raw gviz response text for a tab (the first tab when ``gid`` is None)."""
        url = build_query_url(doc_id, gid)
        logger.info("Fetching sheet %s (gid=%s)", doc_id, gid or "default")
        response = await self._get(url)
        return response.text

    async def fetch_table(self, doc_id: str, gid: str | None = None) -> RawTable:
        return unwrap_response(await self.fetch_table_text(doc_id, gid))

    async def fetch_named_table(self, doc_id: str, sheet_name: str) -> RawTable:
        response = await self._get(build_sheet_query_url(doc_id, sheet_name))
        return unwrap_response(response.text)

    # ------------------------------------------------------------------
    # Best-effort lookups
    # ------------------------------------------------------------------

    async def fetch_document_title(self, doc_id: str) -> str | None:
        """Document title without the " - Google Sheets" suffix, or None."""
        try:
            response = await self._get(build_edit_url(doc_id))
        except TrackerError as exc:
            logger.debug("Could not fetch document title for %s: %s", doc_id, exc)
            return None
        match = DOCUMENT_TITLE_PATTERN.search(response.text)
        if match is None:
            return None
        title = DOCUMENT_TITLE_SUFFIX_PATTERN.sub("", match.group(1).strip()).strip()
        if not title or title == "Google Sheets" or "Sign in" in title:
            return None
        return title

    async def fetch_art(self, doc_id: str) -> dict[str, str]:
        """Era name -> image URL from the first candidate tab that looks like an art sheet.

        Candidate failures are logged and skipped; an empty dict means none matched.
        """
        for sheet_name in ART_SHEET_CANDIDATES:
            try:
                table = await self.fetch_named_table(doc_id, sheet_name)
            except TrackerError as exc:
                logger.debug("Art sheet candidate %r unavailable: %s", sheet_name, exc)
                continue
            art = parse_art_table(table)
            if art:
                logger.info("Art sheet %r supplied %d entries", sheet_name, len(art))
                return art
        return {}
