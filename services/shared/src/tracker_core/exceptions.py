"""Tracker fetch and parse exceptions."""


class TrackerError(Exception):
    """Base exception for tracker fetch/parse errors."""


class InvalidSheetUrlError(TrackerError):
    """The supplied URL does not contain a Google Sheets document id."""

    def __init__(self, url: str = "") -> None:
        self.url = url
        super().__init__("Invalid Google Sheets URL format")


class SheetFetchError(TrackerError):
    """Google Sheets could not be reached or returned an error status."""

    def __init__(self, status_code: int, detail: str = "") -> None:
        self.status_code = status_code
        self.detail = detail or f"Google Sheets request failed: HTTP {status_code}"
        super().__init__(self.detail)


class SheetAccessDeniedError(SheetFetchError):
    """Google Sheets returned 403 — the document is not shared publicly."""

    def __init__(self) -> None:
        super().__init__(
            403,
            "Access denied. Please ensure the Google Sheet is publicly accessible "
            "(Anyone with the link can view).",
        )


class SheetNotFoundError(SheetFetchError):
    """Google Sheets returned 404."""

    def __init__(self) -> None:
        super().__init__(404, "Google Sheet not found. Please check the URL.")


class ParseError(TrackerError):
    """The upstream response could not be decoded into a table."""
