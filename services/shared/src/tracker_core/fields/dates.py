"""Loose date-string normalization."""

import calendar
import re
from collections.abc import Callable
from datetime import date, timedelta

from tracker_core.constants import MAX_DATE_YEAR_AHEAD, MIN_DATE_YEAR

_MONTHS = {name.lower(): number for number, name in enumerate(calendar.month_name) if name}

_PREFIX_PATTERN = re.compile(r"^(?:leaked|released|recorded|date)\s*(?:on\b)?\s*:?\s*", re.IGNORECASE)
_ORDINAL = r"(?:st|nd|rd|th)?"


def _month(word: str) -> int | None:
    word = word.lower().rstrip(".")
    if len(word) < 3:
        return None
    for name, number in _MONTHS.items():
        if name.startswith(word):
            return number
    return None


def _safe_date(year: int, month: int | None, day: int) -> date | None:
    if month is None:
        return None
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _months_back(today: date, months: int) -> date:
    total = today.year * 12 + today.month - 1 - months
    year, month = divmod(total, 12)
    month += 1
    return date(year, month, min(today.day, calendar.monthrange(year, month)[1]))


_RELATIVE: dict[str, Callable[[date], date]] = {
    "today": lambda today: today,
    "yesterday": lambda today: today - timedelta(days=1),
    "last week": lambda today: today - timedelta(weeks=1),
    "last month": lambda today: _months_back(today, 1),
    "last year": lambda today: _months_back(today, 12),
}

# Tried in order; the first that matches and yields a valid in-range date wins.
_DATE_RULES: tuple[tuple[re.Pattern[str], Callable[[re.Match[str]], date | None]], ...] = (
    (
        re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})"),
        lambda m: _safe_date(int(m[3]), int(m[1]), int(m[2])),
    ),
    (
        re.compile(r"(\d{1,2})\.(\d{1,2})\.(\d{4})"),
        lambda m: _safe_date(int(m[3]), int(m[2]), int(m[1])),
    ),
    (
        re.compile(r"(\d{4})-(\d{1,2})-(\d{1,2})"),
        lambda m: _safe_date(int(m[1]), int(m[2]), int(m[3])),
    ),
    (
        re.compile(rf"([a-z]+)\.?\s+(\d{{1,2}}){_ORDINAL},?\s+(\d{{4}})", re.IGNORECASE),
        lambda m: _safe_date(int(m[3]), _month(m[1]), int(m[2])),
    ),
    (
        re.compile(rf"(\d{{1,2}}){_ORDINAL}\s+([a-z]+)\.?,?\s+(\d{{4}})", re.IGNORECASE),
        lambda m: _safe_date(int(m[3]), _month(m[2]), int(m[1])),
    ),
    (
        re.compile(r"([a-z]+)\.?,?\s+(\d{4})", re.IGNORECASE),
        lambda m: _safe_date(int(m[2]), _month(m[1]), 1),
    ),
    (
        re.compile(r"(\d{4})"),
        lambda m: _safe_date(int(m[1]), 1, 1),
    ),
    (
        re.compile(r"q([1-4])\s+(\d{4})", re.IGNORECASE),
        lambda m: _safe_date(int(m[2]), (int(m[1]) - 1) * 3 + 1, 1),
    ),
)


def _clean(text: str) -> str:
    text = " ".join(text.split())
    text = text.strip().strip("()").strip()
    return _PREFIX_PATTERN.sub("", text).strip()


def normalize_date(text: str, today: date | None = None) -> date | None:
    """Parse a loosely formatted date, or return None.

    Years outside ``[1990, today.year + 5]`` are rejected.
    """
    if not text:
        return None
    today = today or date.today()
    cleaned = _clean(text)
    if not cleaned:
        return None

    relative = _RELATIVE.get(cleaned.lower())
    if relative is not None:
        return relative(today)

    for pattern, build in _DATE_RULES:
        match = pattern.fullmatch(cleaned)
        if match is None:
            continue
        parsed = build(match)
        if parsed is not None and MIN_DATE_YEAR <= parsed.year <= today.year + MAX_DATE_YEAR_AHEAD:
            return parsed
    return None


def format_date(text: str, today: date | None = None) -> str:
    """ISO date when ``text`` normalizes, else the trimmed original."""
    parsed = normalize_date(text, today)
    return parsed.isoformat() if parsed else text.strip()
