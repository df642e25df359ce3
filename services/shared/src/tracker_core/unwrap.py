"""Decoding of gviz query responses into a RawTable."""

import json
import logging
import re
from typing import Any

from tracker_core.exceptions import ParseError
from tracker_core.models import RawColumn, RawTable

logger = logging.getLogger(__name__)

_SET_RESPONSE_PATTERN = re.compile(
    r"google\.visualization\.(?:DataTable|Query)\.setResponse\((.*)\)\s*;?",
    re.DOTALL,
)
# Anti-hijacking prefixes seen in front of the payload
_COMMENT_PREFIX_PATTERN = re.compile(r"^\s*(?:/\*.*?\*/|\)\]\}'|//[^\n]*\n)\s*", re.DOTALL)
# gviz emits JavaScript date literals (Date(2020,0,1)) that JSON cannot carry
_DATE_LITERAL_PATTERN = re.compile(r"([:\[,]\s*)(?:new\s+)?(Date\([\d,\s]*\))")

INVALID_FORMAT = "invalid response format"


def _strip_prefix(text: str) -> str:
    previous = None
    while previous != text:
        previous = text
        text = _COMMENT_PREFIX_PATTERN.sub("", text, count=1)
    return text


def _loads(candidate: str) -> dict[str, Any] | None:
    # Date literals are only quoted when the plain payload does not decode
    try:
        payload = json.loads(candidate)
    except ValueError:
        try:
            payload = json.loads(_DATE_LITERAL_PATTERN.sub(r'\1"\2"', candidate))
        except ValueError:
            return None
    return payload if isinstance(payload, dict) else None


def _decode(text: str) -> dict[str, Any] | None:
    match = _SET_RESPONSE_PATTERN.search(text)
    if match and (payload := _loads(match.group(1))) is not None:
        return payload

    stripped = _strip_prefix(text)
    match = _SET_RESPONSE_PATTERN.search(stripped)
    if match and (payload := _loads(match.group(1))) is not None:
        return payload

    return _loads(stripped.strip())


def cell_text(cell: dict[str, Any] | None) -> str:
    """Formatted value ``f`` when present, else ``v`` as text, else ``""``."""
    if not cell:
        return ""
    formatted = cell.get("f")
    if formatted is not None:
        return str(formatted)
    value = cell.get("v")
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def unwrap_response(text: str) -> RawTable:
    """Strip the JSONP wrapper and return the table.

    Raises ParseError("invalid response format") when no variant decodes,
    or ParseError("api status: <status>") for a non-ok status.
    """
    payload = _decode(text)
    if payload is None:
        raise ParseError(INVALID_FORMAT)

    status = payload.get("status")
    if status is not None and status != "ok":
        errors = payload.get("errors") or []
        logger.warning("Sheets query returned status %s: %s", status, errors)
        raise ParseError(f"api status: {status}")

    table = payload.get("table")
    if not isinstance(table, dict):
        raise ParseError(INVALID_FORMAT)

    cols = [
        RawColumn(id=str(col.get("id") or ""), label=str(col.get("label") or ""))
        for col in table.get("cols") or []
        if isinstance(col, dict)
    ]
    width = len(cols)
    rows: list[list[str]] = []
    for row in table.get("rows") or []:
        cells = (row or {}).get("c") or []
        values = [cell_text(cell if isinstance(cell, dict) else None) for cell in cells]
        if len(values) < width:
            values.extend([""] * (width - len(values)))
        rows.append(values)

    logger.debug("Unwrapped table with %d columns and %d rows", width, len(rows))
    return RawTable(cols=cols, rows=rows)
