"""Google Sheets URL parsing and endpoint construction."""

from urllib.parse import urlencode

from tracker_core.constants import (
    DOC_ID_PATH_PATTERN,
    DOC_ID_QUERY_PATTERN,
    EDIT_URL_TEMPLATE,
    GID_KEY_SEPARATOR,
    GID_PATTERN,
    QUERY_URL_TEMPLATE,
)
from tracker_core.exceptions import InvalidSheetUrlError


def extract_document_id(url: str) -> str:
    """Return the document id from a share URL (``/d/<id>`` or ``id=<id>``).

    Raises InvalidSheetUrlError when neither form is present.
    """
    match = DOC_ID_PATH_PATTERN.search(url) or DOC_ID_QUERY_PATTERN.search(url)
    if match is None:
        raise InvalidSheetUrlError(url)
    return match.group(1)


def extract_gid(url: str) -> str | None:
    """Return the tab id from ``gid=<n>`` in the query or fragment, if any."""
    match = GID_PATTERN.search(url)
    return match.group(1) if match else None


def cache_key(doc_id: str, gid: str | None = None) -> str:
    """Cache key for a document, e.g. ``abc`` or ``abc_gid_123``."""
    if gid:
        return f"{doc_id}{GID_KEY_SEPARATOR}{gid}"
    return doc_id


def cache_key_for_url(url: str) -> str:
    return cache_key(extract_document_id(url), extract_gid(url))


def split_cache_key(key: str) -> tuple[str, str | None]:
    """Inverse of :func:`cache_key`."""
    doc_id, sep, gid = key.partition(GID_KEY_SEPARATOR)
    return doc_id, (gid if sep and gid else None)


def build_query_url(doc_id: str, gid: str | None = None) -> str:
    """gviz table-query URL returning the JSONP-wrapped table."""
    params = {"tqx": "out:json"}
    if gid:
        params["gid"] = gid
    return f"{QUERY_URL_TEMPLATE.format(doc_id=doc_id)}?{urlencode(params)}"


def build_sheet_query_url(doc_id: str, sheet_name: str) -> str:
    """gviz JSON-API URL addressing a tab by name rather than by gid."""
    params = {"tqx": "out:json", "sheet": sheet_name}
    return f"{QUERY_URL_TEMPLATE.format(doc_id=doc_id)}?{urlencode(params)}"


def build_edit_url(doc_id: str) -> str:
    return EDIT_URL_TEMPLATE.format(doc_id=doc_id)


def build_sheet_url(key: str) -> str:
    """Rebuild a share URL from a cache key."""
    doc_id, gid = split_cache_key(key)
    url = build_edit_url(doc_id)
    if gid:
        url += f"#gid={gid}"
    return url
