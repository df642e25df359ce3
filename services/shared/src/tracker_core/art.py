"""Cover art from a companion "Art" sheet."""

import difflib
import logging
from collections.abc import Sequence

from tracker_core.constants import ART_FUZZY_MATCH_THRESHOLD
from tracker_core.fields import parse_era_name
from tracker_core.fields.shapes import is_image_url, is_url
from tracker_core.models import Era, RawTable

logger = logging.getLogger(__name__)


def parse_art_table(table: RawTable) -> dict[str, str]:
    """Era name -> image URL for every row holding a name cell and an image cell.

    An empty result means the table is not an art sheet.
    """
    art: dict[str, str] = {}
    for row in table.rows:
        cells = [cell.strip() for cell in row if cell.strip()]
        image = next((cell for cell in cells if is_image_url(cell)), None)
        name = next((cell for cell in cells if not is_url(cell)), None)
        if image and name:
            art.setdefault(parse_era_name(name).main_name, image)
    return art


def resolve_picture(name: str, art: dict[str, str]) -> str | None:
    """Exact case-insensitive match, else a close fuzzy match."""
    if not art:
        return None
    lowered = {key.lower(): url for key, url in art.items()}
    target = name.lower().strip()
    if target in lowered:
        return lowered[target]
    best = difflib.get_close_matches(target, list(lowered), n=1, cutoff=ART_FUZZY_MATCH_THRESHOLD)
    return lowered[best[0]] if best else None


def apply_art(albums: Sequence[Era], art: dict[str, str]) -> int:
    """Fill empty ``picture`` fields; returns how many were set."""
    filled = 0
    for album in albums:
        if album.picture:
            continue
        picture = resolve_picture(album.name, art)
        if picture:
            album.picture = picture
            filled += 1
    logger.debug("Art sheet supplied %d pictures", filled)
    return filled
