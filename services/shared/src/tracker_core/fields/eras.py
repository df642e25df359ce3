"""Era-name and era-metadata cell parsers."""

import re
from dataclasses import dataclass, field

from tracker_core.constants import PARENTHETICAL_PATTERN
from tracker_core.fields.shapes import is_purely_parenthetical
from tracker_core.models import EraMetadata

# One pattern per EraMetadata field; each captures the integer preceding its label.
_METADATA_PATTERNS: dict[str, re.Pattern[str]] = {
    "og_files": re.compile(r"(\d+)\s*OG\s*Files?\b", re.IGNORECASE),
    "full_files": re.compile(r"(\d+)\s*Full\b", re.IGNORECASE),
    "tagged_files": re.compile(r"(\d+)\s*Tagged\b", re.IGNORECASE),
    "partial_files": re.compile(r"(\d+)\s*Partials?\b", re.IGNORECASE),
    "snippet_files": re.compile(r"(\d+)\s*Snippets?\b", re.IGNORECASE),
    "stem_bounce_files": re.compile(r"(\d+)\s*Stem\s*Bounces?\b", re.IGNORECASE),
    "unavailable_files": re.compile(r"(\d+)\s*Unavailable\b", re.IGNORECASE),
}


@dataclass(slots=True)
class EraName:
    """Parsed era-name cell."""

    main_name: str
    alternate_names: list[str] = field(default_factory=list)
    description: str | None = None


def parse_era_name(text: str) -> EraName:
    """Split an era-name cell into name, alternate names and description.

    ``"Yandhi (Yandhi 2018, Yandhi 2019)\\nThe shelved album"`` gives main name
    ``"Yandhi"``, both alternates, and the second line as description.
    """
    lines = [line.strip() for line in text.strip().split("\n")]
    head = lines[0] if lines else ""
    description_lines = [line for line in lines[1:] if line and not is_purely_parenthetical(line)]

    alternate_names: list[str] = []
    for group in PARENTHETICAL_PATTERN.findall(head):
        alternate_names.extend(part for part in (p.strip() for p in group.split(",")) if part)

    main_name = " ".join(PARENTHETICAL_PATTERN.sub(" ", head).split())
    if not main_name:
        main_name = " ".join(head.replace("(", " ").replace(")", " ").split())

    return EraName(
        main_name=main_name,
        alternate_names=alternate_names,
        description="\n".join(description_lines) or None,
    )


def count_era_metadata(text: str) -> EraMetadata:
    """Per-category file counts from a cell like ``"3 OG Files\\n5 Full"``; missing categories are 0."""
    flat = text.replace("\n", " ")
    counts: dict[str, int] = {}
    for name, pattern in _METADATA_PATTERNS.items():
        match = pattern.search(flat)
        if match:
            counts[name] = int(match.group(1))
    return EraMetadata(**counts)
