"""Predicates describing the shape of a single cell."""

from tracker_core.constants import (
    BARE_DATE_PATTERN,
    DATE_FRAGMENT_PATTERN,
    IMAGE_EXTENSION_PATTERN,
    IMAGE_HOSTS,
    METADATA_LABEL_PATTERN,
    METADATA_SHAPE_PATTERN,
    PARENTHETICAL_PATTERN,
    TIME_PATTERN,
    TIMELINE_KEYWORDS,
    URL_PATTERN,
)

DESCRIPTIVE_LINE_LENGTH = 60


def first_line(text: str) -> str:
    return text.strip().split("\n", 1)[0].strip()


def is_url(text: str) -> bool:
    return bool(URL_PATTERN.match(text.strip()))


def is_time(text: str) -> bool:
    return bool(TIME_PATTERN.match(text.strip()))


def is_bare_date(text: str) -> bool:
    return bool(BARE_DATE_PATTERN.match(text.strip()))


def is_image_url(text: str) -> bool:
    text = text.strip()
    if not is_url(text):
        return False
    lowered = text.lower()
    return bool(IMAGE_EXTENSION_PATTERN.search(lowered)) or any(host in lowered for host in IMAGE_HOSTS)


def is_metadata_cell(text: str) -> bool:
    """True for era file-count cells such as ``"3 OG Files\\n5 Full"``."""
    return bool(METADATA_LABEL_PATTERN.search(text) or METADATA_SHAPE_PATTERN.search(text.strip()))


def is_purely_parenthetical(text: str) -> bool:
    text = text.strip()
    return text.startswith("(") and text.endswith(")")


def is_descriptive(text: str) -> bool:
    """Prose rather than a name: a long first line, or one opening with a parenthesis."""
    line = first_line(text)
    return len(line) > DESCRIPTIVE_LINE_LENGTH or line.startswith("(")


def has_balanced_parenthetical(text: str) -> bool:
    return bool(PARENTHETICAL_PATTERN.search(text)) and text.count("(") == text.count(")")


def has_dated_parenthetical(text: str) -> bool:
    return any(DATE_FRAGMENT_PATTERN.search(group) for group in PARENTHETICAL_PATTERN.findall(text))


def dated_parentheticals(text: str) -> list[str]:
    """Every ``(...)`` substring whose content carries a date fragment."""
    return [f"({group.strip()})" for group in PARENTHETICAL_PATTERN.findall(text) if DATE_FRAGMENT_PATTERN.search(group)]


def has_timeline_keyword(text: str) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in TIMELINE_KEYWORDS)
