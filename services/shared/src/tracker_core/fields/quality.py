"""Quality-label standardization."""

import re
import string

_QUALITY_SYNONYMS: dict[str, str] = {
    # OG File
    "og": "OG File",
    "og file": "OG File",
    "og files": "OG File",
    "original": "OG File",
    "original file": "OG File",
    # Lossless
    "lossless": "Lossless",
    "flac": "Lossless",
    "wav": "Lossless",
    "alac": "Lossless",
    "aiff": "Lossless",
    # CD Quality
    "cdq": "CD Quality",
    "cd": "CD Quality",
    "cd quality": "CD Quality",
    # High Quality
    "hq": "High Quality",
    "high quality": "High Quality",
    "high-quality": "High Quality",
    "320kbps": "High Quality",
    "320 kbps": "High Quality",
    # Low Quality
    "lq": "Low Quality",
    "low quality": "Low Quality",
    "low-quality": "Low Quality",
    # Recordings
    "recording": "Recording",
    "recordings": "Recording",
    "live recording": "Recording",
    "phone recording": "Recording",
    # Not Available
    "n/a": "Not Available",
    "na": "Not Available",
    "unavailable": "Not Available",
    "not available": "Not Available",
    "none": "Not Available",
}

# Synonyms shorter than this match on word boundaries only ("og" must not hit "prologue").
_MIN_SUBSTRING_LENGTH = 3

_SUBSTRING_MATCHERS: list[tuple[re.Pattern[str], str]] = [
    (
        re.compile(re.escape(synonym) if len(synonym) >= _MIN_SUBSTRING_LENGTH else rf"\b{re.escape(synonym)}\b"),
        _QUALITY_SYNONYMS[synonym],
    )
    for synonym in sorted(_QUALITY_SYNONYMS, key=len, reverse=True)
]


def standardize_quality(text: str) -> str:
    """Map free-text quality to a canonical label (``"hq"`` -> ``"High Quality"``)."""
    cleaned = " ".join(text.split()).lower()
    if not cleaned:
        return ""
    exact = _QUALITY_SYNONYMS.get(cleaned)
    if exact is not None:
        return exact
    for pattern, label in _SUBSTRING_MATCHERS:
        if pattern.search(cleaned):
            return label
    return string.capwords(text.strip())
