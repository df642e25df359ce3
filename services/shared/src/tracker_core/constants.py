"""Google Sheets endpoints, parser vocabularies, and fetch defaults."""

import re

# Google Sheets
SHEETS_BASE = "https://docs.google.com/spreadsheets/d"
QUERY_URL_TEMPLATE = f"{SHEETS_BASE}/{{doc_id}}/gviz/tq"
EDIT_URL_TEMPLATE = f"{SHEETS_BASE}/{{doc_id}}/edit"

# Fetch defaults
DEFAULT_REQUEST_TIMEOUT = 10.0  # seconds
USER_AGENT = "Mozilla/5.0 (compatible; TrackerHub/0.1; +https://github.com/tracker-hub)"

# Document id and tab id patterns
DOC_ID_PATH_PATTERN = re.compile(r"/d/([a-zA-Z0-9_-]+)")
DOC_ID_QUERY_PATTERN = re.compile(r"(?:^|[?&#])id=([a-zA-Z0-9_-]+)")
GID_PATTERN = re.compile(r"[?&#]gid=(\d+)")
GID_KEY_SEPARATOR = "_gid_"

# Candidate tab names for the cover-art sheet, tried in order
ART_SHEET_CANDIDATES = ("Art", "Album Art", "Era Art", "Covers", "Artwork", "Art Sheet")

# Header detection
HEADER_SCAN_LIMIT = 20
HEADER_NAME_CELLS = frozenset({"name", "track name", "song name"})
HEADER_KEYWORDS = ("era", "name", "track", "song", "quality", "link", "date", "notes", "length")
HEADER_KEYWORD_MIN_CELLS = 3

# Structural markers
FOOTER_MARKERS = ("update notes", "total links", "quality summary", "availability", "tracker guidelines")
TEMPLATE_NAME_MARKERS = ("how to", "template", "add a new entry")
TEMPLATE_ERA_MARKER = "template era"
STRAY_LABEL_CELLS = frozenset({"links", "availability"})
SUB_ERA_MARKER = "sub-era"
SUB_ERA_ALT_MARKER = "another:"
FALLBACK_ERA_NAME = "Miscellaneous"
UNKNOWN_ARTIST = "Unknown Artist"
TIMELINE_KEYWORDS = ("timeline", "recorded", "recording", "sessions", "started", "began", "ended", "released")

# Era names recognized when mining multi-line column labels
KNOWN_ERA_PATTERNS = (
    re.compile(r"\bThe College Dropout\b", re.IGNORECASE),
    re.compile(r"\bLate Registration\b", re.IGNORECASE),
    re.compile(r"\bGraduation\b", re.IGNORECASE),
    re.compile(r"\b808s (?:&|and) Heartbreak\b", re.IGNORECASE),
    re.compile(r"\bMy Beautiful Dark Twisted Fantasy\b", re.IGNORECASE),
    re.compile(r"\bWatch the Throne\b", re.IGNORECASE),
    re.compile(r"\bCruel Summer\b", re.IGNORECASE),
    re.compile(r"\bYeezus\b", re.IGNORECASE),
    re.compile(r"\bSo Help Me God\b", re.IGNORECASE),
    re.compile(r"\bThe Life of Pablo\b", re.IGNORECASE),
    re.compile(r"\bYandhi\b", re.IGNORECASE),
    re.compile(r"\bJesus Is King\b", re.IGNORECASE),
    re.compile(r"\bDonda 2\b", re.IGNORECASE),
    re.compile(r"\bDonda\b", re.IGNORECASE),
    re.compile(r"\bVultures(?: [123])?\b", re.IGNORECASE),
    re.compile(r"\bBully\b", re.IGNORECASE),
)

# Cell shapes
URL_PATTERN = re.compile(r"https?://\S+", re.IGNORECASE)
TIME_PATTERN = re.compile(r"^\d{1,2}:\d{2}(?::\d{2})?$")
BARE_DATE_PATTERN = re.compile(
    r"^\(?\s*(?:\d{1,2}[/.-]\d{1,2}[/.-]\d{2,4}|\d{4}[/.-]\d{1,2}[/.-]\d{1,2}|\d{4}|"
    r"(?:jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*\.?\s+\d{1,2}(?:st|nd|rd|th)?,?\s*\d{2,4}|"
    r"\d{1,2}(?:st|nd|rd|th)?\s+(?:jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*\.?,?\s*\d{2,4}|"
    r"(?:jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*\.?\s+\d{4})\s*\)?$",
    re.IGNORECASE,
)
DATE_FRAGMENT_PATTERN = re.compile(
    r"\d{1,2}/\d{1,2}/\d{2,4}|\b(?:19|20)\d{2}\b|"
    r"\b(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?\s+\d{1,2}\b",
    re.IGNORECASE,
)
PARENTHETICAL_PATTERN = re.compile(r"\(([^()]*)\)")
METADATA_LABEL_PATTERN = re.compile(r"OG File|Unavailable", re.IGNORECASE)
METADATA_SHAPE_PATTERN = re.compile(r"\d+[^\n]*\n\s*\d+")
IMAGE_EXTENSION_PATTERN = re.compile(r"\.(?:jpg|jpeg|png|gif|webp)(?:\?|$)", re.IGNORECASE)
IMAGE_HOSTS = (
    "imgur.com",
    "ibb.co",
    "postimg",
    "gyazo.com",
    "drive.google.com",
    "dropbox.com",
    "googleusercontent.com",
)

# Markers embedded in track names
SPECIAL_MARKERS = ("⭐", "✨", "🏆")
WANTED_MARKERS = ("🥇", "🥈", "🥉")
DECORATIVE_MARKERS = ("🎵", "🎶", "🎤", "🎧", "🔥", "💎", "🤖")
REPLACEMENT_CHARACTER = "\ufffd"

# Dates
MIN_DATE_YEAR = 1990
MAX_DATE_YEAR_AHEAD = 5
DEFAULT_RECENT_WINDOW_DAYS = 30

# Fuzzy era-name matching for the art sheet
ART_FUZZY_MATCH_THRESHOLD = 0.85

# Artist-name mining
ARTIST_SCAN_ROWS = 5
ARTIST_CELL_MAX_LENGTH = 80
TRACKER_WORD_PATTERN = re.compile(r"\btracker\b", re.IGNORECASE)
DOCUMENT_TITLE_PATTERN = re.compile(r"<title>([^<]+)</title>", re.IGNORECASE)
DOCUMENT_TITLE_SUFFIX_PATTERN = re.compile(r"\s*-\s*Google\s*Sheets?\s*$", re.IGNORECASE)

# Playback
PILLOWCASE_HOST_PATTERN = re.compile(r"pillow(?:case)?s?\.(?:su|top)", re.IGNORECASE)
PILLOWCASE_FILE_ID_PATTERN = re.compile(r"/f/([a-f0-9]{32})", re.IGNORECASE)
HEX_FILE_ID_PATTERN = re.compile(r"[a-f0-9]{32}", re.IGNORECASE)
PILLOWCASE_DOWNLOAD_URL = "https://api.pillows.su/api/download/{file_id}.mp3"
AUDIO_EXTENSION_PATTERN = re.compile(r"\.(?:mp3|wav|flac|m4a|aac|ogg|opus)(?:\?|$)", re.IGNORECASE)
