"""Text normalization utilities for film titles and showtimes."""

import re
from datetime import datetime

# Edition and presentation tags that cinemas append to German listings
EDITION_TAGS = r"ov|omu|omdu|ome|3d|imax|dolby|atmos|df|d-?box|4dx|screenx"

# "19.30" counts as a time, "04.02." and "04.02.2024" are dates
TIME_PATTERN = re.compile(r"(?<![\d.:])([01]?\d|2[0-3])(?::([0-5]\d)|\.([0-5]\d)(?![.\d]))(?!\d)")
AM_PM_PATTERN = re.compile(r"^\s*(\d{1,2})(?:[:.](\d{2}))?\s*([ap])\.?\s*m\.?\s*$", re.IGNORECASE)

PLACEHOLDER_TITLE = "Film"


def clean_movie_title(title: str | None) -> str:
    """
    Strip listing decorations from a film title to improve metadata lookups.

    Removes:
    - Dash suffixes: "Dune - Teil Zwei", "Film – Preview" → "Dune", "Film"
    - Parenthesised notes and years: "Oppenheimer (OV)", "Alien (1979)"
    - Square bracket tags: "Barbie [OmU]"
    - Edition tags: OV, OmU, 3D, IMAX, Dolby Atmos, D-Box, ...
    - Extra whitespace

    Args:
        title: Raw film title

    Returns:
        Cleaned title suitable for searching
    """
    title = str(title or "").strip()

    # Dash suffixes need surrounding whitespace so "Spider-Man" survives
    title = re.sub(r"\s+[-–—]\s+.*$", "", title)

    title = re.sub(r"\([^)]*\)", " ", title)
    title = re.sub(r"\[[^\]]*\]", " ", title)

    title = re.sub(rf"\b(?:{EDITION_TAGS})\b", " ", title, flags=re.IGNORECASE)

    # Collapse multiple spaces into one
    title = re.sub(r"\s+", " ", title)

    return title.strip(" :-")


def metadata_cache_key(title: str | None) -> str:
    """Cache key shared by every spelling of the same film."""
    return f"tmdb::{clean_movie_title(title)}".lower()


def normalize_time(value: object) -> str | None:
    """
    Normalize a single showtime to 24-hour "HH:MM".

    Accepts "19:30", "19.30", "9:05", "19:30 Uhr" and "7:30 PM".

    Returns:
        "HH:MM" or None if the value holds no time
    """
    text = str(value or "").strip()
    if not text:
        return None

    am_pm = AM_PM_PATTERN.match(text)
    if am_pm:
        hour = int(am_pm.group(1)) % 12
        minute = int(am_pm.group(2) or 0)
        if am_pm.group(3).lower() == "p":
            hour += 12
        if minute > 59:
            return None
        return f"{hour:02d}:{minute:02d}"

    if "T" in text:
        try:
            return datetime.fromisoformat(text).strftime("%H:%M")
        except ValueError:
            pass

    match = TIME_PATTERN.search(text)
    if not match:
        return None
    return _format_match(match.groups())


def _format_match(groups: tuple[str, ...]) -> str:
    hour, colon_minute, dot_minute = groups
    return f"{int(hour):02d}:{colon_minute or dot_minute}"


def clean_times(values: list[object]) -> list[str]:
    """Normalize, deduplicate and sort a list of showtimes."""
    times = {t for t in (normalize_time(v) for v in values) if t}
    return sorted(times)


def extract_times_from_text(text: str) -> list[str]:
    """Find every HH:MM / HH.MM time in free text, unique and sorted."""
    found = {_format_match(groups) for groups in TIME_PATTERN.findall(text or "")}
    return sorted(found)
