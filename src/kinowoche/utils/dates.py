"""Calendar date helpers: German display labels and upstream label parsing."""

import re
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from kinowoche.config import settings

WEEKDAY_LABELS = ("Mo.", "Di.", "Mi.", "Do.", "Fr.", "Sa.", "So.")

WEEKDAY_NAMES = {
    "mo": 0, "mon": 0, "montag": 0, "monday": 0,
    "di": 1, "die": 1, "tue": 1, "dienstag": 1, "tuesday": 1,
    "mi": 2, "mit": 2, "wed": 2, "mittwoch": 2, "wednesday": 2,
    "do": 3, "don": 3, "thu": 3, "donnerstag": 3, "thursday": 3,
    "fr": 4, "fri": 4, "freitag": 4, "friday": 4,
    "sa": 5, "sat": 5, "samstag": 5, "sonnabend": 5, "saturday": 5,
    "so": 6, "sun": 6, "sonntag": 6, "sunday": 6,
}

MONTH_NAMES = {
    "jan": 1, "januar": 1, "january": 1, "jänner": 1,
    "feb": 2, "februar": 2, "february": 2,
    "mär": 3, "mar": 3, "märz": 3, "maerz": 3, "march": 3,
    "apr": 4, "april": 4,
    "mai": 5, "may": 5,
    "jun": 6, "juni": 6, "june": 6,
    "jul": 7, "juli": 7, "july": 7,
    "aug": 8, "august": 8,
    "sep": 9, "sept": 9, "september": 9,
    "okt": 10, "oct": 10, "oktober": 10, "october": 10,
    "nov": 11, "november": 11,
    "dez": 12, "dec": 12, "dezember": 12, "december": 12,
}

RELATIVE_DAYS = {
    "heute": 0,
    "today": 0,
    "morgen": 1,
    "tomorrow": 1,
    "übermorgen": 2,
}

ISO_DATE = re.compile(r"\b(\d{4})-(\d{2})-(\d{2})")
NUMERIC_DATE = re.compile(r"\b(\d{1,2})\.(\d{1,2})(?!\d)(?:\.(\d{2,4})?)?")
DAY_MONTH_NAME = re.compile(r"\b(\d{1,2})\.?\s+([A-Za-zÄÖÜäöü]{3,})")
MONTH_NAME_DAY = re.compile(r"\b([A-Za-zÄÖÜäöü]{3,})\.?\s+(\d{1,2})\b")


def today_local(tz: str | None = None) -> date:
    """Return today's date in the configured timezone."""
    return datetime.now(ZoneInfo(tz or settings.timezone)).date()


def weekday_label(d: date) -> str:
    """Short German weekday label, e.g. "So."."""
    return WEEKDAY_LABELS[d.weekday()]


def date_label(d: date) -> str:
    """German day/month label, e.g. "04.02."."""
    return d.strftime("%d.%m.")


def _nearest_year(month: int, day: int, today: date) -> date | None:
    """Resolve a year-less day/month to the candidate closest to today."""
    candidates = []
    for year in (today.year - 1, today.year, today.year + 1):
        try:
            candidates.append(date(year, month, day))
        except ValueError:
            continue
    if not candidates:
        return None
    return min(candidates, key=lambda c: abs((c - today).days))


def _safe_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_day_label(raw: object, today: date | None = None) -> date | None:
    """
    Resolve an upstream date label to a calendar date.

    Understands ISO dates ("2024-02-04", "2024-02-04T19:30"), German numeric
    labels ("04.02.", "Sa 10.02", "Sa., 04.02.2024"), month names ("Feb 4",
    "4. Februar"), relative words ("heute", "morgen") and bare weekday names,
    which resolve to the next occurrence on or after today.

    Args:
        raw: Label as delivered by the source
        today: Reference date (defaults to today in the configured timezone)

    Returns:
        The calendar date, or None if the label can't be interpreted
    """
    text = str(raw or "").strip().lower()
    if not text:
        return None
    today = today or today_local()

    match = ISO_DATE.search(text)
    if match:
        return _safe_date(*(int(g) for g in match.groups()))

    match = NUMERIC_DATE.search(text)
    if match:
        day, month = int(match.group(1)), int(match.group(2))
        if match.group(3):
            year = int(match.group(3))
            resolved = _safe_date(year + 2000 if year < 100 else year, month, day)
        else:
            resolved = _nearest_year(month, day, today)
        # "19.30" is a time, not a date; let the other patterns have a go
        if resolved is not None:
            return resolved

    match = DAY_MONTH_NAME.search(text)
    if match and match.group(2) in MONTH_NAMES:
        return _nearest_year(MONTH_NAMES[match.group(2)], int(match.group(1)), today)

    match = MONTH_NAME_DAY.search(text)
    if match and match.group(1) in MONTH_NAMES:
        return _nearest_year(MONTH_NAMES[match.group(1)], int(match.group(2)), today)

    for word, offset in RELATIVE_DAYS.items():
        if re.search(rf"\b{word}\b", text):
            return today + timedelta(days=offset)

    token = re.split(r"[\s.,]+", text)[0]
    if token in WEEKDAY_NAMES:
        return today + timedelta(days=(WEEKDAY_NAMES[token] - today.weekday()) % 7)

    return None
