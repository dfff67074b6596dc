"""Normalize provider showtime payloads into calendar days."""

import logging
from collections.abc import Mapping
from datetime import date
from enum import Enum
from typing import Any

from kinowoche.schemas.calendar import CalendarDay, MovieInfo, MovieScreening
from kinowoche.utils.dates import date_label, parse_day_label, today_local, weekday_label
from kinowoche.utils.text import PLACEHOLDER_TITLE, clean_times

logger = logging.getLogger(__name__)

DAY_MOVIE_FIELDS = ("movies", "films", "showtimes")
MOVIE_TIME_FIELDS = ("showtimes", "times")
TIME_VALUE_FIELDS = ("time", "start_time", "starts_at")
POSTER_FIELDS = ("poster", "thumbnail", "image")


class SourceShape(str, Enum):
    """Payload variants a showtimes source can deliver."""

    DAY_GROUPED = "day_grouped"  # [{date, day, movies: [{name, showing: [{time: [...]}]}]}]
    FLAT_MOVIES = "flat_movies"  # [{name, showing}] without day context
    CANONICAL = "canonical"  # [{day, date, movies: [{title, times, poster, info}]}]
    EMPTY = "empty"


def unwrap(raw: Any) -> list[Mapping[str, Any]]:
    """Return the list of records, accepting a bare list or {"showtimes": [...]}."""
    if isinstance(raw, Mapping):
        raw = raw.get("showtimes")
    if not isinstance(raw, list):
        return []
    return [item for item in raw if isinstance(item, Mapping)]


def _movie_list(day: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    for field in DAY_MOVIE_FIELDS:
        value = day.get(field)
        if isinstance(value, list):
            return [m for m in value if isinstance(m, Mapping)]
    return []


def _is_canonical_movie(movie: Mapping[str, Any]) -> bool:
    return "times" in movie and not any(k in movie for k in ("showing", "showtimes", "name"))


def _has_movie_list(record: Mapping[str, Any]) -> bool:
    """True if the record nests films, i.e. a list of records with a name or title."""
    for field in DAY_MOVIE_FIELDS:
        value = record.get(field)
        if isinstance(value, list) and any(
            isinstance(m, Mapping) and ("name" in m or "title" in m) for m in value
        ):
            return True
    return False


def detect_shape(raw: Any) -> SourceShape:
    """
    Choose the payload variant.

    A first record carrying `name`, `title` or `showing` and no nested films
    is a flat movie list, whether its times sit in `showing`, `showtimes` or
    `times`. Day records whose films already use `title`/`times` are
    canonical. Anything else with records is treated as day-grouped.
    """
    items = unwrap(raw)
    if not items:
        return SourceShape.EMPTY

    first = items[0]
    if any(k in first for k in ("name", "title", "showing")) and not _has_movie_list(first):
        return SourceShape.FLAT_MOVIES

    movies = [m for item in items for m in _movie_list(item)]
    if all("movies" in item for item in items) and movies and all(_is_canonical_movie(m) for m in movies):
        return SourceShape.CANONICAL

    return SourceShape.DAY_GROUPED


def _flatten_time_values(values: Any) -> list[Any]:
    """Flatten nested lists and {time|start_time|starts_at} dicts to raw values."""
    if isinstance(values, list):
        out: list[Any] = []
        for value in values:
            out.extend(_flatten_time_values(value))
        return out
    if isinstance(values, Mapping):
        for field in TIME_VALUE_FIELDS:
            if values.get(field):
                return _flatten_time_values(values[field])
        return []
    return [values]


def extract_times(movie: Mapping[str, Any]) -> list[str]:
    """Collect a film's showtimes from whichever field the source used."""
    for field in MOVIE_TIME_FIELDS:
        if isinstance(movie.get(field), list):
            return clean_times(_flatten_time_values(movie[field]))

    showing = movie.get("showing")
    if isinstance(showing, list):
        return clean_times(_flatten_time_values(showing))

    return []


def extract_title(movie: Mapping[str, Any]) -> str:
    for field in ("name", "title"):
        value = str(movie.get(field) or "").strip()
        if value:
            return value
    return ""


def _extract_poster(movie: Mapping[str, Any]) -> str | None:
    for field in POSTER_FIELDS:
        value = movie.get(field)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _extract_info(movie: Mapping[str, Any]) -> MovieInfo:
    info = movie.get("info")
    if isinstance(info, Mapping):
        return MovieInfo(
            description=info.get("description") or None,
            runtime=str(info["runtime"]) if info.get("runtime") else None,
            genres=[str(g) for g in info.get("genres") or []],
            cast=[str(c) for c in info.get("cast") or []],
        )
    return MovieInfo()


def to_screening(movie: Mapping[str, Any]) -> MovieScreening | None:
    """Build a screening, or None if the film has no showtime."""
    times = extract_times(movie)
    if not times:
        return None
    return MovieScreening(
        title=extract_title(movie) or PLACEHOLDER_TITLE,
        times=times,
        poster=_extract_poster(movie),
        info=_extract_info(movie),
    )


def _screenings(movies: list[Mapping[str, Any]]) -> list[MovieScreening]:
    screenings = [to_screening(m) for m in movies]
    return [s for s in screenings if s is not None]


def _day_for(entry: Mapping[str, Any], today: date) -> CalendarDay:
    raw_date = str(entry.get("date") or entry.get("datetime") or "").strip()
    raw_day = str(entry.get("day") or "").strip()

    key = parse_day_label(raw_date, today) or parse_day_label(raw_day, today)
    if key is None and not raw_date and not raw_day:
        key = today

    if key is None:
        logger.debug(f"Unparseable day label: date={raw_date!r} day={raw_day!r}")
        return CalendarDay(day=raw_day, date=raw_date, movies=_screenings(_movie_list(entry)))

    return CalendarDay(
        key=key,
        day=raw_day or weekday_label(key),
        date=date_label(key),
        movies=_screenings(_movie_list(entry)),
    )


def _normalize_flat(items: list[Mapping[str, Any]], today: date) -> list[CalendarDay]:
    return [
        CalendarDay(
            key=today,
            day=weekday_label(today),
            date=date_label(today),
            movies=_screenings(items),
        )
    ]


def _normalize_grouped(items: list[Mapping[str, Any]], today: date) -> list[CalendarDay]:
    return [_day_for(entry, today) for entry in items]


def _normalize_canonical(items: list[Mapping[str, Any]], today: date) -> list[CalendarDay]:
    days = []
    for entry in items:
        label = str(entry.get("date") or "").strip()
        key = parse_day_label(label, today)
        movies = [
            MovieScreening(
                title=str(m.get("title") or "").strip() or PLACEHOLDER_TITLE,
                times=clean_times(_flatten_time_values(m.get("times") or [])),
                poster=_extract_poster(m),
                info=_extract_info(m),
            )
            for m in entry.get("movies") or []
            if isinstance(m, Mapping)
        ]
        days.append(
            CalendarDay(
                key=key,
                day=str(entry.get("day") or "").strip() or (weekday_label(key) if key else ""),
                date=date_label(key) if key else label,
                movies=[m for m in movies if m.times],
            )
        )
    return days


def normalize(
    raw: Any,
    shape: SourceShape | None = None,
    today: date | None = None,
) -> list[CalendarDay]:
    """
    Convert one source's payload into calendar days.

    The result may hold fewer than seven days and is not aligned to the
    request's window; the reconciler handles alignment.

    Args:
        raw: Provider payload (list, or dict with a "showtimes" list)
        shape: Payload variant; detected from the payload when omitted
        today: Reference date for relative and year-less labels

    Returns:
        Calendar days with cleaned, deduplicated showtimes
    """
    items = unwrap(raw)
    shape = shape or detect_shape(items)
    today = today or today_local()

    if shape is SourceShape.EMPTY or not items:
        return []
    if shape is SourceShape.FLAT_MOVIES:
        days = _normalize_flat(items, today)
    elif shape is SourceShape.CANONICAL:
        days = _normalize_canonical(items, today)
    else:
        days = _normalize_grouped(items, today)

    logger.debug(f"Normalized {len(items)} {shape.value} records into {len(days)} days")
    if not any(day.movies for day in days):
        logger.debug(f"No screenings in {len(items)} {shape.value} records")
    return days
