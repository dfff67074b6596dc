"""Merge calendar days from several sources and align them to a 7-day window."""

import logging
from datetime import date, timedelta
from functools import reduce

from kinowoche.classifiers.blocklist import is_blocked
from kinowoche.schemas.calendar import CalendarDay, MovieScreening
from kinowoche.utils.dates import date_label, today_local, weekday_label

logger = logging.getLogger(__name__)

WINDOW_DAYS = 7


def merge_screenings(existing: MovieScreening, incoming: MovieScreening) -> MovieScreening:
    """
    Combine two screenings of the same film on the same day.

    Times are unioned. Poster and info keep the first non-empty value, so a
    higher-priority source is never overwritten by a later one.
    """
    return MovieScreening(
        title=existing.title,
        times=sorted(set(existing.times) | set(incoming.times)),
        poster=existing.poster or incoming.poster,
        info=existing.info if not existing.info.is_empty else incoming.info.model_copy(deep=True),
    )


def _merge_movie_lists(
    existing: list[MovieScreening],
    incoming: list[MovieScreening],
) -> list[MovieScreening]:
    by_title: dict[str, MovieScreening] = {}
    for movie in [*existing, *incoming]:
        key = movie.merge_key
        if not key:
            continue
        if key in by_title:
            by_title[key] = merge_screenings(by_title[key], movie)
        else:
            by_title[key] = movie.model_copy(deep=True)
    return list(by_title.values())


def merge(a: list[CalendarDay], b: list[CalendarDay]) -> list[CalendarDay]:
    """
    Merge two day lists, giving precedence to `a`.

    Days are matched by calendar date (or by their date label when the
    source's label couldn't be parsed). Within a day, films are matched by
    case-insensitive trimmed title. Neither input is modified.

    Args:
        a: Days from the higher-priority source
        b: Days from the lower-priority source

    Returns:
        Combined days in first-seen order
    """
    by_key: dict[object, CalendarDay] = {}
    for day in [*a, *b]:
        key = day.merge_key
        if not key:
            continue
        existing = by_key.get(key)
        if existing is None:
            by_key[key] = CalendarDay(
                key=day.key,
                day=day.day,
                date=day.date,
                movies=_merge_movie_lists([], day.movies),
            )
            continue
        by_key[key] = CalendarDay(
            key=existing.key,
            day=existing.day or day.day,
            date=existing.date or day.date,
            movies=_merge_movie_lists(existing.movies, day.movies),
        )
    return list(by_key.values())


def canonical_window(today: date | None = None) -> list[CalendarDay]:
    """Seven empty days starting today."""
    today = today or today_local()
    window = []
    for offset in range(WINDOW_DAYS):
        d = today + timedelta(days=offset)
        window.append(CalendarDay(key=d, day=weekday_label(d), date=date_label(d)))
    return window


def ensure_seven_days(days: list[CalendarDay], today: date | None = None) -> list[CalendarDay]:
    """
    Align days to the seven calendar dates starting today.

    Days outside the window are dropped, missing dates become empty days.
    A matched day keeps its own weekday label; the date label is always the
    canonical one.
    """
    by_key: dict[object, CalendarDay] = {}
    for day in days:
        by_key.setdefault(day.merge_key, day)

    aligned = []
    used: set[object] = set()
    for slot in canonical_window(today):
        match_key = slot.key if slot.key in by_key else slot.date
        found = by_key.get(match_key)
        if found is None:
            aligned.append(slot)
            continue
        used.add(match_key)
        aligned.append(
            CalendarDay(
                key=slot.key,
                day=found.day or slot.day,
                date=slot.date,
                movies=[m.model_copy(deep=True) for m in found.movies],
            )
        )

    outside = len(by_key) - len(used)
    if outside:
        logger.debug(f"Dropped {outside} day(s) outside the 7-day window")
    return aligned


def reconcile(
    base: list[CalendarDay],
    *extras: list[CalendarDay],
    today: date | None = None,
) -> list[CalendarDay]:
    """Merge sources in priority order and pad the result to seven days."""
    merged = reduce(merge, [base, *extras], [])
    return ensure_seven_days(merged, today=today)


def count_real_days(days: list[CalendarDay]) -> int:
    """Number of days with at least one film that has a showtime."""
    return sum(1 for day in days if day.is_real)


def drop_blocked_movies(days: list[CalendarDay]) -> list[CalendarDay]:
    """Remove films whose titles hit the blocklist."""
    return [
        day.model_copy(update={"movies": [m for m in day.movies if not is_blocked(m.title)]})
        for day in days
    ]
