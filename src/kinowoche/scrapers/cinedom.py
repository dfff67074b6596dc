"""Cinedom Köln programme page scraper."""

import logging
from datetime import date

import httpx
from bs4 import BeautifulSoup, Tag

from kinowoche.config import settings
from kinowoche.schemas.calendar import CalendarDay, MovieScreening
from kinowoche.scrapers.base import ShowtimeSource
from kinowoche.utils.dates import date_label, parse_day_label, today_local, weekday_label
from kinowoche.utils.text import PLACEHOLDER_TITLE, extract_times_from_text

logger = logging.getLogger(__name__)

MAX_DAYS = 7
MAX_TIMES_PER_FILM = 25
FILM_CLASS_HINTS = ("movie", "film")
HEADINGS = ["h2", "h3", "h4"]


def _is_ancestor(tag: Tag, other: Tag) -> bool:
    return any(parent is tag for parent in other.parents)


class CinedomScraper(ShowtimeSource):
    """
    Scraper for the Cinedom programme overview.

    The page groups screenings into blocks carrying a `data-date` attribute.
    Inside a block, each film container has a heading with the title and the
    start times as link text.
    """

    name = "cinedom"
    URL = "https://cinedom.de/programmuebersicht/"

    def matches(self, cinema_name: str, website: str | None = None) -> bool:
        return "cinedom" in cinema_name.lower() or "cinedom.de" in (website or "").lower()

    async def get_days(self, website: str | None = None) -> list[CalendarDay]:
        """Fetch and parse the programme overview."""
        try:
            async with httpx.AsyncClient(
                timeout=settings.request_timeout,
                headers={"User-Agent": "Mozilla/5.0"},
                follow_redirects=True,
            ) as client:
                response = await client.get(self.URL)
                response.raise_for_status()
        except Exception as e:
            logger.error(f"Cinedom scraper error: {e}", exc_info=True)
            return []

        days = self._parse_html(response.text)
        logger.info(f"Cinedom: Found {len(days)} days")
        return days

    def _parse_html(self, html: str, today: date | None = None) -> list[CalendarDay]:
        """Parse the programme HTML into calendar days."""
        soup = BeautifulSoup(html, "html.parser")
        today = today or today_local()
        days: list[CalendarDay] = []

        for block in soup.find_all(attrs={"data-date": True}):
            if len(days) >= MAX_DAYS:
                break

            key = parse_day_label(block.get("data-date"), today)
            if key is None:
                logger.debug(f"Skipping block with unreadable date {block.get('data-date')!r}")
                continue

            movies = self._parse_films(block)
            days.append(
                CalendarDay(key=key, day=weekday_label(key), date=date_label(key), movies=movies)
            )

        return days

    def _parse_films(self, block: Tag) -> list[MovieScreening]:
        # A film container holds exactly one heading; wrappers around several films don't
        candidates = [
            el
            for el in block.find_all(True)
            if any(hint in " ".join(el.get("class") or []).lower() for hint in FILM_CLASS_HINTS)
            and len(el.find_all(HEADINGS)) == 1
        ]
        films = [
            el
            for el in candidates
            if not any(_is_ancestor(other, el) for other in candidates if other is not el)
        ]

        movies: list[MovieScreening] = []
        seen: set[str] = set()
        for film in films:
            heading = film.find(HEADINGS)
            title = heading.get_text(" ", strip=True) if heading else ""
            times = extract_times_from_text(film.get_text(" ", strip=True))[:MAX_TIMES_PER_FILM]
            if not title or not times or title.lower() in seen:
                continue
            seen.add(title.lower())
            movies.append(MovieScreening(title=title, times=times))

        if movies:
            return movies

        # No film containers: keep the block's times under a placeholder title
        times = extract_times_from_text(block.get_text(" ", strip=True))[:MAX_TIMES_PER_FILM]
        return [MovieScreening(title=PLACEHOLDER_TITLE, times=times)] if times else []
