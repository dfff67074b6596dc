"""Showtimes pipeline: search, normalize, scrape fallback, reconcile, enrich."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from kinowoche.config import settings
from kinowoche.errors import ProviderError
from kinowoche.schemas.calendar import CalendarDay
from kinowoche.scrapers import ShowtimeSource, get_sources
from kinowoche.services.serpapi_client import SerpApiClient
from kinowoche.services.tmdb_client import TMDbClient
from kinowoche.showtimes.enrichment import enrich
from kinowoche.showtimes.normalizer import normalize, unwrap
from kinowoche.showtimes.reconciler import (
    count_real_days,
    drop_blocked_movies,
    ensure_seven_days,
    merge,
    reconcile,
)
from kinowoche.utils.cache import TTLCache
from kinowoche.utils.dates import today_local

logger = logging.getLogger(__name__)

SourceFactory = Callable[[str, str | None], list[ShowtimeSource]]


@dataclass
class CalendarResult:
    days: list[CalendarDay]
    raw_has_showtimes: bool
    real_days_found: int


async def safe_get_days(source: ShowtimeSource, website: str | None) -> list[CalendarDay]:
    """Run a scrape source, treating any exception as an empty result."""
    try:
        days = await source.get_days(website)
    except Exception as e:
        logger.error(f"Scrape source '{source.name}' raised: {e}", exc_info=True)
        return []
    return days if isinstance(days, list) else []


class ShowtimesService:
    """
    Builds the seven-day calendar for one venue.

    The SerpApi showtimes block is the primary source. Scrape fallbacks run
    only when it yields fewer than `min_real_days` real days in the window;
    their days are merged in with lower precedence.
    """

    def __init__(
        self,
        serpapi: SerpApiClient,
        tmdb: TMDbClient,
        metadata_cache: TTLCache,
        sources: SourceFactory = get_sources,
        min_real_days: int | None = None,
        max_titles: int | None = None,
    ) -> None:
        self.serpapi = serpapi
        self.tmdb = tmdb
        self.metadata_cache = metadata_cache
        self.sources = sources
        self.min_real_days = settings.fallback_min_real_days if min_real_days is None else min_real_days
        self.max_titles = max_titles or settings.enrich_max_titles

    async def build_calendar(
        self,
        cinema_name: str,
        city: str,
        website: str | None = None,
        today: date | None = None,
    ) -> CalendarResult:
        """
        Run the pipeline for one venue.

        Args:
            cinema_name: Venue name as listed by the places search
            city: City the venue is in
            website: Venue website for the generic scrape fallback
            today: First day of the window (defaults to today, local time)

        Returns:
            Seven aligned days and the number of real days found

        Raises:
            ProviderError: If the primary showtimes search fails
        """
        today = today or today_local()

        result = await self.serpapi.showtimes(cinema_name, city)
        if not result.ok:
            raise ProviderError(result.status, result.data)

        raw = unwrap(result.data)
        days = normalize(raw, today=today)
        real_days = count_real_days(ensure_seven_days(days, today=today))
        logger.info(f"{cinema_name} ({city}): {real_days} real days from search")

        if real_days < self.min_real_days:
            days = await self._merge_fallbacks(days, cinema_name, website)

        days = reconcile(drop_blocked_movies(days), today=today)
        real_days = count_real_days(days)

        if self.tmdb.configured:
            days = await enrich(days, self.tmdb.movie_by_title, self.metadata_cache, self.max_titles)

        return CalendarResult(
            days=days,
            raw_has_showtimes=bool(raw),
            real_days_found=real_days,
        )

    async def _merge_fallbacks(
        self,
        days: list[CalendarDay],
        cinema_name: str,
        website: str | None,
    ) -> list[CalendarDay]:
        sources = self.sources(cinema_name, website)
        if not sources:
            return days

        scraped = await asyncio.gather(*(safe_get_days(s, website) for s in sources))
        for source, source_days in zip(sources, scraped):
            logger.info(f"Fallback '{source.name}' returned {len(source_days)} days")
            days = merge(days, source_days)
        return days
