"""Attach film metadata (poster, synopsis, runtime, genres, cast) to a calendar."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from kinowoche.classifiers.blocklist import is_blocked
from kinowoche.schemas.calendar import CalendarDay
from kinowoche.schemas.movie import MovieMetadata
from kinowoche.utils.cache import TTLCache
from kinowoche.utils.text import clean_movie_title, metadata_cache_key

logger = logging.getLogger(__name__)

MetadataLookup = Callable[[str], Awaitable[MovieMetadata | None]]

DEFAULT_MAX_TITLES = 12


def collect_titles(days: list[CalendarDay], max_titles: int = DEFAULT_MAX_TITLES) -> dict[str, str]:
    """
    Pick the distinct films to enrich, in display order.

    Titles that clean to the same search string ("Oppenheimer" and
    "Oppenheimer (OV)") share one entry.

    Returns:
        Mapping of metadata cache key to the first raw title seen for it
    """
    titles: dict[str, str] = {}
    for day in days:
        for movie in day.movies:
            title = movie.title.strip()
            if not title or is_blocked(title):
                continue
            key = metadata_cache_key(title)
            if key in titles:
                continue
            if len(titles) >= max_titles:
                return titles
            titles[key] = title
    return titles


async def lookup_cached(
    title: str,
    lookup: MetadataLookup,
    cache: TTLCache,
) -> MovieMetadata | None:
    """
    Fetch metadata for one title through the cache.

    Only successful lookups are cached; a miss or an error is retried on the
    next request.
    """
    key = metadata_cache_key(title)
    cached = cache.get(key)
    if cached is not None:
        return cached

    query = clean_movie_title(title) or title.strip()
    try:
        metadata = await lookup(query)
    except Exception as e:
        logger.warning(f"Metadata lookup failed for '{query}': {e}")
        return None

    if metadata is not None:
        cache.set(key, metadata)
    return metadata


async def enrich(
    days: list[CalendarDay],
    lookup: MetadataLookup,
    cache: TTLCache,
    max_titles: int = DEFAULT_MAX_TITLES,
) -> list[CalendarDay]:
    """
    Back-fill posters and info for the films in a calendar.

    Lookups for distinct titles run concurrently. Every occurrence of an
    enriched film gets the poster if it has none and the fetched info
    bundle. Films without a match keep their current fields.

    Args:
        days: Calendar to enrich (not modified)
        lookup: Async metadata provider taking a cleaned title
        cache: Metadata cache
        max_titles: Upper bound on distinct titles looked up per call

    Returns:
        A new calendar with metadata attached
    """
    titles = collect_titles(days, max_titles)
    if not titles:
        return [day.model_copy(deep=True) for day in days]

    keys = list(titles)
    results = await asyncio.gather(*(lookup_cached(titles[k], lookup, cache) for k in keys))
    found = {k: meta for k, meta in zip(keys, results) if meta is not None}
    logger.info(f"Enrichment: {len(found)}/{len(keys)} titles matched")

    enriched = []
    for day in days:
        day = day.model_copy(deep=True)
        for movie in day.movies:
            metadata = found.get(metadata_cache_key(movie.title))
            if metadata is None:
                continue
            if not movie.poster and metadata.poster:
                movie.poster = metadata.poster
            movie.info = metadata.to_info()
        enriched.append(day)
    return enriched
