"""Process-wide caches and provider clients, injected into routes via Depends."""

from functools import lru_cache

from fastapi import Depends

from kinowoche.config import settings
from kinowoche.scrapers import get_sources
from kinowoche.services.geocoding import NominatimClient
from kinowoche.services.serpapi_client import SerpApiClient
from kinowoche.services.showtimes_service import ShowtimesService
from kinowoche.services.tmdb_client import TMDbClient
from kinowoche.utils.cache import TTLCache

# Created once per process and shared by all requests
metadata_cache = TTLCache(settings.metadata_cache_ttl, name="metadata")
query_cache = TTLCache(settings.query_cache_ttl, name="query")


def get_metadata_cache() -> TTLCache:
    return metadata_cache


def get_query_cache() -> TTLCache:
    return query_cache


@lru_cache
def get_geocoder() -> NominatimClient:
    return NominatimClient()


@lru_cache
def get_serpapi() -> SerpApiClient:
    return SerpApiClient()


@lru_cache
def get_tmdb() -> TMDbClient:
    return TMDbClient()


def get_showtimes_service(
    serpapi: SerpApiClient = Depends(get_serpapi),
    tmdb: TMDbClient = Depends(get_tmdb),
    cache: TTLCache = Depends(get_metadata_cache),
) -> ShowtimesService:
    """
    Dependency for FastAPI to provide the showtimes pipeline.

    Usage:
        @router.get("/endpoint")
        async def endpoint(service: ShowtimesService = Depends(get_showtimes_service)):
            ...
    """
    return ShowtimesService(serpapi, tmdb, cache, sources=get_sources)
