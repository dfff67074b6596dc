"""Showtimes API endpoint."""

import logging

from fastapi import APIRouter, Depends, Query

from kinowoche.classifiers.blocklist import is_blocked
from kinowoche.dependencies import get_query_cache, get_serpapi, get_showtimes_service
from kinowoche.errors import ApiError
from kinowoche.schemas.responses import ShowtimesResponse
from kinowoche.services.serpapi_client import SerpApiClient
from kinowoche.services.showtimes_service import ShowtimesService
from kinowoche.utils.cache import TTLCache
from kinowoche.utils.dates import today_local

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/showtimes", response_model=ShowtimesResponse)
async def get_showtimes(
    name: str = Query("", description="Cinema name as returned by /api/cinemas"),
    city: str = Query("", description="City the cinema is in"),
    website: str | None = Query(None, description="Cinema website for the scrape fallback"),
    serpapi: SerpApiClient = Depends(get_serpapi),
    service: ShowtimesService = Depends(get_showtimes_service),
    cache: TTLCache = Depends(get_query_cache),
) -> ShowtimesResponse:
    """
    Seven-day programme of one cinema.

    Always answers with exactly seven days starting today. Days without data
    are empty; `real_days_found` tells how many days actually have showtimes.
    """
    if not serpapi.configured:
        raise ApiError(500, "serpapi_key_missing")

    name = name.strip()
    city = city.strip()
    website = (website or "").strip() or None
    if not name:
        raise ApiError(400, "name_missing")
    if not city:
        raise ApiError(400, "city_missing")
    if is_blocked(name):
        raise ApiError(400, "cinema_blocked")

    today = today_local()
    cache_key = f"showtimes::{today.isoformat()}::{city.lower()}::{name.lower()}::{website or ''}"
    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    result = await service.build_calendar(name, city, website=website, today=today)

    response = ShowtimesResponse(
        cinema=name,
        city=city,
        days=result.days,
        raw_has_showtimes=result.raw_has_showtimes,
        real_days_found=result.real_days_found,
    )
    if result.real_days_found > 0:
        cache.set(cache_key, response)
    return response
