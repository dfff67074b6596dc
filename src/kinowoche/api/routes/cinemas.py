"""Cinema search API endpoint."""

import logging

from fastapi import APIRouter, Depends, Query

from kinowoche.classifiers.venue import filter_cinemas
from kinowoche.dependencies import get_geocoder, get_query_cache, get_serpapi
from kinowoche.errors import ApiError, ProviderError
from kinowoche.schemas.responses import CinemasResponse
from kinowoche.schemas.venue import Coordinates
from kinowoche.services.geocoding import NominatimClient
from kinowoche.services.serpapi_client import SerpApiClient
from kinowoche.utils.cache import TTLCache

logger = logging.getLogger(__name__)
router = APIRouter()

PLACE_RESULT_FIELDS = ("local_results", "place_results", "places")


def extract_places(data: dict) -> list[dict]:
    """Pick the venue list out of a google_maps response."""
    for field in PLACE_RESULT_FIELDS:
        value = data.get(field)
        if isinstance(value, list):
            return value
        if isinstance(value, dict):
            # A single-place answer comes back as one object
            return [value]
    return []


@router.get("/cinemas", response_model=CinemasResponse)
async def get_cinemas(
    q: str = Query("", description="Place name, e.g. 'Köln' or a postcode"),
    geocoder: NominatimClient = Depends(get_geocoder),
    serpapi: SerpApiClient = Depends(get_serpapi),
    cache: TTLCache = Depends(get_query_cache),
) -> CinemasResponse:
    """
    Find cinemas near a place.

    Geocodes the place, searches Google Maps for cinemas around it and keeps
    the results that classify as cinemas and pass the blocklist.
    """
    if not serpapi.configured:
        raise ApiError(500, "serpapi_key_missing")

    q = q.strip()
    if not q:
        raise ApiError(400, "q_missing")

    cache_key = f"cinemas::{q.lower()}"
    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    geo = await geocoder.search(q)
    if geo is None:
        raise ApiError(404, "place_not_found")

    result = await serpapi.google_maps(geo.city, geo.lat, geo.lon)
    if not result.ok:
        raise ProviderError(result.status, result.data)

    cinemas = filter_cinemas(extract_places(result.data))
    logger.info(f"Cinemas for '{q}' ({geo.city}): {len(cinemas)}")

    response = CinemasResponse(
        resolved_city=geo.city,
        coords_used=Coordinates(lat=geo.lat, lon=geo.lon) if geo.has_coordinates else None,
        cinemas=cinemas,
    )
    if cinemas:
        cache.set(cache_key, response)
    return response
