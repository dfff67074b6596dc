"""Nominatim (OpenStreetMap) geocoding client."""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from kinowoche.config import settings
from kinowoche.errors import ProviderError

logger = logging.getLogger(__name__)

CITY_FIELDS = ("city", "town", "village", "municipality", "county")


@dataclass
class GeocodeResult:
    city: str
    lat: float | None
    lon: float | None

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lon is not None


def _to_float(value: Any) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def pick_city(item: dict[str, Any], fallback: str) -> str:
    """
    Choose the most specific settlement name of a Nominatim result.

    Falls back to the first component of display_name, then to *fallback*.
    """
    address = item.get("address") or {}
    for field in CITY_FIELDS:
        if address.get(field):
            return address[field]
    display_name = str(item.get("display_name") or "")
    first = display_name.split(",")[0].strip()
    return first or fallback


class NominatimClient:
    """Client for the public Nominatim search API."""

    BASE_URL = "https://nominatim.openstreetmap.org/search"

    def __init__(self, user_agent: str | None = None, timeout: float | None = None) -> None:
        # Nominatim's usage policy requires an identifying User-Agent
        self.user_agent = user_agent or settings.user_agent
        self.timeout = timeout or settings.request_timeout

    async def search(self, query: str) -> GeocodeResult | None:
        """
        Resolve a place name.

        Args:
            query: Free-text place name, e.g. "Köln" or "50667"

        Returns:
            City and coordinates of the best match, or None if not found

        Raises:
            ProviderError: If Nominatim is unreachable, times out, rejects the
                request (e.g. 429 rate limit) or returns a malformed body
        """
        params = {"format": "json", "limit": 1, "addressdetails": 1, "q": query}
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
            ) as client:
                response = await client.get(self.BASE_URL, params=params)
                response.raise_for_status()
                results = response.json()
        except httpx.TimeoutException:
            logger.error(f"Nominatim timeout for '{query}'")
            raise ProviderError(504, {"error": "Nominatim timeout"}, provider="nominatim")
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"Nominatim HTTP error for '{query}': {status}")
            raise ProviderError(502, {"error": f"Nominatim HTTP {status}", "status": status}, provider="nominatim")
        except httpx.HTTPError as e:
            logger.error(f"Nominatim request failed for '{query}': {e}")
            raise ProviderError(502, {"error": str(e)}, provider="nominatim")
        except ValueError:
            logger.error(f"Nominatim returned a malformed body for '{query}'")
            raise ProviderError(502, {"error": "malformed response"}, provider="nominatim")

        if not isinstance(results, list) or not results:
            logger.info(f"No Nominatim results for: {query}")
            return None

        item = results[0]
        return GeocodeResult(
            city=pick_city(item, query),
            lat=_to_float(item.get("lat")),
            lon=_to_float(item.get("lon")),
        )
