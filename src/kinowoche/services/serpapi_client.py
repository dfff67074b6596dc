"""SerpApi client for Google Maps venue search and the Google showtimes block."""

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from kinowoche.config import settings

logger = logging.getLogger(__name__)


@dataclass
class ProviderResult:
    """
    Outcome of a single provider call.

    `ok` is False for any failure; `status` is the HTTP status to surface and
    `data` the provider's own payload, kept for diagnostics.
    """

    ok: bool
    status: int
    data: Any = field(default=None)

    @classmethod
    def failure(cls, status: int, data: Any) -> "ProviderResult":
        return cls(ok=False, status=status, data=data)


class SerpApiClient:
    """Client for SerpApi's google and google_maps engines, German locale."""

    BASE_URL = "https://serpapi.com/search.json"

    def __init__(self, api_key: str | None = None, timeout: float | None = None) -> None:
        """
        Initialize SerpApi client.

        Args:
            api_key: SerpApi key (uses settings if not provided)
            timeout: Request timeout in seconds (uses settings if not provided)
        """
        self.api_key = api_key or settings.serpapi_key
        self.timeout = timeout or settings.request_timeout

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def google_maps(
        self,
        city: str,
        lat: float | None = None,
        lon: float | None = None,
    ) -> ProviderResult:
        """
        Search Google Maps for cinemas in a city.

        Coordinates, when known, pin the map viewport; otherwise the city name
        is used as location. SerpApi rejects requests that carry both.
        """
        params: dict[str, Any] = {
            "engine": "google_maps",
            "q": f"Kino in {city}",
            "hl": "de",
            "gl": "de",
        }
        if lat is not None and lon is not None:
            params["ll"] = f"@{lat},{lon},12z"
        else:
            params["location"] = f"{city}, Germany"

        return await self._search(params)

    async def showtimes(self, cinema_name: str, city: str) -> ProviderResult:
        """Run a Google search whose result page carries the cinema's showtimes block."""
        params = {
            "engine": "google",
            "q": f"{cinema_name} Spielzeiten {city}",
            "location": f"{city}, Germany",
            "hl": "de",
            "gl": "de",
            "google_domain": "google.de",
        }
        return await self._search(params)

    async def _search(self, params: dict[str, Any]) -> ProviderResult:
        if not self.api_key:
            return ProviderResult.failure(500, {"error": "SERPAPI_KEY missing"})

        query = {**params, "api_key": self.api_key}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.BASE_URL, params=query)
        except httpx.TimeoutException:
            logger.error(f"SerpApi timeout ({params.get('engine')})")
            return ProviderResult.failure(504, {"error": "SerpApi timeout"})
        except httpx.HTTPError as e:
            logger.error(f"SerpApi request failed ({params.get('engine')}): {e}")
            return ProviderResult.failure(502, {"error": str(e)})

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.is_error:
            logger.error(f"SerpApi HTTP error: {response.status_code}")
            return ProviderResult.failure(response.status_code, data)
        if not isinstance(data, dict):
            logger.error("SerpApi returned a malformed body")
            return ProviderResult.failure(502, {"error": "malformed response"})
        if data.get("error"):
            logger.error(f"SerpApi error: {data['error']}")
            return ProviderResult.failure(500, data)

        return ProviderResult(ok=True, status=200, data=data)
