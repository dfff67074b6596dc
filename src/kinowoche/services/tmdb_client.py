"""TMDb API client for fetching film metadata."""

import logging
from typing import Any

import httpx

from kinowoche.config import settings
from kinowoche.schemas.movie import MovieMetadata
from kinowoche.utils.text import clean_movie_title

logger = logging.getLogger(__name__)


class TMDbClient:
    """Client for The Movie Database (TMDb) API."""

    BASE_URL = "https://api.themoviedb.org/3"
    IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w342"
    LANGUAGE = "de-DE"
    CAST_LIMIT = 6

    def __init__(self, api_key: str | None = None, timeout: float | None = None) -> None:
        """
        Initialize TMDb client.

        Args:
            api_key: TMDb API key (uses settings if not provided)
            timeout: Request timeout in seconds (uses settings if not provided)
        """
        self.api_key = api_key or settings.tmdb_key
        self.timeout = timeout or settings.request_timeout
        if not self.api_key:
            logger.warning("TMDb API key not configured")

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any] | None:
        if not self.api_key:
            logger.warning("Cannot query TMDb without API key")
            return None

        query: dict[str, Any] = {"api_key": self.api_key, "language": self.LANGUAGE}
        query.update(params or {})

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(f"{self.BASE_URL}/{path}", params=query)
                response.raise_for_status()
                return response.json()
        except Exception as e:
            logger.error(f"TMDb request error for '{path}': {e}")
            return None

    async def search_film(self, title: str) -> dict[str, Any] | None:
        """
        Search for a film by title.

        Args:
            title: Film title

        Returns:
            First matching film result or None if not found
        """
        data = await self._get("search/movie", {"query": title})
        if not data:
            return None

        results = data.get("results", [])
        if not results:
            logger.info(f"No TMDb results for: {title}")
            return None

        return results[0]

    async def search_best_match(self, title: str) -> dict[str, Any] | None:
        """
        Search with progressively looser variants of the title.

        Tries the raw title, the cleaned title and the part before a colon
        ("Dune: Teil Zwei" → "Dune").
        """
        raw = title.strip()
        cleaned = clean_movie_title(raw)
        variants = [raw]
        if cleaned and cleaned != raw:
            variants.append(cleaned)
        if ":" in cleaned:
            variants.append(cleaned.split(":")[0].strip())

        for variant in dict.fromkeys(v for v in variants if v):
            result = await self.search_film(variant)
            if result and result.get("id"):
                return result
        return None

    async def get_film_details(self, tmdb_id: int) -> dict[str, Any] | None:
        """
        Get detailed film information including credits.

        Args:
            tmdb_id: TMDb film ID

        Returns:
            Film details including credits or None if error
        """
        return await self._get(f"movie/{tmdb_id}", {"append_to_response": "credits"})

    async def movie_by_title(self, title: str) -> MovieMetadata | None:
        """
        Look up a film and build its metadata bundle.

        Args:
            title: Film title as listed by the cinema

        Returns:
            MovieMetadata or None if TMDb has no match
        """
        if not self.api_key or not title.strip():
            return None

        movie = await self.search_best_match(title)
        if not movie:
            return None

        details = await self.get_film_details(movie["id"]) or {}
        poster_path = movie.get("poster_path") or details.get("poster_path")
        runtime = details.get("runtime")

        return MovieMetadata(
            title=details.get("title") or movie.get("title") or title,
            poster=f"{self.IMAGE_BASE_URL}{poster_path}" if poster_path else None,
            description=details.get("overview") or movie.get("overview") or None,
            runtime=f"{runtime} Min" if runtime else None,
            genres=self.extract_genres(details),
            cast=self.extract_cast(details.get("credits") or {}),
        )

    def extract_genres(self, film_data: dict[str, Any]) -> list[str]:
        """
        Extract genre names from TMDb film data.

        Args:
            film_data: TMDb film details

        Returns:
            List of genre names
        """
        genres = film_data.get("genres", [])
        return [genre["name"] for genre in genres if genre.get("name")]

    def extract_cast(self, credits: dict[str, Any], n: int = CAST_LIMIT) -> list[str]:
        """
        Extract top-billed cast member names from TMDb credits.

        Args:
            credits: TMDb credits data
            n: Maximum number of cast members to return

        Returns:
            List of actor names (up to n)
        """
        cast = credits.get("cast", [])
        return [person["name"] for person in cast[:n] if person.get("name")]
