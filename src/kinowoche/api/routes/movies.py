"""Single-title metadata endpoints used to lazily back-fill artwork."""

from fastapi import APIRouter, Depends, Query

from kinowoche.classifiers.blocklist import is_blocked
from kinowoche.dependencies import get_metadata_cache, get_tmdb
from kinowoche.errors import ApiError
from kinowoche.schemas.responses import MovieResponse, PosterResponse
from kinowoche.services.tmdb_client import TMDbClient
from kinowoche.showtimes.enrichment import lookup_cached
from kinowoche.utils.cache import TTLCache

router = APIRouter()


def _validate_title(title: str) -> str:
    title = title.strip()
    if not title:
        raise ApiError(400, "title_missing")
    return title


@router.get("/movie", response_model=MovieResponse)
async def get_movie(
    title: str = Query("", description="Film title as listed"),
    tmdb: TMDbClient = Depends(get_tmdb),
    cache: TTLCache = Depends(get_metadata_cache),
) -> MovieResponse:
    """Metadata for one film, or `movie: null` with a reason."""
    title = _validate_title(title)
    if is_blocked(title):
        return MovieResponse(movie=None, reason="blocked")
    if not tmdb.configured:
        return MovieResponse(movie=None, reason="tmdb_key_missing")

    movie = await lookup_cached(title, tmdb.movie_by_title, cache)
    return MovieResponse(movie=movie, reason=None if movie else "not_found")


@router.get("/poster", response_model=PosterResponse)
async def get_poster(
    title: str = Query("", description="Film title as listed"),
    tmdb: TMDbClient = Depends(get_tmdb),
    cache: TTLCache = Depends(get_metadata_cache),
) -> PosterResponse:
    """Poster URL for one film."""
    title = _validate_title(title)
    if is_blocked(title):
        return PosterResponse(poster=None, reason="blocked")
    if not tmdb.configured:
        return PosterResponse(poster=None, reason="tmdb_key_missing")

    movie = await lookup_cached(title, tmdb.movie_by_title, cache)
    if movie is None:
        return PosterResponse(poster=None, reason="not_found")
    return PosterResponse(poster=movie.poster, reason=None if movie.poster else "no_poster")
