"""Health check endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from kinowoche.dependencies import get_serpapi, get_tmdb
from kinowoche.schemas.responses import HealthResponse
from kinowoche.services.serpapi_client import SerpApiClient
from kinowoche.services.tmdb_client import TMDbClient

router = APIRouter()


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def root() -> str:
    return "ok"


@router.get("/api/health", response_model=HealthResponse, tags=["health"])
async def health_check(
    serpapi: SerpApiClient = Depends(get_serpapi),
    tmdb: TMDbClient = Depends(get_tmdb),
) -> HealthResponse:
    """
    Liveness probe.

    Returns:
        ok plus whether the SerpApi and TMDb keys are configured
    """
    return HealthResponse(ok=True, serp=serpapi.configured, tmdb=tmdb.configured)
