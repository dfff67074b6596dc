"""Shared test fixtures."""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI

from kinowoche.api.routes import cinemas, health, movies, showtimes
from kinowoche.errors import ApiError, api_error_handler, unhandled_error_handler
from kinowoche.schemas.calendar import CalendarDay, MovieScreening
from kinowoche.utils.cache import TTLCache

TODAY = date(2024, 2, 4)  # a Sunday


@pytest.fixture
def test_app() -> FastAPI:
    """Minimal FastAPI app with the routers and error handlers, no logging setup."""
    app = FastAPI()
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
    app.include_router(health.router)
    app.include_router(cinemas.router, prefix="/api")
    app.include_router(showtimes.router, prefix="/api")
    app.include_router(movies.router, prefix="/api")
    return app


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def cache() -> TTLCache:
    return TTLCache(60, name="test")


def make_serpapi(configured: bool = True) -> MagicMock:
    serpapi = MagicMock()
    serpapi.configured = configured
    serpapi.google_maps = AsyncMock()
    serpapi.showtimes = AsyncMock()
    return serpapi


def make_tmdb(configured: bool = True, result: object = None) -> MagicMock:
    tmdb = MagicMock()
    tmdb.configured = configured
    tmdb.movie_by_title = AsyncMock(return_value=result)
    return tmdb


def make_day(d: date, *movies: MovieScreening, day: str = "") -> CalendarDay:
    return CalendarDay(key=d, day=day, date=d.strftime("%d.%m."), movies=list(movies))
