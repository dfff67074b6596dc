"""Pydantic schemas for API responses."""

from typing import Any

from pydantic import BaseModel

from kinowoche.schemas.calendar import CalendarDay
from kinowoche.schemas.movie import MovieMetadata
from kinowoche.schemas.venue import Coordinates, VenueRecord


class HealthResponse(BaseModel):
    ok: bool = True
    serp: bool
    tmdb: bool


class CinemasResponse(BaseModel):
    """Response for the cinemas endpoint."""

    ok: bool = True
    resolved_city: str
    coords_used: Coordinates | None = None
    cinemas: list[VenueRecord]


class ShowtimesResponse(BaseModel):
    """Response for the showtimes endpoint. `days` always holds seven entries."""

    ok: bool = True
    cinema: str
    city: str
    days: list[CalendarDay]
    raw_has_showtimes: bool = False
    real_days_found: int


class MovieResponse(BaseModel):
    ok: bool = True
    movie: MovieMetadata | None = None
    reason: str | None = None


class PosterResponse(BaseModel):
    ok: bool = True
    poster: str | None = None
    reason: str | None = None


class ErrorResponse(BaseModel):
    """Error body shared by all endpoints."""

    ok: bool = False
    error: str
    details: Any = None
