"""Pydantic schemas for API requests and responses."""

from kinowoche.schemas.calendar import CalendarDay, MovieInfo, MovieScreening
from kinowoche.schemas.movie import MovieMetadata
from kinowoche.schemas.responses import (
    CinemasResponse,
    ErrorResponse,
    HealthResponse,
    MovieResponse,
    PosterResponse,
    ShowtimesResponse,
)
from kinowoche.schemas.venue import Coordinates, VenueRecord

__all__ = [
    "CalendarDay",
    "MovieInfo",
    "MovieScreening",
    "MovieMetadata",
    "VenueRecord",
    "Coordinates",
    "HealthResponse",
    "CinemasResponse",
    "ShowtimesResponse",
    "MovieResponse",
    "PosterResponse",
    "ErrorResponse",
]
