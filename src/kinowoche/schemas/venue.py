"""Pydantic schemas for cinema venues."""

from typing import Any

from pydantic import BaseModel


class VenueRecord(BaseModel):
    """Cinema returned by the places search, reshaped for the front-end."""

    title: str
    address: str = ""
    rating: float | None = None
    reviews: int | None = None
    place_id: str | None = None
    link: str | None = None
    gps_coordinates: dict[str, Any] | None = None
    category: str | None = None
    type: str | None = None


class Coordinates(BaseModel):
    lat: float
    lon: float
