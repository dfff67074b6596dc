"""Pydantic schemas for the seven-day showtimes calendar."""

import datetime

from pydantic import BaseModel, Field


class MovieInfo(BaseModel):
    """Descriptive metadata attached to a screening. Fields are never absent."""

    description: str | None = None
    runtime: str | None = None
    genres: list[str] = Field(default_factory=list)
    cast: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.description or self.runtime or self.genres or self.cast)


class MovieScreening(BaseModel):
    """A film and its showtimes on one calendar day."""

    title: str
    times: list[str] = Field(default_factory=list)  # "HH:MM", sorted, unique
    poster: str | None = None
    info: MovieInfo = Field(default_factory=MovieInfo)

    @property
    def merge_key(self) -> str:
        return self.title.strip().lower()


class CalendarDay(BaseModel):
    """
    One slot of the calendar.

    `key` is the structural calendar date used for merging. It is not part of
    the wire format; `day` and `date` are display labels derived from it.
    """

    key: datetime.date | None = Field(default=None, exclude=True)
    day: str = ""
    date: str = ""
    movies: list[MovieScreening] = Field(default_factory=list)

    @property
    def merge_key(self) -> datetime.date | str:
        return self.key if self.key is not None else self.date.strip()

    @property
    def is_real(self) -> bool:
        """True if at least one film on this day has a showtime."""
        return any(movie.times for movie in self.movies)
