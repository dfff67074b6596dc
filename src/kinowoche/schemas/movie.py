"""Pydantic schemas for film metadata."""

from pydantic import BaseModel, Field

from kinowoche.schemas.calendar import MovieInfo


class MovieMetadata(BaseModel):
    """Film metadata as returned by the metadata provider."""

    title: str
    poster: str | None = None
    description: str | None = None
    runtime: str | None = None
    genres: list[str] = Field(default_factory=list)
    cast: list[str] = Field(default_factory=list)

    def to_info(self) -> MovieInfo:
        """Return the descriptive bundle attached to screenings."""
        return MovieInfo(
            description=self.description,
            runtime=self.runtime,
            genres=list(self.genres),
            cast=list(self.cast),
        )
