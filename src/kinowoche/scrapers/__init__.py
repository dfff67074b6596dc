"""Registry of scrape fallbacks for the showtimes pipeline."""

from kinowoche.scrapers.base import ShowtimeSource
from kinowoche.scrapers.cinedom import CinedomScraper
from kinowoche.scrapers.website import WebsiteScraper

# Sources in priority order: venue-specific scrapers before the generic one
SOURCE_REGISTRY: list[type[ShowtimeSource]] = [
    CinedomScraper,
    WebsiteScraper,
]


def get_sources(cinema_name: str, website: str | None = None) -> list[ShowtimeSource]:
    """
    Get the scrape sources able to serve a venue.

    Args:
        cinema_name: Venue name from the request
        website: Venue website, if known

    Returns:
        Matching source instances in priority order
    """
    sources = [source_class() for source_class in SOURCE_REGISTRY]
    return [s for s in sources if s.matches(cinema_name, website)]


__all__ = [
    "SOURCE_REGISTRY",
    "get_sources",
    "ShowtimeSource",
    "CinedomScraper",
    "WebsiteScraper",
]
