"""Heuristic classifier deciding whether a places-search result is a cinema."""

from collections.abc import Mapping
from typing import Any

from kinowoche.classifiers.blocklist import contains_any, is_blocked
from kinowoche.classifiers.wordlists import (
    BAD_VENUE_WORDS,
    CINEMA_BRANDS,
    CINEMA_CATEGORY_TOKENS,
    CINEMA_WORDS,
)
from kinowoche.schemas.venue import VenueRecord


def _text(value: Any) -> str:
    return "" if value is None else str(value).lower()


def _number(value: Any, cast: type) -> Any:
    try:
        return cast(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def looks_like_cinema_by_category(venue: Mapping[str, Any]) -> bool:
    """True if the provider's type or category field names a cinema."""
    fields = (_text(venue.get("type")), _text(venue.get("category")))
    return any(contains_any(field, CINEMA_CATEGORY_TOKENS) for field in fields)


def looks_like_cinema_by_text(title: str) -> bool:
    """True if the title carries a cinema brand or a generic cinema word."""
    title = title.lower()
    return contains_any(title, CINEMA_BRANDS) or contains_any(title, CINEMA_WORDS)


def is_cinema(venue: Mapping[str, Any]) -> bool:
    """
    Classify a raw places-search result.

    Category metadata is patchy, so the title text is the primary signal and
    the category confirms it. Nightlife venues are only accepted when one of
    the two signals holds.

    Args:
        venue: Raw provider record (uses title/name, type, category)

    Returns:
        True if the venue should be listed as a cinema
    """
    title = _text(venue.get("title") or venue.get("name"))
    if is_blocked(title):
        return False

    by_category = looks_like_cinema_by_category(venue)
    by_text = looks_like_cinema_by_text(title)

    if contains_any(title, BAD_VENUE_WORDS) and not by_category and not by_text:
        return False

    return by_category or by_text


def normalize_venue(venue: Mapping[str, Any]) -> VenueRecord:
    """Reshape a raw places-search result into a VenueRecord."""
    return VenueRecord(
        title=venue.get("title") or venue.get("name") or "Kino",
        address=venue.get("address") or venue.get("full_address") or "",
        rating=_number(venue.get("rating"), float),
        reviews=_number(venue.get("reviews"), int),
        place_id=venue.get("place_id") or venue.get("data_id"),
        link=venue.get("link") or venue.get("website"),
        gps_coordinates=venue.get("gps_coordinates") or None,
        category=venue.get("category") or None,
        type=venue.get("type") or None,
    )


def filter_cinemas(results: list[Mapping[str, Any]]) -> list[VenueRecord]:
    """Keep the cinema-like, non-blocked results as VenueRecords."""
    venues = [normalize_venue(r) for r in results if isinstance(r, Mapping) and is_cinema(r)]
    return [v for v in venues if v.title and not is_blocked(v.title)]
