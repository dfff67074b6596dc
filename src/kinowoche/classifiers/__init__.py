"""Stateless title and venue classifiers."""

from kinowoche.classifiers.blocklist import is_blocked
from kinowoche.classifiers.venue import filter_cinemas, is_cinema, normalize_venue

__all__ = [
    "is_blocked",
    "is_cinema",
    "normalize_venue",
    "filter_cinemas",
]
