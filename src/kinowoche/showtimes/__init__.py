"""Showtime normalization, merge and enrichment pipeline."""

from kinowoche.showtimes.enrichment import enrich, lookup_cached
from kinowoche.showtimes.normalizer import SourceShape, detect_shape, normalize
from kinowoche.showtimes.reconciler import (
    count_real_days,
    drop_blocked_movies,
    ensure_seven_days,
    merge,
    reconcile,
)

__all__ = [
    "SourceShape",
    "detect_shape",
    "normalize",
    "merge",
    "ensure_seven_days",
    "reconcile",
    "count_real_days",
    "drop_blocked_movies",
    "enrich",
    "lookup_cached",
]
