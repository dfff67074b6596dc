"""Blocklist filter for adult-content and noise venue/film titles."""

from collections.abc import Iterable

from kinowoche.classifiers.wordlists import BLOCKED_WORDS


def contains_any(text: str, words: Iterable[str]) -> bool:
    """Return True if any of *words* occurs in *text* as a substring."""
    return any(word in text for word in words)


def is_blocked(text: str | None, words: Iterable[str] = BLOCKED_WORDS) -> bool:
    """
    Check whether a venue or film title hits the denylist.

    Args:
        text: Free-text title (None is treated as empty)
        words: Denylist of lower-case substrings

    Returns:
        True if any denylisted substring appears in the lower-cased text
    """
    return contains_any(str(text or "").lower(), words)
