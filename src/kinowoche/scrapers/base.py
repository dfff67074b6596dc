"""Base interface for best-effort showtime scrape sources."""

from abc import ABC, abstractmethod

from kinowoche.schemas.calendar import CalendarDay


class ShowtimeSource(ABC):
    """
    Abstract base class for scrape fallbacks.

    A source is asked for showtimes only when the primary search yielded too
    few real days. It returns calendar days in canonical shape, possibly
    fewer than seven and possibly none.
    """

    name: str = "source"

    @abstractmethod
    def matches(self, cinema_name: str, website: str | None = None) -> bool:
        """
        Decide whether this source can serve a venue.

        Args:
            cinema_name: Venue name from the request
            website: Venue website, if the client supplied one
        """
        pass

    @abstractmethod
    async def get_days(self, website: str | None = None) -> list[CalendarDay]:
        """
        Fetch showtimes.

        Args:
            website: Venue website, if known

        Returns:
            Calendar days with cleaned times

        Raises:
            Should NOT raise exceptions. Return empty list on errors and log warnings.
        """
        pass
