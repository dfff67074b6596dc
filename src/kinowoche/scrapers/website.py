"""Generic venue website scraper driven by headless Chromium."""

import asyncio
import ipaddress
import logging
import re
import socket
from datetime import date
from urllib.parse import urlparse

from playwright.async_api import async_playwright

from kinowoche.config import settings
from kinowoche.schemas.calendar import CalendarDay, MovieScreening
from kinowoche.scrapers.base import ShowtimeSource
from kinowoche.utils.dates import (
    RELATIVE_DAYS,
    WEEKDAY_NAMES,
    date_label,
    parse_day_label,
    today_local,
    weekday_label,
)
from kinowoche.utils.text import extract_times_from_text

logger = logging.getLogger(__name__)

SETTLE_MS = 2500  # time for client-side rendering after DOMContentLoaded
MAX_HEADER_LENGTH = 30
WEBSITE_TITLE = "Spielzeiten"

BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
]
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/123.0.0.0 Safari/537.36"
)
LOCAL_HOST_SUFFIXES = (".localhost", ".local", ".internal", ".lan", ".home.arpa")


def _is_global_ip(address: str) -> bool:
    try:
        return ipaddress.ip_address(address).is_global
    except ValueError:
        return False


def is_public_url(url: str | None) -> bool:
    """
    True for an http(s) URL that doesn't name a local host.

    Rejects localhost and local-network names, single-label hosts, and IP
    literals outside the global address space (loopback, private ranges,
    link-local metadata endpoints). Names are not resolved here.
    """
    if not url:
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    if parsed.scheme not in ("http", "https"):
        return False

    host = (parsed.hostname or "").rstrip(".").lower()
    if not host or host == "localhost" or host.endswith(LOCAL_HOST_SUFFIXES):
        return False
    try:
        return ipaddress.ip_address(host).is_global
    except ValueError:
        return "." in host


WEEKDAY_DATE_PREFIX = re.compile(
    r"^(" + "|".join(sorted(WEEKDAY_NAMES, key=len, reverse=True)) + r")\.?,?\s+"
    r"(\d{1,2}\.\d{1,2}(?!\d)(?:\.(?:\d{2,4})?)?)(?![\d:])",
    re.IGNORECASE,
)


def _split_weekday_date(line: str, today: date) -> tuple[date | None, str]:
    """
    Read a leading "Sa 10.02" style header off a line.

    A dotted pair after a weekday name is a date only when it falls on that
    weekday, so "Sa 20.15" stays a showtime. Returns the date (or None) and
    the rest of the line.
    """
    match = WEEKDAY_DATE_PREFIX.match(line)
    if not match:
        return None, line
    header = parse_day_label(match.group(2), today)
    if header is None or header.weekday() != WEEKDAY_NAMES[match.group(1).lower()]:
        return None, line
    return header, line[match.end():].strip()


def _is_day_header(line: str) -> bool:
    """Short line holding a date, or nothing but a weekday/relative day word."""
    if len(line) > MAX_HEADER_LENGTH or extract_times_from_text(line):
        return False
    if any(ch.isdigit() for ch in line):
        return True
    word = re.sub(r"[^\wäöüß]", "", line.lower())
    return word in WEEKDAY_NAMES or word in RELATIVE_DAYS


def days_from_text(text: str, today: date | None = None) -> list[CalendarDay]:
    """
    Split page text into days and collect the times under each.

    A short line that reads as a date ("Heute", "Sa. 10.02.") opens a new
    day, as does a weekday and date leading a line ("Sa 10.02 Dune 20:00").
    Times found before the first such header belong to today. Times are
    grouped under a single "Spielzeiten" entry per day since page layouts
    don't reliably tie titles to times.
    """
    today = today or today_local()
    buckets: dict[date, set[str]] = {}
    current = today

    for line in (text or "").splitlines():
        line = line.strip()
        if not line:
            continue
        header, line = _split_weekday_date(line, today)
        if header is not None:
            current = header
            if not line:
                continue
        elif _is_day_header(line):
            header = parse_day_label(line, today)
            if header is not None:
                current = header
                continue
        times = extract_times_from_text(line)
        if times:
            buckets.setdefault(current, set()).update(times)

    return [
        CalendarDay(
            key=d,
            day=weekday_label(d),
            date=date_label(d),
            movies=[MovieScreening(title=WEBSITE_TITLE, times=sorted(times))],
        )
        for d, times in sorted(buckets.items())
    ]


class WebsiteScraper(ShowtimeSource):
    """
    Fallback for any venue whose website the client supplied.

    Reads the rendered page text first and falls back to the raw HTML for
    pages that keep their programme in scripts.
    """

    name = "website"

    def matches(self, cinema_name: str, website: str | None = None) -> bool:
        return is_public_url(website)

    async def get_days(self, website: str | None = None) -> list[CalendarDay]:
        if not website:
            return []
        if not await self._host_is_public(website):
            logger.warning(f"Refusing to load {website}: host is not public")
            return []

        try:
            text = await self._fetch_text(website)
        except Exception as e:
            logger.error(f"Website scraper error for {website}: {e}", exc_info=True)
            return []

        days = days_from_text(text)
        logger.info(f"Website {website}: Found {len(days)} days")
        return days

    async def _host_is_public(self, url: str) -> bool:
        """Resolve the URL's host and require every address to be global."""
        if not is_public_url(url):
            return False
        parsed = urlparse(url)
        try:
            infos = await asyncio.get_running_loop().getaddrinfo(
                parsed.hostname, parsed.port, type=socket.SOCK_STREAM
            )
        except (OSError, ValueError) as e:
            logger.warning(f"Could not resolve {parsed.hostname}: {e}")
            return False
        return bool(infos) and all(_is_global_ip(info[4][0]) for info in infos)

    async def _fetch_text(self, url: str) -> str:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True, args=BROWSER_ARGS)
            try:
                context = await browser.new_context(
                    locale="de-DE",
                    timezone_id=settings.timezone,
                    user_agent=USER_AGENT,
                    viewport={"width": 1280, "height": 720},
                )
                # Redirects and subresources must stay on public hosts too
                await context.route("**/*", self._guard_route)
                page = await context.new_page()
                await page.goto(url, wait_until="domcontentloaded", timeout=settings.scrape_timeout * 1000)
                await page.wait_for_timeout(SETTLE_MS)

                text = await page.evaluate("() => document.body ? document.body.innerText : ''")
                if extract_times_from_text(text):
                    return text

                return await page.content()
            finally:
                await browser.close()

    async def _guard_route(self, route) -> None:
        url = route.request.url
        if await self._host_is_public(url):
            await route.continue_()
        else:
            logger.warning(f"Blocked browser request to {url}")
            await route.abort()
