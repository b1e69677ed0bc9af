"""Listing-page traversal.

`Paginator` is the one loop every site goes through: it reaches the start
page, yields listing pages in order and applies the rate-limiting delay
between them. It stops on its own at the end page (explicit, or discovered
from the site's total page count) and when navigation fails; the consumer
stops it early with ``stop(reason)`` when a page is empty, fully duplicated,
or marked as the end of results.

How page N is reached is delegated to a `PageNavigator`.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from .fetchers import PageFetcher
from .models import StopReason

logger = logging.getLogger("careers-engine")


@dataclass(frozen=True)
class ListingPage:
    number: int
    url: str
    html: str


class PageNavigator(ABC):
    """Strategy for reaching listing pages. Methods return None when navigation fails."""

    def __init__(self, fetcher: PageFetcher, wait_for: Optional[str] = None) -> None:
        self.fetcher = fetcher
        self.wait_for = wait_for

    @abstractmethod
    def open(self, page: int) -> Optional[ListingPage]:
        """Reach the first page of the run."""
        raise NotImplementedError

    @abstractmethod
    def advance(self, page: int) -> Optional[ListingPage]:
        """Reach ``page``, which directly follows the page last returned."""
        raise NotImplementedError


class UrlNavigator(PageNavigator):
    """Each page has its own URL (page-number or row-offset parameter)."""

    def __init__(self, fetcher: PageFetcher, url_for: Callable[[int], str], wait_for: Optional[str] = None) -> None:
        super().__init__(fetcher, wait_for)
        self.url_for = url_for

    def _load(self, page: int) -> str:
        return self.fetcher.get(self.url_for(page), wait_for=self.wait_for)

    def open(self, page: int) -> Optional[ListingPage]:
        return self.advance(page)

    def advance(self, page: int) -> Optional[ListingPage]:
        return ListingPage(page, self.url_for(page), self._load(page))


class ScrollNavigator(UrlNavigator):
    """Page URLs as `UrlNavigator`, each auto-scrolled until it stops growing."""

    def __init__(
        self,
        fetcher: PageFetcher,
        url_for: Callable[[int], str],
        wait_for: Optional[str] = None,
        max_rounds: int = 3,
        pause_s: float = 2.0,
    ) -> None:
        super().__init__(fetcher, url_for, wait_for)
        self.max_rounds = max_rounds
        self.pause_s = pause_s

    def _load(self, page: int) -> str:
        super()._load(page)
        return self.fetcher.scroll_to_end(self.max_rounds, self.pause_s)


class ClickNavigator(PageNavigator):
    """One entry URL; later pages are reached by clicking a 'next' control."""

    def __init__(self, fetcher: PageFetcher, start_url: str, next_selector: str, wait_for: Optional[str] = None) -> None:
        super().__init__(fetcher, wait_for)
        self.start_url = start_url
        self.next_selector = next_selector

    def open(self, page: int) -> Optional[ListingPage]:
        html = self.fetcher.get(self.start_url, wait_for=self.wait_for)
        for _ in range(page - 1):
            html = self.fetcher.click(self.next_selector, wait_for=self.wait_for)
            if html is None:
                logger.warning("Could not click through to start page %s", page)
                return None
        return ListingPage(page, self.start_url, html)

    def advance(self, page: int) -> Optional[ListingPage]:
        html = self.fetcher.click(self.next_selector, wait_for=self.wait_for)
        if html is None:
            return None
        return ListingPage(page, self.start_url, html)


class Paginator:
    """Iterate listing pages from ``start_page`` until a stop condition.

    ``total_pages`` parses the first page and returns the site's page count
    (or None when unknown); the effective end is then the smaller of it and
    ``end_page``.
    """

    def __init__(
        self,
        navigator: PageNavigator,
        start_page: int = 1,
        end_page: Optional[int] = None,
        delay_s: float = 0.0,
        total_pages: Optional[Callable[[str], Optional[int]]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.navigator = navigator
        self.start_page = max(start_page, 1)
        self.end_page = end_page
        self.delay_s = delay_s
        self.total_pages = total_pages
        self.sleep = sleep
        self.effective_end: Optional[int] = end_page
        self.stop_reason: Optional[StopReason] = None
        self.pages_yielded = 0
        self.current_page = self.start_page
        self._end_reason = StopReason.END_PAGE

    def stop(self, reason: StopReason) -> None:
        if self.stop_reason is None:
            self.stop_reason = reason

    @property
    def stopped(self) -> bool:
        return self.stop_reason is not None

    def _apply_total(self, html: str) -> None:
        if self.total_pages is None:
            return
        total = self.total_pages(html)
        if total is None:
            return
        logger.info("Site reports %s listing pages", total)
        if self.end_page is None or total < self.end_page:
            self.effective_end = total
            self._end_reason = StopReason.TOTAL_PAGES

    def _past_end(self, page: int) -> bool:
        return self.effective_end is not None and page > self.effective_end

    def __iter__(self) -> Iterator[ListingPage]:
        page = self.start_page
        if self._past_end(page):
            self.stop(StopReason.END_PAGE)
            return

        self.current_page = page
        listing = self.navigator.open(page)
        if listing is None:
            self.stop(StopReason.NAVIGATION_FAILED)
            return
        self._apply_total(listing.html)

        while True:
            if self._past_end(page):
                self.stop(self._end_reason)
                return
            self.pages_yielded += 1
            yield listing
            if self.stopped:
                return
            if self._past_end(page + 1):
                self.stop(self._end_reason)
                return

            if self.delay_s > 0:
                self.sleep(self.delay_s)
            page += 1
            self.current_page = page
            listing = self.navigator.advance(page)
            if listing is None:
                logger.warning("Could not navigate to page %s", page)
                self.stop(StopReason.NAVIGATION_FAILED)
                return
