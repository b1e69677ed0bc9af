"""Page fetchers.

Adapters never talk to a network library directly: they receive HTML from a
`PageFetcher`. `HttpFetcher` serves server-rendered listings with httpx;
`BrowserFetcher` drives headless Chromium through Playwright for listings that
are rendered client-side, scrolled, or paged with a "next" button.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from .errors import FetchError

logger = logging.getLogger("careers-engine")

BLOCKED_RESOURCE_TYPES = {"image", "stylesheet", "font", "media"}


class PageFetcher(ABC):
    """Serial page handle: one listing page plus one detail page at a time."""

    def __enter__(self) -> "PageFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @abstractmethod
    def get(self, url: str, wait_for: Optional[str] = None) -> str:
        """Navigate the listing handle to ``url`` and return its HTML."""
        raise NotImplementedError

    def get_detail(self, url: str, wait_for: Optional[str] = None) -> str:
        """Fetch a detail page without disturbing the listing handle."""
        return self.get(url, wait_for=wait_for)

    def click(self, selector: str, wait_for: Optional[str] = None) -> Optional[str]:
        """Click ``selector`` on the listing handle; None if it is missing or disabled."""
        raise FetchError(f"{type(self).__name__} cannot click {selector!r}")

    def scroll_to_end(self, max_rounds: int = 3, pause_s: float = 2.0) -> str:
        """Scroll until the page stops growing; return the final HTML."""
        raise FetchError(f"{type(self).__name__} cannot scroll")

    def close(self) -> None:
        pass


class HttpFetcher(PageFetcher):
    """Plain GET fetcher with exponential backoff on HTTP 429."""

    def __init__(
        self,
        timeout_s: float = 20.0,
        max_retries: int = 3,
        backoff_s: float = 2.0,
        user_agent: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._max_retries = max_retries
        self._backoff_s = backoff_s
        headers = {"User-Agent": user_agent} if user_agent else None
        self._client = client or httpx.Client(timeout=timeout_s, follow_redirects=True, headers=headers)

    def get(self, url: str, wait_for: Optional[str] = None) -> str:
        retries = 0
        while True:
            try:
                resp = self._client.get(url)
                resp.raise_for_status()
                return resp.text
            except httpx.HTTPStatusError as exc:
                if exc.response.status_code == 429 and retries < self._max_retries:
                    sleep_s = self._backoff_s * (2**retries)
                    logger.info("Rate limited by %s; retrying in %.1fs", url, sleep_s)
                    time.sleep(sleep_s)
                    retries += 1
                    continue
                raise FetchError(f"GET {url} failed with HTTP {exc.response.status_code}") from exc
            except httpx.HTTPError as exc:
                raise FetchError(f"GET {url} failed: {exc}") from exc

    def close(self) -> None:
        self._client.close()


class BrowserFetcher(PageFetcher):
    """Headless Chromium via Playwright's sync API, started on first use."""

    def __init__(
        self,
        headless: bool = True,
        nav_timeout_s: float = 60.0,
        wait_timeout_s: float = 10.0,
        wait_until: str = "networkidle",
        user_agent: Optional[str] = None,
        block_resources: bool = False,
    ) -> None:
        self._headless = headless
        self._nav_timeout_ms = nav_timeout_s * 1000
        self._wait_timeout_ms = wait_timeout_s * 1000
        self._wait_until = wait_until
        self._user_agent = user_agent
        self._block_resources = block_resources
        self._playwright = None
        self._browser = None
        self._context = None
        self._page = None
        self._detail_page = None
        self._errors: tuple = (Exception,)

    def _start(self) -> None:
        if self._page is not None:
            return
        try:
            from playwright.sync_api import Error as PlaywrightError
            from playwright.sync_api import sync_playwright
        except ImportError as exc:
            raise FetchError("Playwright is not installed; use FETCH_MODE=http or install playwright") from exc

        self._errors = (PlaywrightError,)
        try:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(
                headless=self._headless,
                args=["--no-sandbox", "--disable-setuid-sandbox", "--disable-dev-shm-usage"],
            )
            self._context = self._browser.new_context(
                viewport={"width": 1920, "height": 1080},
                user_agent=self._user_agent,
            )
            self._context.set_default_navigation_timeout(self._nav_timeout_ms)
            if self._block_resources:
                self._context.route("**/*", self._route)
            self._page = self._context.new_page()
        except PlaywrightError as exc:
            self.close()
            raise FetchError(f"Could not start the browser: {exc}") from exc

    @staticmethod
    def _route(route) -> None:
        if route.request.resource_type in BLOCKED_RESOURCE_TYPES:
            route.abort()
        else:
            route.continue_()

    def _wait_for(self, page, selector: Optional[str]) -> None:
        if not selector:
            return
        try:
            page.wait_for_selector(selector, timeout=self._wait_timeout_ms)
        except self._errors:
            # Empty listings never render the selector; the caller decides.
            logger.debug("Selector %s did not appear on %s", selector, page.url)

    def _goto(self, page, url: str, wait_for: Optional[str]) -> str:
        try:
            page.goto(url, wait_until=self._wait_until)
            self._wait_for(page, wait_for)
            return page.content()
        except self._errors as exc:
            raise FetchError(f"Navigation to {url} failed: {exc}") from exc

    def get(self, url: str, wait_for: Optional[str] = None) -> str:
        self._start()
        return self._goto(self._page, url, wait_for)

    def get_detail(self, url: str, wait_for: Optional[str] = None) -> str:
        self._start()
        if self._detail_page is None:
            self._detail_page = self._context.new_page()
        return self._goto(self._detail_page, url, wait_for)

    def click(self, selector: str, wait_for: Optional[str] = None) -> Optional[str]:
        self._start()
        try:
            element = self._page.query_selector(selector)
            if element is None or element.get_attribute("disabled") is not None:
                return None
            element.click()
            self._page.wait_for_load_state(self._wait_until)
            self._wait_for(self._page, wait_for)
            return self._page.content()
        except self._errors as exc:
            raise FetchError(f"Clicking {selector} failed: {exc}") from exc

    def scroll_to_end(self, max_rounds: int = 3, pause_s: float = 2.0) -> str:
        self._start()
        try:
            for _ in range(max_rounds):
                height = self._page.evaluate("document.documentElement.scrollHeight")
                self._page.evaluate("window.scrollTo(0, document.documentElement.scrollHeight)")
                self._page.wait_for_timeout(pause_s * 1000)
                if self._page.evaluate("document.documentElement.scrollHeight") == height:
                    break
            return self._page.content()
        except self._errors as exc:
            raise FetchError(f"Scrolling {self._page.url} failed: {exc}") from exc

    def close(self) -> None:
        if self._context is not None:
            self._context.close()
        if self._browser is not None:
            self._browser.close()
        if self._playwright is not None:
            self._playwright.stop()
        self._playwright = self._browser = self._context = None
        self._page = self._detail_page = None
