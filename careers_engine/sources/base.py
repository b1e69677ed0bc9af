"""Base class for career-site adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..csv_io import DEFAULT_COLUMNS, Column
from ..fetchers import PageFetcher
from ..models import JobRecord
from ..pagination import PageNavigator, UrlNavigator
from ..utils import company_key


def site_key(name: str) -> str:
    """Registry key of a company name."""
    return company_key(name)


class CareerSite(ABC):
    """Adapter for one company's career site.

    Subclasses map the site's markup onto `JobRecord` and describe how its
    listing pages are reached; the shared scrape loop does everything else.
    """

    name: str
    output_name: str
    slug: str
    columns: Sequence[Column] = DEFAULT_COLUMNS

    listing_selector: Optional[str] = None
    detail_selector: Optional[str] = None

    page_delay_s: float = 3.0
    detail_delay_s: float = 0.0

    dedupe: bool = True
    # Click/scroll navigation needs a real browser even in http fetch mode.
    interactive: bool = False
    block_resources: bool = False

    fetches_details: bool = False
    detail_placeholder: str = "Error fetching description"

    @classmethod
    def key(cls) -> str:
        return site_key(cls.name)

    def prepare_base_url(self, base_url: str, end_page: Optional[int]) -> str:
        """Rewrite the configured base URL before use (identity by default)."""
        return base_url

    def page_url(self, base_url: str, page: int) -> str:
        """URL of listing page ``page``.

        Only sites using the default `UrlNavigator` (or `ScrollNavigator`) must
        override this; click-navigated sites never build page URLs.
        """
        raise NotImplementedError(f"{type(self).__name__} does not build page URLs")

    def navigator(self, fetcher: PageFetcher, base_url: str) -> PageNavigator:
        return UrlNavigator(fetcher, lambda page: self.page_url(base_url, page), wait_for=self.listing_selector)

    def total_pages(self, html: str) -> Optional[int]:
        """Page count advertised by the first listing page, if the site shows one."""
        return None

    @abstractmethod
    def parse_listing(self, html: str, page: int) -> List[JobRecord]:
        """Extract the job summaries of one listing page."""
        raise NotImplementedError

    def wants_detail(self, record: JobRecord) -> bool:
        return self.fetches_details and bool(record.detail_url)

    def parse_detail(self, html: str, record: JobRecord) -> None:
        """Fill ``record`` in place from its detail page."""

    def detail_failed(self, record: JobRecord) -> None:
        """Fill ``record`` with placeholders after a failed detail fetch."""
        record.description = self.detail_placeholder

    def is_end_of_results(self, html: str) -> bool:
        """True when the page carries the site's 'no more results' marker."""
        return False

    def stop_on_empty(self, page: int, html: str) -> bool:
        return True

    def record_limit(self, start_page: int, end_page: Optional[int]) -> Optional[int]:
        """Maximum records for a run, or None for no limit."""
        return None


class StartRowPaging:
    """Mixin for job boards that page by row offset (``startrow=``)."""

    rows_per_page = 25

    def page_url(self, base_url: str, page: int) -> str:
        return f"{base_url}&startrow={(page - 1) * self.rows_per_page}"
