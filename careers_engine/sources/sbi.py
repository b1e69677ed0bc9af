"""SBI careers connector.

Each results page loads more cards as it is scrolled, so pages are scrolled
to the end before extraction. Cards repeat across pages; the scrape loop's
job-id de-duplication drops them. SBI's CSV has no page column.
"""

from __future__ import annotations

from typing import List

from ..csv_io import DEFAULT_COLUMNS
from ..fetchers import PageFetcher
from ..models import JobRecord
from ..normalize import make_soup, split_title_function, strip_suffixes, text_of
from ..pagination import PageNavigator, ScrollNavigator
from .base import CareerSite

END_MARKERS = (".no-results-found", ".end-of-jobs-message")


class SBISite(CareerSite):
    name = "SBI"
    output_name = "SBI"
    slug = "sbi"
    columns = [c for c in DEFAULT_COLUMNS if c[0] != "page"]
    listing_selector = ".job-list-item"
    interactive = True

    scroll_rounds = 3
    scroll_pause_s = 2.0

    def page_url(self, base_url: str, page: int) -> str:
        return f"{base_url}?page={page}"

    def navigator(self, fetcher: PageFetcher, base_url: str) -> PageNavigator:
        return ScrollNavigator(
            fetcher,
            lambda page: self.page_url(base_url, page),
            wait_for=self.listing_selector,
            max_rounds=self.scroll_rounds,
            pause_s=self.scroll_pause_s,
        )

    def parse_listing(self, html: str, page: int) -> List[JobRecord]:
        out: List[JobRecord] = []
        for card in make_soup(html).select(".job-list-item"):
            title, function = split_title_function(text_of(card, ".job-tile__title"))

            posted_on = ""
            label = card.select_one(".job-list-item__job-info-label--posting-date")
            if label is not None and label.parent is not None:
                posted_on = text_of(label.parent, ".job-list-item__job-info-value")

            link = card.select_one(".job-list-item__link")
            out.append(
                JobRecord(
                    company=self.name,
                    job_id=(link.get("aria-labelledby") or "") if link else "",
                    title=title,
                    function=function,
                    location=strip_suffixes(text_of(card, '[data-bind="html: primaryLocation"]'), [", India"]),
                    description=text_of(card, ".job-list-item__description"),
                    posted_on=posted_on,
                    page=page,
                )
            )
        return out

    def is_end_of_results(self, html: str) -> bool:
        soup = make_soup(html)
        return any(soup.select_one(sel) is not None for sel in END_MARKERS)
