"""Amazon Jobs connector.

The search results are a client-rendered list paged with a "next" button, so
this site always runs in the browser. The page count is read from the
pagination nav on the first page.
"""

from __future__ import annotations

from typing import List, Optional

from ..fetchers import PageFetcher
from ..models import JobRecord
from ..normalize import first_part, make_soup, parse_int, text_of
from ..pagination import ClickNavigator, PageNavigator
from .base import CareerSite

CARD_SELECTOR = 'li div[role="button"]'
META_SELECTOR = ".metadatum-module_text__ncKFr"


class AmazonSite(CareerSite):
    """Fetch Amazon job cards by clicking through the result pages."""

    name = "Amazon"
    output_name = "Amazon"
    slug = "amazon"
    listing_selector = CARD_SELECTOR
    page_delay_s = 2.0
    interactive = True

    next_selector = 'button[data-test-id="next-page"]'

    def navigator(self, fetcher: PageFetcher, base_url: str) -> PageNavigator:
        return ClickNavigator(fetcher, base_url, self.next_selector, wait_for=self.listing_selector)

    def total_pages(self, html: str) -> Optional[int]:
        soup = make_soup(html)
        nav = soup.select_one('nav[aria-label="Page selection"]')
        if nav is None:
            return 1
        numbers = [
            parse_int(btn.get("data-test-id"))
            for btn in nav.select("button[data-test-id]")
            if btn.get("data-test-id") != "next-page"
        ]
        numbers = [n for n in numbers if n is not None]
        return max(numbers) if numbers else 1

    def parse_listing(self, html: str, page: int) -> List[JobRecord]:
        out: List[JobRecord] = []
        for card in make_soup(html).select(CARD_SELECTOR):
            link = card.select_one("h3 a")
            if link is None:
                continue
            href = link.get("href") or ""
            job_id = href.split("/jobs/")[1].split("/")[0] if "/jobs/" in href else ""
            title = link.get_text().strip()
            if not (job_id and title):
                continue

            meta = card.select(META_SELECTOR)
            location = first_part(meta[0].get_text()) if meta else ""
            posted_on = meta[1].get_text().replace("Updated:", "").strip() if len(meta) > 1 else ""
            description = text_of(card, ".job-card-module_content__8sS0J")

            out.append(
                JobRecord(
                    company=self.name,
                    job_id=job_id,
                    function="FireTV" if "FireTV" in description else "Program Management",
                    location=location,
                    title=title,
                    description=description,
                    posted_on=posted_on,
                    page=page,
                )
            )
        return out
