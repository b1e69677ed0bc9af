"""Marriott careers connector.

Results name the owning brand, which is written as the company. Marriott
shows no posting date on the listing, so the scrape date is recorded.
"""

from __future__ import annotations

from typing import List

from ..models import JobRecord
from ..normalize import make_soup, text_of
from ..utils import today_iso
from .base import CareerSite


class MarriottSite(CareerSite):
    name = "Marriott"
    output_name = "Marriott"
    slug = "marriott"
    listing_selector = ".results-list__item"
    detail_selector = ".job-description"
    fetches_details = True

    def page_url(self, base_url: str, page: int) -> str:
        return f"{base_url}&page={page}"

    def parse_listing(self, html: str, page: int) -> List[JobRecord]:
        out: List[JobRecord] = []
        scraped_on = today_iso()
        for item in make_soup(html).select(".results-list__item"):
            street = text_of(item, ".results-list__item-street--label")
            hotel = text_of(item, ".results-list__item-location--label")
            link = item.select_one("a.results-list__item-title") or item.select_one(".results-list__item-title a")
            out.append(
                JobRecord(
                    company=text_of(item, ".results-list__item-ownership--label") or self.name,
                    job_id=text_of(item, ".reference"),
                    location=f"{street} - {hotel}" if street and hotel else "",
                    title=text_of(item, ".results-list__item-title span"),
                    posted_on=scraped_on,
                    page=page,
                    detail_url=link.get("href") if link else None,
                )
            )
        return out

    def parse_detail(self, html: str, record: JobRecord) -> None:
        record.description = text_of(make_soup(html), ".job-description") or "Description not available"
