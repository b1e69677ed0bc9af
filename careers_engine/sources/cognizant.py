"""Cognizant careers connector.

Listing cards give title, location, function and the job id; every card is
then opened for its description and posting date.
"""

from __future__ import annotations

from typing import List

from ..models import JobRecord
from ..normalize import collapse_ws, make_soup
from .base import CareerSite

LISTING_QUERY = "location=India&radius=100&cname=India&ccode=IN&pagesize=10#results"


class CognizantSite(CareerSite):
    """Fetch Cognizant job cards and their detail pages."""

    name = "Cognizant"
    output_name = "Cognizant"
    slug = "cognizant"
    listing_selector = ".card.card-job"
    detail_selector = ".cms-content"
    detail_delay_s = 2.0
    fetches_details = True
    detail_placeholder = "Error fetching details"

    def page_url(self, base_url: str, page: int) -> str:
        return f"{base_url.rstrip('/')}/?page={page}&{LISTING_QUERY}"

    def parse_listing(self, html: str, page: int) -> List[JobRecord]:
        out: List[JobRecord] = []
        for card in make_soup(html).select(".card.card-job"):
            link = card.select_one(".card-title a")
            meta = card.select(".job-meta .list-inline-item")
            actions = card.select_one(".card-job-actions")
            out.append(
                JobRecord(
                    company=self.name,
                    title=link.get_text().strip() if link else "",
                    location=meta[0].get_text().strip() if len(meta) > 0 else "",
                    function=meta[1].get_text().strip() if len(meta) > 1 else "",
                    job_id=(actions.get("data-id") or "") if actions else "",
                    page=page,
                    detail_url=link.get("href") if link else None,
                )
            )
        return out

    def parse_detail(self, html: str, record: JobRecord) -> None:
        soup = make_soup(html)
        content = soup.select_one(".cms-content")
        description = collapse_ws(content.get_text(" ")) if content else ""

        posted_on = ""
        for label in soup.select("dt"):
            if "date" in label.get_text().strip().lower():
                value = label.find_next_sibling()
                posted_on = value.get_text().strip() if value else ""
                break

        record.description = description or "No description available"
        record.posted_on = posted_on

    def detail_failed(self, record: JobRecord) -> None:
        record.description = self.detail_placeholder
        record.posted_on = ""
