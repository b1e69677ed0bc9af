"""IBM careers connector.

Listing cards carry the requisition number, title, function and location;
the description comes from each job's detail page. IBM does not publish a
posting date, so the scrape date is recorded instead.
"""

from __future__ import annotations

import re
from typing import List

from ..models import JobRecord
from ..normalize import formatted_text, make_soup, strip_suffixes, text_of
from ..utils import today_iso
from .base import CareerSite

REQ_RE = re.compile(r"/job/(\d+)/")


class IBMSite(CareerSite):
    name = "IBM"
    output_name = "IBM"
    slug = "ibm"
    listing_selector = ".bx--card__content"
    detail_selector = ".jd-description"
    page_delay_s = 2.0
    detail_delay_s = 0.8
    block_resources = True
    fetches_details = True
    detail_placeholder = "Failed to load description"

    def page_url(self, base_url: str, page: int) -> str:
        return f"{base_url}&p={page}"

    def parse_listing(self, html: str, page: int) -> List[JobRecord]:
        out: List[JobRecord] = []
        scraped_on = today_iso()
        for card in make_soup(html).select(".bx--card-group__cards__col"):
            link = card.select_one("a")
            content = card.select_one(".bx--card__content")
            if link is None or content is None:
                continue
            href = link.get("href") or ""
            match = REQ_RE.search(href)

            # Inner copy is "<professional level><br><location>".
            location = ""
            inner = content.select_one(".ibm--card__copy__inner")
            if inner is not None:
                lines = [s.strip() for s in inner.stripped_strings]
                if len(lines) > 1:
                    location = strip_suffixes(lines[1], [", IN"])

            out.append(
                JobRecord(
                    company=self.name,
                    job_id=f"REQ{match.group(1)}" if match else "",
                    title=text_of(content, ".bx--card__heading"),
                    location=location,
                    function=text_of(content, ".bx--card__eyebrow"),
                    posted_on=scraped_on,
                    page=page,
                    detail_url=href or None,
                )
            )
        return out

    def parse_detail(self, html: str, record: JobRecord) -> None:
        record.description = formatted_text(make_soup(html).select_one(".jd-description"))
