"""EXL careers connector.

EXL paginates client-side: the first page reports the total number of
openings (45 per page) and later pages are reached through the pagination
control. Each job's detail page adds an extra "Detailed Description" column.
"""

from __future__ import annotations

import math
from typing import List, Optional

from ..csv_io import DEFAULT_COLUMNS
from ..fetchers import PageFetcher
from ..models import JobRecord
from ..normalize import make_soup, parse_int, text_of
from ..pagination import ClickNavigator, PageNavigator
from ..utils import uniq_preserve_order
from .base import CareerSite

JOBS_PER_PAGE = 45

EXL_COLUMNS = [c for c in DEFAULT_COLUMNS if c[0] not in ("postedOn", "page")] + [
    ("detailedDescription", "Detailed Description"),
    ("postedOn", "Posted On"),
    ("page", "Page Number"),
]


def _last_segment(text: str) -> str:
    return text.split(">")[-1].strip()


class EXLSite(CareerSite):
    name = "EXL"
    output_name = "EXL"
    slug = "exl"
    columns = EXL_COLUMNS
    listing_selector = ".card-block"
    detail_selector = ".panel-body"
    detail_delay_s = 1.0
    interactive = True
    fetches_details = True
    detail_placeholder = "Failed to fetch detailed description"

    next_selector = ".pagination li.active + li a"

    def navigator(self, fetcher: PageFetcher, base_url: str) -> PageNavigator:
        return ClickNavigator(fetcher, base_url, self.next_selector, wait_for=self.listing_selector)

    def total_pages(self, html: str) -> Optional[int]:
        total_jobs = parse_int(text_of(make_soup(html), ".totale-num"))
        if not total_jobs:
            return None
        return math.ceil(total_jobs / JOBS_PER_PAGE)

    def parse_listing(self, html: str, page: int) -> List[JobRecord]:
        out: List[JobRecord] = []
        for card in make_soup(html).select(".card-block"):
            link = card.select_one(".title_block .link")
            if link is None:
                continue

            function_text = text_of(card, ".listing-inline li:first-child")
            location_text = text_of(card, ".listing-inline li:nth-child(2)")
            location = ", ".join(
                part.strip() for part in location_text.split(">") if part.strip() and part.strip() != "India"
            )
            experience = text_of(card, ".text-cell.font-bold")
            skills = ", ".join(uniq_preserve_order(tag.get_text().strip() for tag in card.select(".tag-job")))

            out.append(
                JobRecord(
                    company=self.name,
                    job_id=text_of(card, ".job-code"),
                    function=function_text,
                    location=location,
                    title=link.get_text().strip(),
                    description=f"{_last_segment(function_text)} | Experience: {experience} | Skills: {skills}",
                    posted_on=text_of(card, ".last-child .link2"),
                    page=page,
                    detail_url=link.get("href") or None,
                )
            )
        return out

    def parse_detail(self, html: str, record: JobRecord) -> None:
        body = make_soup(html).select_one(".panel-body")
        paragraphs = [p.get_text().strip() for p in body.select("p")] if body else []
        record.detailed_description = "\n".join(p for p in paragraphs if p)

    def detail_failed(self, record: JobRecord) -> None:
        record.detailed_description = self.detail_placeholder
