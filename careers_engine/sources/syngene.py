"""Syngene careers connector.

Same row-offset job board as Deloitte; descriptions come from the detail
page and are flattened with bullets preserved.
"""

from __future__ import annotations

from typing import List

from ..models import JobRecord
from ..normalize import formatted_text, make_soup, strip_suffixes, text_of
from .base import CareerSite, StartRowPaging


class SyngeneSite(StartRowPaging, CareerSite):
    name = "Syngene"
    output_name = "Syngene"
    slug = "syngene"
    listing_selector = ".data-row"
    detail_selector = ".jobdescription"
    detail_delay_s = 2.0
    fetches_details = True

    def parse_listing(self, html: str, page: int) -> List[JobRecord]:
        out: List[JobRecord] = []
        for row in make_soup(html).select(".data-row"):
            link = row.select_one(".jobTitle-link")
            out.append(
                JobRecord(
                    company=self.name,
                    job_id=text_of(row, ".jobFacility"),
                    function=text_of(row, ".jobDepartment"),
                    location=strip_suffixes(text_of(row, ".jobLocation"), [", India"]),
                    title=text_of(row, ".jobTitle-link"),
                    posted_on=text_of(row, ".jobDate"),
                    page=page,
                    detail_url=link.get("href") if link else None,
                )
            )
        return out

    def parse_detail(self, html: str, record: JobRecord) -> None:
        record.description = formatted_text(make_soup(html).select_one(".jobdescription"))
