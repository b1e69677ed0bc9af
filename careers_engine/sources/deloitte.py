"""Deloitte careers connector (row-offset job board)."""

from __future__ import annotations

from typing import List

from ..models import JobRecord
from ..normalize import make_soup, text_of
from .base import CareerSite, StartRowPaging


class DeloitteSite(StartRowPaging, CareerSite):
    name = "Deloitte"
    output_name = "Deloitte"
    slug = "deloitte"
    listing_selector = "tr.data-row"

    def parse_listing(self, html: str, page: int) -> List[JobRecord]:
        out: List[JobRecord] = []
        for row in make_soup(html).select("tr.data-row"):
            link = row.select_one(".jobTitle-link")
            href = (link.get("href") or "") if link else ""
            segments = [s for s in href.split("/") if s]
            out.append(
                JobRecord(
                    company=self.name,
                    job_id=segments[-1] if segments else "",
                    location=text_of(row, ".jobLocation"),
                    title=link.get_text().strip() if link else "",
                    description=text_of(row, ".jobDescription"),
                    posted_on=text_of(row, ".jobDate"),
                    page=page,
                )
            )
        return out
