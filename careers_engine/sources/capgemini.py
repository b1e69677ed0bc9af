"""Capgemini careers connector.

The listing table only carries title, location and business unit; the
description and posting date come from each job's detail page.
"""

from __future__ import annotations

from typing import List, Optional

from ..models import JobRecord
from ..normalize import collapse_ws, make_soup, text_of
from .base import CareerSite

ROW_SELECTOR = ".table-tr.filter-box.tag-active.joblink"
DESCRIPTION_HEADINGS = ("Job Description", "Grade Specific")
JOBS_PER_PAGE = 30


class CapgeminiSite(CareerSite):
    """Fetch Capgemini listings and enrich every row from its detail page."""

    name = "Capgemini"
    output_name = "Capgemini"
    slug = "capgemini"
    listing_selector = ROW_SELECTOR
    detail_selector = ".article-text"
    detail_delay_s = 2.0
    fetches_details = True
    detail_placeholder = "Failed to fetch description"

    def page_url(self, base_url: str, page: int) -> str:
        return f"{base_url}&page={page}"

    def record_limit(self, start_page: int, end_page: Optional[int]) -> Optional[int]:
        if end_page is None:
            return None
        return JOBS_PER_PAGE * (end_page - start_page + 1)

    def parse_listing(self, html: str, page: int) -> List[JobRecord]:
        out: List[JobRecord] = []
        for row in make_soup(html).select(ROW_SELECTOR):
            href = row.get("href") or ""
            parts = href.split("/")
            job_id = parts[2].split("+")[0] if len(parts) > 2 else ""

            function = ""
            for cell in row.select("div.table-td div"):
                label = cell.find_previous_sibling()
                if label is not None and "Business Unit" in label.get_text():
                    function = cell.get_text().strip()
                    break

            out.append(
                JobRecord(
                    company=self.name,
                    job_id=job_id,
                    function=function,
                    location=text_of(row, "div.table-td:nth-child(3) > div"),
                    title=text_of(row, "div.table-td:nth-child(1) > div"),
                    page=page,
                    detail_url=href or None,
                )
            )
        return out

    def parse_detail(self, html: str, record: JobRecord) -> None:
        soup = make_soup(html)
        sections: List[str] = []
        for heading in soup.select(".article-text h2"):
            if not any(h in heading.get_text() for h in DESCRIPTION_HEADINGS):
                continue
            parts: List[str] = []
            for sib in heading.find_next_siblings():
                if sib.name == "h2":
                    break
                parts.append(sib.get_text(" "))
            body = collapse_ws(" ".join(parts))
            if body:
                sections.append(body)

        posted_on = ""
        for box in soup.select(".job-meta-box-detail"):
            if text_of(box, ".label") == "Posted on":
                posted_on = text_of(box, ".value")
                break

        record.description = "\n\n".join(sections) or "No description available"
        record.posted_on = posted_on
