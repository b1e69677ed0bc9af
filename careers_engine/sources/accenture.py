"""Accenture careers connector.

Listing pages are addressed by a ``pg=`` query parameter. The teaser grid
mixes job cards with marketing cards, which are filtered out by title.
"""

from __future__ import annotations

import re
from typing import List, Optional

from ..models import JobRecord
from ..normalize import attr_of, collapse_ws, make_soup, text_of
from .base import CareerSite

PG_RE = re.compile(r"pg=\d+")
PG_PARAM_RE = re.compile(r"&pg=\d+")

EXCLUDED_TITLES = {"Join Our Team", "Keep Up to Date", "Job Alert Emails"}


class AccentureSite(CareerSite):
    """Fetch Accenture job cards page by page."""

    name = "Accenture"
    output_name = "Accenture"
    slug = "accenture"
    listing_selector = ".cmp-teaser.card"

    def prepare_base_url(self, base_url: str, end_page: Optional[int]) -> str:
        return PG_RE.sub(f"pg={end_page or 1}", base_url)

    def page_url(self, base_url: str, page: int) -> str:
        return f"{PG_PARAM_RE.sub('', base_url)}&pg={page}"

    def parse_listing(self, html: str, page: int) -> List[JobRecord]:
        out: List[JobRecord] = []
        for card in make_soup(html).select(".cmp-teaser.card"):
            title = text_of(card, ".cmp-teaser__title")
            if title in EXCLUDED_TITLES:
                continue
            out.append(
                JobRecord(
                    company=self.name,
                    job_id=attr_of(card, ".cmp-teaser__save-job-card", "data-job-id"),
                    function=text_of(card, ".cmp-teaser__job-listing-semibold.skill"),
                    location=text_of(card, ".cmp-teaser-city"),
                    title=title,
                    description=collapse_ws(text_of(card, ".cmp-teaser__job-listing .description")),
                    posted_on=text_of(card, ".cmp-teaser__job-listing-posted-date"),
                    page=page,
                )
            )
        return out
