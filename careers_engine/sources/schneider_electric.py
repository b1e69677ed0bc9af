"""Schneider Electric careers connector.

The base URL already contains a ``page=`` parameter which is rewritten for
every page. The first page can render empty while the listing warms up, so an
empty first page only ends the run when the "no results" message is shown.
"""

from __future__ import annotations

import re
from typing import List

from ..models import JobRecord
from ..normalize import make_soup, text_of
from ..utils import stable_id
from .base import CareerSite

PAGE_RE = re.compile(r"page=\d+")


class SchneiderElectricSite(CareerSite):
    name = "Schneider Electric"
    output_name = "SchneiderElectric"
    slug = "schneider-electric"
    listing_selector = ".jobs-list-item"
    page_delay_s = 5.0

    def page_url(self, base_url: str, page: int) -> str:
        return PAGE_RE.sub(f"page={page}", base_url)

    def parse_listing(self, html: str, page: int) -> List[JobRecord]:
        out: List[JobRecord] = []
        for item in make_soup(html).select(".jobs-list-item"):
            title = text_of(item, ".job-title")
            location = text_of(item, ".job-location")
            function = text_of(item, ".job-function")
            out.append(
                JobRecord(
                    company=self.name,
                    job_id=text_of(item, ".job-id") or f"SE-{stable_id(title, location, function)}",
                    function=function,
                    location=location,
                    title=title,
                    description=text_of(item, ".job-description") or function,
                    posted_on=text_of(item, ".job-posted-date"),
                    page=page,
                )
            )
        return out

    def is_end_of_results(self, html: str) -> bool:
        return make_soup(html).select_one(".no-results-message") is not None

    def stop_on_empty(self, page: int, html: str) -> bool:
        return page > 1
