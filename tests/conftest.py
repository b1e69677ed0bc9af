import os
import sys
from typing import Dict, List, Optional

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from careers_engine.config import Settings  # noqa: E402
from careers_engine.errors import FetchError  # noqa: E402
from careers_engine.fetchers import PageFetcher  # noqa: E402


class FakeFetcher(PageFetcher):
    """Serves canned HTML by URL; click and scroll walk through ``click_pages``."""

    def __init__(
        self,
        pages: Optional[Dict[str, str]] = None,
        details: Optional[Dict[str, str]] = None,
        click_pages: Optional[List[str]] = None,
        failing: Optional[set] = None,
    ) -> None:
        self.pages = pages or {}
        self.details = details or {}
        self.click_pages = list(click_pages or [])
        self.failing = failing or set()
        self.requested: List[str] = []
        self.detail_requests: List[str] = []
        self.clicks = 0
        self.scrolls = 0
        self.closed = False
        self._current = ""

    def get(self, url, wait_for=None):
        self.requested.append(url)
        if url in self.failing or url not in self.pages:
            raise FetchError(f"no page for {url}")
        self._current = self.pages[url]
        return self._current

    def get_detail(self, url, wait_for=None):
        self.detail_requests.append(url)
        if url in self.failing or url not in self.details:
            raise FetchError(f"no detail page for {url}")
        return self.details[url]

    def click(self, selector, wait_for=None):
        self.clicks += 1
        if not self.click_pages:
            return None
        self._current = self.click_pages.pop(0)
        return self._current

    def scroll_to_end(self, max_rounds=3, pause_s=2.0):
        self.scrolls += 1
        return self._current

    def close(self):
        self.closed = True


@pytest.fixture()
def fake_fetcher_cls():
    return FakeFetcher


@pytest.fixture()
def settings(tmp_path):
    input_csv = tmp_path / "input.csv"
    input_csv.write_text(
        "company,base_url,start_page,end_page\n"
        "Deloitte,https://jobs.example.com/search/?q=,1,3\n"
        "Accenture,https://www.accenture.com/in-en/careers/jobsearch?jk=&pg=1,1,4\n"
        "Acme,https://acme.example.com/jobs,,\n",
        encoding="utf-8",
    )
    return Settings(input_csv=input_csv, output_dir=tmp_path / "output", delay_scale=0.0)
