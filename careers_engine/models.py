"""Data models for the careers engine.

Every site adapter maps its own markup onto the same flat `JobRecord`, so the
CSV writer and the scrape loop never need to know which company they serve.

This file uses Pydantic v2.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator


class StopReason(str, Enum):
    """Why a company's pagination loop ended."""

    END_PAGE = "end_page"
    TOTAL_PAGES = "total_pages"
    EMPTY_PAGE = "empty_page"
    ALL_DUPLICATES = "all_duplicates"
    NO_RESULTS = "no_results"
    NAVIGATION_FAILED = "navigation_failed"
    RECORD_LIMIT = "record_limit"


class JobRecord(BaseModel):
    """A normalized job record as written to a company CSV.

    Values are plain strings so a missing field is written as an empty cell,
    never as ``None``. ``detail_url`` is only carried to the enrichment step.
    """

    company: str
    job_id: str = ""
    title: str = ""
    function: str = ""
    location: str = ""
    description: str = ""
    detailed_description: str = ""
    posted_on: str = ""
    page: Optional[int] = None
    sno: Optional[int] = Field(default=None, description="Sequence number assigned at write time.")
    detail_url: Optional[str] = Field(default=None, exclude=True)

    def csv_values(self) -> dict:
        """Return the record keyed by the CSV field ids used in column specs."""
        return {
            "sno": self.sno,
            "company": self.company,
            "jobId": self.job_id,
            "function": self.function,
            "location": self.location,
            "title": self.title,
            "description": self.description,
            "detailedDescription": self.detailed_description,
            "postedOn": self.posted_on,
            "page": self.page,
        }


class CompanyInput(BaseModel):
    """One row of the company input CSV."""

    company: str
    base_url: str
    start_page: int = 1
    end_page: Optional[int] = None

    @field_validator("company", "base_url")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = (value or "").strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("start_page", mode="before")
    @classmethod
    def _default_start(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return 1
        return value

    @field_validator("end_page", mode="before")
    @classmethod
    def _optional_end(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return value

    @property
    def end_page_label(self) -> Union[int, str]:
        return self.end_page if self.end_page is not None else "auto"


class ScrapeResult(BaseModel):
    """Summary of one company scrape run."""

    company: str
    run_id: str
    start_page: int
    end_page: Optional[int] = None
    pages_scraped: int = 0
    jobs_written: int = 0
    duplicates_skipped: int = 0
    detail_failures: int = 0
    stop_reason: Optional[StopReason] = None
    output_file: str
    started_at: datetime
    finished_at: Optional[datetime] = None
