"""Scrape runs.

`scrape_company` is the single control loop behind every site: traverse
listing pages, extract records, drop job ids already seen in this run,
enrich records from their detail pages, append them to the company CSV and
move on until the paginator or the page content says to stop.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Callable, List, Optional, Set, Tuple

from .config import Settings
from .csv_io import JobCsvWriter, find_company, read_companies
from .errors import FetchError, ScrapeError, UnknownCompanyError
from .fetchers import BrowserFetcher, HttpFetcher, PageFetcher
from .logging_setup import log_event
from .models import CompanyInput, JobRecord, ScrapeResult, StopReason
from .pagination import Paginator
from .sources import CareerSite, get_site
from .utils import absolute_url, new_run_id

logger = logging.getLogger("careers-engine")

# Failures of a single job's detail page; the record keeps a placeholder.
DETAIL_ERRORS = (FetchError, ValueError, AttributeError, IndexError, KeyError)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def drop_seen(records: List[JobRecord], seen: Set[str]) -> List[JobRecord]:
    """Return records whose job id was not seen yet, recording the new ids.

    Records without a job id cannot be compared and are always kept.
    """
    unique: List[JobRecord] = []
    for record in records:
        if record.job_id:
            if record.job_id in seen:
                continue
            seen.add(record.job_id)
        unique.append(record)
    return unique


def _enrich(
    site: CareerSite,
    fetcher: PageFetcher,
    records: List[JobRecord],
    result: ScrapeResult,
    delay_s: float,
    sleep: Callable[[float], None],
) -> None:
    for record in records:
        if not site.wants_detail(record):
            continue
        try:
            html = fetcher.get_detail(record.detail_url, wait_for=site.detail_selector)
            site.parse_detail(html, record)
        except DETAIL_ERRORS as exc:
            logger.warning("Detail page failed for %s job %s: %s", site.name, record.job_id or record.title, exc)
            site.detail_failed(record)
            result.detail_failures += 1
        if delay_s > 0:
            sleep(delay_s)


def scrape_company(
    site: CareerSite,
    company: CompanyInput,
    fetcher: PageFetcher,
    writer: JobCsvWriter,
    run_id: Optional[str] = None,
    delay_scale: float = 1.0,
    sleep: Callable[[float], None] = time.sleep,
) -> ScrapeResult:
    """Run one company's scrape and return its summary.

    A listing page that cannot be fetched raises `ScrapeError`; rows written
    before it stay in the CSV.
    """
    run_id = run_id or new_run_id()
    base_url = site.prepare_base_url(company.base_url, company.end_page)
    result = ScrapeResult(
        company=site.output_name,
        run_id=run_id,
        start_page=company.start_page,
        end_page=company.end_page,
        output_file=str(writer.path),
        started_at=_now(),
    )
    log_event(
        "START",
        company=site.name,
        run_id=run_id,
        start_page=company.start_page,
        end_page=company.end_page_label,
    )

    paginator = Paginator(
        site.navigator(fetcher, base_url),
        start_page=company.start_page,
        end_page=company.end_page,
        delay_s=site.page_delay_s * delay_scale,
        total_pages=site.total_pages,
        sleep=sleep,
    )
    limit = site.record_limit(company.start_page, company.end_page)
    seen: Set[str] = set()
    writer.open()

    try:
        for listing in paginator:
            records = site.parse_listing(listing.html, listing.number)
            log_event("PAGE", company=site.name, run_id=run_id, page=listing.number, items_found=len(records))

            if not records:
                if site.is_end_of_results(listing.html):
                    paginator.stop(StopReason.NO_RESULTS)
                elif site.stop_on_empty(listing.number, listing.html):
                    logger.info("No jobs found on %s page %s. Stopping.", site.name, listing.number)
                    paginator.stop(StopReason.EMPTY_PAGE)
                continue

            if site.dedupe:
                unique = drop_seen(records, seen)
                result.duplicates_skipped += len(records) - len(unique)
                if not unique:
                    logger.info("Every job on %s page %s was already seen. Stopping.", site.name, listing.number)
                    paginator.stop(StopReason.ALL_DUPLICATES)
                    continue
                records = unique

            for record in records:
                record.detail_url = absolute_url(record.detail_url, listing.url)
            _enrich(site, fetcher, records, result, site.detail_delay_s * delay_scale, sleep)

            result.jobs_written += writer.write(records)
            result.pages_scraped += 1
            log_event("WRITE", company=site.name, run_id=run_id, page=listing.number, rows=len(records), total=writer.count)

            if site.is_end_of_results(listing.html):
                paginator.stop(StopReason.NO_RESULTS)
            elif limit is not None and result.jobs_written >= limit:
                paginator.stop(StopReason.RECORD_LIMIT)
    except FetchError as exc:
        page_no = paginator.current_page
        result.finished_at = _now()
        log_event("END", company=site.name, run_id=run_id, success=False, page=page_no, error=str(exc))
        raise ScrapeError(
            f"{site.name} page {page_no} failed: {exc}", page=page_no, jobs_written=result.jobs_written
        ) from exc

    result.stop_reason = paginator.stop_reason
    result.finished_at = _now()
    log_event(
        "END",
        company=site.name,
        run_id=run_id,
        success=True,
        jobs=result.jobs_written,
        pages=result.pages_scraped,
        stop_reason=result.stop_reason,
    )
    return result


def make_fetcher(settings: Settings, site: CareerSite) -> PageFetcher:
    """Pick the fetcher for ``site``; scrolled or clicked listings always get a browser."""
    if settings.fetch_mode == "http" and not site.interactive:
        return HttpFetcher(
            timeout_s=settings.http_timeout_s,
            max_retries=settings.http_max_retries,
            backoff_s=settings.http_backoff_s,
            user_agent=settings.user_agent,
        )
    if settings.fetch_mode == "http":
        logger.info("%s needs page interaction; using the browser fetcher", site.name)
    return BrowserFetcher(
        headless=settings.headless,
        nav_timeout_s=settings.nav_timeout_s,
        user_agent=settings.user_agent,
        block_resources=site.block_resources,
    )


def resolve_company(name: str, settings: Settings) -> Tuple[CompanyInput, CareerSite]:
    """Find the input row and the adapter for ``name``."""
    company = find_company(read_companies(settings.input_csv), name)
    if company is None:
        raise UnknownCompanyError(f"Company {name} not found in input CSV.")
    return company, get_site(company.company)


def output_path(settings: Settings, site: CareerSite):
    return settings.output_dir / f"{site.output_name}.csv"


def run_company(
    name: str,
    settings: Settings,
    run_id: Optional[str] = None,
    fetcher: Optional[PageFetcher] = None,
    sleep: Callable[[float], None] = time.sleep,
    start_page: Optional[int] = None,
    end_page: Optional[int] = None,
) -> ScrapeResult:
    """Resolve ``name``, open a fetcher and scrape the company into its CSV.

    ``start_page``/``end_page`` override the values from the input CSV.
    """
    company, site = resolve_company(name, settings)
    update = {}
    if start_page is not None:
        update["start_page"] = start_page
    if end_page is not None:
        update["end_page"] = end_page
    if update:
        company = company.model_copy(update=update)
    logger.info(
        "Processing %s from page %s to %s", company.company, company.start_page, company.end_page_label
    )
    writer = JobCsvWriter(output_path(settings, site), site.columns)
    if fetcher is not None:
        return scrape_company(site, company, fetcher, writer, run_id, settings.delay_scale, sleep)
    with make_fetcher(settings, site) as owned:
        return scrape_company(site, company, owned, writer, run_id, settings.delay_scale, sleep)
