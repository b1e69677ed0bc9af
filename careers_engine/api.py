"""HTTP API.

FastAPI app that triggers company scrape runs and reports their status.
Errors are always answered as JSON: unknown companies with 404, everything
else with 500.
"""

import logging
from typing import Callable, Optional

from fastapi import BackgroundTasks, Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from . import __version__
from .config import Settings
from .csv_io import read_companies
from .engine import output_path, resolve_company, run_company
from .errors import CareersEngineError, UnknownCompanyError
from .models import ScrapeResult
from .runs import RunRegistry
from .sources import SITES, all_sites, site_key
from .utils import new_run_id

logger = logging.getLogger("careers-engine")

Runner = Callable[..., ScrapeResult]

app = FastAPI(title="Careers Engine API", version=__version__)
runs = RunRegistry()


def get_settings() -> Settings:
    return Settings.from_env()


def get_runner() -> Runner:
    return run_company


@app.exception_handler(UnknownCompanyError)
async def _unknown_company(request: Request, exc: UnknownCompanyError):
    return JSONResponse(status_code=404, content={"success": False, "message": str(exc)})


@app.exception_handler(CareersEngineError)
async def _engine_error(request: Request, exc: CareersEngineError):
    logger.error("Request %s failed: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})


@app.exception_handler(Exception)
async def _unexpected_error(request: Request, exc: Exception):
    logger.error("Request %s failed: %s", request.url.path, exc, exc_info=exc)
    return JSONResponse(status_code=500, content={"success": False, "error": str(exc)})


def _execute(run_id: str, company: str, settings: Settings, runner: Runner, raise_errors: bool) -> Optional[ScrapeResult]:
    try:
        result = runner(company, settings, run_id=run_id)
    except CareersEngineError as exc:
        logger.error("Error scraping %s: %s", company, exc)
        runs.fail(run_id, str(exc))
        if raise_errors:
            raise
        return None
    except Exception as exc:
        logger.exception("Unexpected error scraping %s", company)
        runs.fail(run_id, str(exc) or type(exc).__name__)
        if raise_errors:
            raise
        return None
    runs.finish(run_id, result)
    logger.info("Scraping completed for %s", company)
    return result


def _start_scrape(
    name: str,
    settings: Settings,
    runner: Runner,
    background_tasks: Optional[BackgroundTasks],
):
    company, site = resolve_company(name, settings)
    run_id = new_run_id()
    runs.start(run_id, company.company)

    details = {
        "company": company.company,
        "startPage": company.start_page,
        "endPage": company.end_page_label,
        "outputFile": str(output_path(settings, site)),
        "runId": run_id,
    }
    if background_tasks is not None:
        background_tasks.add_task(_execute, run_id, company.company, settings, runner, False)
        return {"success": True, "message": f"Scraping started for {company.company}", "details": details}

    result = _execute(run_id, company.company, settings, runner, True)
    return {
        "success": True,
        "message": f"Scraping completed for {company.company}",
        "details": details,
        "result": result.model_dump(mode="json"),
    }


@app.get("/health")
def health():
    return {"ok": True, "version": __version__}


@app.get("/scrape/{company}")
def scrape(
    company: str,
    background_tasks: BackgroundTasks,
    wait: bool = False,
    settings: Settings = Depends(get_settings),
    runner: Runner = Depends(get_runner),
):
    return _start_scrape(company, settings, runner, None if wait else background_tasks)


@app.get("/companies")
def companies(settings: Settings = Depends(get_settings)):
    out = []
    for row in read_companies(settings.input_csv):
        site_cls = SITES.get(site_key(row.company))
        base_url = site_cls().prepare_base_url(row.base_url, row.end_page) if site_cls else row.base_url
        out.append(
            {
                "name": row.company,
                "baseUrl": base_url,
                "startPage": row.start_page,
                "endPage": row.end_page_label,
                "hasScraper": site_cls is not None,
            }
        )
    return {"success": True, "companies": out}


@app.get("/runs")
def list_runs():
    return {"success": True, "runs": runs.all()}


@app.get("/runs/{run_id}")
def run_status(run_id: str):
    run = runs.get(run_id)
    if run is None:
        return JSONResponse(status_code=404, content={"success": False, "message": f"Run {run_id} not found."})
    return {"success": True, "run": run}


def _company_route(company: str):
    def endpoint(settings: Settings = Depends(get_settings), runner: Runner = Depends(get_runner)):
        return _start_scrape(company, settings, runner, None)

    endpoint.__name__ = f"scrape_{site_key(company)}"
    return endpoint


# Per-company routes wait for the run to finish before answering.
for _site in all_sites():
    app.add_api_route(f"/{_site.slug}", _company_route(_site.name), methods=["GET"])
