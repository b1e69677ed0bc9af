"""CLI entry point.

This script scrapes one or more companies from the input CSV and writes one
CSV per company to the output directory.

Examples:
    python run_scrape.py --list
    python run_scrape.py --company IBM
    python run_scrape.py --company Deloitte --company Syngene --end-page 2
    python run_scrape.py --company all --fetch-mode http

Settings not given on the command line come from the environment / .env
(INPUT_CSV, OUTPUT_DIR, FETCH_MODE, DELAY_SCALE, ...).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

from careers_engine.config import Settings
from careers_engine.csv_io import read_companies
from careers_engine.engine import run_company
from careers_engine.errors import CareersEngineError
from careers_engine.logging_setup import logger, setup_logging
from careers_engine.sources import SITES, site_key


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Scrape corporate career sites into per-company CSV files.")
    p.add_argument(
        "--company",
        action="append",
        default=[],
        help="Company name from the input CSV (repeatable), or 'all'.",
    )
    p.add_argument("--input", type=str, default=None, help="Company input CSV (overrides INPUT_CSV).")
    p.add_argument("--out-dir", type=str, default=None, help="Output directory (overrides OUTPUT_DIR).")
    p.add_argument("--start-page", type=int, default=None, help="Override the start page from the input CSV.")
    p.add_argument("--end-page", type=int, default=None, help="Override the end page from the input CSV.")
    p.add_argument("--fetch-mode", choices=["browser", "http"], default=None, help="Page fetcher to use.")
    p.add_argument("--list", action="store_true", help="List the companies in the input CSV and exit.")
    return p.parse_args()


def main() -> int:
    args = parse_args()
    settings = Settings.from_env()
    overrides = {}
    if args.input:
        overrides["input_csv"] = Path(args.input)
    if args.out_dir:
        overrides["output_dir"] = Path(args.out_dir)
    if args.fetch_mode:
        overrides["fetch_mode"] = args.fetch_mode
    settings = settings.model_copy(update=overrides)
    setup_logging(settings.log_level)

    try:
        companies = read_companies(settings.input_csv)
    except CareersEngineError as exc:
        logger.error("%s", exc)
        return 2

    if args.list or not args.company:
        for row in companies:
            marker = "" if site_key(row.company) in SITES else "  (no scraper)"
            print(f"{row.company:<20} pages {row.start_page}..{row.end_page_label}  {row.base_url}{marker}")
        return 0

    names: List[str] = [c.company for c in companies] if "all" in args.company else args.company

    failures = 0
    for name in names:
        try:
            result = run_company(name, settings, start_page=args.start_page, end_page=args.end_page)
        except CareersEngineError as exc:
            logger.error("Error scraping %s: %s", name, exc)
            failures += 1
            continue
        print(
            f"{result.company}: wrote {result.jobs_written} jobs from {result.pages_scraped} pages "
            f"to {result.output_file} (stopped: {result.stop_reason.value if result.stop_reason else 'n/a'})"
        )
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
