"""Careers engine package.

The package is laid out around one shared scrape loop:
- `models.py` defines the record schema written to every company CSV.
- `sources/` contains one adapter per corporate career site.
- `pagination.py` and `engine.py` hold the page-by-page control loop.
- `api.py` exposes the HTTP surface that triggers scrape runs.
"""

__version__ = "1.0.0"
