"""Utility helpers shared across the engine."""

from __future__ import annotations

import hashlib
import re
import uuid
from datetime import date
from typing import Iterable, List, Optional
from urllib.parse import urljoin


def stable_id(*parts: str, length: int = 12) -> str:
    """Create a short deterministic identifier from a set of string parts."""
    joined = "|".join(p.strip() for p in parts if p is not None)
    return hashlib.sha256(joined.encode("utf-8")).hexdigest()[:length]


def new_run_id() -> str:
    return str(uuid.uuid4())


def today_iso() -> str:
    """Scrape date used by sites that do not publish a posting date."""
    return date.today().isoformat()


def uniq_preserve_order(items: Iterable[str]) -> List[str]:
    """Deduplicate while preserving first-seen order."""
    seen = set()
    out: List[str] = []
    for it in items:
        if not it:
            continue
        key = it.strip().lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(it)
    return out


def absolute_url(href: Optional[str], base_url: str) -> Optional[str]:
    """Resolve a possibly relative link against the page it was found on."""
    if not href:
        return None
    href = href.strip()
    if not href or href.startswith(("javascript:", "#")):
        return None
    return urljoin(base_url, href)


def company_key(name: str) -> str:
    """Comparison key for company names: 'Schneider Electric' -> 'schneiderelectric'."""
    return re.sub(r"[^a-z0-9]", "", (name or "").lower())
