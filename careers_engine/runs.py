"""In-process record of scrape runs started through the API."""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .models import ScrapeResult


class RunRegistry:
    """Thread-safe map of run id -> status, result and last error."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._runs: Dict[str, Dict[str, Any]] = {}

    def start(self, run_id: str, company: str) -> None:
        with self._lock:
            self._runs[run_id] = {
                "runId": run_id,
                "company": company,
                "status": "running",
                "startedAt": datetime.now(timezone.utc).isoformat(),
                "result": None,
                "error": None,
            }

    def finish(self, run_id: str, result: ScrapeResult) -> None:
        with self._lock:
            run = self._runs.setdefault(run_id, {"runId": run_id, "company": result.company})
            run.update(status="success", result=result.model_dump(mode="json"), error=None)

    def fail(self, run_id: str, error: str) -> None:
        with self._lock:
            run = self._runs.setdefault(run_id, {"runId": run_id, "company": None})
            run.update(status="failed", error=error)

    def get(self, run_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            run = self._runs.get(run_id)
            return dict(run) if run else None

    def all(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [dict(run) for run in self._runs.values()]
