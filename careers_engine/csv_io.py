"""CSV input and output.

Input is the company list (``company,base_url,start_page,end_page``); output
is one CSV per company with a fixed header, appended page by page.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from pydantic import ValidationError

from .errors import InputFileError
from .models import CompanyInput, JobRecord
from .utils import company_key

logger = logging.getLogger("careers-engine")

# (field id, header title) pairs.
Column = Tuple[str, str]

DEFAULT_COLUMNS: List[Column] = [
    ("sno", "S.No."),
    ("company", "Company"),
    ("jobId", "Job ID"),
    ("function", "Function"),
    ("location", "Location"),
    ("title", "Title"),
    ("description", "Description"),
    ("postedOn", "Posted On"),
    ("page", "Page Number"),
]


def read_companies(path: Path) -> List[CompanyInput]:
    """Read the company input CSV, skipping (and logging) malformed rows."""
    path = Path(path)
    if not path.is_file():
        raise InputFileError(f"Input CSV not found: {path}")

    out: List[CompanyInput] = []
    with path.open(newline="", encoding="utf-8-sig") as fh:
        reader = csv.DictReader(fh)
        for line_no, row in enumerate(reader, start=2):
            clean = {(k or "").strip(): (v or "").strip() for k, v in row.items() if k}
            try:
                out.append(CompanyInput(**clean))
            except ValidationError as exc:
                logger.warning("Skipping malformed input row %s in %s: %s", line_no, path, exc.errors()[0]["msg"])
    return out


def find_company(companies: Iterable[CompanyInput], name: str) -> Optional[CompanyInput]:
    """Lookup of a company row, ignoring case, spaces and punctuation."""
    wanted = company_key(name)
    for company in companies:
        if company_key(company.company) == wanted:
            return company
    return None


class JobCsvWriter:
    """Write one company's records, numbering rows across the whole run.

    The file is truncated and the header written when the writer is opened;
    each ``write`` call then appends one page worth of rows.
    """

    def __init__(self, path: Path, columns: Sequence[Column] = DEFAULT_COLUMNS) -> None:
        self.path = Path(path)
        self.columns = list(columns)
        self.count = 0
        self._opened = False

    def open(self) -> "JobCsvWriter":
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", newline="", encoding="utf-8") as fh:
            csv.writer(fh).writerow([title for _, title in self.columns])
        self._opened = True
        self.count = 0
        return self

    def write(self, records: Sequence[JobRecord]) -> int:
        """Append records, assigning their sequence numbers; return rows written."""
        if not self._opened:
            self.open()
        if not records:
            return 0
        field_ids = [field for field, _ in self.columns]
        with self.path.open("a", newline="", encoding="utf-8") as fh:
            writer = csv.writer(fh)
            for record in records:
                self.count += 1
                record.sno = self.count
                values = record.csv_values()
                writer.writerow(["" if values.get(f) is None else values.get(f) for f in field_ids])
        return len(records)
