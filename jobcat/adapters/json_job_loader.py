"""
adapters/json_job_loader.py
──────────────────────────────────────────────────────────────────────────────
Implements JobSourcePort by reading a job.json file.

File layout:
  A JSON array of job objects:
    jobId        integer, required
    title        string, required, not blank
    description  string or null (null → "")
    minorCodes   array of integers or null (null / absent → empty)
  Key matching is case-insensitive; ``null`` entries in the array are skipped.

Repeated minor codes collapse inside JobPosting; repeated jobIds are kept as
separate records and unioned later by the job index.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from jobcat.adapters.json_category_loader import lower_keys, read_json_array
from jobcat.domain.exceptions import DataFormatError
from jobcat.domain.models import JobPosting

logger = logging.getLogger(__name__)


class JsonJobLoader:
    """JSON file implementation of JobSourcePort.

    Args:
        path: Location of the job postings JSON file.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    def load_jobs(self) -> list[JobPosting]:
        """Read and convert every job object in the file.

        Raises:
            DataFormatError: Missing file, non-array root, missing jobId,
                             blank title or a non-integer minor code.
        """
        jobs: list[JobPosting] = []
        for raw in read_json_array(self._path):
            if raw is None:
                continue
            jobs.append(_to_job(lower_keys(raw)))

        logger.info("Loaded %d job postings from %s", len(jobs), self._path)
        return jobs


def _to_job(node: dict[str, Any]) -> JobPosting:
    job_id = node.get("jobid")
    title = node.get("title")

    if job_id is None:
        raise DataFormatError("Missing jobId.")
    if not isinstance(title, str) or not title.strip():
        raise DataFormatError(f"Missing or empty title for jobId={job_id}.")

    try:
        return JobPosting(
            job_id=job_id,
            title=title,
            description=node.get("description"),
            minor_codes=node.get("minorcodes") or [],
        )
    except ValidationError as exc:
        raise DataFormatError(f"Invalid job jobId={job_id}: {exc}") from exc
