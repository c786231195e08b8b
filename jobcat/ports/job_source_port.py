"""
ports/job_source_port.py
──────────────────────────────────────────────────────────────────────────────
Abstract interface for anything that yields job posting records.

Current implementations:
  JsonJobLoader        (adapters/json_job_loader.py)
  GeneratedDataSource  (adapters/generated_source.py)
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from jobcat.domain.models import JobPosting


@runtime_checkable
class JobSourcePort(Protocol):
    """Contract for a job posting record source."""

    def load_jobs(self) -> list[JobPosting]:
        """Return every job posting record in source order.

        Several records may share a job_id; the job index unions them.

        Raises:
            DataFormatError: If the source is missing or malformed.
        """
        ...
