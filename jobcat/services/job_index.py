"""
services/job_index.py
──────────────────────────────────────────────────────────────────────────────
Job posting ↔ job category index.

Built once from a JobCategoryHierarchyIndex plus a collection of job
postings.  Every job's middle and major codes are derived at build time, so
queries are plain union-all lookups with no re-derivation.

Build rules:
  • Several postings sharing a job_id are one logical job: their minor codes
    (and the derived middle / major codes) are unioned.
  • Minor codes unknown to the hierarchy stay in the job's raw minor set but
    derive nothing, so they never reach the middle / major sets or the
    major → job ids map.
  • Nothing is rejected; an inconsistent job only shows up as empty sets.
"""
from __future__ import annotations

import logging
from typing import Iterable

from jobcat.domain.models import JobPosting
from jobcat.services.hierarchy_index import JobCategoryHierarchyIndex
from jobcat.services.set_queries import freeze_sets, union_all

logger = logging.getLogger(__name__)


class JobToCategoryIndex:
    """Immutable per-job category memberships plus a major → job ids map.

    Args:
        hierarchy: A built hierarchy index; shared read-only by reference.
        jobs:      Job postings, consumed exactly once.
    """

    def __init__(
        self,
        hierarchy: JobCategoryHierarchyIndex,
        jobs: Iterable[JobPosting],
    ) -> None:
        self._hierarchy = hierarchy

        minors_by_job: dict[int, set[int]] = {}
        middles_by_job: dict[int, set[int]] = {}
        majors_by_job: dict[int, set[int]] = {}
        jobs_by_major: dict[int, set[int]] = {}

        postings = 0
        for job in jobs:
            postings += 1
            major_codes = hierarchy.get_major_codes_by_minor_codes(job.minor_codes)

            minors_by_job.setdefault(job.job_id, set()).update(job.minor_codes)
            middles_by_job.setdefault(job.job_id, set()).update(
                hierarchy.get_middle_codes_by_minor_codes(job.minor_codes)
            )
            majors_by_job.setdefault(job.job_id, set()).update(major_codes)

            for major_code in major_codes:
                jobs_by_major.setdefault(major_code, set()).add(job.job_id)

        self._minors_by_job = freeze_sets(minors_by_job)
        self._middles_by_job = freeze_sets(middles_by_job)
        self._majors_by_job = freeze_sets(majors_by_job)
        self._jobs_by_major = freeze_sets(jobs_by_major)

        logger.debug(
            "JobToCategoryIndex built | postings=%d jobs=%d majors_with_jobs=%d",
            postings,
            len(self._minors_by_job),
            len(self._jobs_by_major),
        )

    @property
    def hierarchy(self) -> JobCategoryHierarchyIndex:
        return self._hierarchy

    @property
    def job_ids(self) -> frozenset[int]:
        return frozenset(self._minors_by_job)

    def __len__(self) -> int:
        return len(self._minors_by_job)

    # ── Queries ────────────────────────────────────────────────────────────

    def get_minor_codes_by_job_ids(self, job_ids: Iterable[int]) -> set[int]:
        """Raw minor codes of the given jobs, including codes the hierarchy
        does not know."""
        return union_all(self._minors_by_job, job_ids)

    def get_middle_codes_by_job_ids(self, job_ids: Iterable[int]) -> set[int]:
        return union_all(self._middles_by_job, job_ids)

    def get_major_codes_by_job_ids(self, job_ids: Iterable[int]) -> set[int]:
        return union_all(self._majors_by_job, job_ids)

    def get_job_ids_by_major_codes(self, major_codes: Iterable[int]) -> set[int]:
        return union_all(self._jobs_by_major, major_codes)
