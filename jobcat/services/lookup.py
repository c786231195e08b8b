"""
services/lookup.py
──────────────────────────────────────────────────────────────────────────────
Lookup facade: a single lookup(LookupRequest) → LookupResponse call in
front of the two indexes.

This is the primary entry point for all interfaces (CLI, future API).  It
knows nothing about where the records came from; it only speaks in domain
objects and delegates every query to the indexes.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable

from jobcat.domain.models import LookupDirection, LookupRequest, LookupResponse
from jobcat.services.hierarchy_index import JobCategoryHierarchyIndex
from jobcat.services.job_index import JobToCategoryIndex

logger = logging.getLogger(__name__)

_Query = Callable[[Iterable[int]], set[int]]


class CategoryLookupService:
    """Dispatches lookup requests to the hierarchy and job indexes.

    Inject via services/container.py — do not instantiate directly in
    application code.

    Args:
        hierarchy: Built JobCategoryHierarchyIndex.
        job_index: JobToCategoryIndex built on the same hierarchy.
    """

    def __init__(
        self,
        hierarchy: JobCategoryHierarchyIndex,
        job_index: JobToCategoryIndex,
    ) -> None:
        self._hierarchy = hierarchy
        self._job_index = job_index
        self._queries: dict[LookupDirection, _Query] = {
            LookupDirection.MINOR_TO_MAJOR:  hierarchy.get_major_codes_by_minor_codes,
            LookupDirection.MINOR_TO_MIDDLE: hierarchy.get_middle_codes_by_minor_codes,
            LookupDirection.MIDDLE_TO_MINOR: hierarchy.get_minor_codes_by_middle_codes,
            LookupDirection.MIDDLE_TO_MAJOR: hierarchy.get_major_codes_by_middle_codes,
            LookupDirection.MAJOR_TO_MINOR:  hierarchy.get_minor_codes_by_major_codes,
            LookupDirection.MAJOR_TO_MIDDLE: hierarchy.get_middle_codes_by_major_codes,
            LookupDirection.JOB_TO_MINOR:    job_index.get_minor_codes_by_job_ids,
            LookupDirection.JOB_TO_MIDDLE:   job_index.get_middle_codes_by_job_ids,
            LookupDirection.JOB_TO_MAJOR:    job_index.get_major_codes_by_job_ids,
            LookupDirection.MAJOR_TO_JOB:    job_index.get_job_ids_by_major_codes,
        }

    @property
    def hierarchy(self) -> JobCategoryHierarchyIndex:
        return self._hierarchy

    @property
    def job_index(self) -> JobToCategoryIndex:
        return self._job_index

    # ── Public API ─────────────────────────────────────────────────────────

    def lookup(self, request: LookupRequest) -> LookupResponse:
        """Answer one set-valued query.

        Unknown and repeated keys are ignored; an empty key list yields an
        empty result.

        Args:
            request: Validated LookupRequest (direction, keys).

        Returns:
            LookupResponse with results sorted ascending.  For category
            results, ``labels`` maps each known code to its name; a raw
            job minor code unknown to the hierarchy has no label.
        """
        logger.info(
            "lookup | direction=%s keys=%d",
            request.direction.value,
            len(request.keys),
        )
        found = self._queries[request.direction](request.keys)
        results = sorted(found)

        labels: dict[int, str] = {}
        if request.direction.returns_categories:
            for code in results:
                category = self._hierarchy.get_category(code)
                if category is not None:
                    labels[code] = category.name

        logger.debug("lookup complete | results=%d", len(results))
        return LookupResponse(
            direction=request.direction.value,
            keys=list(request.keys),
            results=results,
            labels=labels,
        )
