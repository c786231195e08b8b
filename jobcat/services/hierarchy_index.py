"""
services/hierarchy_index.py
──────────────────────────────────────────────────────────────────────────────
Major / middle / minor job category hierarchy index.

Architecture:
  • build_hierarchy() is a pure function: records → HierarchyTables, or a
    HierarchyValidationError.  No partially built index is ever observable.
  • JobCategoryHierarchyIndex wraps the tables and exposes six set queries.

Build order is level-first, not input order:
  1. every MAJOR record   → establishes the major code set
  2. every MIDDLE record  → parent must be a known major
  3. every MINOR record   → parent must be a known middle
so majors, middles and minors may appear in the input in any order.

Query policy (all six queries):
  • input may repeat codes or contain codes this index has never seen
  • unknown codes are skipped, never raised
  • result is a new set; empty input → empty set
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from jobcat.domain.exceptions import DuplicateCategoryCodeError, ParentCodeError
from jobcat.domain.models import CategoryLevel, JobCategory
from jobcat.services.set_queries import collect_all, freeze_sets, union_all

logger = logging.getLogger(__name__)


# ── Built tables ───────────────────────────────────────────────────────────

@dataclass(frozen=True)
class HierarchyTables:
    """Every lookup table derived from a validated category collection."""

    major_by_code:  Mapping[int, JobCategory]
    middle_by_code: Mapping[int, JobCategory]
    minor_by_code:  Mapping[int, JobCategory]

    # Reverse (single-valued) maps
    middle_by_minor: Mapping[int, int]
    major_by_middle: Mapping[int, int]

    # Aggregate (multi-valued) maps; every major / middle has an entry
    minors_by_middle: Mapping[int, frozenset[int]]
    middles_by_major: Mapping[int, frozenset[int]]
    minors_by_major:  Mapping[int, frozenset[int]]


def build_hierarchy(categories: Iterable[JobCategory]) -> HierarchyTables:
    """Validate a flat category collection and build its lookup tables.

    The input is materialised exactly once, so single-pass iterables such as
    generators are safe.

    Args:
        categories: Category records of all three levels, in any order.

    Returns:
        Frozen HierarchyTables.

    Raises:
        DuplicateCategoryCodeError: Two records share a code (any levels).
        ParentCodeError: A major has a parent, a middle/minor lacks one, or
                         a parent code does not name an existing ancestor.
    """
    records = list(categories)
    seen: set[int] = set()

    def _claim(category: JobCategory) -> None:
        if category.code in seen:
            raise DuplicateCategoryCodeError(
                f"Duplicate category code found. code={category.code}"
            )
        seen.add(category.code)

    major_by_code: dict[int, JobCategory] = {}
    middle_by_code: dict[int, JobCategory] = {}
    minor_by_code: dict[int, JobCategory] = {}
    middle_by_minor: dict[int, int] = {}
    major_by_middle: dict[int, int] = {}
    minors_by_middle: dict[int, set[int]] = {}
    middles_by_major: dict[int, set[int]] = {}
    minors_by_major: dict[int, set[int]] = {}

    # ── 1. Majors ──────────────────────────────────────────────────────────
    for category in _of_level(records, CategoryLevel.MAJOR):
        if category.parent_code is not None:
            raise ParentCodeError(
                f"Major category must not have a parent. code={category.code}"
            )
        _claim(category)
        major_by_code[category.code] = category
        middles_by_major[category.code] = set()
        minors_by_major[category.code] = set()

    # ── 2. Middles ─────────────────────────────────────────────────────────
    for category in _of_level(records, CategoryLevel.MIDDLE):
        major_code = category.parent_code
        if major_code is None:
            raise ParentCodeError(
                f"Middle category must have a parent. code={category.code}"
            )
        if major_code not in major_by_code:
            raise ParentCodeError(
                "Middle category parent must be an existing major code. "
                f"middle={category.code} parent={major_code}"
            )
        _claim(category)
        middle_by_code[category.code] = category
        major_by_middle[category.code] = major_code
        minors_by_middle[category.code] = set()
        middles_by_major[major_code].add(category.code)

    # ── 3. Minors ──────────────────────────────────────────────────────────
    for category in _of_level(records, CategoryLevel.MINOR):
        middle_code = category.parent_code
        if middle_code is None:
            raise ParentCodeError(
                f"Minor category must have a parent. code={category.code}"
            )
        if middle_code not in middle_by_code:
            raise ParentCodeError(
                "Minor category parent must be an existing middle code. "
                f"minor={category.code} parent={middle_code}"
            )
        _claim(category)
        minor_by_code[category.code] = category
        middle_by_minor[category.code] = middle_code
        minors_by_middle[middle_code].add(category.code)
        minors_by_major[major_by_middle[middle_code]].add(category.code)

    return HierarchyTables(
        major_by_code=MappingProxyType(major_by_code),
        middle_by_code=MappingProxyType(middle_by_code),
        minor_by_code=MappingProxyType(minor_by_code),
        middle_by_minor=MappingProxyType(middle_by_minor),
        major_by_middle=MappingProxyType(major_by_middle),
        minors_by_middle=freeze_sets(minors_by_middle),
        middles_by_major=freeze_sets(middles_by_major),
        minors_by_major=freeze_sets(minors_by_major),
    )


def _of_level(records: list[JobCategory], level: CategoryLevel) -> Iterable[JobCategory]:
    return (c for c in records if c.level == level)


# ── Index ──────────────────────────────────────────────────────────────────

class JobCategoryHierarchyIndex:
    """Immutable three-level category index with O(1)-per-key set queries.

    Args:
        categories: Category records of all three levels, in any order.
                    Consumed exactly once.

    Raises:
        HierarchyValidationError: If the records do not form a valid tree.
    """

    def __init__(self, categories: Iterable[JobCategory]) -> None:
        self._tables = build_hierarchy(categories)
        logger.debug(
            "JobCategoryHierarchyIndex built | majors=%d middles=%d minors=%d",
            len(self._tables.major_by_code),
            len(self._tables.middle_by_code),
            len(self._tables.minor_by_code),
        )

    # ── Introspection ──────────────────────────────────────────────────────

    @property
    def major_codes(self) -> frozenset[int]:
        return frozenset(self._tables.major_by_code)

    @property
    def middle_codes(self) -> frozenset[int]:
        return frozenset(self._tables.middle_by_code)

    @property
    def minor_codes(self) -> frozenset[int]:
        return frozenset(self._tables.minor_by_code)

    def get_category(self, code: int) -> Optional[JobCategory]:
        """Return the category record for a code of any level, or None."""
        t = self._tables
        for by_code in (t.major_by_code, t.middle_by_code, t.minor_by_code):
            if code in by_code:
                return by_code[code]
        return None

    def __len__(self) -> int:
        t = self._tables
        return len(t.major_by_code) + len(t.middle_by_code) + len(t.minor_by_code)

    def __contains__(self, code: object) -> bool:
        return self.get_category(code) is not None  # type: ignore[arg-type]

    # ── Queries ────────────────────────────────────────────────────────────

    def get_major_codes_by_minor_codes(self, minor_codes: Iterable[int]) -> set[int]:
        """Minor → major (two hops up)."""
        return collect_all(
            self._tables.major_by_middle,
            collect_all(self._tables.middle_by_minor, minor_codes),
        )

    def get_middle_codes_by_minor_codes(self, minor_codes: Iterable[int]) -> set[int]:
        """Minor → middle (one hop up)."""
        return collect_all(self._tables.middle_by_minor, minor_codes)

    def get_minor_codes_by_middle_codes(self, middle_codes: Iterable[int]) -> set[int]:
        """Middle → all of its minors."""
        return union_all(self._tables.minors_by_middle, middle_codes)

    def get_major_codes_by_middle_codes(self, middle_codes: Iterable[int]) -> set[int]:
        """Middle → major (one hop up)."""
        return collect_all(self._tables.major_by_middle, middle_codes)

    def get_minor_codes_by_major_codes(self, major_codes: Iterable[int]) -> set[int]:
        """Major → every minor under any of its middles."""
        return union_all(self._tables.minors_by_major, major_codes)

    def get_middle_codes_by_major_codes(self, major_codes: Iterable[int]) -> set[int]:
        """Major → all of its middles."""
        return union_all(self._tables.middles_by_major, major_codes)
