"""
tests/conftest.py
──────────────────────────────────────────────────────────────────────────────
Shared pytest fixtures.

Everything here is in-memory: the indexes are built straight from domain
models, so no JSON file is touched unless a test writes one to tmp_path.

Fixture hierarchy:
  categories    → the reference 1 major / 2 middle / 4 minor tree
  hierarchy     → JobCategoryHierarchyIndex over ``categories``
  jobs          → postings incl. repeated ids, empty and unknown minor codes
  job_index     → JobToCategoryIndex over ``hierarchy`` + ``jobs``
  service       → CategoryLookupService over both indexes
  settings      → Settings with a small synthetic generator config
  write_json    → helper that dumps an object to a tmp JSON file
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from jobcat.config.settings import Settings
from jobcat.domain.models import CategoryLevel, JobCategory, JobPosting
from jobcat.services.hierarchy_index import JobCategoryHierarchyIndex
from jobcat.services.job_index import JobToCategoryIndex
from jobcat.services.lookup import CategoryLookupService

# Reference tree
MAJOR = 100000
MIDDLE_MGMT, MIDDLE_HR = 100100, 100200
MINOR_GM, MINOR_ASSIST = 100101, 100105      # under MIDDLE_MGMT
MINOR_HR_ASSIST, MINOR_EMPLOY = 100205, 100206  # under MIDDLE_HR
UNKNOWN = 999999


def make_category(code: int, parent: int | None, level: CategoryLevel) -> JobCategory:
    return JobCategory(code=code, name=f"Category {code}", parent_code=parent, level=level)


def reference_categories() -> list[JobCategory]:
    return [
        make_category(MAJOR, None, CategoryLevel.MAJOR),
        make_category(MIDDLE_MGMT, MAJOR, CategoryLevel.MIDDLE),
        make_category(MIDDLE_HR, MAJOR, CategoryLevel.MIDDLE),
        make_category(MINOR_GM, MIDDLE_MGMT, CategoryLevel.MINOR),
        make_category(MINOR_ASSIST, MIDDLE_MGMT, CategoryLevel.MINOR),
        make_category(MINOR_HR_ASSIST, MIDDLE_HR, CategoryLevel.MINOR),
        make_category(MINOR_EMPLOY, MIDDLE_HR, CategoryLevel.MINOR),
    ]


# ── Index fixtures ─────────────────────────────────────────────────────────

@pytest.fixture
def categories() -> list[JobCategory]:
    return reference_categories()


@pytest.fixture
def hierarchy(categories) -> JobCategoryHierarchyIndex:
    return JobCategoryHierarchyIndex(categories)


@pytest.fixture
def jobs() -> list[JobPosting]:
    return [
        JobPosting(job_id=1, title="Job 1", description="desc",
                   minor_codes=[MINOR_GM, MINOR_GM, MINOR_HR_ASSIST]),
        JobPosting(job_id=2, title="Job 2", description="desc", minor_codes=None),
        JobPosting(job_id=3, title="Job 3", description="desc", minor_codes=[MINOR_EMPLOY]),
        JobPosting(job_id=4, title="Job 4", minor_codes=[UNKNOWN]),
    ]


@pytest.fixture
def job_index(hierarchy, jobs) -> JobToCategoryIndex:
    return JobToCategoryIndex(hierarchy, jobs)


@pytest.fixture
def service(hierarchy, job_index) -> CategoryLookupService:
    return CategoryLookupService(hierarchy=hierarchy, job_index=job_index)


# ── Settings / files ───────────────────────────────────────────────────────

@pytest.fixture
def settings() -> Settings:
    """Return a Settings instance with a tiny generator configuration."""
    return Settings(
        category_source="generated",
        generated_minor_count=25,
        generated_job_count=40,
        generator_seed=42,
        minors_per_middle=5,
        middles_per_major=2,
        max_minors_per_job=3,
        bench_iterations=5,
    )


@pytest.fixture
def write_json(tmp_path) -> Callable[[str, Any], Path]:
    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        return path
    return _write
