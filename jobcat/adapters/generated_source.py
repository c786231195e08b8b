"""
adapters/generated_source.py
──────────────────────────────────────────────────────────────────────────────
Deterministic synthetic categories and job postings, for benchmarks and
large-volume tests.  Implements both CategorySourcePort and JobSourcePort.

Code scheme (all codes unique across levels):
  major  = 1_000_000 + i * 100_000                 (i = 0, 1, …)
  middle = major + (j + 1) * 1_000                 (j < middles_per_major)
  minor  = middle + k + 1                          (k < minors_per_middle)

Generation stops as soon as ``generated_minor_count`` minors exist, so the
last middle (and major) may be partially filled.

Jobs get ids 1..generated_job_count; each draws between 1 and
``max_minors_per_job`` minor codes from a ``random.Random(generator_seed)``,
so the same settings always produce the same jobs.
"""
from __future__ import annotations

import logging
import math
import random
from typing import Optional

from jobcat.config.settings import Settings
from jobcat.domain.exceptions import ConfigurationError
from jobcat.domain.models import CategoryLevel, JobCategory, JobPosting

logger = logging.getLogger(__name__)

_MAJOR_BASE = 1_000_000
_MAJOR_STEP = 100_000
_MIDDLE_STEP = 1_000


class GeneratedDataSource:
    """Synthetic record source.

    Args:
        settings: Shared application settings (generator knobs).

    Raises:
        ConfigurationError: If a generator knob is out of range.
    """

    def __init__(self, settings: Settings) -> None:
        if settings.minors_per_middle < 1 or settings.minors_per_middle >= _MIDDLE_STEP:
            raise ConfigurationError(
                f"MINORS_PER_MIDDLE must be in 1..{_MIDDLE_STEP - 1}, "
                f"got {settings.minors_per_middle}"
            )
        if settings.middles_per_major < 1 or (
            (settings.middles_per_major + 1) * _MIDDLE_STEP > _MAJOR_STEP
        ):
            raise ConfigurationError(
                f"MIDDLES_PER_MAJOR must be in 1..{_MAJOR_STEP // _MIDDLE_STEP - 1}, "
                f"got {settings.middles_per_major}"
            )
        if settings.max_minors_per_job < 1:
            raise ConfigurationError(
                f"MAX_MINORS_PER_JOB must be >= 1, got {settings.max_minors_per_job}"
            )
        self._minor_count = max(settings.generated_minor_count, 0)
        self._job_count = max(settings.generated_job_count, 0)
        self._seed = settings.generator_seed
        self._minors_per_middle = settings.minors_per_middle
        self._middles_per_major = settings.middles_per_major
        self._max_minors_per_job = settings.max_minors_per_job
        self._minor_codes: Optional[list[int]] = None

    # ── CategorySourcePort implementation ──────────────────────────────────

    def load_categories(self) -> list[JobCategory]:
        categories: list[JobCategory] = []
        required_middles = math.ceil(self._minor_count / self._minors_per_middle)
        required_majors = math.ceil(required_middles / self._middles_per_major)

        made = 0
        for i in range(required_majors):
            major = _MAJOR_BASE + i * _MAJOR_STEP
            categories.append(
                JobCategory(code=major, name=f"Major {major}", level=CategoryLevel.MAJOR)
            )
            for j in range(self._middles_per_major):
                if made >= self._minor_count:
                    break
                middle = major + (j + 1) * _MIDDLE_STEP
                categories.append(
                    JobCategory(
                        code=middle,
                        name=f"Middle {middle}",
                        parent_code=major,
                        level=CategoryLevel.MIDDLE,
                    )
                )
                for k in range(min(self._minors_per_middle, self._minor_count - made)):
                    minor = middle + k + 1
                    categories.append(
                        JobCategory(
                            code=minor,
                            name=f"Minor {minor}",
                            parent_code=middle,
                            level=CategoryLevel.MINOR,
                        )
                    )
                    made += 1

        self._minor_codes = [
            c.code for c in categories if c.level == CategoryLevel.MINOR
        ]
        logger.info(
            "Generated %d categories (%d minors)", len(categories), made
        )
        return categories

    # ── JobSourcePort implementation ───────────────────────────────────────

    def load_jobs(self) -> list[JobPosting]:
        if self._minor_codes is None:
            self.load_categories()
        minor_codes = self._minor_codes
        if not minor_codes:
            logger.warning("No minor codes generated; jobs will carry no categories")

        rng = random.Random(self._seed)
        jobs: list[JobPosting] = []
        for job_id in range(1, self._job_count + 1):
            picks = rng.randint(1, self._max_minors_per_job)
            chosen = {rng.choice(minor_codes) for _ in range(picks)} if minor_codes else set()
            jobs.append(
                JobPosting(
                    job_id=job_id,
                    title=f"Job {job_id}",
                    description=f"Synthetic job posting {job_id}",
                    minor_codes=chosen,
                )
            )

        logger.info("Generated %d job postings", len(jobs))
        return jobs
