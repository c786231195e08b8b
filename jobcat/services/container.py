"""
services/container.py
──────────────────────────────────────────────────────────────────────────────
Dependency Injection container.

THIS IS THE ONLY FILE THAT NAMES CONCRETE ADAPTER CLASSES.

Source selection is driven entirely by environment variables — no code
changes are needed to switch between sources:

  CATEGORY_SOURCE=json       (default) → JsonCategoryLoader + JsonJobLoader
  CATEGORY_SOURCE=generated            → GeneratedDataSource (both ports)

Index lifetime:
  @lru_cache(maxsize=1) makes get_lookup_service() build the indexes once per
  process.  The indexes expose no mutation API, so the shared instance is safe
  to read from several threads.  A changed hierarchy means a new process (or
  get_lookup_service.cache_clear()) and a full rebuild.
"""
from __future__ import annotations

import logging
from functools import lru_cache

from jobcat.config.settings import Settings, get_settings
from jobcat.domain.exceptions import ConfigurationError
from jobcat.ports.category_source_port import CategorySourcePort
from jobcat.ports.job_source_port import JobSourcePort
from jobcat.services.hierarchy_index import JobCategoryHierarchyIndex
from jobcat.services.job_index import JobToCategoryIndex
from jobcat.services.lookup import CategoryLookupService

logger = logging.getLogger(__name__)


def build_sources(settings: Settings) -> tuple[CategorySourcePort, JobSourcePort]:
    """Instantiate the record sources selected by CATEGORY_SOURCE."""
    source = settings.category_source.lower()
    if source == "json":
        from jobcat.adapters.json_category_loader import JsonCategoryLoader
        from jobcat.adapters.json_job_loader import JsonJobLoader
        logger.info(
            "Record source: JSON (%s, %s)",
            settings.categories_json_path,
            settings.jobs_json_path,
        )
        return (
            JsonCategoryLoader(settings.categories_json_path),
            JsonJobLoader(settings.jobs_json_path),
        )
    if source == "generated":
        from jobcat.adapters.generated_source import GeneratedDataSource
        logger.info(
            "Record source: generated (minors=%d jobs=%d seed=%d)",
            settings.generated_minor_count,
            settings.generated_job_count,
            settings.generator_seed,
        )
        generated = GeneratedDataSource(settings)
        return generated, generated
    raise ConfigurationError(
        f"Unknown CATEGORY_SOURCE '{settings.category_source}'. "
        "Valid values: 'json', 'generated'."
    )


def build_indexes(
    category_source: CategorySourcePort,
    job_source: JobSourcePort,
) -> tuple[JobCategoryHierarchyIndex, JobToCategoryIndex]:
    """Load all records and build both indexes.

    Raises:
        DataFormatError: If a source cannot be read.
        HierarchyValidationError: If the categories do not form a valid tree.
    """
    hierarchy = JobCategoryHierarchyIndex(category_source.load_categories())
    job_index = JobToCategoryIndex(hierarchy, job_source.load_jobs())
    logger.info(
        "Indexes ready | categories=%d jobs=%d", len(hierarchy), len(job_index)
    )
    return hierarchy, job_index


@lru_cache(maxsize=1)
def get_lookup_service() -> CategoryLookupService:
    """Build and return the fully wired CategoryLookupService singleton.

    Returns:
        CategoryLookupService backed by freshly built indexes.

    Raises:
        ConfigurationError: If an unknown source name is given.
        DataFormatError: If a source file cannot be read.
        HierarchyValidationError: If the categories are inconsistent.
    """
    settings = get_settings()
    category_source, job_source = build_sources(settings)
    hierarchy, job_index = build_indexes(category_source, job_source)
    return CategoryLookupService(hierarchy=hierarchy, job_index=job_index)
