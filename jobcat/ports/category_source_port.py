"""
ports/category_source_port.py
──────────────────────────────────────────────────────────────────────────────
Abstract interface for anything that yields job category records.

Any class that implements load_categories() (structural subtyping via
Protocol) is a valid CategorySourcePort — no inheritance required.

Current implementations:
  JsonCategoryLoader   (adapters/json_category_loader.py)
  GeneratedDataSource  (adapters/generated_source.py)
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from jobcat.domain.models import JobCategory


@runtime_checkable
class CategorySourcePort(Protocol):
    """Contract for a job category record source."""

    def load_categories(self) -> list[JobCategory]:
        """Return every category record, flattened, in source order.

        The list may be in any level order; the hierarchy index sorts
        out majors, middles and minors itself.

        Raises:
            DataFormatError: If the source is missing or malformed.
        """
        ...
