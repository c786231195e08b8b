"""
domain/models.py
──────────────────────────────────────────────────────────────────────────────
Pure domain objects — Pydantic models with no imports from adapters or ports.

These models are the lingua franca of the entire system:
  • adapters produce them (JSON loaders, synthetic generator)
  • services index and query them
  • interfaces (CLI, benchmark) serialise the lookup responses

Record models are frozen: once a category or job posting is constructed it
cannot be changed, so an index built from them never sees a mutation.
"""
from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone
from enum import Enum, IntEnum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ── Enums ──────────────────────────────────────────────────────────────────────

class CategoryLevel(IntEnum):
    """Hierarchy level of a job category, coarsest to finest.

    The integer values match the ``level`` field of the category JSON file.
    """
    MAJOR  = 1
    MIDDLE = 2
    MINOR  = 3


class LookupDirection(str, Enum):
    """Every set-valued query the lookup service can answer."""
    MINOR_TO_MAJOR  = "minor_to_major"
    MINOR_TO_MIDDLE = "minor_to_middle"
    MIDDLE_TO_MINOR = "middle_to_minor"
    MIDDLE_TO_MAJOR = "middle_to_major"
    MAJOR_TO_MINOR  = "major_to_minor"
    MAJOR_TO_MIDDLE = "major_to_middle"
    JOB_TO_MINOR    = "job_to_minor"
    JOB_TO_MIDDLE   = "job_to_middle"
    JOB_TO_MAJOR    = "job_to_major"
    MAJOR_TO_JOB    = "major_to_job"

    @property
    def returns_categories(self) -> bool:
        """True when the result set holds category codes (not job ids)."""
        return self is not LookupDirection.MAJOR_TO_JOB


# ── Records ────────────────────────────────────────────────────────────────────

class JobCategory(BaseModel):
    """A single node of the major / middle / minor hierarchy.

    Only field-level rules are checked here.  Whether ``parent_code`` is
    allowed and points at a real ancestor is decided by the hierarchy index,
    which sees the whole collection.
    """

    model_config = ConfigDict(frozen=True)

    code:        int
    name:        str = Field(..., min_length=1)
    parent_code: Optional[int] = None
    level:       CategoryLevel

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be blank")
        return v


class JobPosting(BaseModel):
    """A job listing tagged with zero or more minor category codes.

    ``minor_codes`` is collapsed to a frozenset on construction; codes that
    no hierarchy knows about are kept and only ignored at query time.
    """

    model_config = ConfigDict(frozen=True)

    job_id:      int
    title:       str = Field(..., min_length=1)
    description: str = ""
    minor_codes: frozenset[int] = Field(default_factory=frozenset)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title must not be blank")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def description_default(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("minor_codes", mode="before")
    @classmethod
    def minor_codes_to_set(cls, v: Any) -> Any:
        if v is None:
            return frozenset()
        if isinstance(v, (str, bytes)) or not isinstance(v, Iterable):
            return v  # let pydantic reject it
        return frozenset(v)


# ── Lookup I/O ─────────────────────────────────────────────────────────────────

class LookupRequest(BaseModel):
    """Validated input to CategoryLookupService.lookup().

    ``keys`` may be empty or contain repeats / unknown codes; none of these
    are errors.
    """

    direction: LookupDirection
    keys: list[int] = Field(default_factory=list,
                            description="Category codes or job ids to look up")


class LookupResponse(BaseModel):
    """Result of a single lookup, serialisable straight to JSON."""

    direction:    str
    keys:         list[int]
    results:      list[int]
    labels:       dict[int, str] = Field(default_factory=dict)
    generated_at: datetime = Field(
                      default_factory=lambda: datetime.now(timezone.utc)
                  )

    @property
    def count(self) -> int:
        return len(self.results)

    def to_dict(self) -> dict:
        """Serialise to a plain dict (JSON-safe)."""
        return self.model_dump(mode="json")
