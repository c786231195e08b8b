"""
domain/exceptions.py
──────────────────────────────────────────────────────────────────────────────
Custom exception hierarchy.

All exceptions are rooted at JobCategoryError so callers can catch broadly
(except JobCategoryError) or narrowly (except DuplicateCategoryCodeError).

Query methods on the indexes never raise for unknown or repeated keys; only
construction (HierarchyValidationError) and loading (DataFormatError) fail.
"""
from __future__ import annotations


class JobCategoryError(Exception):
    """Base exception for all application errors."""


class ConfigurationError(JobCategoryError):
    """Raised when required configuration is missing or invalid."""


class HierarchyValidationError(JobCategoryError):
    """Raised when a category collection cannot form a valid 3-level tree."""


class DuplicateCategoryCodeError(HierarchyValidationError):
    """Raised when two category records share the same code (any level)."""


class ParentCodeError(HierarchyValidationError):
    """Raised when a parent code is present/absent at the wrong level, or
    references an ancestor that does not exist."""


class DataFormatError(JobCategoryError):
    """Raised when a source file is missing, malformed or self-contradictory."""
