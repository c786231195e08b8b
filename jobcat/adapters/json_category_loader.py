"""
adapters/json_category_loader.py
──────────────────────────────────────────────────────────────────────────────
Implements CategorySourcePort by reading a jobCategory.json file.

File layout:
  A JSON array of category nodes.  Each node carries
    code, name, parentCode (null for majors), level (1/2/3)
  and may carry a nested ``children`` array of further nodes.  Key matching
  is case-insensitive (``parentCode`` == ``parentcode``).

The same category may appear both in a flat list and nested under its
parent.  Nodes are de-duplicated by code:
  • identical name / parentCode / level  → later copy dropped
  • anything else differs                → DataFormatError (fail fast)
``children`` is not part of that comparison.

Only field-level checks happen here.  Parent / level consistency across the
whole tree is the hierarchy index's job.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from jobcat.domain.exceptions import DataFormatError
from jobcat.domain.models import CategoryLevel, JobCategory

logger = logging.getLogger(__name__)

_LEVELS = {level.value for level in CategoryLevel}


class JsonCategoryLoader:
    """JSON file implementation of CategorySourcePort.

    Args:
        path: Location of the category JSON file.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    # ── CategorySourcePort implementation ──────────────────────────────────

    def load_categories(self) -> list[JobCategory]:
        """Read, flatten and convert every node in the file.

        Raises:
            DataFormatError: Missing file, non-array root or ``children``,
                             blank name, unknown level, or inconsistent
                             duplicate code.
        """
        roots = read_json_array(self._path)
        nodes = flatten_nodes(roots)

        categories: list[JobCategory] = []
        for node in nodes:
            categories.append(_to_category(node))

        logger.info(
            "Loaded %d categories from %s", len(categories), self._path
        )
        return categories


# ── Shared file helper ─────────────────────────────────────────────────────

def read_json_array(path: Path) -> list[Any]:
    """Parse ``path`` and return its root array.

    Raises:
        DataFormatError: If the file is missing, is not JSON, or the root
                         value is not an array.
    """
    if not path.exists():
        raise DataFormatError(f"File not found: {path}")
    try:
        with path.open(encoding="utf-8") as fh:
            data = json.load(fh)
    except json.JSONDecodeError as exc:
        raise DataFormatError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, list):
        raise DataFormatError(f"Expected a JSON array at the root of {path}")
    return data


def lower_keys(node: Any, path_hint: str = "") -> dict[str, Any]:
    """Return ``node`` with lower-cased keys, or raise if it is not an object."""
    if not isinstance(node, dict):
        raise DataFormatError(f"Expected a JSON object{path_hint}, got {type(node).__name__}")
    return {str(k).lower(): v for k, v in node.items()}


# ── Flattening ─────────────────────────────────────────────────────────────

def flatten_nodes(roots: list[Any]) -> list[dict[str, Any]]:
    """Depth-first flatten of nested category nodes, de-duplicated by code.

    Document order is preserved: a parent comes before its children and
    siblings keep their relative order.  A node reachable twice (flat list
    plus tree, or a cycle) is visited once.

    Raises:
        DataFormatError: Two nodes share a code but disagree on name,
                         parentCode or level.
    """
    result: list[dict[str, Any]] = []
    seen: dict[Any, dict[str, Any]] = {}

    for root in roots:
        if root is None:
            continue
        stack = [lower_keys(root)]
        while stack:
            current = stack.pop()
            code = current.get("code")

            existing = seen.get(code)
            if existing is not None:
                if _identity(existing) != _identity(current):
                    raise DataFormatError(
                        "Duplicate code with inconsistent data. "
                        f"code={code} existing={_identity(existing)} "
                        f"current={_identity(current)}"
                    )
                continue

            seen[code] = current
            result.append(current)

            children = current.get("children")
            if children is None:
                continue
            if not isinstance(children, list):
                raise DataFormatError(
                    f"'children' must be an array for code={code}"
                )
            # Reverse push so children pop in document order
            for child in reversed(children):
                if child is not None:
                    stack.append(lower_keys(child, f" under code={code}"))

    return result


def _identity(node: dict[str, Any]) -> tuple:
    return (node.get("name"), node.get("parentcode"), node.get("level"))


def _to_category(node: dict[str, Any]) -> JobCategory:
    code = node.get("code")
    name = node.get("name")
    level = node.get("level")

    if code is None:
        raise DataFormatError(f"Missing code for category node: {node!r}")
    if not isinstance(name, str) or not name.strip():
        raise DataFormatError(f"Missing or empty name for code={code}.")
    if type(level) is not int or level not in _LEVELS:
        raise DataFormatError(f"Invalid level={level} for code={code}.")

    try:
        return JobCategory(
            code=code,
            name=name,
            parent_code=node.get("parentcode"),
            level=CategoryLevel(level),
        )
    except ValidationError as exc:
        raise DataFormatError(f"Invalid category node code={code}: {exc}") from exc
