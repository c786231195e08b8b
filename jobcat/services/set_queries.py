"""
services/set_queries.py
──────────────────────────────────────────────────────────────────────────────
Union-all helpers shared by both indexes.

Both are pure functions over read-only mappings: every key is looked up once,
unknown keys contribute nothing, repeated keys are harmless, and the result is
always a fresh set the caller may keep or mutate.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping


def collect_all(mapping: Mapping[int, int], keys: Iterable[int]) -> set[int]:
    """Collect the single mapped value of every known key.

    >>> sorted(collect_all({1: 10, 2: 20, 3: 10}, [1, 3, 3, 99]))
    [10]
    """
    result: set[int] = set()
    for key in keys:
        value = mapping.get(key)
        if value is not None:
            result.add(value)
    return result


def union_all(mapping: Mapping[int, frozenset[int]], keys: Iterable[int]) -> set[int]:
    """Union the mapped value sets of every known key.

    >>> sorted(union_all({1: frozenset({10, 11}), 2: frozenset({12})}, [1, 2, 1, 99]))
    [10, 11, 12]
    """
    result: set[int] = set()
    for key in keys:
        values = mapping.get(key)
        if values:
            result.update(values)
    return result


def freeze_sets(mapping: dict[int, set[int]]) -> Mapping[int, frozenset[int]]:
    """Return a read-only view of ``mapping`` with every value set frozen."""
    return MappingProxyType({k: frozenset(v) for k, v in mapping.items()})
