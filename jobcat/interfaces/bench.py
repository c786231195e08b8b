"""
interfaces/bench.py
──────────────────────────────────────────────────────────────────────────────
Micro-benchmark for index construction and minor → major lookups.

Builds both indexes from GeneratedDataSource (no files involved), then times
get_major_codes_by_minor_codes() for batches of 1, 10 and 100 randomly picked
minor codes.

Usage:
  python -m jobcat.interfaces.bench
  python -m jobcat.interfaces.bench --minors 50000 --jobs 20000 --iterations 5000
  jobcat-bench --seed 7
"""
from __future__ import annotations

import argparse
import logging
import random
import statistics
import sys
import time
from dataclasses import dataclass, replace

from jobcat.adapters.generated_source import GeneratedDataSource
from jobcat.config.settings import Settings, get_settings
from jobcat.domain.exceptions import JobCategoryError
from jobcat.services.container import build_indexes
from jobcat.services.hierarchy_index import JobCategoryHierarchyIndex

logger = logging.getLogger(__name__)

BATCH_SIZES = (1, 10, 100)


@dataclass(frozen=True)
class BenchResult:
    """Timing summary for one benchmark case, in microseconds per call."""

    name: str
    mean_us: float
    median_us: float
    min_us: float
    max_us: float


def time_minor_to_major(
    hierarchy: JobCategoryHierarchyIndex,
    batch_size: int,
    iterations: int,
    seed: int,
) -> BenchResult:
    """Time minor → major lookups over ``iterations`` calls of one fixed batch."""
    minor_codes = sorted(hierarchy.minor_codes)
    if not minor_codes:
        raise JobCategoryError("Cannot benchmark an index without minor codes")
    rng = random.Random(seed)
    batch = [rng.choice(minor_codes) for _ in range(batch_size)]

    samples: list[float] = []
    for _ in range(iterations):
        start = time.perf_counter()
        hierarchy.get_major_codes_by_minor_codes(batch)
        samples.append((time.perf_counter() - start) * 1e6)

    return BenchResult(
        name=f"minor_to_major x{batch_size}",
        mean_us=statistics.fmean(samples),
        median_us=statistics.median(samples),
        min_us=min(samples),
        max_us=max(samples),
    )


def run_benchmark(settings: Settings) -> list[BenchResult]:
    """Generate data, build the indexes and time every batch size."""
    source = GeneratedDataSource(settings)

    start = time.perf_counter()
    hierarchy, job_index = build_indexes(source, source)
    build_ms = (time.perf_counter() - start) * 1e3
    logger.info(
        "Built indexes in %.1f ms | categories=%d jobs=%d",
        build_ms, len(hierarchy), len(job_index),
    )
    print(f"Index build: {build_ms:.1f} ms "
          f"({len(hierarchy)} categories, {len(job_index)} jobs)")

    return [
        time_minor_to_major(
            hierarchy,
            batch_size=size,
            iterations=settings.bench_iterations,
            seed=settings.generator_seed,
        )
        for size in BATCH_SIZES
    ]


def _build_parser(defaults: Settings) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="jobcat-bench",
        description="Benchmark job category index construction and lookups.",
    )
    p.add_argument("--minors", type=int, default=defaults.generated_minor_count,
                   help=f"Minor categories to generate. (default: {defaults.generated_minor_count})")
    p.add_argument("--jobs", type=int, default=defaults.generated_job_count,
                   help=f"Job postings to generate. (default: {defaults.generated_job_count})")
    p.add_argument("--iterations", type=int, default=defaults.bench_iterations,
                   help=f"Timed calls per case. (default: {defaults.bench_iterations})")
    p.add_argument("--seed", type=int, default=defaults.generator_seed,
                   help=f"Random seed. (default: {defaults.generator_seed})")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    return p


def main() -> None:
    """Entry point for the jobcat-bench console script."""
    defaults = get_settings()
    args = _build_parser(defaults).parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )

    settings = replace(
        defaults,
        generated_minor_count=args.minors,
        generated_job_count=args.jobs,
        bench_iterations=max(args.iterations, 1),
        generator_seed=args.seed,
    )

    try:
        results = run_benchmark(settings)
    except JobCategoryError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    print(f"{'case':<22}{'mean µs':>10}{'median µs':>12}{'min µs':>10}{'max µs':>10}")
    for r in results:
        print(f"{r.name:<22}{r.mean_us:>10.2f}{r.median_us:>12.2f}"
              f"{r.min_us:>10.2f}{r.max_us:>10.2f}")
    sys.exit(0)


if __name__ == "__main__":
    main()
