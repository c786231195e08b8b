"""
interfaces/cli.py
──────────────────────────────────────────────────────────────────────────────
Command-line interface for job category lookups.

Usage:
  # Majors of two minor categories
  python -m jobcat.interfaces.cli --direction minor_to_major --codes 100101 100205

  # Every minor under a major, as JSON
  python -m jobcat.interfaces.cli -d major_to_minor -c 100000 --json

  # Job ids filed under a major
  python -m jobcat.interfaces.cli -d major_to_job -c 100000

  # Via installed entry-point (pyproject.toml [project.scripts])
  jobcat-lookup -d job_to_major -c 1 3

Data source is chosen by CATEGORY_SOURCE / CATEGORIES_JSON_PATH /
JOBS_JSON_PATH (see config/settings.py).

Exit codes:
  0 — success
  1 — fatal error (missing or invalid data)
  2 — argument error
"""
from __future__ import annotations

import argparse
import json
import logging
import sys

from jobcat.domain.exceptions import JobCategoryError
from jobcat.domain.models import LookupDirection, LookupRequest
from jobcat.services.container import get_lookup_service

logger = logging.getLogger(__name__)


# ── Argument parser ────────────────────────────────────────────────────────

def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="jobcat-lookup",
        description="Look up job categories across levels and between jobs and categories.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument(
        "--direction", "-d",
        choices=[d.value for d in LookupDirection],
        required=True,
        help="Which query to run, e.g. minor_to_major or major_to_job.",
    )
    p.add_argument(
        "--codes", "-c",
        metavar="CODE",
        type=int,
        nargs="*",
        default=[],
        help="Category codes or job ids to look up (repeats / unknowns are ignored).",
    )
    p.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output results as JSON.",
    )
    p.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging.",
    )
    return p


# ── Formatting helpers ─────────────────────────────────────────────────────

def _print_results_text(response) -> None:
    """Pretty-print a LookupResponse to stdout."""
    print(f"\n{'─' * 60}")
    print(f"Direction : {response.direction}")
    print(f"Keys      : {', '.join(str(k) for k in response.keys) or '(none)'}")
    print(f"Results   : {response.count}")
    print(f"{'─' * 60}")
    for code in response.results:
        label = response.labels.get(code)
        print(f"  {code}  {label}" if label else f"  {code}")
    print()


def _print_results_json(response) -> None:
    """Print a LookupResponse as JSON to stdout."""
    print(json.dumps(response.to_dict(), indent=2, ensure_ascii=False))


# ── Main logic ─────────────────────────────────────────────────────────────

def run(args: argparse.Namespace) -> int:
    """Execute one lookup for the given arguments.

    Returns:
        Exit code (0 = success, 1 = error).
    """
    printer = _print_results_json if args.json_output else _print_results_text

    try:
        service = get_lookup_service()
    except JobCategoryError as exc:
        logger.exception("Failed to build indexes")
        print(f"ERROR: Index initialisation failed: {exc}", file=sys.stderr)
        return 1

    request = LookupRequest(direction=LookupDirection(args.direction), keys=args.codes)
    printer(service.lookup(request))
    return 0


def main() -> None:
    """Entry point for the jobcat-lookup console script."""
    parser = _build_parser()
    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )

    sys.exit(run(args))


if __name__ == "__main__":
    main()
