"""
config/settings.py
──────────────────────────────────────────────────────────────────────────────
Single source of truth for all tuneable parameters.

All values can be overridden via environment variables or a .env file placed
at the project root.  The frozen dataclass ensures settings are never mutated
at runtime.

To swap the record source, change the relevant env var — no code edits:
  CATEGORY_SOURCE       → "json" (bundled / custom files) or "generated"
  CATEGORIES_JSON_PATH  → category hierarchy file
  JOBS_JSON_PATH        → job postings file
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root (two levels up from this file)
load_dotenv(Path(__file__).parent.parent.parent / ".env")

_DATA_DIR = Path(__file__).parent.parent.parent / "data"


def _env(key: str, default: str) -> str:
    return os.getenv(key, default)


def _env_int(key: str, default: int) -> int:
    return int(os.getenv(key, str(default)))


def _env_path(key: str, default: Path) -> Path:
    return Path(os.getenv(key, str(default)))


@dataclass(frozen=True)
class Settings:
    """Immutable application settings loaded from environment variables."""

    # ── Source selection ────────────────────────────────────────────────────
    # Valid values: "json" | "generated"
    category_source: str = field(
        default_factory=lambda: _env("CATEGORY_SOURCE", "json")
    )

    # ── Data paths ─────────────────────────────────────────────────────────
    categories_json_path: Path = field(
        default_factory=lambda: _env_path(
            "CATEGORIES_JSON_PATH", _DATA_DIR / "jobCategory.json"
        )
    )
    jobs_json_path: Path = field(
        default_factory=lambda: _env_path("JOBS_JSON_PATH", _DATA_DIR / "job.json")
    )

    # ── Synthetic data generator ───────────────────────────────────────────
    generated_minor_count: int = field(
        default_factory=lambda: _env_int("GENERATED_MINOR_COUNT", 10_000)
    )
    generated_job_count: int = field(
        default_factory=lambda: _env_int("GENERATED_JOB_COUNT", 10_000)
    )
    generator_seed: int = field(
        default_factory=lambda: _env_int("GENERATOR_SEED", 42)
    )
    minors_per_middle: int = field(
        default_factory=lambda: _env_int("MINORS_PER_MIDDLE", 50)
    )
    middles_per_major: int = field(
        default_factory=lambda: _env_int("MIDDLES_PER_MAJOR", 20)
    )
    max_minors_per_job: int = field(
        default_factory=lambda: _env_int("MAX_MINORS_PER_JOB", 5)
    )

    # ── Benchmark ──────────────────────────────────────────────────────────
    bench_iterations: int = field(
        default_factory=lambda: _env_int("BENCH_ITERATIONS", 1000)
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Returns a cached singleton Settings instance.

    Use this everywhere instead of instantiating Settings() directly —
    it guarantees a single object is shared across the entire process.
    """
    return Settings()
