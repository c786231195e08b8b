"""
Job Category Lookup — Production Package
=========================================
Hexagonal (Ports & Adapters) architecture.

Layer map
─────────────────────────────────────────────────────
  config/       All tuneable settings (env vars / .env)
  domain/       Pure business objects (models, exceptions) — no I/O
  ports/        Abstract interfaces (Python Protocols) for record sources
  adapters/     Concrete record sources (JSON files, synthetic generator)
  services/     Hierarchy / job indexes and the lookup facade
  interfaces/   Delivery layer: lookup CLI, benchmark CLI
  tests/        Full test suite: unit / integration / e2e

Swapping the record source (JSON files, generated data, a future DB):
  1. Write a new adapter in adapters/ implementing the relevant Port
  2. Change the single wiring function in services/container.py
  3. Done: the indexes only ever see domain models
"""
__version__ = "1.0.0"
