#!/usr/bin/env python3
"""Smoke test for the dashboard load.

Runs one fetch-join-aggregate cycle against the data service configured
through COURSEBOARD_* environment variables (the in-memory demo service by
default) and prints the resulting dashboard payload.

Usage:
    python scripts/smoke_dashboard.py

Exit codes:
    0: Load succeeded and invariants hold
    1: Load failed or an invariant was violated
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from courseboard.api.app import build_data_service  # noqa: E402
from courseboard.config import load_settings  # noqa: E402
from courseboard.models.types import DashboardOverview  # noqa: E402
from courseboard.worker.loader import DashboardLoader  # noqa: E402


def check_invariants(overview: DashboardOverview) -> bool:
    """Check summary invariants on a loaded overview."""
    stats = overview.stats
    if stats is None:
        print("FAIL: Stats missing after load")
        return False

    ok = True
    if not 0 <= stats.paid_ratio <= 100:
        print(f"FAIL: paid_ratio out of range: {stats.paid_ratio}")
        ok = False
    if len(overview.status_histogram) != 4:
        print(f"FAIL: Expected 4 status buckets, got {len(overview.status_histogram)}")
        ok = False
    if sum(s.count for s in overview.status_histogram) != stats.courses:
        print("FAIL: Status histogram does not sum to course count")
        ok = False
    if len(overview.recent_courses) > 5:
        print(f"FAIL: Too many recent courses: {len(overview.recent_courses)}")
        ok = False
    if stats.revenue < 0:
        print(f"FAIL: Negative revenue: {stats.revenue}")
        ok = False

    if ok:
        print("OK: Summary invariants hold")
    return ok


async def run() -> int:
    settings = load_settings()
    print(f"Provider: {settings.provider}")

    service = build_data_service(settings)
    loader = DashboardLoader(service)
    try:
        loaded = await loader.load()
    finally:
        await service.aclose()

    overview = loader.overview()
    print(overview.model_dump_json(indent=2))

    if not loaded:
        print(f"FAIL: Load failed: {overview.error}")
        return 1
    return 0 if check_invariants(overview) else 1


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    return asyncio.run(run())


if __name__ == "__main__":
    sys.exit(main())
