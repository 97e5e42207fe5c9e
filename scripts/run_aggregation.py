#!/usr/bin/env python3
"""Run one hotspot aggregation pass against the configured database.

Runs with system privilege, exactly like a scheduled tick. Useful after a
bulk report import or to rebuild hotspots by hand.

Usage:
    python scripts/run_aggregation.py [--lookback-hours 24]
"""

import argparse
import asyncio
import logging

from hotspot_engine.database import close_db
from hotspot_engine.services.aggregation import build_aggregation_run


async def run_aggregation(lookback_hours: int | None) -> None:
    """Run aggregation once and print the summary."""
    try:
        summary = await build_aggregation_run().run(lookback_hours=lookback_hours)
    finally:
        await close_db()
    print(
        f"Processed {summary.reports_processed} reports into "
        f"{summary.hotspots_updated} hotspots, pruned {summary.hotspots_pruned}."
    )


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--lookback-hours",
        type=int,
        default=None,
        help="Override the configured lookback window",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_aggregation(args.lookback_hours))
