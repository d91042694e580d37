"""Print the most recently generated fitness plans."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fitness_planner.database import SessionLocal
from fitness_planner.logging_config import configure_logging
from fitness_planner.models.schemas import HistoryOutcome
from fitness_planner.services.document_store import DocumentStore
from fitness_planner.services.plan_service import HISTORY_LIMIT, get_plan_history


logger = logging.getLogger("scripts.plan_history")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="List recently generated fitness plans")
    parser.add_argument(
        "--limit",
        type=int,
        default=HISTORY_LIMIT,
        help=f"Number of plans to show (default {HISTORY_LIMIT})",
    )
    return parser.parse_args(argv)


def format_history(outcome: HistoryOutcome) -> str:
    if not outcome.plans:
        return "No plans generated yet."
    lines = []
    for entry in outcome.plans:
        lines.append(
            f"{entry.created_at:%Y-%m-%d %H:%M}  {entry.id}  {entry.name or '-'}  {entry.fitness_goals or ''}"
        )
    return "\n".join(lines)


async def run(limit: int) -> HistoryOutcome:
    db = SessionLocal()
    try:
        return await get_plan_history(DocumentStore(db), limit=limit)
    finally:
        db.close()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging()

    outcome = asyncio.run(run(max(1, min(args.limit, HISTORY_LIMIT))))
    if not outcome.success:
        logger.error("Failed to load history: %s", outcome.error.message)
        return 1

    print(format_history(outcome))
    return 0


if __name__ == "__main__":
    sys.exit(main())
