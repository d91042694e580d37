"""Generate a fitness plan from the command line and print the outcome as JSON."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fitness_planner.database import SessionLocal
from fitness_planner.logging_config import configure_logging
from fitness_planner.models.schemas import ErrorKind, PlanOutcome
from fitness_planner.services.document_store import DocumentStore
from fitness_planner.services.plan_generator import PlanGenerator
from fitness_planner.services.plan_service import PlanService
from fitness_planner.services.prompt_builder import generation_options, load_prompt_config


logger = logging.getLogger("scripts.generate_plan")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NOT_SAVED = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate and store a personalised fitness plan",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/generate_plan.py --name "Jane Doe" --age 30 --weight 65 \\
      --height 168 --goals "lose 5kg in 2 months"

  # With an exercise preference
  python scripts/generate_plan.py --name Sam --age 41 --weight 90 --height 182 \\
      --goals "build strength for hiking" --preference "home workouts"
        """
    )
    parser.add_argument("--name", required=True, help="Your name")
    parser.add_argument("--age", required=True, help="Age in years")
    parser.add_argument("--weight", required=True, help="Weight in kg")
    parser.add_argument("--height", required=True, help="Height in cm")
    parser.add_argument("--goals", required=True, help="Fitness goals (at least 10 characters)")
    parser.add_argument("--preference", help="Preferred types of exercise")
    return parser.parse_args(argv)


def exit_code_for(outcome: PlanOutcome) -> int:
    if outcome.success:
        return EXIT_OK
    if outcome.error is not None and outcome.error.kind == ErrorKind.PERSISTENCE_FAILED:
        return EXIT_NOT_SAVED
    return EXIT_FAILED


async def run(args: argparse.Namespace) -> PlanOutcome:
    form_data = {
        "name": args.name,
        "age": args.age,
        "weight": args.weight,
        "height": args.height,
        "fitnessGoals": args.goals,
    }
    if args.preference:
        form_data["exercisePreference"] = args.preference

    prompt_config = load_prompt_config()
    db = SessionLocal()
    try:
        service = PlanService(
            generator=PlanGenerator(max_tokens=generation_options(prompt_config)["max_tokens"]),
            store=DocumentStore(db),
            prompt_config=prompt_config,
        )
        return await service.create_plan(form_data)
    finally:
        db.close()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging()

    outcome = asyncio.run(run(args))
    print(json.dumps(outcome.model_dump(mode="json", by_alias=True), indent=2))

    if outcome.error is not None:
        logger.error("%s: %s", outcome.error.kind.value, outcome.error.message)
    return exit_code_for(outcome)


if __name__ == "__main__":
    sys.exit(main())
